"""Unitary exponential integrator."""

import numpy as np
from numpy.typing import NDArray

from qexpint.algebra.exponential import DEFAULT_DROPTOL, ExponentialStrategy
from qexpint.core.exceptions import IntegratorConfigurationError
from qexpint.core.system import QuantumSystem
from qexpint.core.trajectory import NamedTrajectory
from qexpint.integrators.base import DriveName, ExponentialIntegrator
from qexpint.utils.kronecker import eye_kronecker, eye_kronecker_matvec


class UnitaryExponentialIntegrator(ExponentialIntegrator):
    """
    Ũ_{t+1} - (I ⊗ exp(Δt G(a_t))) Ũ_t for a lifted unitary Ũ.

    Ũ stacks the n lifted columns of U, so the propagator acts on each
    column block independently: I_n ⊗ exp(Δt G).
    """

    strategy = ExponentialStrategy.HERMITIAN

    def __init__(
        self,
        unitary_name: str,
        drive_name: DriveName,
        system: QuantumSystem,
        traj: NamedTrajectory,
        autodiff: bool = True,
        droptol: float = DEFAULT_DROPTOL,
    ):
        dim = traj.dims[unitary_name]
        ketdim = int(round(np.sqrt(dim // 2)))

        if dim % 2 != 0 or 2 * ketdim**2 != dim:
            raise IntegratorConfigurationError(
                f"unitary state dimension {dim} is not 2n² for an integer n"
            )

        super().__init__(
            unitary_name,
            drive_name,
            system,
            system.G,
            traj,
            ketdim=ketdim,
            generator_dim=2 * ketdim,
            autodiff=autodiff,
            droptol=droptol,
        )

    def _propagate(self, A: NDArray, x: NDArray) -> NDArray:
        return eye_kronecker(self.ketdim, self._exp.expm(A)) @ x

    def _apply(self, M, x: NDArray) -> NDArray:
        return eye_kronecker_matvec(M, x, self.ketdim)

    def _propagator_block(self, expA):
        return eye_kronecker(self.ketdim, expA)
