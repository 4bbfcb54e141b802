"""Density operator exponential integrator for open systems."""

import numpy as np

from qexpint.algebra.exponential import DEFAULT_DROPTOL, ExponentialStrategy
from qexpint.core.exceptions import IntegratorConfigurationError
from qexpint.core.system import OpenQuantumSystem
from qexpint.core.trajectory import NamedTrajectory
from qexpint.integrators.base import DriveName, ExponentialIntegrator


class DensityOperatorExponentialIntegrator(ExponentialIntegrator):
    """
    ρ̃_{t+1} - exp(Δt 𝒢(a_t)) ρ̃_t for a lifted, vectorized density operator.

    The Liouvillian 𝒢 is dissipative and not skew-symmetric, so both the
    residual and the Jacobian use the generic exponential.
    """

    strategy = ExponentialStrategy.GENERIC

    def __init__(
        self,
        density_operator_name: str,
        drive_name: DriveName,
        system: OpenQuantumSystem,
        traj: NamedTrajectory,
        autodiff: bool = True,
        droptol: float = DEFAULT_DROPTOL,
    ):
        dim = traj.dims[density_operator_name]
        ketdim = np.asarray(system.H(np.zeros(system.n_drives))).shape[0]

        if dim != 2 * ketdim**2:
            raise IntegratorConfigurationError(
                f"density operator dimension {dim} does not match "
                f"2n² = {2 * ketdim**2} for {ketdim}-level system"
            )

        super().__init__(
            density_operator_name,
            drive_name,
            system,
            system.liouvillian,
            traj,
            ketdim=ketdim,
            generator_dim=dim,
            autodiff=autodiff,
            droptol=droptol,
        )
