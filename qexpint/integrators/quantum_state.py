"""Pure state exponential integrator."""

from qexpint.algebra.exponential import DEFAULT_DROPTOL, ExponentialStrategy
from qexpint.core.exceptions import IntegratorConfigurationError
from qexpint.core.system import QuantumSystem
from qexpint.core.trajectory import NamedTrajectory
from qexpint.integrators.base import DriveName, ExponentialIntegrator


class QuantumStateExponentialIntegrator(ExponentialIntegrator):
    """ψ̃_{t+1} - exp(Δt G(a_t)) ψ̃_t for a lifted ket ψ̃."""

    strategy = ExponentialStrategy.HERMITIAN

    def __init__(
        self,
        state_name: str,
        drive_name: DriveName,
        system: QuantumSystem,
        traj: NamedTrajectory,
        autodiff: bool = True,
        droptol: float = DEFAULT_DROPTOL,
    ):
        dim = traj.dims[state_name]

        if dim % 2 != 0:
            raise IntegratorConfigurationError(
                f"ket state dimension {dim} is not even"
            )
        ketdim = dim // 2

        super().__init__(
            state_name,
            drive_name,
            system,
            system.G,
            traj,
            ketdim=ketdim,
            generator_dim=dim,
            autodiff=autodiff,
            droptol=droptol,
        )
