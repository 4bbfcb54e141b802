"""Base exponential integrator."""

from typing import Any, Sequence, Union
import logging
import numpy as np
import scipy.sparse as sparse
from numpy.typing import NDArray

from qexpint.algebra.exponential import (
    DEFAULT_DROPTOL,
    ExponentialStrategy,
    create_exponential_engine,
)
from qexpint.algebra.protocols import ExponentialEngine
from qexpint.core.exceptions import (
    ExponentialComputationError,
    IntegratorConfigurationError,
)
from qexpint.core.system import Generator
from qexpint.core.trajectory import NamedTrajectory
from qexpint.differentiation.factory import create_differentiator
from qexpint.integrators.assembly import JacobianAssembler

logger = logging.getLogger(__name__)

DriveName = Union[str, Sequence[str]]


class ExponentialIntegrator:
    """
    Dynamics residual x_{t+1} - exp(Δt G(a_t)) x_t between adjacent knot points.

    Configuration is fixed at construction and exposed read-only, so one
    instance can serve every time index, including from several threads.
    Subclasses choose the exponential strategy and how the propagator acts
    on the lifted state.
    """

    strategy: ExponentialStrategy = ExponentialStrategy.GENERIC

    def __init__(
        self,
        state_name: str,
        drive_name: DriveName,
        system: Any,
        generator: Generator,
        traj: NamedTrajectory,
        ketdim: int,
        generator_dim: int,
        autodiff: bool = True,
        droptol: float = DEFAULT_DROPTOL,
    ):
        """
        Initialize integrator configuration.

        Args:
            state_name: Trajectory variable holding the lifted state
            drive_name: Drive variable name, or names concatenated in order
            system: System description (provides n_drives)
            generator: Drive vector → generator matrix
            traj: Trajectory layout
            ketdim: Underlying Hilbert space dimension
            generator_dim: Expected generator size
            autodiff: Forward-mode AD for drive derivatives (else finite differences)
            droptol: Drop tolerance of the Hermitian exponential
        """
        state_components = np.array(traj.components[state_name])

        if isinstance(drive_name, str):
            drive_components = np.array(traj.components[drive_name])
        else:
            drive_components = np.concatenate(
                [traj.components[name] for name in drive_name]
            ).astype(int)

        if not np.all(np.diff(drive_components) == 1):
            raise IntegratorConfigurationError(
                f"drive components must be contiguous and ordered, "
                f"got {drive_components.tolist()}"
            )

        n_drives = len(drive_components)
        system_drives = getattr(system, "n_drives", n_drives)
        if system_drives != n_drives:
            raise IntegratorConfigurationError(
                f"system has {system_drives} drives but trajectory "
                f"provides {n_drives} drive components"
            )

        G0 = np.asarray(generator(np.zeros(n_drives)))
        if G0.shape != (generator_dim, generator_dim):
            raise IntegratorConfigurationError(
                f"generator has shape {G0.shape}, expected "
                f"{(generator_dim, generator_dim)} for state {state_name!r}"
            )

        if traj.free_time:
            timestep = int(traj.components[traj.timestep][0])
        else:
            timestep = float(traj.timestep)

        state_components.setflags(write=False)
        drive_components.setflags(write=False)

        self._state_components = state_components
        self._drive_components = drive_components
        self._timestep = timestep
        self._freetime = traj.free_time
        self._n_drives = n_drives
        self._ketdim = ketdim
        self._dim = len(state_components)
        self._zdim = traj.dim
        self._autodiff = autodiff
        self._droptol = droptol
        self._G = generator
        self._exp: ExponentialEngine = create_exponential_engine(self.strategy, droptol)
        self._differentiator = create_differentiator(autodiff)

        logger.debug(
            "%s: dim=%d ketdim=%d n_drives=%d freetime=%s strategy=%s",
            type(self).__name__,
            self._dim,
            ketdim,
            n_drives,
            self._freetime,
            self.strategy.name,
        )

    @property
    def state_components(self) -> NDArray:
        """Positions of the lifted state in a knot point."""
        return self._state_components

    @property
    def drive_components(self) -> NDArray:
        """Positions of the drives in a knot point (contiguous)."""
        return self._drive_components

    @property
    def timestep(self) -> Union[int, float]:
        """Knot point position of Δt if free, else the fixed Δt."""
        return self._timestep

    @property
    def freetime(self) -> bool:
        return self._freetime

    @property
    def n_drives(self) -> int:
        return self._n_drives

    @property
    def ketdim(self) -> int:
        return self._ketdim

    @property
    def dim(self) -> int:
        """Residual (state) dimension."""
        return self._dim

    @property
    def zdim(self) -> int:
        """Knot point dimension."""
        return self._zdim

    @property
    def autodiff(self) -> bool:
        return self._autodiff

    @property
    def droptol(self) -> float:
        return self._droptol

    @property
    def G(self) -> Generator:
        """Generator map."""
        return self._G

    def __call__(self, z: NDArray, z_next: NDArray, t: int) -> NDArray:
        """
        Residual between knot points t and t+1.

        Args:
            z: Knot point z_t
            z_next: Knot point z_{t+1}
            t: Time index

        Returns:
            Residual of length dim
        """
        z = np.asarray(z, dtype=float)
        z_next = np.asarray(z_next, dtype=float)

        x = z[self._state_components]
        x_next = z_next[self._state_components]
        a = z[self._drive_components]
        dt = self._get_timestep(z)

        return x_next - self._propagate(dt * self._G(a), x)

    def jacobian(self, z: NDArray, z_next: NDArray, t: int) -> sparse.csr_matrix:
        """
        Jacobian of the residual with respect to [z_t; z_{t+1}].

        Args:
            z: Knot point z_t
            z_next: Knot point z_{t+1}
            t: Time index

        Returns:
            Sparse matrix (dim, 2 * zdim)
        """
        z = np.asarray(z, dtype=float)

        x = z[self._state_components]
        a = z[self._drive_components]
        dt = self._get_timestep(z)

        Gt = np.asarray(self._G(a))
        expGt = self._exp.expm(dt * Gt)

        rows = np.arange(self._dim)
        J = JacobianAssembler((self._dim, 2 * self._zdim))

        # ∂x_{t+1}
        J.insert_identity(rows, self._zdim + self._state_components)

        # ∂x_t
        J.insert(rows, self._state_components, -self._propagator_block(expGt))

        # ∂a_t
        if self._n_drives > 0:
            J.insert(rows, self._drive_components, self._drive_jacobian(a, dt, x))

        # ∂Δt: d/dΔt exp(Δt G) = G exp(Δt G)
        if self._freetime:
            J.insert(rows, [self._timestep], -self._apply(Gt, self._apply(expGt, x)))

        return J.tocsr()

    def get_comps(self, traj: NamedTrajectory) -> tuple[NDArray, ...]:
        """Index sets wiring this integrator into a constraint system."""
        if self._freetime:
            return (
                self._state_components,
                self._drive_components,
                traj.components[traj.timestep],
            )
        return self._state_components, self._drive_components

    def _get_timestep(self, z: NDArray) -> float:
        if self._freetime:
            return float(z[self._timestep])
        return self._timestep

    def _drive_jacobian(self, a: NDArray, dt: float, x: NDArray) -> NDArray:
        """Differentiate a ↦ -exp(Δt G(a)) x with the configured engine."""
        expm = self._differentiator.expm
        G = self._G

        def drive_map(a_):
            return -self._apply(expm(dt * G(a_)), x)

        Ja = self._differentiator.jacobian(drive_map, a)
        if not np.all(np.isfinite(Ja)):
            raise ExponentialComputationError(
                "drive derivative contains non-finite entries"
            )
        return Ja

    def _propagate(self, A: NDArray, x: NDArray) -> NDArray:
        """exp(A) applied to the lifted state."""
        return self._exp.expm_multiply(A, x)

    def _apply(self, M, x: NDArray) -> NDArray:
        """Action of a generator-sized matrix M on the lifted state."""
        return M @ x

    def _propagator_block(self, expA):
        """exp(A) as it acts on the full lifted state."""
        return expA


def jacobian(
    integrator: ExponentialIntegrator,
    z: NDArray,
    z_next: NDArray,
    t: int,
) -> sparse.csr_matrix:
    """Jacobian of integrator's residual; see ExponentialIntegrator.jacobian."""
    return integrator.jacobian(z, z_next, t)


def get_comps(
    integrator: ExponentialIntegrator,
    traj: NamedTrajectory,
) -> tuple[NDArray, ...]:
    """Index sets (state, drive[, timestep]) of integrator in traj."""
    return integrator.get_comps(traj)
