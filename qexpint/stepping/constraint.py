"""Dynamics constraint over a whole trajectory."""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, TypeVar
import logging
import numpy as np
import scipy.sparse as sparse
from numpy.typing import NDArray

from qexpint.core.trajectory import NamedTrajectory
from qexpint.integrators.base import ExponentialIntegrator

logger = logging.getLogger(__name__)

R = TypeVar("R")


class DynamicsConstraint:
    """
    Stacks the integrator residual over every adjacent knot point pair.

    For a flat trajectory vector Z = [z_0; ...; z_{T-1}]:

        c(Z) = [f(z_0, z_1, 0); ...; f(z_{T-2}, z_{T-1}, T-2)]

    and the Jacobian places each per-step block (dim, 2 zdim) at rows
    t*dim and columns t*zdim. Steps are independent, so they can be
    evaluated on a thread pool; results are always gathered in time order.
    """

    def __init__(
        self,
        integrator: ExponentialIntegrator,
        traj: NamedTrajectory,
        n_workers: int = 1,
    ):
        """
        Initialize dynamics constraint.

        Args:
            integrator: Per-step residual and Jacobian
            traj: Trajectory layout (fixes T and zdim)
            n_workers: Threads used to evaluate steps
        """
        if integrator.zdim != traj.dim:
            raise ValueError(
                f"integrator knot point dimension {integrator.zdim} does not "
                f"match trajectory dimension {traj.dim}"
            )
        if n_workers < 1:
            raise ValueError("n_workers must be positive")

        self.integrator = integrator
        self.T = traj.T
        self.zdim = traj.dim
        self.n_workers = n_workers

    @property
    def dim(self) -> int:
        """Number of constraints."""
        return self.integrator.dim * (self.T - 1)

    def __call__(self, Z: NDArray) -> NDArray:
        """Stacked residuals, length dim * (T - 1)."""
        knots = self._knot_points(Z)
        residuals = self._map(
            lambda t: self.integrator(knots[t], knots[t + 1], t)
        )
        return np.concatenate(residuals) if residuals else np.zeros(0)

    def jacobian(self, Z: NDArray) -> sparse.csr_matrix:
        """Sparse Jacobian of shape (dim * (T - 1), zdim * T)."""
        knots = self._knot_points(Z)
        blocks = self._map(
            lambda t: self.integrator.jacobian(knots[t], knots[t + 1], t)
        )

        rows, cols, vals = [], [], []
        for t, block in enumerate(blocks):
            coo = block.tocoo()
            rows.append(coo.row + t * self.integrator.dim)
            cols.append(coo.col + t * self.zdim)
            vals.append(coo.data)

        shape = (self.dim, self.zdim * self.T)
        if not vals:
            return sparse.csr_matrix(shape)

        return sparse.coo_matrix(
            (np.concatenate(vals), (np.concatenate(rows), np.concatenate(cols))),
            shape=shape,
        ).tocsr()

    def _knot_points(self, Z: NDArray) -> NDArray:
        Z = np.asarray(Z, dtype=float)
        if Z.shape != (self.zdim * self.T,):
            raise ValueError(
                f"trajectory vector has shape {Z.shape}, "
                f"expected {(self.zdim * self.T,)}"
            )
        return Z.reshape(self.T, self.zdim)

    def _map(self, step: Callable[[int], R]) -> list[R]:
        steps = range(self.T - 1)
        logger.debug(
            "evaluating %d steps on %d worker(s)", len(steps), self.n_workers
        )

        if self.n_workers == 1:
            return [step(t) for t in steps]

        with ThreadPoolExecutor(max_workers=self.n_workers) as pool:
            return list(pool.map(step, steps))
