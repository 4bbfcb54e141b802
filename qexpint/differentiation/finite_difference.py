"""Central finite differences."""

from typing import Callable
import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from qexpint.differentiation.base import Differentiator


class FiniteDifferenceDifferentiator(Differentiator):
    """
    Central differences with step h_i = rel_step * max(1, |x_i|).

    Truncation and rounding errors balance near rel_step = ε^(1/3), which
    leaves roughly ten correct digits: a digit or two short of forward-mode
    differentiation. Needs no tracing, so any numpy generator works.
    """

    def __init__(self, rel_step: float | None = None):
        if rel_step is None:
            rel_step = float(np.finfo(float).eps ** (1.0 / 3.0))
        self.rel_step = rel_step

    def expm(self, A):
        return scipy.linalg.expm(A)

    def jacobian(
        self,
        f: Callable[[NDArray], NDArray],
        x: NDArray,
    ) -> NDArray:
        """Central-difference Jacobian of f at x."""
        x = np.asarray(x, dtype=float)
        if x.shape[0] == 0:
            return np.zeros((np.asarray(f(x)).shape[0], 0))

        columns = []

        for i in range(x.shape[0]):
            h = self.rel_step * max(1.0, abs(x[i]))
            x_plus = x.copy()
            x_minus = x.copy()
            x_plus[i] += h
            x_minus[i] -= h
            columns.append((np.asarray(f(x_plus)) - np.asarray(f(x_minus))) / (2 * h))

        return np.stack(columns, axis=1)
