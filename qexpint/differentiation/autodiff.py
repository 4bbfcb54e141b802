"""Forward-mode automatic differentiation with JAX."""

from typing import Callable
import numpy as np
import jax
import jax.numpy as jnp
import jax.scipy.linalg
from numpy.typing import NDArray

from qexpint import config  # noqa: F401
from qexpint.differentiation.base import Differentiator


class ForwardModeDifferentiator(Differentiator):
    """
    jax.jacfwd through jax.scipy.linalg.expm.

    One forward pass per drive channel; exact to floating point. The
    function being differentiated must be written with operations JAX can
    trace (array products, sums, reshapes).
    """

    def expm(self, A):
        return jax.scipy.linalg.expm(A)

    def jacobian(
        self,
        f: Callable[[NDArray], NDArray],
        x: NDArray,
    ) -> NDArray:
        """Forward-mode Jacobian of f at x."""
        J = jax.jacfwd(f)(jnp.asarray(x, dtype=jnp.float64))
        return np.asarray(J)
