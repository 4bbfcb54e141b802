"""Base differentiator interface."""

from abc import ABC, abstractmethod
from typing import Callable
from numpy.typing import NDArray


class Differentiator(ABC):
    """Computes the Jacobian of a vector-valued function at a point."""

    @abstractmethod
    def expm(self, A):
        """
        Matrix exponential the differentiated closure must use.

        Args:
            A: Square matrix (possibly a traced array)

        Returns:
            exp(A) in the array type this engine differentiates through
        """
        ...

    @abstractmethod
    def jacobian(
        self,
        f: Callable[[NDArray], NDArray],
        x: NDArray,
    ) -> NDArray:
        """
        Jacobian of f at x.

        Args:
            f: Function R^k → R^m, built fresh by the caller
            x: Evaluation point (k,)

        Returns:
            Dense Jacobian (m, k)
        """
        ...
