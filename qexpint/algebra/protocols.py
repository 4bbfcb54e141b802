"""Matrix exponential engine protocol."""

from typing import Protocol, Any
from numpy.typing import NDArray


class ExponentialEngine(Protocol):
    """
    Protocol for matrix exponential strategies.
    Allows swapping between structure-exploiting and generic exponentials.
    """

    def expm(self, A: NDArray) -> Any:
        """
        Compute exp(A).

        Args:
            A: Scaled generator, square real matrix

        Returns:
            exp(A) as a dense array or scipy sparse matrix
        """
        ...

    def expm_multiply(self, A: NDArray, v: NDArray) -> NDArray:
        """
        Compute exp(A) @ v without handing the matrix back to the caller.

        Args:
            A: Scaled generator, square real matrix
            v: Vector

        Returns:
            exp(A) @ v
        """
        ...
