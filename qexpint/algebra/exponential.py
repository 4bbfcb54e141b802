"""Matrix exponential engines for scaled generators."""

from enum import Enum, auto
import logging
import numpy as np
import scipy.linalg
import scipy.sparse as sparse
import scipy.sparse.linalg
from numpy.typing import NDArray

from qexpint.algebra.isomorphisms import (
    generator_to_hamiltonian,
    iso_operator,
    iso_to_ket,
    ket_to_iso,
)
from qexpint.core.exceptions import ExponentialComputationError

logger = logging.getLogger(__name__)

DEFAULT_DROPTOL = 1e-12


class ExponentialStrategy(Enum):
    """How the exponential of a scaled generator is computed."""
    HERMITIAN = auto()  # G = iso(-iH) with H Hermitian: eigendecomposition
    GENERIC = auto()    # no structure (Liouvillian): scaling and squaring


class HermitianExponential:
    """
    Eigendecomposition exponential for generators of the form iso(-iH).

    The real generator is lifted back to the Hermitian H, diagonalized as
    H = V diag(λ) Vᴴ, and exp(-iH) = V diag(e^{-iλ}) Vᴴ is mapped back to
    its real block form. Entries with magnitude at or below `droptol` are
    dropped so the result stays sparse inside Kronecker products.
    """

    def __init__(self, droptol: float = DEFAULT_DROPTOL):
        self.droptol = droptol

    def expm(self, A: NDArray) -> sparse.csr_matrix:
        """exp(A) as a sparse real (2n, 2n) matrix."""
        lam, V = self._eigh(A)
        U = V @ (np.exp(-1j * lam)[:, None] * V.conj().T)

        expA = iso_operator(U)
        expA[np.abs(expA) <= self.droptol] = 0.0
        _check_finite(expA, "matrix exponential")

        return sparse.csr_matrix(expA)

    def expm_multiply(self, A: NDArray, v: NDArray) -> NDArray:
        """exp(A) @ v computed in the eigenbasis of H(A)."""
        lam, V = self._eigh(A)
        psi = iso_to_ket(v)
        result = ket_to_iso(V @ (np.exp(-1j * lam) * (V.conj().T @ psi)))
        _check_finite(result, "exponential action")
        return result

    def _eigh(self, A: NDArray) -> tuple[NDArray, NDArray]:
        _check_finite(A, "generator")
        H = generator_to_hamiltonian(A)
        try:
            return scipy.linalg.eigh(H)
        except np.linalg.LinAlgError as err:
            raise ExponentialComputationError(
                f"eigendecomposition of {H.shape[0]}x{H.shape[0]} "
                f"Hermitian lift did not converge"
            ) from err


class GenericExponential:
    """Dense scaling-and-squaring Padé exponential for arbitrary generators."""

    def expm(self, A: NDArray) -> NDArray:
        """exp(A) as a dense array."""
        A = _to_dense(A)
        _check_finite(A, "generator")
        expA = scipy.linalg.expm(A)
        _check_finite(expA, "matrix exponential")
        return expA

    def expm_multiply(self, A: NDArray, v: NDArray) -> NDArray:
        """exp(A) @ v via the Al-Mohy-Higham truncated Taylor action."""
        _check_finite(_to_dense(A), "generator")
        result = scipy.sparse.linalg.expm_multiply(A, v)
        _check_finite(result, "exponential action")
        return result


def create_exponential_engine(
    strategy: ExponentialStrategy,
    droptol: float = DEFAULT_DROPTOL,
) -> HermitianExponential | GenericExponential:
    """
    Select the exponential engine for a generator class.

    Args:
        strategy: Generator structure
        droptol: Drop tolerance (Hermitian strategy only)

    Returns:
        Exponential engine
    """
    if strategy == ExponentialStrategy.HERMITIAN:
        return HermitianExponential(droptol=droptol)

    return GenericExponential()


def _to_dense(A) -> NDArray:
    if sparse.issparse(A):
        return A.toarray()
    return np.asarray(A, dtype=float)


def _check_finite(A, what: str) -> None:
    data = A.data if sparse.issparse(A) else np.asarray(A)
    if not np.all(np.isfinite(data)):
        logger.debug("non-finite entries in %s of shape %s", what, np.shape(A))
        raise ExponentialComputationError(f"{what} contains non-finite entries")
