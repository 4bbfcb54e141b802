"""Identity Kronecker product utilities for column-stacked operators."""

import scipy.sparse as sparse
from numpy.typing import NDArray


def eye_kronecker(n: int, B) -> sparse.csr_matrix:
    """
    Compute I_n ⊗ B as a sparse matrix.

    Args:
        n: Size of identity matrix
        B: Matrix (m, m), dense or sparse

    Returns:
        I_n ⊗ B of shape (n*m, n*m)
    """
    return sparse.kron(sparse.identity(n, format="csr"), B, format="csr")


def eye_kronecker_matvec(B, x: NDArray, n: int) -> NDArray:
    """
    Compute (I_n ⊗ B) @ x efficiently without forming full matrix.

    Only uses `@`, `reshape` and `.T`, so it is traceable when B or x are
    JAX arrays.

    Args:
        B: Block matrix (m, m)
        x: Vector of length n*m (n stacked blocks of length m)
        n: Number of blocks

    Returns:
        Result of (I_n ⊗ B) @ x
    """
    m = x.shape[0] // n
    X = x.reshape(n, m).T
    return (B @ X).T.reshape(-1)
