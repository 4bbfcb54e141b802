"""Sparse Jacobian assembly by block insertion."""

import numpy as np
import scipy.sparse as sparse
from numpy.typing import NDArray


class JacobianAssembler:
    """
    Collects disjoint (rows, cols, block) insertions as COO triplets.

    Blocks may be dense arrays or scipy sparse matrices. Dense blocks keep
    every entry; sparse blocks keep only their stored entries. Since blocks
    are disjoint the insertion order does not matter.
    """

    def __init__(self, shape: tuple[int, int]):
        self.shape = shape
        self._rows: list[NDArray] = []
        self._cols: list[NDArray] = []
        self._vals: list[NDArray] = []

    def insert(self, rows: NDArray, cols: NDArray, block) -> None:
        """
        Place block at the given row and column positions.

        Args:
            rows: Row positions (m,)
            cols: Column positions (k,)
            block: Dense (m, k) array, (m,) vector when k == 1, or sparse matrix
        """
        rows = np.asarray(rows, dtype=int)
        cols = np.asarray(cols, dtype=int)

        if sparse.issparse(block):
            coo = block.tocoo()
            if coo.shape != (rows.shape[0], cols.shape[0]):
                raise ValueError(
                    f"block shape {coo.shape} does not match "
                    f"{(rows.shape[0], cols.shape[0])}"
                )
            self._rows.append(rows[coo.row])
            self._cols.append(cols[coo.col])
            self._vals.append(coo.data)
            return

        block = np.asarray(block, dtype=float).reshape(rows.shape[0], cols.shape[0])
        r, c = np.meshgrid(rows, cols, indexing="ij")
        self._rows.append(r.ravel())
        self._cols.append(c.ravel())
        self._vals.append(block.ravel())

    def insert_identity(self, rows: NDArray, cols: NDArray) -> None:
        """Place an identity block (rows and cols of equal length)."""
        self.insert(rows, cols, sparse.identity(len(rows), format="coo"))

    def tocsr(self) -> sparse.csr_matrix:
        """Finalize into compressed sparse rows."""
        if not self._vals:
            return sparse.csr_matrix(self.shape)

        return sparse.coo_matrix(
            (
                np.concatenate(self._vals),
                (np.concatenate(self._rows), np.concatenate(self._cols)),
            ),
            shape=self.shape,
        ).tocsr()
