"""
Nullspace of a full-row-rank rectangular matrix from its QR factorisation.

For A of shape (k, n) with k < n, the QR factorisation of the transpose,
A^T = Q R, gives A = R^T Q^T. The trailing n - rank columns of Q span the
kernel of A and are orthonormal.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import scipy.linalg

from ..config import PIVOT_TOLERANCE


def qr_rank(R: np.ndarray, tolerance: float = PIVOT_TOLERANCE) -> int:
    """
    Numerical rank read off the diagonal of an upper triangular QR factor.

    A pivot counts when its magnitude exceeds ``tolerance`` times the
    largest pivot (or ``tolerance`` itself when all pivots are small).
    """
    k = min(R.shape)
    if k == 0:
        return 0
    diag = np.abs(np.diag(R[:k, :k]))
    scale = max(1.0, float(np.max(diag)))
    return int(np.count_nonzero(diag > tolerance * scale))


@dataclass
class Nullspace:
    """
    Orthonormal basis of the kernel of a matrix.

    Attributes
    ----------
    basis : np.ndarray
        Matrix of shape (n, nullity); columns are orthonormal kernel vectors.
    """
    basis: np.ndarray

    @property
    def dimension(self) -> int:
        """Nullity of the matrix."""
        return self.basis.shape[1]

    def vector(self) -> np.ndarray:
        """
        The kernel direction of a nullity-1 matrix.

        The sign is fixed so that the last ("time") coordinate is
        non-negative, making the result independent of LAPACK sign choices.

        Raises
        ------
        ValueError
            If the nullity is not exactly one.
        """
        if self.dimension != 1:
            raise ValueError(f"Expected a one-dimensional nullspace, got {self.dimension}")
        n = self.basis[:, 0].copy()
        if n[-1] < 0:
            n = -n
        return n

    def contains(self, v: np.ndarray, tolerance: float = 1e-9) -> bool:
        """True if v lies in the span of the basis (up to tolerance)."""
        residual = v - self.basis @ (self.basis.T @ v)
        return bool(np.linalg.norm(residual) <= tolerance * max(1.0, np.linalg.norm(v)))

    @classmethod
    def from_qr(cls, Q: np.ndarray, rank: int) -> "Nullspace":
        """Build from the full Q factor of A^T and the rank of A."""
        return cls(basis=Q[:, rank:].copy())


def compute_nullspace(A: np.ndarray,
                      tolerance: float = PIVOT_TOLERANCE) -> Optional[Nullspace]:
    """
    Kernel of a full-row-rank matrix.

    Parameters
    ----------
    A : np.ndarray
        Matrix of shape (k, n) with k <= n.
    tolerance : float
        Relative pivot tolerance passed to :func:`qr_rank`.

    Returns
    -------
    Nullspace or None
        None when A is rank deficient (fewer than k independent rows).
    """
    if A.ndim != 2:
        raise ValueError(f"Expected a 2D matrix, got shape {A.shape}")
    k, n = A.shape
    if k > n:
        raise ValueError(f"Matrix has more rows than columns: {A.shape}")
    if k == 0:
        return Nullspace(basis=np.eye(n))
    Q, R = scipy.linalg.qr(A.T)
    rank = qr_rank(R, tolerance)
    if rank < k:
        return None
    return Nullspace.from_qr(Q, rank)
