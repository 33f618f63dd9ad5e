"""
Cached LQ factorisation of a hyperbolic basis.

Extension attempts from one candidate all solve A x = b with the same A
(the basis rows) and a different target b. The factorisation of A is
therefore computed once and stored as

    qtli = Q_1 L^{-1}      shape (n, k)
    null = Q_2             shape (n,)

so that every particular solution is a single matrix-vector product
``x0 = qtli @ b`` and the general solution is ``x0 + λ null``.

Reference: Golub & Van Loan, "Matrix Computations", Section 5.7
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import scipy.linalg

from ..config import PIVOT_TOLERANCE
from .nullspace import Nullspace, qr_rank


@dataclass
class LQInfo:
    """
    Precomputed pieces of an LQ factorisation A = [L 0] Q^T.

    Attributes
    ----------
    qtli : np.ndarray
        Q_1 L^{-1}, shape (n, k); maps a target vector to a particular solution.
    null : np.ndarray
        Unit kernel vector of A, shape (n,), with non-negative last coordinate.
    """
    qtli: np.ndarray
    null: np.ndarray

    @property
    def n_rows(self) -> int:
        return self.qtli.shape[1]

    def particular_solution(self, b: np.ndarray) -> np.ndarray:
        """Minimum-norm solution of A x = b."""
        if b.shape[0] != self.n_rows:
            raise ValueError(
                f"Target length {b.shape[0]} does not match basis size {self.n_rows}"
            )
        return self.qtli @ b

    @classmethod
    def from_matrix(cls, A: np.ndarray,
                    tolerance: float = PIVOT_TOLERANCE) -> Optional["LQInfo"]:
        """
        Factorise a (k, k+1) matrix of full row rank.

        The LQ factorisation of A is taken as the QR factorisation of A^T:
        A^T = Q R gives A = R^T Q^T with L = R[:k, :k]^T lower triangular.

        Parameters
        ----------
        A : np.ndarray
            Matrix of shape (k, k+1).
        tolerance : float
            Relative pivot tolerance; a smaller pivot means rank deficiency.

        Returns
        -------
        LQInfo or None
            None if A is rank deficient.
        """
        if A.ndim != 2 or A.shape[1] != A.shape[0] + 1:
            raise ValueError(f"Expected a (k, k+1) matrix, got shape {A.shape}")
        k = A.shape[0]

        Q, R = scipy.linalg.qr(A.T)
        if qr_rank(R, tolerance) < k:
            return None

        L = R[:k, :k].T
        L_inv = scipy.linalg.solve_triangular(L, np.eye(k), lower=True)
        qtli = Q[:, :k] @ L_inv
        null = Nullspace.from_qr(Q, k).vector()
        return cls(qtli=qtli, null=null)
