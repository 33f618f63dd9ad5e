"""
Solver for the one-parameter systems that arise when adding a hyperplane.

In the hyperbolic phase a candidate's basis has k = d rows in R^{d,1}, so
asking for prescribed inner products with the basis leaves exactly one
free parameter along the kernel of the basis.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..config import PIVOT_TOLERANCE
from .lq_info import LQInfo


@dataclass
class UDSolution:
    """
    Solution family x0 + λ null of an underdetermined system.

    Attributes
    ----------
    success : bool
        False if the coefficient matrix was rank deficient.
    particular : Optional[np.ndarray]
        Particular solution x0 (orthogonal to ``null``).
    null : Optional[np.ndarray]
        Unit kernel direction.
    """
    success: bool
    particular: Optional[np.ndarray] = None
    null: Optional[np.ndarray] = None


class UDSolver:
    """
    Underdetermined solver with a lazily computed, reusable factorisation.

    Parameters
    ----------
    A : np.ndarray
        Coefficient matrix of shape (k, k+1), one row per basis vector.
    tolerance : float
        Relative pivot tolerance for rank deficiency.

    Examples
    --------
    >>> solver = UDSolver(np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]))
    >>> sol = solver.solve(np.array([2.0, 3.0]))
    >>> bool(np.allclose(solver.A @ sol.particular, [2.0, 3.0]))
    True
    >>> sol.null
    array([0., 0., 1.])
    """

    def __init__(self, A: np.ndarray, tolerance: float = PIVOT_TOLERANCE):
        if A.ndim != 2 or A.shape[1] != A.shape[0] + 1:
            raise ValueError(f"Expected a (k, k+1) matrix, got shape {A.shape}")
        self.A = A
        self.tolerance = tolerance
        self._info: Optional[LQInfo] = None
        self._factorised = False

    @property
    def info(self) -> Optional[LQInfo]:
        """The cached factorisation, or None if A is rank deficient."""
        if not self._factorised:
            self._info = LQInfo.from_matrix(self.A, self.tolerance)
            self._factorised = True
        return self._info

    def solve(self, b: np.ndarray) -> UDSolution:
        """
        Solve A x = b up to the kernel direction.

        Raises
        ------
        ValueError
            If b does not have one entry per row of A.
        """
        if b.shape[0] != self.A.shape[0]:
            raise ValueError(
                f"Target length {b.shape[0]} does not match {self.A.shape[0]} rows"
            )
        info = self.info
        if info is None:
            return UDSolution(success=False)
        return UDSolution(
            success=True,
            particular=info.particular_solution(b),
            null=info.null,
        )


def solve_underdetermined(A: np.ndarray, b: np.ndarray,
                          tolerance: float = PIVOT_TOLERANCE) -> UDSolution:
    """One-shot convenience wrapper around :class:`UDSolver`."""
    return UDSolver(A, tolerance).solve(b)
