"""
Detection of parabolic subdiagrams.

A parabolic (affine) Coxeter subdiagram has a positive semidefinite,
singular Gram matrix. A compact polytope has none, so a candidate
containing one can only be repaired by further extension.

Only subsets containing the last hyperplane are tested: earlier
hyperplanes were already checked when they were added.
"""

from itertools import combinations
from typing import Optional, Tuple

import numpy as np

from ..config import COMPARISON_TOLERANCE
from ..polytope.candidate import PolytopeCandidate


def is_parabolic(m: np.ndarray, tolerance: float = COMPARISON_TOLERANCE) -> bool:
    """True if m is singular and positive semidefinite."""
    if abs(np.linalg.det(m)) > tolerance:
        return False
    return bool(np.min(np.linalg.eigvalsh(m)) >= -tolerance)


class ParabolicCheck:
    """
    Look for a parabolic submatrix of a given size containing the last index.

    Parameters
    ----------
    tolerance : float
        Tolerance for the determinant and eigenvalue tests.
    """

    def __init__(self, tolerance: float = COMPARISON_TOLERANCE):
        self.tolerance = tolerance
        self.last_found: Optional[Tuple[int, ...]] = None

    def check(self, gram: np.ndarray, dim: int) -> bool:
        """
        True if some size-``dim`` principal submatrix containing the last
        index is parabolic.

        Parameters
        ----------
        gram : np.ndarray
            Square Gram matrix.
        dim : int
            Size of the submatrices to test.
        """
        n = gram.shape[0]
        if dim < 1 or dim > n:
            raise ValueError(f"Submatrix size {dim} out of range for {n}x{n} matrix")
        self.last_found = None
        last = n - 1
        for head in combinations(range(last), dim - 1):
            idx = head + (last,)
            if is_parabolic(gram[np.ix_(idx, idx)], self.tolerance):
                self.last_found = idx
                return True
        return False

    def __call__(self, p: PolytopeCandidate) -> bool:
        return self.check(p.gram, p.real_dimension())
