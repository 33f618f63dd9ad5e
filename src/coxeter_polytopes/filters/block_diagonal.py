"""
Filter for decomposable Coxeter diagrams.

Two hyperplanes are joined in the Coxeter diagram when their inner product
is non-zero. A Gram matrix whose diagram has several connected components
is block diagonal up to reordering and describes a reducible group.
"""

from typing import Union

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import connected_components

from ..config import COMPARISON_TOLERANCE
from ..polytope.candidate import PolytopeCandidate


def diagram_components(m: np.ndarray, tolerance: float = COMPARISON_TOLERANCE) -> int:
    """Number of connected components of the Coxeter diagram of m."""
    adjacency = np.abs(m) > tolerance
    np.fill_diagonal(adjacency, False)
    n_components, _ = connected_components(csr_matrix(adjacency, dtype=np.float64), directed=False)
    return int(n_components)


class BlockDiagonalCheck:
    """
    True iff the diagram splits into two or more independent blocks.

    Examples
    --------
    >>> BlockDiagonalCheck()(np.eye(3))
    True
    """

    def __init__(self, tolerance: float = COMPARISON_TOLERANCE):
        self.tolerance = tolerance

    def check(self, m: np.ndarray) -> bool:
        return diagram_components(m, self.tolerance) >= 2

    def __call__(self, obj: Union[PolytopeCandidate, np.ndarray]) -> bool:
        if isinstance(obj, PolytopeCandidate):
            return self.check(obj.gram)
        return self.check(np.asarray(obj))
