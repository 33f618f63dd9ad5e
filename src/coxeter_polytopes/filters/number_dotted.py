"""Filter on the number of dotted (non-intersecting) hyperplane pairs."""

from typing import Union

import numpy as np

from ..config import COMPARISON_TOLERANCE, DOTTED_THRESHOLD
from ..polytope.candidate import PolytopeCandidate


def count_dotted(m: np.ndarray, tolerance: float = COMPARISON_TOLERANCE) -> int:
    """Number of unordered pairs i < j with m[i, j] <= -1."""
    upper = m[np.triu_indices(m.shape[0], k=1)]
    return int(np.count_nonzero(upper < DOTTED_THRESHOLD + tolerance))


class NumberDottedCheck:
    """
    True iff the Gram matrix has exactly ``n`` dotted pairs.

    Parameters
    ----------
    n : int
        Required number of dotted pairs.
    """

    def __init__(self, n: int, tolerance: float = COMPARISON_TOLERANCE):
        if n < 0:
            raise ValueError(f"Number of dotted pairs must be non-negative, got {n}")
        self.n = n
        self.tolerance = tolerance

    def __call__(self, obj: Union[PolytopeCandidate, np.ndarray]) -> bool:
        m = obj.gram if isinstance(obj, PolytopeCandidate) else np.asarray(obj)
        return count_dotted(m, self.tolerance) == self.n
