"""Filter rejecting a new hyperplane that duplicates an existing one."""

from typing import Union

import numpy as np

from ..config import DUPLICATE_TOLERANCE
from ..polytope.candidate import PolytopeCandidate


class DuplicateColumnCheck:
    """
    True when the last column equals some earlier column.

    Columns are compared entry by entry within ``tolerance``.

    Examples
    --------
    >>> DuplicateColumnCheck()(np.array([[0.0, 0.0], [1.0, 1.0]]))
    True
    """

    def __init__(self, tolerance: float = DUPLICATE_TOLERANCE):
        self.tolerance = tolerance

    def check(self, m: np.ndarray) -> bool:
        last = m[:, -1]
        for j in range(m.shape[1] - 1):
            if np.all(np.abs(m[:, j] - last) <= self.tolerance):
                return True
        return False

    def __call__(self, obj: Union[PolytopeCandidate, np.ndarray]) -> bool:
        if isinstance(obj, PolytopeCandidate):
            return self.check(obj.gram)
        return self.check(np.asarray(obj))
