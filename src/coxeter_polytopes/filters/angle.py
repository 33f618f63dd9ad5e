"""
Filter on the angles made by the most recently added hyperplane.

Every off-diagonal entry of the last Gram column must either be dotted
(<= -1, the hyperplanes do not meet) or equal one of the allowed inner
products -cos(π/n).
"""

from typing import Iterable, Union

import numpy as np

from ..angles import Angles
from ..config import COMPARISON_TOLERANCE, DOTTED_THRESHOLD
from ..polytope.candidate import PolytopeCandidate


class AngleCheck:
    """
    Accept a Gram matrix whose last column uses only allowed angles.

    Parameters
    ----------
    angles : Angles or iterable of int
        Allowed angle submultiples.
    tolerance : float
        Matching tolerance for inner products.

    Examples
    --------
    >>> check = AngleCheck([2, 3])
    >>> check(np.array([[1.0, -0.5], [-0.5, 1.0]]))
    True
    >>> check(-0.9)
    False
    """

    def __init__(self, angles: Union[Angles, Iterable[int]],
                 tolerance: float = COMPARISON_TOLERANCE):
        if not isinstance(angles, Angles):
            angles = Angles.from_multiples(angles)
        self.angles = angles
        self.tolerance = tolerance
        self._values = angles.as_array()

    def check_value(self, val: float) -> bool:
        """True if a single inner product is dotted or an allowed angle."""
        if val < DOTTED_THRESHOLD + self.tolerance:
            return True
        if val > self.tolerance:
            return False
        i = int(np.searchsorted(self._values, val))
        for j in (i - 1, i):
            if 0 <= j < self._values.shape[0] and abs(self._values[j] - val) <= self.tolerance:
                return True
        return False

    def check(self, m: np.ndarray) -> bool:
        """True if every off-diagonal entry of the last column passes."""
        last = m.shape[1] - 1
        return all(self.check_value(float(m[i, last])) for i in range(last))

    def __call__(self, obj: Union[PolytopeCandidate, np.ndarray, float]) -> bool:
        if isinstance(obj, PolytopeCandidate):
            return self.check(obj.gram)
        if np.ndim(obj) == 0:
            return self.check_value(float(obj))
        return self.check(np.asarray(obj))
