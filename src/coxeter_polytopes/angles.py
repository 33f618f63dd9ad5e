"""
Allowed dihedral angles and their inner products.

A set of angle submultiples {n} (angle π/n) is converted once into the
sorted list of inner products -cos(π/n) used by the angle filter and the
extension-vector generator.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from .config import COMPARISON_TOLERANCE, DEFAULT_ANGLES
from .linalg.calc import min_cos_angle


@dataclass(frozen=True)
class Angles:
    """
    Allowed angle submultiples and the matching inner products.

    Attributes
    ----------
    multiples : tuple of int
        Sorted, distinct submultiples n, each >= 2.
    inner_products : tuple of float
        -cos(π/n) for each multiple, sorted ascending.
    """
    multiples: Tuple[int, ...]
    inner_products: Tuple[float, ...] = field(init=False)
    _lookup: Dict[float, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        multiples = tuple(sorted(set(int(m) for m in self.multiples)))
        if not multiples:
            raise ValueError("At least one angle multiple is required")
        if multiples[0] < 2:
            raise ValueError(f"Angle multiples must be >= 2, got {multiples}")
        prods = {min_cos_angle(m): m for m in multiples}
        object.__setattr__(self, "multiples", multiples)
        object.__setattr__(self, "inner_products", tuple(sorted(prods)))
        object.__setattr__(self, "_lookup", prods)

    @classmethod
    def from_multiples(cls, multiples: Iterable[int]) -> "Angles":
        return cls(tuple(multiples))

    @classmethod
    def default(cls) -> "Angles":
        """Angles π/2, π/3, π/4, π/5, π/8."""
        return cls(DEFAULT_ANGLES)

    def as_array(self) -> np.ndarray:
        return np.array(self.inner_products)

    def multiple_for(self, value: float,
                     tolerance: float = COMPARISON_TOLERANCE) -> Optional[int]:
        """
        Angle submultiple whose inner product matches ``value``.

        Examples
        --------
        >>> Angles((2, 3, 4)).multiple_for(-0.5)
        3
        >>> Angles((2, 3, 4)).multiple_for(-0.3) is None
        True
        """
        for prod, mult in self._lookup.items():
            if abs(prod - value) <= tolerance:
                return mult
        return None
