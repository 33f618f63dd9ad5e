"""
Predicates used to prune the polytope search.

- `AngleCheck`: last column uses only allowed angles (True = keep)
- `ParabolicCheck`: a parabolic subdiagram contains the last hyperplane
- `DuplicateColumnCheck`: the last hyperplane repeats an earlier one
- `BlockDiagonalCheck`: the diagram is decomposable
- `NumberDottedCheck`: the diagram has exactly n dotted edges
"""

from .angle import AngleCheck
from .parabolic import ParabolicCheck, is_parabolic
from .duplicate_column import DuplicateColumnCheck
from .block_diagonal import BlockDiagonalCheck, diagram_components
from .number_dotted import NumberDottedCheck, count_dotted

__all__ = [
    "AngleCheck",
    "ParabolicCheck",
    "is_parabolic",
    "DuplicateColumnCheck",
    "BlockDiagonalCheck",
    "diagram_components",
    "NumberDottedCheck",
    "count_dotted",
]
