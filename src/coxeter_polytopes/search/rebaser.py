"""
Rebasing of a candidate onto every possible basis.

A hyperbolic extension only prescribes inner products with the current
basis. Rebasing onto each ``real_dimension``-subset of the hyperplanes
lets later extensions prescribe angles with any of them.
"""

from itertools import combinations
from typing import Iterator

from ..polytope.candidate import PolytopeCandidate


def rebased_polytopes(p: PolytopeCandidate) -> Iterator[PolytopeCandidate]:
    """
    Generate copies of ``p`` rebased onto every basis subset.

    Subsets are taken in lexicographic order, so the first copy keeps the
    current basis.

    Yields
    ------
    PolytopeCandidate
        Independent copies; mutating one does not affect ``p``.
    """
    if not p.is_valid:
        raise ValueError("Cannot rebase an invalid polytope candidate")
    for indices in combinations(range(len(p)), p.real_dimension()):
        q = p.copy()
        q.rebase_vectors(indices)
        yield q
