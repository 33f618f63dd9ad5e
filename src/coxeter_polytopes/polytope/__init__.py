"""
Polytope candidates and their compactness check.

Main entry points:
- `PolytopeCandidate(gram)`: seed from an elliptic Gram matrix
- `PolytopeCandidate.extend_by_inner_products(b)`: add one hyperplane
- `PolytopeCheck()(p)`: breadth-first compactness test
- `save_candidate(p, path)` / `load_candidate(path)`: NPZ persistence
"""

from .vector_family import VectorFamily

from .candidate import PolytopeCandidate

from .check import (
    Edge,
    PolytopeCheck,
    edges_of,
    is_compact,
    is_elliptic,
)

from .storage import (
    save_candidate,
    load_candidate,
    save_candidates,
    load_candidates,
)

__all__ = [
    # Vectors
    "VectorFamily",
    # Candidates
    "PolytopeCandidate",
    # Compactness
    "Edge",
    "PolytopeCheck",
    "edges_of",
    "is_compact",
    "is_elliptic",
    # Storage
    "save_candidate",
    "load_candidate",
    "save_candidates",
    "load_candidates",
]
