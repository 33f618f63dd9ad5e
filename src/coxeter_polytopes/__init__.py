"""
coxeter_polytopes: enumeration of compact hyperbolic Coxeter polytopes

Candidates are grown one hyperplane at a time from an elliptic seed,
pruned by cheap Gram-matrix filters and tested for compactness by walking
the vertex graph implied by the Gram matrix.
"""

from . import config
from .angles import Angles
from .polytope import PolytopeCandidate, PolytopeCheck, VectorFamily

__version__ = "0.1.0"
__all__ = [
    "config",
    "Angles",
    "PolytopeCandidate",
    "PolytopeCheck",
    "VectorFamily",
]
