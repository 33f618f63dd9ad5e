"""
Building blocks of the polytope search.

Main entry points:
- `type_a(n)` ... `type_h(n)`: elliptic seed Gram matrices
- `inner_product_vectors(size, angles)`: trial inner products for a new hyperplane
- `extend_polytope(p, angles)`: valid extensions of one candidate
- `extend_all(candidates, angles, workers)`: batch extension on a process pool
- `rebased_polytopes(p)`: every rebasing of a candidate
"""

from .elliptic import (
    gram_from_labels,
    type_a,
    type_b,
    type_d,
    type_e,
    type_f,
    type_g,
    type_h,
    connected_diagrams,
)

from .inner_product_vectors import (
    inner_product_vectors,
    count_inner_product_vectors,
)

from .extender import (
    ExtensionBatch,
    extend_polytope,
    extend_all,
)

from .rebaser import rebased_polytopes

__all__ = [
    # Elliptic seeds
    "gram_from_labels",
    "type_a",
    "type_b",
    "type_d",
    "type_e",
    "type_f",
    "type_g",
    "type_h",
    "connected_diagrams",
    # Trial vectors
    "inner_product_vectors",
    "count_inner_product_vectors",
    # Extension
    "ExtensionBatch",
    "extend_polytope",
    "extend_all",
    # Rebasing
    "rebased_polytopes",
]
