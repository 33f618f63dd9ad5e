"""
Gram matrices of the connected elliptic Coxeter diagrams.

These are the finite reflection groups A_n, B_n (= C_n), D_n, E_6, E_7,
E_8, F_4, H_3, H_4 and the dihedral groups G_2^(m). Each diagram is
encoded by its edge labels; a label m gives inner product -cos(π/m)
between the two nodes, and unlabelled pairs are orthogonal.

Reference: Humphreys, "Reflection Groups and Coxeter Groups", Section 2.7
"""

from typing import Dict, Iterable, Iterator, List, Tuple

import numpy as np

from ..config import DEFAULT_DIHEDRAL_LABELS
from ..linalg.calc import min_cos_angle


Labels = Dict[Tuple[int, int], int]


def gram_from_labels(size: int, labels: Labels) -> np.ndarray:
    """
    Gram matrix of a Coxeter diagram given by its labelled edges.

    Parameters
    ----------
    size : int
        Number of nodes.
    labels : dict
        Mapping (i, j) -> m for every edge of the diagram.

    Returns
    -------
    np.ndarray
        Symmetric (size, size) matrix with unit diagonal.
    """
    gram = np.eye(size)
    for (i, j), m in labels.items():
        if not (0 <= i < size and 0 <= j < size) or i == j:
            raise ValueError(f"Invalid edge ({i}, {j}) for a diagram on {size} nodes")
        gram[i, j] = gram[j, i] = min_cos_angle(m)
    return gram


def _chain(nodes: List[int]) -> Labels:
    return {(a, b): 3 for a, b in zip(nodes, nodes[1:])}


def type_a(size: int) -> np.ndarray:
    """A_n: a simple chain."""
    if size < 1:
        raise ValueError(f"A_n needs at least 1 node, got {size}")
    return gram_from_labels(size, _chain(list(range(size))))


def type_b(size: int) -> np.ndarray:
    """B_n: a chain with label 4 on the first edge."""
    if size < 2:
        raise ValueError(f"B_n needs at least 2 nodes, got {size}")
    labels = _chain(list(range(size)))
    labels[(0, 1)] = 4
    return gram_from_labels(size, labels)


def type_d(size: int) -> np.ndarray:
    """D_n: nodes 0 and 1 both attached to node 2, then a chain 2-3-...-(n-1)."""
    if size < 4:
        raise ValueError(f"D_n needs at least 4 nodes, got {size}")
    labels = _chain(list(range(2, size)))
    labels[(0, 2)] = 3
    labels[(1, 2)] = 3
    return gram_from_labels(size, labels)


def type_e(size: int) -> np.ndarray:
    """E_6, E_7, E_8: chain 0-1-2-4-5-... with node 3 attached to node 2."""
    if size not in (6, 7, 8):
        raise ValueError(f"E_n exists only for n in 6, 7, 8, got {size}")
    labels = _chain([0, 1, 2] + list(range(4, size)))
    labels[(2, 3)] = 3
    return gram_from_labels(size, labels)


def type_f(size: int = 4) -> np.ndarray:
    """F_4: chain with labels 3, 4, 3."""
    if size != 4:
        raise ValueError(f"F_n exists only for n = 4, got {size}")
    return gram_from_labels(4, {(0, 1): 3, (1, 2): 4, (2, 3): 3})


def type_g(size: int, label: int) -> np.ndarray:
    """G_2^(m): two nodes joined by an edge labelled m."""
    if size != 2:
        raise ValueError(f"G_n exists only for n = 2, got {size}")
    if label < 3:
        raise ValueError(f"G_2 label must be at least 3, got {label}")
    return gram_from_labels(2, {(0, 1): label})


def type_h(size: int) -> np.ndarray:
    """H_3, H_4: a chain with label 5 on the first edge."""
    if size not in (3, 4):
        raise ValueError(f"H_n exists only for n in 3, 4, got {size}")
    labels = _chain(list(range(size)))
    labels[(0, 1)] = 5
    return gram_from_labels(size, labels)


def connected_diagrams(size: int, g_labels: Iterable[int] = DEFAULT_DIHEDRAL_LABELS
                       ) -> Iterator[Tuple[str, np.ndarray]]:
    """
    All connected elliptic diagrams on ``size`` nodes.

    Dihedral groups G_2^(m) are listed for each label in ``g_labels``.
    Labels 3 and 4 are skipped since G_2^(3) = A_2 and G_2^(4) = B_2.

    Yields
    ------
    name, gram : str, np.ndarray
    """
    yield f"A{size}", type_a(size)
    if size >= 2:
        yield f"B{size}", type_b(size)
    if size >= 4:
        yield f"D{size}", type_d(size)
    if size in (6, 7, 8):
        yield f"E{size}", type_e(size)
    if size == 4:
        yield "F4", type_f(4)
    if size == 2:
        for m in g_labels:
            if m in (3, 4):
                continue
            yield f"G2({m})", type_g(2, m)
    if size in (3, 4):
        yield f"H{size}", type_h(size)
