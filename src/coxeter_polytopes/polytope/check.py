"""
Compactness check for hyperbolic Coxeter polytope candidates.

A candidate is compact when every edge of its combinatorial graph is
bounded by two vertices. Vertices are sets of ``real_dimension`` hyperplanes
whose Gram submatrix is positive definite (elliptic); an edge is a vertex
with one hyperplane removed. Starting from the seed vertex (the hyperplanes
with zero time coordinate), the check walks the vertex graph breadth-first
and fails as soon as some edge has no second endpoint.

Positive definiteness is tested by attempting a Cholesky factorisation,
which costs one O(k^3) factorisation per test instead of an eigensolve.

Reference: Vinberg, "Hyperbolic reflection groups", Proposition 4.2
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Set, Tuple

import numpy as np

from ..config import ELLIPTIC_PIVOT_TOLERANCE
from .candidate import PolytopeCandidate


Vertex = Tuple[int, ...]


@dataclass(frozen=True)
class Edge:
    """
    An edge reached by dropping one hyperplane from a known vertex.

    Attributes
    ----------
    vertex_index : int
        Index of the hyperplane that was dropped. Completing the edge with
        it would give back the vertex the edge came from.
    indices : tuple of int
        Sorted hyperplane indices spanning the edge.
    """
    vertex_index: int
    indices: Vertex


def is_elliptic(m: np.ndarray, tolerance: float = ELLIPTIC_PIVOT_TOLERANCE) -> bool:
    """
    True if a symmetric matrix is positive definite.

    The smallest Cholesky pivot must exceed ``tolerance`` so that
    semidefinite (parabolic) matrices are not accepted through rounding.
    """
    try:
        L = np.linalg.cholesky(m)
    except np.linalg.LinAlgError:
        return False
    return bool(np.min(np.diag(L)) > tolerance)


def edges_of(vertex: Vertex) -> Tuple[Edge, ...]:
    """All edges obtained by dropping one index from a vertex."""
    return tuple(
        Edge(vertex_index=i, indices=tuple(j for j in vertex if j != i))
        for i in vertex
    )


class PolytopeCheck:
    """
    Breadth-first compactness test.

    The check keeps its work queue after a failure, so :meth:`resume` can
    continue on an extension of the failed candidate without revisiting
    vertices already found.

    Parameters
    ----------
    tolerance : float
        Smallest Cholesky pivot accepted by :func:`is_elliptic`.
    """

    def __init__(self, tolerance: float = ELLIPTIC_PIVOT_TOLERANCE):
        self.tolerance = tolerance
        self._queue: Deque[Edge] = deque()
        self._visited: Set[Vertex] = set()
        self._gram: Optional[np.ndarray] = None
        self._failed_edge: Optional[Edge] = None
        self._last_edge: Optional[Edge] = None

    @property
    def visited_vertices(self) -> Set[Vertex]:
        """Vertices found by the most recent run."""
        return set(self._visited)

    def __call__(self, p: PolytopeCandidate) -> bool:
        """
        Decide whether a candidate is a compact polytope.

        Returns False for invalid or Euclidean-phase candidates and for
        candidates whose seed vertex cannot be found.
        """
        self._queue.clear()
        self._visited.clear()
        self._failed_edge = None
        self._last_edge = None
        self._gram = None
        if not p.is_valid or not p.is_hyperbolic:
            return False

        gram = np.array(p.gram)
        vertex = self._initial_vertex(p)
        if vertex is None or not is_elliptic(gram[np.ix_(vertex, vertex)], self.tolerance):
            return False

        self._gram = gram
        self._visited.add(vertex)
        self._queue.extend(edges_of(vertex))
        return self._run()

    def resume(self, p: PolytopeCandidate) -> bool:
        """
        Continue a failed check on an extension of the failed candidate.

        The edge that failed is tried again first, now with the extra
        hyperplanes available. With no failed check to continue, this is
        the same as calling the check.

        Raises
        ------
        ValueError
            If ``p`` has fewer hyperplanes than the candidate checked before.
        """
        if self._failed_edge is None or self._gram is None:
            return self(p)
        if not p.is_valid or not p.is_hyperbolic:
            return False
        if len(p) < self._gram.shape[0]:
            raise ValueError(
                f"Cannot resume a check of {self._gram.shape[0]} hyperplanes "
                f"on a candidate with {len(p)}"
            )
        self._gram = np.array(p.gram)
        self._queue.appendleft(self._failed_edge)
        self._failed_edge = None
        return self._run()

    def last_edge(self) -> Optional[np.ndarray]:
        """Gram submatrix of the edge that failed, or of the last edge processed."""
        if self._last_edge is None or self._gram is None:
            return None
        idx = self._last_edge.indices
        return self._gram[np.ix_(idx, idx)]

    def _initial_vertex(self, p: PolytopeCandidate) -> Optional[Vertex]:
        dim = p.real_dimension()
        zero_time = np.flatnonzero(p.vectors.time_coordinates() == 0.0)
        if zero_time.shape[0] < dim:
            return None
        return tuple(int(i) for i in zero_time[:dim])

    def _complete(self, edge: Edge) -> Optional[int]:
        n = self._gram.shape[0]
        base = list(edge.indices)
        for j in range(n):
            if j == edge.vertex_index or j in edge.indices:
                continue
            idx = base + [j]
            if is_elliptic(self._gram[np.ix_(idx, idx)], self.tolerance):
                return j
        return None

    def _run(self) -> bool:
        while self._queue:
            edge = self._queue.popleft()
            self._last_edge = edge
            j = self._complete(edge)
            if j is None:
                self._failed_edge = edge
                return False

            vertex = tuple(sorted(edge.indices + (j,)))
            if vertex in self._visited:
                continue
            self._visited.add(vertex)
            for next_edge in edges_of(vertex):
                if next_edge.vertex_index != j:
                    self._queue.append(next_edge)
        return True


def is_compact(p: PolytopeCandidate) -> bool:
    """Run a fresh :class:`PolytopeCheck` on a candidate."""
    return PolytopeCheck()(p)
