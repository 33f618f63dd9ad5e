"""
Column store of hyperplane normal vectors.

A family starts as the Cholesky factor of a seed Gram matrix, living in
Euclidean R^d. Its first hyperbolic vector adds a time coordinate, after
which every vector lives in R^{d,1}. Vectors are never modified once
stored, only appended or reordered.
"""

from typing import List, Sequence

import numpy as np


class VectorFamily:
    """
    Ordered family of column vectors of a common dimension.

    Parameters
    ----------
    matrix : np.ndarray
        Matrix of shape (dimension, n_vectors). The family keeps a copy.
    """

    def __init__(self, matrix: np.ndarray):
        matrix = np.array(matrix, dtype=np.float64)
        if matrix.ndim != 2:
            raise ValueError(f"Expected a 2D matrix of column vectors, got shape {matrix.shape}")
        self._vectors = matrix

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "VectorFamily":
        return cls(matrix)

    @property
    def matrix(self) -> np.ndarray:
        """Read-only view of the (dimension, size) storage."""
        view = self._vectors.view()
        view.flags.writeable = False
        return view

    @property
    def dimension(self) -> int:
        """Number of coordinates of each vector."""
        return self._vectors.shape[0]

    def __len__(self) -> int:
        return self._vectors.shape[1]

    def __getitem__(self, index: int) -> np.ndarray:
        return self._vectors[:, index].copy()

    def time_coordinates(self) -> np.ndarray:
        """Last coordinate of every vector."""
        return self._vectors[-1, :].copy()

    def first_basis_cols(self) -> np.ndarray:
        """The first ``dimension - 1`` vectors, as a (dimension, dimension-1) matrix."""
        return self._vectors[:, :self.dimension - 1].copy()

    def copy(self) -> "VectorFamily":
        return VectorFamily(self._vectors)

    # -------------------------------------------------------------------------
    # Growth
    # -------------------------------------------------------------------------

    def add_vector(self, v: np.ndarray) -> None:
        """Append a vector of the family's dimension."""
        v = np.asarray(v, dtype=np.float64)
        if v.shape != (self.dimension,):
            raise ValueError(
                f"Vector of shape {v.shape} does not match family dimension {self.dimension}"
            )
        self._vectors = np.column_stack([self._vectors, v])

    def add_first_hyperbolic_vector(self, v: np.ndarray) -> None:
        """
        Append a vector with one extra (time) coordinate.

        Existing vectors are zero-extended in the new coordinate, so their
        mutual inner products are unchanged.
        """
        v = np.asarray(v, dtype=np.float64)
        if v.shape != (self.dimension + 1,):
            raise ValueError(
                f"First hyperbolic vector must have {self.dimension + 1} coordinates, "
                f"got shape {v.shape}"
            )
        padded = np.vstack([self._vectors, np.zeros((1, len(self)))])
        self._vectors = np.column_stack([padded, v])

    def copy_and_add_vector(self, v: np.ndarray) -> "VectorFamily":
        family = self.copy()
        family.add_vector(v)
        return family

    def copy_and_add_first_hyperbolic_vector(self, v: np.ndarray) -> "VectorFamily":
        family = self.copy()
        family.add_first_hyperbolic_vector(v)
        return family

    # -------------------------------------------------------------------------
    # Reordering
    # -------------------------------------------------------------------------

    def swap(self, a: int, b: int) -> None:
        """Exchange the vectors at positions a and b."""
        n = len(self)
        if not (0 <= a < n and 0 <= b < n):
            raise ValueError(f"Swap indices ({a}, {b}) out of range for {n} vectors")
        if a != b:
            self._vectors[:, [a, b]] = self._vectors[:, [b, a]]

    def permute(self, order: Sequence[int]) -> None:
        """Reorder so that new position i holds old vector ``order[i]``."""
        order = _check_permutation(order, len(self))
        self._vectors = self._vectors[:, order]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorFamily):
            return NotImplemented
        return (self._vectors.shape == other._vectors.shape
                and bool(np.array_equal(self._vectors, other._vectors)))

    def __repr__(self) -> str:
        return f"VectorFamily(dimension={self.dimension}, size={len(self)})"


def _check_permutation(order: Sequence[int], n: int) -> List[int]:
    order = [int(i) for i in order]
    if sorted(order) != list(range(n)):
        raise ValueError(f"{order} is not a permutation of range({n})")
    return order
