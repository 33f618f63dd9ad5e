"""
Polytope candidates: a Gram matrix together with the vectors realising it.

A candidate starts in the Euclidean phase, built from the Cholesky factor
of the Gram matrix of an elliptic Coxeter diagram. Its first extension adds
a time coordinate and moves it into the hyperbolic phase; every later
extension stays hyperbolic. A failed extension yields an invalid candidate,
which must not be extended again.

Extension by prescribed inner products:

    Euclidean phase:  solve B x = b, set x_time = sqrt(|x|^2 - 1)
    Hyperbolic phase: solve B x = b as x0 + λ n, pick λ with <x, x> = 1

where the rows of B are the basis vectors (with the time coordinate negated
in the hyperbolic phase, so the Euclidean product with a row is the
Lorentzian product with the basis vector).

Reference: Vinberg, "Hyperbolic reflection groups", Russian Math. Surveys 40 (1985)
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
import scipy.linalg

from ..config import EXTENSION_TOLERANCE
from ..linalg.calc import eucl_sq_norm, mink_inner_prod, mink_products, mink_sq_norm
from ..linalg.underdetermined_solver import UDSolver
from .vector_family import VectorFamily


class PolytopeCandidate:
    """
    Gram matrix of hyperplane normals together with a realising vector family.

    Parameters
    ----------
    gram : np.ndarray
        Symmetric positive definite seed matrix, typically the Gram matrix of
        an elliptic Coxeter diagram (see :mod:`coxeter_polytopes.search.elliptic`).
    tolerance : float
        Tolerance used by :meth:`extend_by_inner_products`.

    Raises
    ------
    ValueError
        If ``gram`` is not square, not symmetric or not positive definite.

    Examples
    --------
    >>> p = PolytopeCandidate(np.array([[1.0, -0.5], [-0.5, 1.0]]))
    >>> p.is_hyperbolic, p.real_dimension()
    (False, 2)
    """

    def __init__(self, gram: np.ndarray, tolerance: float = EXTENSION_TOLERANCE):
        gram = np.array(gram, dtype=np.float64)
        if gram.ndim != 2 or gram.shape[0] != gram.shape[1]:
            raise ValueError(f"Seed Gram matrix must be square, got shape {gram.shape}")
        if not np.allclose(gram, gram.T, rtol=0.0, atol=1e-12):
            raise ValueError("Seed Gram matrix must be symmetric")
        try:
            upper = scipy.linalg.cholesky(gram, lower=False)
        except np.linalg.LinAlgError as exc:
            raise ValueError(f"Seed Gram matrix is not positive definite: {exc}") from exc

        self._gram = gram
        self._vectors = VectorFamily(upper)
        self._hyperbolic = False
        self._valid = True
        self.tolerance = tolerance
        self._basis = self._compute_basis()
        self._solver: Optional[UDSolver] = None

    @classmethod
    def from_parts(cls, gram: np.ndarray, vectors: np.ndarray,
                   hyperbolic: bool, valid: bool = True,
                   tolerance: float = EXTENSION_TOLERANCE) -> "PolytopeCandidate":
        """
        Assemble a candidate from a stored Gram matrix and vector matrix.

        The basis-change matrix is recomputed from the vectors.
        """
        gram = np.array(gram, dtype=np.float64)
        vectors = np.array(vectors, dtype=np.float64)
        if gram.ndim != 2 or gram.shape[0] != gram.shape[1]:
            raise ValueError(f"Gram matrix must be square, got shape {gram.shape}")
        if vectors.ndim != 2 or vectors.shape[1] != gram.shape[0]:
            raise ValueError(
                f"Vector matrix of shape {vectors.shape} does not match "
                f"{gram.shape[0]}x{gram.shape[0]} Gram matrix"
            )
        return cls._build(gram, VectorFamily(vectors), bool(hyperbolic), bool(valid),
                          tolerance)

    @classmethod
    def _build(cls, gram: np.ndarray, vectors: VectorFamily, hyperbolic: bool,
               valid: bool, tolerance: float,
               solver: Optional[UDSolver] = None) -> "PolytopeCandidate":
        p = cls.__new__(cls)
        p._gram = gram
        p._vectors = vectors
        p._hyperbolic = hyperbolic
        p._valid = valid
        p.tolerance = tolerance
        p._basis = p._compute_basis()
        p._solver = solver
        return p

    def _invalid(self) -> "PolytopeCandidate":
        return PolytopeCandidate._build(self._gram.copy(), self._vectors.copy(),
                                        self._hyperbolic, False, self.tolerance)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def gram(self) -> np.ndarray:
        """Read-only view of the Gram matrix."""
        view = self._gram.view()
        view.flags.writeable = False
        return view

    @property
    def vectors(self) -> VectorFamily:
        return self._vectors

    @property
    def basis_change_matrix(self) -> np.ndarray:
        """Rows are the basis vectors in the form used by linear solves."""
        view = self._basis.view()
        view.flags.writeable = False
        return view

    @property
    def is_hyperbolic(self) -> bool:
        return self._hyperbolic

    @property
    def is_valid(self) -> bool:
        return self._valid

    def __len__(self) -> int:
        """Number of hyperplanes."""
        return self._gram.shape[0]

    def real_dimension(self) -> int:
        """Dimension of the space the polytope lives in (size of a vertex)."""
        if self._hyperbolic:
            return self._vectors.dimension - 1
        return self._vectors.dimension

    def signature(self, tolerance: float = 1e-10) -> Tuple[int, int]:
        """Numbers of positive and negative eigenvalues of the Gram matrix."""
        eigenvalues = np.linalg.eigvalsh(self._gram)
        positive = int(np.count_nonzero(eigenvalues > tolerance))
        negative = int(np.count_nonzero(eigenvalues < -tolerance))
        return positive, negative

    def copy(self) -> "PolytopeCandidate":
        """Independent deep copy; the cached factorisation is shared read-only."""
        return PolytopeCandidate._build(self._gram.copy(), self._vectors.copy(),
                                        self._hyperbolic, self._valid, self.tolerance,
                                        self._solver)

    def __repr__(self) -> str:
        phase = "hyperbolic" if self._hyperbolic else "euclidean"
        state = "valid" if self._valid else "invalid"
        return f"PolytopeCandidate(size={len(self)}, {phase}, {state})"

    # -------------------------------------------------------------------------
    # Basis handling
    # -------------------------------------------------------------------------

    def _compute_basis(self) -> np.ndarray:
        if self._hyperbolic:
            basis = self._vectors.first_basis_cols().T
            basis[:, -1] = -basis[:, -1]
            return basis
        return self._vectors.matrix.T.copy()

    def _get_solver(self) -> UDSolver:
        if self._solver is None:
            self._solver = UDSolver(self._basis)
        return self._solver

    def permute_vectors(self, order: Sequence[int]) -> None:
        """
        Reorder hyperplanes so that new position i holds old hyperplane order[i].

        The Gram matrix rows and columns move with the vectors and the
        basis-change matrix is recomputed.
        """
        self._vectors.permute(order)
        order = list(order)
        self._gram = self._gram[np.ix_(order, order)]
        self._basis = self._compute_basis()
        self._solver = None

    def rebase_vectors(self, indices: Sequence[int]) -> List[int]:
        """
        Move the named hyperplanes to the front, making them the new basis.

        Indices are sorted, then position i is swapped with ``indices[i]``
        in turn.

        Parameters
        ----------
        indices : sequence of int
            ``real_dimension()`` distinct hyperplane indices.

        Returns
        -------
        list of int
            The applied order; ``np.argsort(order)`` undoes it.

        Raises
        ------
        ValueError
            If the indices are not distinct, in range and of the right count.
        """
        n = len(self)
        chosen = sorted(int(i) for i in indices)
        if len(chosen) != self.real_dimension():
            raise ValueError(
                f"Rebasing needs {self.real_dimension()} indices, got {len(chosen)}"
            )
        if len(set(chosen)) != len(chosen) or chosen[0] < 0 or chosen[-1] >= n:
            raise ValueError(f"Invalid basis indices {chosen} for {n} hyperplanes")

        order = list(range(n))
        for i, j in enumerate(chosen):
            order[i], order[j] = order[j], order[i]
        self.permute_vectors(order)
        return order

    def swap_rebase(self, a: int, b: int) -> "PolytopeCandidate":
        """Copy of this candidate with hyperplanes a and b exchanged."""
        n = len(self)
        if not (0 <= a < n and 0 <= b < n):
            raise ValueError(f"Swap indices ({a}, {b}) out of range for {n} hyperplanes")
        order = list(range(n))
        order[a], order[b] = order[b], order[a]
        result = self.copy()
        result.permute_vectors(order)
        return result

    # -------------------------------------------------------------------------
    # Extension
    # -------------------------------------------------------------------------

    def extend_by_vector(self, v: np.ndarray) -> "PolytopeCandidate":
        """
        Add an explicit normal vector and grow the Gram matrix.

        In the Euclidean phase ``v`` carries one extra (time) coordinate and
        the result is hyperbolic.
        """
        if not self._valid:
            raise ValueError("Cannot extend an invalid polytope candidate")
        v = np.asarray(v, dtype=np.float64)
        if self._hyperbolic:
            vectors = self._vectors.copy_and_add_vector(v)
            solver = self._solver
        else:
            vectors = self._vectors.copy_and_add_first_hyperbolic_vector(v)
            solver = None

        products = mink_products(vectors.matrix[:, :-1], v)
        n = len(self)
        gram = np.empty((n + 1, n + 1))
        gram[:n, :n] = self._gram
        gram[n, :n] = products
        gram[:n, n] = products
        gram[n, n] = mink_sq_norm(v)
        return PolytopeCandidate._build(gram, vectors, True, True, self.tolerance, solver)

    def extend_by_inner_products(self, target: Sequence[float]) -> "PolytopeCandidate":
        """
        Add a hyperplane with prescribed inner products with the basis.

        Parameters
        ----------
        target : sequence of float
            Desired inner products with the ``real_dimension()`` basis
            hyperplanes, each <= 0.

        Returns
        -------
        PolytopeCandidate
            The extended candidate, or an invalid one when no unit normal
            with these inner products lies on the correct side of every
            existing hyperplane.

        Raises
        ------
        ValueError
            If this candidate is invalid or ``target`` has the wrong length.
        """
        if not self._valid:
            raise ValueError("Cannot extend an invalid polytope candidate")
        target = np.asarray(target, dtype=np.float64)
        if target.shape != (self.real_dimension(),):
            raise ValueError(
                f"Expected {self.real_dimension()} inner products, got shape {target.shape}"
            )
        if np.any(target > self.tolerance):
            return self._invalid()

        if self._hyperbolic:
            v = self._hyperbolic_vector(target)
        else:
            v = self._euclidean_vector(target)
        if v is None:
            return self._invalid()
        return self.extend_by_vector(v)

    def _euclidean_vector(self, target: np.ndarray) -> Optional[np.ndarray]:
        try:
            x = scipy.linalg.solve(self._basis, target)
        except np.linalg.LinAlgError:
            return None
        e = eucl_sq_norm(x)
        if e - 1.0 < self.tolerance:
            return None
        return np.append(x, math.sqrt(e - 1.0))

    def _hyperbolic_vector(self, target: np.ndarray) -> Optional[np.ndarray]:
        solution = self._get_solver().solve(target)
        if not solution.success:
            return None
        x0, n = solution.particular, solution.null

        xx = mink_sq_norm(x0)
        ax = mink_inner_prod(n, x0)
        aa = mink_sq_norm(n)
        if abs(xx - 1.0) < self.tolerance:
            return None

        if abs(aa) < self.tolerance:
            # Light-like kernel: the norm condition is linear in λ.
            if abs(ax) < self.tolerance:
                return None
            roots = [(1.0 - xx) / (2.0 * ax)]
        else:
            disc = ax * ax + aa * (1.0 - xx)
            if disc < 0:
                return None
            sq = math.sqrt(disc)
            roots = [(-ax + sq) / aa, (-ax - sq) / aa]

        passing = [x0 + lam * n for lam in roots]
        passing = [v for v in passing if self._on_polytope_side(v)]
        if not passing:
            return None
        # Keep the seed vertex (0, ..., 0, 1) inside the new half-space.
        for v in passing:
            if v[-1] >= 0:
                return v
        return passing[0]

    def _on_polytope_side(self, v: np.ndarray) -> bool:
        k = self.real_dimension()
        others = self._vectors.matrix[:, k:]
        if others.shape[1] == 0:
            return True
        return bool(np.all(mink_products(others, v) <= self.tolerance))
