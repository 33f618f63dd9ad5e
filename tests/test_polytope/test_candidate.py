"""
Tests for polytope candidates and their extension.

Scenarios:
- Esselmann's 6-facet polytope from an F4 seed with angles π/2, π/4, π/8
- A Lannér simplex from an H3-type seed
- Rebasing, swapping and the inverse permutation
"""

import math

import pytest
import numpy as np

from coxeter_polytopes.linalg.calc import (
    min_cos_angle,
    mink_inner_prod,
    mink_products,
    mink_sq_norm,
)
from coxeter_polytopes.linalg.underdetermined_solver import UDSolver
from coxeter_polytopes.polytope.candidate import PolytopeCandidate
from coxeter_polytopes.search.elliptic import type_a, type_f


C4 = min_cos_angle(4)
C5 = min_cos_angle(5)
C8 = min_cos_angle(8)


# ============================================================================
# Helpers
# ============================================================================

def h3_seed():
    """Elliptic seed with labels 3 and 5."""
    return np.array([[1.0, -0.5, 0.0],
                     [-0.5, 1.0, C5],
                     [0.0, C5, 1.0]])


def lanner():
    """Compact Lannér tetrahedron."""
    return PolytopeCandidate(h3_seed()).extend_by_inner_products([0.0, 0.0, -0.5])


def esselmann():
    """Esselmann's compact 4-dimensional polytope with 6 facets."""
    p = PolytopeCandidate(type_f(4))
    q = p.extend_by_inner_products([0.0, 0.0, 0.0, C8])
    return q.extend_by_inner_products([C8, 0.0, 0.0, 0.0])


# ============================================================================
# Construction
# ============================================================================

class TestSeed:
    """Tests for candidates built from a seed Gram matrix."""

    @pytest.mark.parametrize("gram", [type_a(3), type_f(4), h3_seed()])
    def test_gram_round_trip(self, gram):
        """The stored Gram matrix and the vectors reproduce the seed."""
        p = PolytopeCandidate(gram)
        np.testing.assert_allclose(p.gram, gram)
        m = p.vectors.matrix
        np.testing.assert_allclose(m.T @ m, gram, atol=1e-14)

    def test_initial_state(self):
        """Seeds start valid, Euclidean and with real dimension = size."""
        p = PolytopeCandidate(type_a(3))
        assert p.is_valid
        assert not p.is_hyperbolic
        assert p.real_dimension() == 3
        assert len(p) == 3
        assert p.signature() == (3, 0)

    def test_not_square(self):
        """Non-square seeds are rejected."""
        with pytest.raises(ValueError):
            PolytopeCandidate(np.ones((2, 3)))

    def test_not_symmetric(self):
        """Non-symmetric seeds are rejected."""
        with pytest.raises(ValueError):
            PolytopeCandidate(np.array([[1.0, 0.1], [0.0, 1.0]]))

    def test_not_positive_definite(self):
        """Parabolic or indefinite seeds are rejected."""
        with pytest.raises(ValueError):
            PolytopeCandidate(np.array([[1.0, -1.0], [-1.0, 1.0]]))

    def test_gram_read_only(self):
        """The Gram matrix cannot be changed from outside."""
        p = PolytopeCandidate(type_a(2))
        with pytest.raises(ValueError):
            p.gram[0, 1] = 0.0


# ============================================================================
# Extension
# ============================================================================

class TestEuclideanExtension:
    """Tests for the first (Euclidean to hyperbolic) extension."""

    def test_lanner_extension(self):
        """Extension sets the requested products and a unit diagonal."""
        p = lanner()
        assert p.is_valid
        assert p.is_hyperbolic
        assert p.real_dimension() == 3
        np.testing.assert_allclose(p.gram[3, :3], [0.0, 0.0, -0.5], atol=1e-12)
        np.testing.assert_allclose(p.gram[:3, 3], [0.0, 0.0, -0.5], atol=1e-12)
        assert p.gram[3, 3] == pytest.approx(1.0)
        np.testing.assert_allclose(p.gram[:3, :3], h3_seed())

    def test_lorentzian_signature(self):
        """A hyperbolic simplex has Gram signature (3, 1)."""
        assert lanner().signature() == (3, 1)

    def test_gram_matches_vectors(self):
        """Gram entries are Lorentzian products of the stored vectors."""
        p = lanner()
        m = np.array(p.vectors.matrix)
        for j in range(len(p)):
            np.testing.assert_allclose(p.gram[:, j], mink_products(m, m[:, j]), atol=1e-12)

    def test_norm_at_most_one_invalid(self):
        """Products giving |x|^2 <= 1 cannot be realised."""
        p = PolytopeCandidate(type_a(2))
        q = p.extend_by_inner_products([-0.5, -0.5])
        assert not q.is_valid
        assert p.is_valid

    def test_zero_products_invalid(self):
        """All-orthogonal products give x = 0."""
        q = PolytopeCandidate(type_a(3)).extend_by_inner_products([0.0, 0.0, 0.0])
        assert not q.is_valid

    def test_positive_product_invalid(self):
        """Positive off-diagonal products are rejected."""
        q = PolytopeCandidate(type_a(2)).extend_by_inner_products([0.3, -0.5])
        assert not q.is_valid

    def test_parent_unchanged(self):
        """Extension copies state forward."""
        p = PolytopeCandidate(h3_seed())
        before = np.array(p.gram)
        p.extend_by_inner_products([0.0, 0.0, -0.5])
        np.testing.assert_array_equal(p.gram, before)
        assert len(p.vectors) == 3
        assert not p.is_hyperbolic


class TestHyperbolicExtension:
    """Tests for extensions of hyperbolic candidates."""

    def test_esselmann_gram(self):
        """Second extension picks the root keeping the new facets orthogonal."""
        r = esselmann()
        assert r.is_valid
        assert len(r) == 6
        np.testing.assert_allclose(r.gram[5, :4], [C8, 0.0, 0.0, 0.0], atol=1e-9)
        assert r.gram[5, 4] == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(np.diag(r.gram), 1.0, atol=1e-9)
        np.testing.assert_allclose(r.gram, r.gram.T, atol=1e-12)

    def test_new_vector_unit(self):
        """The new normal has unit Lorentzian norm."""
        r = esselmann()
        assert mink_sq_norm(r.vectors[5]) == pytest.approx(1.0, abs=1e-9)

    def test_extension_repeatable(self):
        """Repeated extensions from one candidate agree."""
        p = PolytopeCandidate(type_f(4)).extend_by_inner_products([0.0, 0.0, 0.0, C8])
        a = p.extend_by_inner_products([C8, 0.0, 0.0, 0.0])
        b = p.extend_by_inner_products([C8, 0.0, 0.0, 0.0])
        np.testing.assert_array_equal(a.gram, b.gram)

    def test_wrong_length_raises(self):
        """Target must have one entry per basis vector."""
        with pytest.raises(ValueError):
            lanner().extend_by_inner_products([0.0, -0.5])

    def test_extending_invalid_raises(self):
        """Invalid candidates must not be extended."""
        bad = PolytopeCandidate(type_a(2)).extend_by_inner_products([-0.5, -0.5])
        with pytest.raises(ValueError):
            bad.extend_by_inner_products([0.0, 0.0])

    def test_extend_by_vector(self):
        """Explicit vectors grow the Gram matrix with their products."""
        p = lanner()
        v = np.array([0.5, 0.0, 0.5, 0.2])
        q = p.extend_by_vector(v)
        m = np.array(p.vectors.matrix)
        np.testing.assert_allclose(q.gram[4, :4], mink_products(m, v))
        assert q.gram[4, 4] == pytest.approx(mink_sq_norm(v))

    def test_negative_discriminant_invalid(self):
        """No unit vector solves the system when the discriminant is negative."""
        p = lanner()
        target = np.zeros(3)
        solution = UDSolver(np.array(p.basis_change_matrix)).solve(target)
        assert solution.success
        x0, n = solution.particular, solution.null
        xx = mink_sq_norm(x0)
        ax = mink_inner_prod(n, x0)
        aa = mink_sq_norm(n)
        assert aa < 0
        assert ax * ax + aa * (1.0 - xx) < 0
        assert not p.extend_by_inner_products(target).is_valid

    def test_rank_deficient_basis_invalid(self):
        """Repeated basis vectors leave the system unsolvable."""
        v = np.array([[1.0, 1.0, 0.0, 0.0],
                      [0.0, 0.0, 1.0, 0.0],
                      [0.0, 0.0, 0.0, 1.0],
                      [0.0, 0.0, 0.0, 0.5]])
        gram = np.array([mink_products(v, v[:, j]) for j in range(4)])
        p = PolytopeCandidate.from_parts(gram=gram, vectors=v, hyperbolic=True)
        assert p.real_dimension() == 3
        assert not UDSolver(np.array(p.basis_change_matrix)).solve(np.zeros(3)).success
        assert not p.extend_by_inner_products([0.0, 0.0, 0.0]).is_valid


# ============================================================================
# Rebasing
# ============================================================================

class TestRebase:
    """Tests for rebase_vectors and swap_rebase."""

    def test_rebase_order(self):
        """Chosen vectors move to the front in sorted order."""
        q = PolytopeCandidate(type_f(4)).extend_by_inner_products([0.0, 0.0, 0.0, C8])
        before = np.array(q.gram)
        order = q.rebase_vectors([4, 2, 3, 1])
        assert order == [1, 2, 3, 4, 0]
        np.testing.assert_array_equal(q.gram, before[np.ix_(order, order)])

    def test_rebase_inverse_restores(self):
        """Applying the inverse permutation restores the Gram matrix."""
        q = PolytopeCandidate(type_f(4)).extend_by_inner_products([0.0, 0.0, 0.0, C8])
        before = np.array(q.gram)
        order = q.rebase_vectors([0, 2, 3, 4])
        q.permute_vectors(np.argsort(order))
        np.testing.assert_allclose(q.gram, before)

    def test_extend_after_rebase(self):
        """The rebased basis is used for the next extension."""
        q = PolytopeCandidate(type_f(4)).extend_by_inner_products([0.0, 0.0, 0.0, C8])
        q.rebase_vectors([1, 2, 3, 4])
        s = q.extend_by_inner_products([0.0, 0.0, 0.0, 0.0])
        assert s.is_valid
        np.testing.assert_allclose(s.gram[5, :4], 0.0, atol=1e-9)
        assert s.gram[5, 4] == pytest.approx(C8, abs=1e-9)
        np.testing.assert_allclose(np.diag(s.gram), 1.0, atol=1e-9)

    def test_rebased_reflection_of_existing_invalid(self):
        """Products of an existing facet give no admissible new facet."""
        p = lanner()
        p.rebase_vectors([1, 2, 3])
        q = p.extend_by_inner_products([-0.5, 0.0, 0.0])
        assert not q.is_valid

    def test_rebase_wrong_count(self):
        """Exactly real_dimension indices are needed."""
        with pytest.raises(ValueError):
            lanner().rebase_vectors([0, 1])

    def test_rebase_repeated_index(self):
        """Indices must be distinct."""
        with pytest.raises(ValueError):
            lanner().rebase_vectors([0, 1, 1])

    def test_rebase_out_of_range(self):
        """Indices must name existing vectors."""
        with pytest.raises(ValueError):
            lanner().rebase_vectors([0, 1, 4])

    def test_swap_rebase_twice(self):
        """Swapping the same pair twice restores the candidate."""
        p = lanner()
        s = p.swap_rebase(0, 3)
        np.testing.assert_allclose(s.gram[0, :], p.gram[3, [3, 1, 2, 0]])
        back = s.swap_rebase(0, 3)
        np.testing.assert_allclose(back.gram, p.gram)
        np.testing.assert_allclose(back.vectors.matrix, p.vectors.matrix)

    def test_swap_rebase_non_mutating(self):
        """The source candidate is not changed."""
        p = lanner()
        before = np.array(p.gram)
        p.swap_rebase(1, 2)
        np.testing.assert_array_equal(p.gram, before)

    def test_copy_independent(self):
        """Rebasing a copy leaves the original."""
        p = lanner()
        q = p.copy()
        q.rebase_vectors([1, 2, 3])
        assert not np.allclose(q.gram, p.gram)
        np.testing.assert_allclose(p.gram[:3, :3], h3_seed())
