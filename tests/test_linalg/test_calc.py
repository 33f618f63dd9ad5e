"""
Tests for Euclidean and Lorentzian inner product kernels.
"""

import math

import pytest
import numpy as np

from coxeter_polytopes.linalg.calc import (
    eucl_inner_prod,
    eucl_sq_norm,
    mink_inner_prod,
    mink_sq_norm,
    mink_products,
    min_cos_angle,
)


class TestEuclidean:
    """Tests for the Euclidean inner product."""

    def test_inner_prod(self):
        """Plain dot product."""
        a = np.array([1.0, 2.0, 3.0])
        b = np.array([4.0, -5.0, 6.0])
        assert eucl_inner_prod(a, b) == pytest.approx(12.0)

    def test_sq_norm(self):
        """Squared length of (3, 4) is 25."""
        assert eucl_sq_norm(np.array([3.0, 4.0])) == pytest.approx(25.0)

    def test_length_mismatch_raises(self):
        """Vectors of different lengths are a contract violation."""
        with pytest.raises(ValueError):
            eucl_inner_prod(np.zeros(2), np.zeros(3))


class TestMinkowski:
    """Tests for the Lorentzian inner product."""

    def test_inner_prod(self):
        """Time coordinate enters with a minus sign."""
        a = np.array([1.0, 0.0, 2.0])
        b = np.array([1.0, 3.0, 1.0])
        assert mink_inner_prod(a, b) == pytest.approx(-1.0)

    def test_time_like_norm(self):
        """(0, 0, 1) is a unit time-like vector."""
        assert mink_sq_norm(np.array([0.0, 0.0, 1.0])) == pytest.approx(-1.0)

    def test_space_like_norm(self):
        """Spatial unit vectors have norm 1."""
        assert mink_sq_norm(np.array([0.0, 1.0, 0.0])) == pytest.approx(1.0)

    def test_symmetry(self):
        """<a, b> == <b, a> exactly for random vectors."""
        rng = np.random.default_rng(7)
        for _ in range(20):
            a = rng.normal(size=6)
            b = rng.normal(size=6)
            assert mink_inner_prod(a, b) == mink_inner_prod(b, a)

    def test_norm_matches_inner_prod(self):
        """mink_sq_norm(a) equals <a, a>."""
        a = np.array([0.3, -1.2, 0.7, 2.0])
        assert mink_sq_norm(a) == pytest.approx(mink_inner_prod(a, a))

    def test_length_mismatch_raises(self):
        """Vectors of different lengths are a contract violation."""
        with pytest.raises(ValueError):
            mink_inner_prod(np.zeros(4), np.zeros(3))

    def test_products_match_pairwise(self):
        """Vectorised products agree with one-at-a-time products."""
        rng = np.random.default_rng(11)
        vectors = rng.normal(size=(5, 4))
        v = rng.normal(size=5)
        expected = [mink_inner_prod(vectors[:, j], v) for j in range(4)]
        np.testing.assert_allclose(mink_products(vectors, v), expected, atol=1e-14)

    def test_products_dimension_mismatch(self):
        """Vector length must match the family dimension."""
        with pytest.raises(ValueError):
            mink_products(np.zeros((3, 2)), np.zeros(4))


class TestMinCosAngle:
    """Tests for angle to inner product conversion."""

    def test_right_angle_exact_zero(self):
        """π/2 gives exactly 0, not a rounding residue."""
        assert min_cos_angle(2) == 0.0

    def test_known_values(self):
        """π/3, π/4 and π/5 give the familiar cosines."""
        assert min_cos_angle(3) == pytest.approx(-0.5, abs=1e-15)
        assert min_cos_angle(4) == pytest.approx(-math.sqrt(2) / 2, abs=1e-15)
        assert min_cos_angle(5) == pytest.approx(-(1 + math.sqrt(5)) / 4, abs=1e-15)

    def test_decreasing(self):
        """Smaller angles give more negative products, approaching -1."""
        values = [min_cos_angle(m) for m in range(2, 12)]
        assert all(a > b for a, b in zip(values, values[1:]))
        assert values[-1] > -1.0

    def test_invalid_multiple(self):
        """Multiples below 2 are rejected."""
        with pytest.raises(ValueError):
            min_cos_angle(1)
