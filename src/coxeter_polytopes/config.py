"""
Global configuration and numerical tolerances for the Coxeter polytope search.

All tolerances are absolute and apply to Gram matrices whose diagonal is 1.

Reference: Vinberg, "Hyperbolic reflection groups", Russian Math. Surveys 40 (1985)
"""

from typing import Tuple


# =============================================================================
# Extension Tolerances
# =============================================================================

EXTENSION_TOLERANCE = 1e-9
"""Tolerance for unit norm, discriminant and same-side tests during extension."""

PIVOT_TOLERANCE = 1e-12
"""Relative pivot size below which a QR/LQ factor is treated as rank deficient."""


# =============================================================================
# Comparison Tolerances
# =============================================================================

COMPARISON_TOLERANCE = 1e-10
"""Tolerance for matching inner products against the allowed angle set."""

DUPLICATE_TOLERANCE = 1e-14
"""Element-wise tolerance for detecting two identical Gram columns."""

ELLIPTIC_PIVOT_TOLERANCE = 1e-6
"""Smallest Cholesky diagonal accepted for a positive definite submatrix.

Parabolic submatrices have a last pivot of pure rounding noise, so a strict
``> 0`` test would read them as elliptic.
"""


# =============================================================================
# Angle Configuration
# =============================================================================

DEFAULT_ANGLES: Tuple[int, ...] = (2, 3, 4, 5, 8)
"""Default dihedral angle submultiples n (angle = π/n)."""

DOTTED_THRESHOLD = -1.0
"""Inner products at or below this value denote non-intersecting hyperplanes."""

DEFAULT_DIHEDRAL_LABELS: Tuple[int, ...] = (5, 8, 10)
"""Labels m of the rank-2 dihedral diagrams G_2^(m) listed as seeds."""


# =============================================================================
# Numerical Parameters
# =============================================================================

MPMATH_PRECISION = 50
"""Number of decimal digits for mpmath extended precision."""
