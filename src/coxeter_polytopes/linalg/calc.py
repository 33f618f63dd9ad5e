"""
Euclidean and Lorentzian inner products on hyperplane normal vectors.

Lorentzian vectors carry their "time" coordinate last, so the bilinear form
has signature (n-1, 1):

    <a, b> = a_0 b_0 + ... + a_{n-2} b_{n-2} - a_{n-1} b_{n-1}

Reference: Ratcliffe, "Foundations of Hyperbolic Manifolds", Chapter 3
"""

from functools import lru_cache

import numpy as np
from mpmath import mp, mpf, cos, pi

from ..config import MPMATH_PRECISION


# Set precision for mpmath
mp.dps = MPMATH_PRECISION


def eucl_inner_prod(a: np.ndarray, b: np.ndarray) -> float:
    """
    Euclidean inner product of two vectors of equal length.

    Parameters
    ----------
    a, b : np.ndarray
        1D arrays of the same length.

    Returns
    -------
    float
        sum_i a_i b_i

    Raises
    ------
    ValueError
        If the lengths differ.
    """
    if a.shape[0] != b.shape[0]:
        raise ValueError(f"Vector lengths differ: {a.shape[0]} != {b.shape[0]}")
    return float(np.dot(a, b))


def eucl_sq_norm(a: np.ndarray) -> float:
    """Squared Euclidean length of a vector."""
    return float(np.dot(a, a))


def mink_inner_prod(a: np.ndarray, b: np.ndarray) -> float:
    """
    Lorentzian inner product with the last coordinate as time.

    Parameters
    ----------
    a, b : np.ndarray
        1D arrays of the same length n >= 1.

    Returns
    -------
    float
        Euclidean product of the first n-1 coordinates minus a[-1] * b[-1].

    Examples
    --------
    >>> mink_inner_prod(np.array([1.0, 0.0, 2.0]), np.array([1.0, 3.0, 1.0]))
    -1.0
    """
    if a.shape[0] != b.shape[0]:
        raise ValueError(f"Vector lengths differ: {a.shape[0]} != {b.shape[0]}")
    return float(np.dot(a[:-1], b[:-1]) - a[-1] * b[-1])


def mink_sq_norm(a: np.ndarray) -> float:
    """Lorentzian squared norm <a, a>; negative for time-like vectors."""
    return float(np.dot(a[:-1], a[:-1]) - a[-1] * a[-1])


def mink_products(vectors: np.ndarray, v: np.ndarray) -> np.ndarray:
    """
    Lorentzian inner products of v with every column of a vector matrix.

    Parameters
    ----------
    vectors : np.ndarray
        Matrix of shape (n, k) holding k column vectors.
    v : np.ndarray
        Vector of length n.

    Returns
    -------
    np.ndarray
        Array of shape (k,) with entry j equal to <vectors[:, j], v>.
    """
    if vectors.shape[0] != v.shape[0]:
        raise ValueError(
            f"Vector length {v.shape[0]} does not match family dimension {vectors.shape[0]}"
        )
    return vectors[:-1, :].T @ v[:-1] - vectors[-1, :] * v[-1]


@lru_cache(maxsize=None)
def min_cos_angle(mult: int) -> float:
    """
    Inner product of two unit normals meeting at dihedral angle π/mult.

    Evaluated in mpmath at MPMATH_PRECISION digits and rounded once, so
    the same multiple always maps to the same double. The right angle
    (mult=2) maps to exactly 0.

    Parameters
    ----------
    mult : int
        Angle submultiple, must be >= 2.

    Returns
    -------
    float
        -cos(π/mult)

    Examples
    --------
    >>> min_cos_angle(2)
    0.0
    >>> min_cos_angle(3)
    -0.5
    """
    if mult < 2:
        raise ValueError(f"Angle multiple must be >= 2, got {mult}")
    if mult == 2:
        return 0.0
    return float(-cos(pi / mpf(mult)))
