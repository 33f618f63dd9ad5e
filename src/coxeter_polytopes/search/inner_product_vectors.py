"""
Trial inner-product vectors for extending a candidate.

Every vector of length ``size`` with entries drawn from the allowed inner
products is produced once, as a mixed-radix counter with the first entry
varying fastest. Entries run from 0 (right angle) downward.
"""

from typing import Iterator, Union, Iterable

import numpy as np

from ..angles import Angles


def inner_product_vectors(size: int,
                          angles: Union[Angles, Iterable[int]]) -> Iterator[np.ndarray]:
    """
    Generate all trial inner-product vectors.

    Parameters
    ----------
    size : int
        Length of each vector (the candidate's real dimension).
    angles : Angles or iterable of int
        Allowed angle submultiples.

    Yields
    ------
    np.ndarray
        A fresh array of shape (size,) for each combination.

    Examples
    --------
    >>> [v.tolist() for v in inner_product_vectors(2, [2, 3])]
    [[0.0, 0.0], [-0.5, 0.0], [0.0, -0.5], [-0.5, -0.5]]
    """
    if size < 1:
        raise ValueError(f"Vector size must be positive, got {size}")
    if not isinstance(angles, Angles):
        angles = Angles.from_multiples(angles)
    products = np.array(angles.inner_products[::-1])
    radix = products.shape[0]

    progress = [0] * size
    while True:
        yield products[progress]
        i = 0
        while i < size:
            progress[i] += 1
            if progress[i] < radix:
                break
            progress[i] = 0
            i += 1
        if i == size:
            return


def count_inner_product_vectors(size: int, angles: Union[Angles, Iterable[int]]) -> int:
    """Number of vectors :func:`inner_product_vectors` produces."""
    if not isinstance(angles, Angles):
        angles = Angles.from_multiples(angles)
    return len(angles.inner_products) ** size
