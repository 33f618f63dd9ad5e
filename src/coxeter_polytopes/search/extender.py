"""
Extension of candidates by every admissible new hyperplane.

`extend_polytope` lazily tries every trial inner-product vector on one
candidate. `extend_all` runs it over a batch of independent candidates on
a process pool; candidates share no state, so each worker simply receives
a pickled copy.
"""

import time
import warnings
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from ..angles import Angles
from ..polytope.candidate import PolytopeCandidate
from .inner_product_vectors import inner_product_vectors


def extend_polytope(p: PolytopeCandidate,
                    angles: Union[Angles, Iterable[int]]) -> Iterator[PolytopeCandidate]:
    """
    Generate every valid single-hyperplane extension of a candidate.

    Parameters
    ----------
    p : PolytopeCandidate
        Valid candidate to extend.
    angles : Angles or iterable of int
        Allowed angle submultiples for the new hyperplane.

    Yields
    ------
    PolytopeCandidate
        Valid extensions, in the order of the trial vectors.
    """
    if not p.is_valid:
        raise ValueError("Cannot extend an invalid polytope candidate")
    for target in inner_product_vectors(p.real_dimension(), angles):
        q = p.extend_by_inner_products(target)
        if q.is_valid:
            yield q


def _extend_worker(p: PolytopeCandidate, angles: Angles) -> List[PolytopeCandidate]:
    return list(extend_polytope(p, angles))


@dataclass
class ExtensionBatch:
    """
    Result of extending a batch of candidates.

    Attributes
    ----------
    candidates : list of PolytopeCandidate
        All valid extensions, grouped by source candidate in input order.
    failed : list of (int, str)
        Index of each source candidate whose worker raised, with the error.
    """
    candidates: List[PolytopeCandidate] = field(default_factory=list)
    failed: List[Tuple[int, str]] = field(default_factory=list)


def extend_all(candidates: List[PolytopeCandidate],
               angles: Union[Angles, Iterable[int]],
               workers: Optional[int] = None,
               verbose: bool = False) -> ExtensionBatch:
    """
    Extend every candidate of a batch.

    Parameters
    ----------
    candidates : list of PolytopeCandidate
        Valid candidates to extend.
    angles : Angles or iterable of int
        Allowed angle submultiples.
    workers : int, optional
        Number of worker processes. ``1`` runs in the calling process;
        None lets the executor choose.
    verbose : bool
        Print progress.

    Returns
    -------
    ExtensionBatch
        Extensions in input order, plus any candidates whose worker failed.
    """
    if not isinstance(angles, Angles):
        angles = Angles.from_multiples(angles)
    n = len(candidates)
    results: List[Optional[List[PolytopeCandidate]]] = [None] * n
    failed: List[Tuple[int, str]] = []
    start_time = time.time()

    if workers == 1:
        for i, p in enumerate(candidates):
            results[i] = _extend_worker(p, angles)
            if verbose:
                print(f"  [{i + 1}/{n}] {len(results[i])} extensions")
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(_extend_worker, p, angles): i
                       for i, p in enumerate(candidates)}
            completed = 0
            for future in as_completed(futures):
                i = futures[future]
                completed += 1
                try:
                    results[i] = future.result()
                except Exception as e:
                    failed.append((i, f"{type(e).__name__}: {e}"))
                    if verbose:
                        print(f"  [{completed}/{n}] candidate {i} FAILED: {e}")
                    continue
                if verbose:
                    elapsed = time.time() - start_time
                    print(f"  [{completed}/{n}] candidate {i}: "
                          f"{len(results[i])} extensions ({elapsed:.1f}s)")

    if failed:
        warnings.warn(f"extend_all: {len(failed)} of {n} candidates failed",
                      RuntimeWarning, stacklevel=2)

    batch = ExtensionBatch(failed=sorted(failed))
    for extensions in results:
        if extensions is not None:
            batch.candidates.extend(extensions)
    if verbose:
        print(f"  Extended {n} candidates into {len(batch.candidates)} "
              f"({time.time() - start_time:.1f}s)")
    return batch
