"""
Saving and loading polytope candidates.

Candidates are stored as compressed NPZ archives holding the Gram matrix,
the vector matrix and the two phase flags. The basis-change matrix is not
stored; loading rebuilds it from the vectors.
"""

from pathlib import Path
from typing import List, Union

import numpy as np

from .candidate import PolytopeCandidate


REQUIRED_KEYS = ("gram", "vectors", "hyperbolic", "valid")


def _npz_path(path: Union[str, Path]) -> Path:
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_suffix(".npz")
    return path


def save_candidate(p: PolytopeCandidate, path: Union[str, Path],
                   overwrite: bool = False) -> Path:
    """
    Save a candidate to an NPZ file.

    Parameters
    ----------
    p : PolytopeCandidate
        Candidate to store.
    path : str or Path
        Target file. A ``.npz`` suffix is added if missing.
    overwrite : bool
        If True, replace an existing file.

    Returns
    -------
    Path
        Path of the written file.

    Raises
    ------
    FileExistsError
        If the file exists and overwrite=False.
    """
    path = _npz_path(path)
    if path.exists() and not overwrite:
        raise FileExistsError(f"Candidate file already exists: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(
        path,
        gram=np.array(p.gram),
        vectors=np.array(p.vectors.matrix),
        hyperbolic=np.bool_(p.is_hyperbolic),
        valid=np.bool_(p.is_valid),
    )
    return path


def load_candidate(path: Union[str, Path]) -> PolytopeCandidate:
    """
    Load a candidate saved by :func:`save_candidate`.

    As in :func:`save_candidate`, a ``.npz`` suffix is added if missing.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist.
    ValueError
        If the archive lacks one of the required arrays.
    """
    path = _npz_path(path)
    if not path.exists():
        raise FileNotFoundError(f"Candidate file not found: {path}")

    with np.load(path) as data:
        missing = [key for key in REQUIRED_KEYS if key not in data.files]
        if missing:
            raise ValueError(f"Candidate file {path} is missing arrays: {missing}")
        return PolytopeCandidate.from_parts(
            gram=data["gram"],
            vectors=data["vectors"],
            hyperbolic=bool(data["hyperbolic"]),
            valid=bool(data["valid"]),
        )


def save_candidates(candidates: List[PolytopeCandidate], directory: Union[str, Path],
                    prefix: str = "candidate", overwrite: bool = False,
                    verbose: bool = False) -> List[Path]:
    """Save a batch of candidates as ``{prefix}_{i:06d}.npz`` files."""
    directory = Path(directory)
    paths = []
    for i, p in enumerate(candidates):
        paths.append(save_candidate(p, directory / f"{prefix}_{i:06d}.npz", overwrite))
    if verbose:
        print(f"  Saved {len(paths)} candidates to {directory}")
    return paths


def load_candidates(directory: Union[str, Path], prefix: str = "candidate",
                    verbose: bool = False) -> List[PolytopeCandidate]:
    """Load every ``{prefix}_*.npz`` file in a directory, in name order."""
    directory = Path(directory)
    paths = sorted(directory.glob(f"{prefix}_*.npz"))
    candidates = [load_candidate(path) for path in paths]
    if verbose:
        print(f"  Loaded {len(candidates)} candidates from {directory}")
    return candidates
