"""
linkrank.ranking.stochastic — Row-stochastic transition matrix.

``S[i][j]`` is the probability of stepping from entity ``i`` to ``j``.
Entities without outgoing links jump uniformly, so every row sums to 1.
"""
from __future__ import annotations
import logging
from typing import Sequence, Tuple
import numpy as np
from linkrank.core.errors import ConfigurationError, InputFormatError, ReferentialError

logger = logging.getLogger(__name__)


def _as_ids(values, what: str) -> np.ndarray:
    arr = np.asarray(values).ravel()
    if arr.size == 0 or arr.dtype.kind in "iu":
        return arr.astype(np.int64)
    if arr.dtype.kind != "f" or not np.isfinite(arr).all() or not np.array_equal(arr, arr.astype(np.int64)):
        raise InputFormatError(f"edge {what} ids must be integers, got dtype {arr.dtype}")
    return arr.astype(np.int64)


def _as_edge_arrays(n: int, sources: Sequence[int], targets: Sequence[int]) -> Tuple[np.ndarray, np.ndarray]:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
        raise ConfigurationError(f"entity count must be a positive integer, got {n!r}")
    src, dst = _as_ids(sources, "source"), _as_ids(targets, "target")
    if src.shape != dst.shape:
        raise InputFormatError(f"got {src.size} edge sources but {dst.size} targets")
    bad = np.flatnonzero((src < 0) | (src >= n) | (dst < 0) | (dst >= n))
    if bad.size:
        k = bad[0]
        raise ReferentialError(int(src[k]), int(dst[k]), int(n))
    return src, dst


def _adjacency(n: int, src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    adj = np.zeros((n, n), dtype=np.float64)
    # Fancy assignment writes 1.0 once per (i, j), so duplicate edges collapse.
    adj[src, dst] = 1.0
    return adj


def out_degrees(n: int, sources: Sequence[int], targets: Sequence[int]) -> np.ndarray:
    """Number of distinct targets per entity."""
    src, dst = _as_edge_arrays(n, sources, targets)
    return _adjacency(n, src, dst).sum(axis=1).astype(np.int64)


def build_stochastic_matrix(n: int, sources: Sequence[int], targets: Sequence[int]) -> np.ndarray:
    """
    Build the dense ``n x n`` transition matrix from an edge list.

    Parameters
    ----------
    n : int
        Number of entities; ids live in ``[0, n)``.
    sources, targets : sequence of int
        Parallel arrays, one entry per edge ``source -> target``.

    Returns
    -------
    np.ndarray
        Read-only float64 matrix. Dangling rows hold ``1/n`` everywhere;
        other rows hold ``1/out_degree`` on each distinct target.

    Raises
    ------
    ReferentialError
        If an edge endpoint lies outside ``[0, n)``.
    """
    src, dst = _as_edge_arrays(n, sources, targets)
    matrix = _adjacency(n, src, dst)
    degree = matrix.sum(axis=1)
    dangling = degree == 0
    linked = ~dangling
    matrix[linked] /= degree[linked, None]
    matrix[dangling] = 1.0 / n
    matrix.setflags(write=False)
    logger.debug("Built %dx%d stochastic matrix (%d distinct edges, %d dangling)", n, n, int(degree.sum()), int(dangling.sum()))
    return matrix
