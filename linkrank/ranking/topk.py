from __future__ import annotations
import heapq
from typing import List, Optional, Sequence
import numpy as np
import pyarrow as pa
from linkrank.core.errors import ConfigurationError, InputFormatError

RANKED_SCHEMA = pa.schema([("rank", pa.int32()), ("entity_id", pa.int64()), ("name", pa.string()), ("score", pa.float64())])


def top_k_indices(scores: Sequence[float], k: int) -> List[int]:
    """
    Indices of the ``k`` highest scores, best first.

    Equal scores keep their original order. Selection is a heap over
    ``(-score, index)``, so the cost is ``O(n log k)``.
    """
    if k < 0: raise ConfigurationError(f"k must be non-negative, got {k}")
    values = np.asarray(scores, dtype=np.float64).tolist()
    return heapq.nsmallest(k, range(len(values)), key=lambda i: (-values[i], i))


def rank_entities(scores: Sequence[float], names: Optional[Sequence[str]] = None, k: int = 10) -> pa.Table:
    values = np.asarray(scores, dtype=np.float64)
    if names is not None and len(names) != len(values):
        raise InputFormatError(f"got {len(names)} names for {len(values)} scores")
    idx = top_k_indices(values, k)
    if not idx: return RANKED_SCHEMA.empty_table()

    rows = [
        {"rank": r, "entity_id": i, "name": names[i] if names is not None else str(i), "score": float(values[i])}
        for r, i in enumerate(idx, start=1)
    ]
    return pa.Table.from_pylist(rows, schema=RANKED_SCHEMA)
