from __future__ import annotations
from typing import Tuple
import numpy as np
import pandas as pd


def generate_cycle_graph(n: int = 3, prefix: str = "page") -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Ring ``0 -> 1 -> ... -> n-1 -> 0``; all scores are equal at the fixed point."""
    if n < 1: raise ValueError("n must be positive")
    ids = np.arange(n)
    entities = pd.DataFrame({"entity_id": ids, "name": [f"{prefix}-{i}" for i in ids]})
    edges = pd.DataFrame({"source": ids, "target": (ids + 1) % n})
    return entities, edges
