"""
linkrank.datasets — Synthetic link graphs.

Each generator returns ``(entities, edges)`` as pandas DataFrames with
0-based ids, ready for ``LinkRank.load_entities`` / ``load_edges``.

- **cycles**: directed rings, every page equally important
- **web**: power-law in-links with a share of dangling pages
"""

from .cycles import generate_cycle_graph
from .web import generate_web_graph

__all__ = [
    "generate_cycle_graph",
    "generate_web_graph",
]
