"""
linkrank.datasets.web — Web-like link graphs for ranking and benchmarking.
"""
from __future__ import annotations
from typing import Optional, Tuple
import numpy as np
import pandas as pd


def generate_web_graph(
    n_pages: int = 500,
    avg_links: int = 6,
    dangling_fraction: float = 0.1,
    hub_fraction: float = 0.05,
    seed: Optional[int] = 42,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Generate a directed link graph with a few heavily linked hub pages.

    80% of links point at the top ``hub_fraction`` of pages, so the hubs
    are the expected leaders of any ranking. A ``dangling_fraction`` of
    the non-hub pages has no outgoing links at all.

    Parameters
    ----------
    n_pages : int
        Number of pages.
    avg_links : int
        Mean out-degree of the non-dangling pages (Poisson distributed).
    dangling_fraction : float
        Share of pages without outgoing links, in ``[0, 1)``.
    hub_fraction : float
        Share of pages that attract most links, in ``(0, 1]``.
    seed : int, optional
        Random seed for reproducibility.

    Returns
    -------
    (pd.DataFrame, pd.DataFrame)
        ``entities`` with ``entity_id``, ``name`` and ``edges`` with
        ``source``, ``target``. Self-links are never generated; duplicate
        links may be, as in crawled data.

    Example
    -------
    >>> from linkrank.datasets import generate_web_graph
    >>> entities, edges = generate_web_graph(n_pages=100)
    >>> len(entities)
    100
    """
    if n_pages < 2: raise ValueError("n_pages must be at least 2")
    if not (0 <= dangling_fraction < 1): raise ValueError("dangling_fraction must be in [0, 1)")
    if not (0 < hub_fraction <= 1): raise ValueError("hub_fraction must be in (0, 1]")
    rng = np.random.default_rng(seed)

    n_hubs = max(1, int(n_pages * hub_fraction))
    p_hub = 0.8 / n_hubs
    p_other = 0.2 / max(1, n_pages - n_hubs)
    probs = np.array([p_hub] * n_hubs + [p_other] * (n_pages - n_hubs))
    probs /= probs.sum()

    # Hubs always link out; dangling pages come from the tail.
    tail = np.arange(n_hubs, n_pages)
    n_dangling = min(len(tail), int(n_pages * dangling_fraction))
    dangling = set(rng.choice(tail, size=n_dangling, replace=False).tolist()) if n_dangling else set()

    sources, targets = [], []
    for page in range(n_pages):
        if page in dangling: continue
        k = max(1, int(rng.poisson(avg_links)))
        picks = rng.choice(n_pages, size=k, p=probs)
        picks[picks == page] = (page + 1) % n_pages
        sources.extend([page] * len(picks))
        targets.extend(picks.tolist())

    entities = pd.DataFrame({"entity_id": np.arange(n_pages), "name": [f"http://site{i}.example.org/" for i in range(n_pages)]})
    edges = pd.DataFrame({"source": np.array(sources, dtype=np.int64), "target": np.array(targets, dtype=np.int64)})
    return entities, edges
