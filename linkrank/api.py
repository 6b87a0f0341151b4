from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, List, Optional, Union
import numpy as np
import pyarrow as pa
from linkrank.core.config import RankConfig
from linkrank.core.connection import DuckDBConnection
from linkrank.core.errors import InputFormatError, ReferentialError
from linkrank.core.ingestion import (
    ENTITIES_TABLE, load_edges, load_entities, load_link_data, read_link_file,
)
from linkrank.ranking.damped import DampedSystem, assemble_damped_system
from linkrank.ranking.solver import RelaxationSolver, SolveResult
from linkrank.ranking.stochastic import build_stochastic_matrix
from linkrank.ranking.topk import rank_entities
from linkrank.report import format_report

logger = logging.getLogger(__name__)


class LinkRank:
    """PageRank engine over entities and edges stored in DuckDB."""

    def __init__(
        self,
        database: Union[str, Path] = ":memory:",
        config: Optional[RankConfig] = None,
        memory_limit: Optional[str] = None,
        threads: Optional[int] = None,
    ) -> None:
        self.conn = DuckDBConnection(database=database, memory_limit=memory_limit, threads=threads)
        self.config = config or RankConfig()
        self._result: Optional[SolveResult] = None

    @property
    def result(self) -> Optional[SolveResult]: return self._result

    def load_file(self, path: Union[str, Path]) -> LinkRank:
        load_link_data(self.conn, read_link_file(path))
        self._result = None
        return self

    def load_entities(self, data: Any, **kwargs) -> int:
        self._result = None
        return load_entities(self.conn, data, **kwargs)

    def load_edges(self, data: Any, **kwargs) -> int:
        self._result = None
        return load_edges(self.conn, data, **kwargs)

    def entity_count(self) -> int:
        if not self.conn.table_exists(ENTITIES_TABLE): raise RuntimeError("Call load_file() or load_entities() first.")
        total, distinct, lo, hi = self.conn.entity_bounds()
        if total == 0: raise InputFormatError("no entities loaded")
        if distinct != total or lo != 0 or hi != total - 1:
            raise InputFormatError(f"entity ids must be unique and cover [0, {total}), got [{lo}, {hi}] with {distinct} distinct")
        return total

    def names(self) -> List[str]:
        self.entity_count()
        return self.conn.entity_names()

    def _distinct_edges(self, n: int):
        bad = self.conn.out_of_range_edge(n)
        if bad: raise ReferentialError(bad[0], bad[1], n)
        return self.conn.distinct_edges()

    def stochastic_matrix(self) -> np.ndarray:
        n = self.entity_count()
        sources, targets = self._distinct_edges(n)
        logger.info("Graph has %d entities and %d distinct edges", n, len(sources))
        return build_stochastic_matrix(n, sources, targets)

    def damped_system(self) -> DampedSystem:
        return assemble_damped_system(self.stochastic_matrix(), self.config.damping)

    def fit(self, initial: Optional[np.ndarray] = None, raise_on_divergence: bool = True) -> LinkRank:
        self._result = RelaxationSolver(self.config).solve(self.damped_system(), initial=initial, raise_on_divergence=raise_on_divergence)
        return self

    def _fitted(self) -> SolveResult:
        if self._result is None: self.fit()
        return self._result

    def scores(self) -> pa.Table:
        """Every entity with its score, in entity-id order."""
        result = self._fitted()
        return pa.table({
            "entity_id": pa.array(range(len(result.scores)), pa.int64()),
            "name": pa.array(self.names(), pa.string()),
            "score": pa.array(result.scores, pa.float64()),
        })

    def top(self, k: Optional[int] = None) -> pa.Table:
        result = self._fitted()
        return rank_entities(result.scores, self.names(), self.config.top_k if k is None else k)

    def report(self, k: Optional[int] = None) -> str:
        table = self.top(k)
        return format_report(table, self._result, self.config.damping)

    def sql(self, query: str) -> pa.Table: return self.conn.query(query)
    def close(self): self.conn.close()
    def __enter__(self): return self
    def __exit__(self, *_): self.close()
    def __repr__(self) -> str: return f"LinkRank(database={self.conn._database!r}, damping={self.config.damping})"
