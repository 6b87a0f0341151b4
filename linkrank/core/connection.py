from __future__ import annotations
import duckdb
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union
import numpy as np
import pyarrow as pa

ENTITIES_TABLE, EDGES_TABLE = "entities", "edges"


class DuckDBConnection:
    """DuckDB connection holding the ``entities`` and ``edges`` tables of a link graph."""
    def __init__(
        self,
        database: Union[str, Path] = ":memory:",
        memory_limit: Optional[str] = None,
        threads: Optional[int] = None,
    ):
        self._database = str(database)
        self.conn = duckdb.connect(self._database)

        if memory_limit:
            self.conn.execute(f"SET memory_limit='{memory_limit}'")
        if threads:
            self.conn.execute(f"SET threads={threads}")

    def execute(self, query: str, params: Optional[Union[list, dict]] = None) -> duckdb.DuckDBPyConnection:
        return self.conn.execute(query, params)

    def query(self, query: str, params: Optional[Union[list, dict]] = None) -> pa.Table:
        table = self.execute(query, params).arrow()
        if hasattr(table, "read_all"):
            return table.read_all()
        return table

    def table_exists(self, table_name: str) -> bool:
        try:
            self.conn.execute(f"SELECT 1 FROM {table_name} LIMIT 0")
            return True
        except duckdb.Error:
            return False

    def count_rows(self, table_name: str) -> int:
        return self.execute(f"SELECT COUNT(*) FROM {table_name}").fetchone()[0]

    def entity_bounds(self, table_name: str = ENTITIES_TABLE) -> Tuple[int, int, Optional[int], Optional[int]]:
        """``(rows, distinct ids, min id, max id)`` of the entity table."""
        return self.execute(
            f"SELECT COUNT(*), COUNT(DISTINCT entity_id), MIN(entity_id), MAX(entity_id) FROM {table_name}"
        ).fetchone()

    def entity_names(self, table_name: str = ENTITIES_TABLE) -> List[str]:
        return self.query(f"SELECT name FROM {table_name} ORDER BY entity_id").column("name").to_pylist()

    def out_of_range_edge(self, n: int, table_name: str = EDGES_TABLE) -> Optional[Tuple[int, int]]:
        """First edge with an endpoint outside ``[0, n)``, or None."""
        if not self.table_exists(table_name): return None
        return self.execute(
            f"SELECT source, target FROM {table_name} WHERE source < 0 OR source >= ? OR target < 0 OR target >= ? LIMIT 1",
            [n, n],
        ).fetchone()

    def distinct_edges(self, table_name: str = EDGES_TABLE) -> Tuple[np.ndarray, np.ndarray]:
        """Deduplicated ``(sources, targets)``; empty when no edges were loaded."""
        if not self.table_exists(table_name):
            return np.empty(0, dtype=np.int64), np.empty(0, dtype=np.int64)
        cols = self.execute(f"SELECT DISTINCT source, target FROM {table_name}").fetchnumpy()
        return np.asarray(cols["source"], dtype=np.int64), np.asarray(cols["target"], dtype=np.int64)

    def register(self, name: str, df: Any):
        self.conn.register(name, df)

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def __repr__(self) -> str:
        return f"DuckDBConnection(database={self._database!r})"
