"""Tests for DuckDB connection management."""

import pytest
import numpy as np
import pyarrow as pa
from unittest.mock import MagicMock, patch
from linkrank.core.connection import DuckDBConnection


class TestDuckDBConnection:

    def test_in_memory_connection(self):
        conn = DuckDBConnection()
        assert conn.execute("SELECT 42 AS answer").fetchone()[0] == 42
        conn.close()

    def test_query_returns_arrow(self):
        with DuckDBConnection() as conn:
            table = conn.query("SELECT 1 AS a, 2 AS b")
            assert table.column_names == ["a", "b"]
            assert table.to_pylist()[0]["a"] == 1

    def test_count_rows(self):
        with DuckDBConnection() as conn:
            conn.execute("CREATE TABLE t AS SELECT * FROM range(4) r(x)")
            assert conn.count_rows("t") == 4

    def test_table_exists(self):
        with DuckDBConnection() as conn:
            assert conn.table_exists("edges") is False
            conn.execute("CREATE TABLE edges (source BIGINT, target BIGINT)")
            assert conn.table_exists("edges") is True

    def test_threads_param(self):
        conn = DuckDBConnection(threads=1, memory_limit="256MB")
        assert str(conn.execute("SELECT current_setting('threads')").fetchone()[0]) == "1"
        conn.close()

    def test_execute_with_params(self):
        with DuckDBConnection() as conn:
            assert conn.execute("SELECT ? AS x", [10]).fetchone()[0] == 10

    def test_persistent_database(self, tmp_path):
        db_path = str(tmp_path / "links.duckdb")
        with DuckDBConnection(database=db_path) as conn:
            conn.execute("CREATE TABLE t (v INT)")
            conn.execute("INSERT INTO t VALUES (99)")
        with DuckDBConnection(database=db_path) as conn:
            assert conn.execute("SELECT v FROM t").fetchone()[0] == 99

    def test_repr(self):
        with DuckDBConnection() as conn:
            assert ":memory:" in repr(conn)

    def test_query_returns_table_directly(self):
        """arrow() may hand back a Table rather than a reader."""
        with DuckDBConnection() as conn:
            mock_result = MagicMock()
            mock_table = pa.Table.from_pydict({"a": [1]})
            mock_result.arrow.return_value = mock_table
            with patch.object(conn, "execute", return_value=mock_result):
                assert conn.query("SELECT 1") == mock_table


class TestGraphTables:

    @pytest.fixture
    def graph_conn(self, conn):
        conn.execute("CREATE TABLE entities AS SELECT * FROM (VALUES (1, 'b'), (0, 'a'), (2, 'c')) t(entity_id, name)")
        conn.execute("CREATE TABLE edges AS SELECT * FROM (VALUES (0, 1), (0, 1), (1, 2), (2, 0)) t(source, target)")
        return conn

    def test_entity_bounds(self, graph_conn):
        assert graph_conn.entity_bounds() == (3, 3, 0, 2)

    def test_entity_names_in_id_order(self, graph_conn):
        assert graph_conn.entity_names() == ["a", "b", "c"]

    def test_distinct_edges(self, graph_conn):
        sources, targets = graph_conn.distinct_edges()
        assert sources.dtype == np.int64
        assert sorted(zip(sources.tolist(), targets.tolist())) == [(0, 1), (1, 2), (2, 0)]

    def test_distinct_edges_without_table(self, conn):
        sources, targets = conn.distinct_edges()
        assert sources.size == 0 and targets.size == 0

    def test_out_of_range_edge(self, graph_conn):
        assert graph_conn.out_of_range_edge(3) is None
        assert graph_conn.out_of_range_edge(2) == (1, 2)

    def test_out_of_range_edge_without_table(self, conn):
        assert conn.out_of_range_edge(3) is None
