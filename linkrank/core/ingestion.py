from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Union
import numpy as np
import duckdb
import pyarrow as pa
import narwhals as nw
from linkrank.core.connection import EDGES_TABLE, ENTITIES_TABLE, DuckDBConnection
from linkrank.core.errors import InputFormatError

logger = logging.getLogger(__name__)

_CAST_ERRORS = (duckdb.ConversionException, duckdb.InvalidInputException)


@dataclass(frozen=True)
class LinkData:
    """Entities and edges parsed from a link file, with 0-based ids."""
    names: List[str]
    sources: np.ndarray
    targets: np.ndarray

    @property
    def n(self) -> int: return len(self.names)

    def entities_table(self) -> pa.Table:
        return pa.table({"entity_id": pa.array(range(self.n), pa.int64()), "name": pa.array(self.names, pa.string())})

    def edges_table(self) -> pa.Table:
        return pa.table({"source": pa.array(self.sources, pa.int64()), "target": pa.array(self.targets, pa.int64())})


def _parse_ints(tokens: List[str], lineno: int, what: str) -> List[int]:
    try: return [int(t) for t in tokens]
    except ValueError: raise InputFormatError(f"expected integer {what}, got {' '.join(tokens)!r}", line=lineno) from None


def _content_lines(text: str):
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if line: yield lineno, line


def parse_link_text(text: str) -> LinkData:
    """
    Parse the link file format.

    Line 1 holds ``n m``. The next ``n`` lines hold a 1-based entity id
    followed by a display name running to end of line, then ``m`` lines
    of 1-based ``src dst`` pairs.
    """
    lines = _content_lines(text)
    try: lineno, header = next(lines)
    except StopIteration: raise InputFormatError("empty input, expected header 'n m'", line=1) from None

    tokens = header.split()
    if len(tokens) != 2: raise InputFormatError(f"header must be 'n m', got {header!r}", line=lineno)
    n, m = _parse_ints(tokens, lineno, "counts")
    if n < 1 or m < 0: raise InputFormatError(f"invalid counts n={n}, m={m}", line=lineno)

    names: List[Union[str, None]] = [None] * n
    for _ in range(n):
        try: lineno, line = next(lines)
        except StopIteration: raise InputFormatError(f"expected {n} entity lines") from None
        parts = line.split(None, 1)
        if len(parts) != 2: raise InputFormatError("entity line needs an id and a name", line=lineno)
        (entity_id,) = _parse_ints(parts[:1], lineno, "entity id")
        if not 1 <= entity_id <= n: raise InputFormatError(f"entity id {entity_id} outside [1, {n}]", line=lineno)
        if names[entity_id - 1] is not None: raise InputFormatError(f"duplicate entity id {entity_id}", line=lineno)
        names[entity_id - 1] = parts[1]

    sources, targets = np.empty(m, dtype=np.int64), np.empty(m, dtype=np.int64)
    for k in range(m):
        try: lineno, line = next(lines)
        except StopIteration: raise InputFormatError(f"expected {m} edge lines, found {k}") from None
        tokens = line.split()
        if len(tokens) != 2: raise InputFormatError(f"edge line must be 'src dst', got {line!r}", line=lineno)
        src, dst = _parse_ints(tokens, lineno, "edge endpoints")
        sources[k], targets[k] = src - 1, dst - 1

    extra = sum(1 for _ in lines)
    if extra: logger.warning("Ignoring %d trailing lines after %d declared edges", extra, m)
    return LinkData(names=names, sources=sources, targets=targets)


def read_link_file(path: Union[str, Path], encoding: str = "utf-8") -> LinkData:
    p = Path(path)
    try: text = p.read_text(encoding=encoding, errors="replace")
    except FileNotFoundError: raise InputFormatError(f"link file not found: {p}") from None
    except OSError as e: raise InputFormatError(f"cannot read link file {p}: {e}") from e
    data = parse_link_text(text)
    logger.info("Read %d entities and %d edges from %s", data.n, len(data.sources), p)
    return data


def _schema_of(df) -> List[str]:
    try: return list(df.collect_schema().names())
    except AttributeError: return list(df.columns)


def _register_source(conn: DuckDBConnection, source: Any, columns: List[str]) -> str:
    if isinstance(source, (str, Path)):
        p = str(source)
        if p.endswith(".csv"): reader = f"read_csv_auto('{p}')"
        elif p.endswith(".parquet"): reader = f"read_parquet('{p}')"
        else: raise InputFormatError(f"Unsupported file type: {p}")
        try: conn.execute(f"CREATE OR REPLACE TEMP TABLE _tmp_raw AS SELECT * FROM {reader}")
        except duckdb.IOException as e: raise InputFormatError(f"cannot read {p}: {e}") from e
        schema = [d[0] for d in conn.execute("SELECT * FROM _tmp_raw LIMIT 0").description]
    else:
        try: df = nw.from_native(source)
        except TypeError: raise InputFormatError(f"Unsupported source type: {type(source).__name__}") from None
        schema = _schema_of(df)
        if isinstance(df, nw.LazyFrame): df = df.collect()
        conn.register("_tmp_raw_view", df.to_native())
        conn.execute("CREATE OR REPLACE TEMP TABLE _tmp_raw AS SELECT * FROM _tmp_raw_view")
    missing = [c for c in columns if c not in schema]
    if missing: raise InputFormatError(f"Missing columns: {missing}")
    return "_tmp_raw"


def _upsert(conn: DuckDBConnection, table_name: str, select_sql: str, append: bool) -> int:
    if append and conn.table_exists(table_name):
        conn.execute(f"INSERT INTO {table_name} BY NAME {select_sql}")
    else:
        conn.execute(f"CREATE OR REPLACE TABLE {table_name} AS {select_sql}")
    return conn.count_rows(table_name)


def _count_non_integers(conn: DuckDBConnection, raw: str, column: str) -> int:
    """Non-null values of ``column`` that do not survive a BIGINT cast unchanged."""
    return conn.execute(
        f'SELECT COUNT(*) FROM {raw} WHERE "{column}" IS NOT NULL AND (TRY_CAST("{column}" AS BIGINT) IS NULL '
        f'OR TRY_CAST("{column}" AS DOUBLE) IS DISTINCT FROM TRY_CAST("{column}" AS BIGINT))'
    ).fetchone()[0]


def load_entities(conn, source, id_col="entity_id", name_col="name", one_based=False, table_name=ENTITIES_TABLE, append=False) -> int:
    """Load ``(entity_id, name)`` rows from a DataFrame, Arrow table or csv/parquet path."""
    raw = _register_source(conn, source, [id_col, name_col])
    offset = 1 if one_based else 0
    nulls = conn.execute(f'SELECT COUNT(*) FROM {raw} WHERE "{id_col}" IS NULL').fetchone()[0]
    if nulls: raise InputFormatError(f"{nulls} entities have a null id")
    bad = _count_non_integers(conn, raw, id_col)
    if bad: raise InputFormatError(f"entity ids must be integers, {bad} values are not")
    try:
        return _upsert(conn, table_name, f'SELECT "{id_col}"::BIGINT - {offset} AS entity_id, "{name_col}"::VARCHAR AS name FROM {raw}', append)
    except _CAST_ERRORS as e:
        raise InputFormatError(f"entity ids must be integers: {e}") from e


def load_edges(conn, source, source_col="source", target_col="target", one_based=False, table_name=EDGES_TABLE, append=False) -> int:
    """Load ``(source, target)`` rows; nulls are rejected, duplicates kept."""
    raw = _register_source(conn, source, [source_col, target_col])
    offset = 1 if one_based else 0
    nulls = conn.execute(f'SELECT COUNT(*) FROM {raw} WHERE "{source_col}" IS NULL OR "{target_col}" IS NULL').fetchone()[0]
    if nulls: raise InputFormatError(f"{nulls} edges have a null endpoint")
    bad = _count_non_integers(conn, raw, source_col) + _count_non_integers(conn, raw, target_col)
    if bad: raise InputFormatError(f"edge endpoints must be integers, {bad} values are not")
    try:
        return _upsert(conn, table_name, f'SELECT "{source_col}"::BIGINT - {offset} AS source, "{target_col}"::BIGINT - {offset} AS target FROM {raw}', append)
    except _CAST_ERRORS as e:
        raise InputFormatError(f"edge endpoints must be integers: {e}") from e


def load_link_data(conn: DuckDBConnection, data: LinkData) -> int:
    load_entities(conn, data.entities_table())
    return load_edges(conn, data.edges_table())
