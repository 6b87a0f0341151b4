from __future__ import annotations
from typing import List, Optional
import pyarrow as pa


def format_ranking(table: pa.Table) -> List[str]:
    return [f"{r['rank']}({r['score']:f}): {r['name']}" for r in table.to_pylist()]


def format_report(table: pa.Table, result=None, damping: Optional[float] = None) -> str:
    """Console report of a ranking table plus optional solve diagnostics."""
    lines = []
    if damping is not None: lines.append(f"Using damping factor d = {damping:f}")
    if result is not None:
        lines.append(f"Using {result.threads} threads")
        lines.append(f"Parallel time with {result.threads} threads is = {result.elapsed:f} seconds")
    lines.append(f"The {table.num_rows} biggest sites are:")
    lines.extend(format_ranking(table))
    if result is not None: lines.append(f"The number of iterations is: {result.iterations}")
    return "\n".join(lines)
