"""
linkrank command line.

    linkrank rank hollins.dat --damping 0.85 --top-k 20
    linkrank scores hollins.dat --output scores.csv
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional
import typer
import pyarrow as pa
import pyarrow.csv as pacsv
from linkrank.api import LinkRank
from linkrank.core.config import RankConfig
from linkrank.core.errors import LinkRankError

app = typer.Typer(name="linkrank", help="PageRank over a link file.", add_completion=False)


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _engine(damping, tolerance, threads, top_k, max_iterations, mode) -> LinkRank:
    config = RankConfig().replace(
        damping=damping, tolerance=tolerance, threads=threads,
        top_k=top_k, max_iterations=max_iterations, mode=mode,
    )
    return LinkRank(config=config)


@app.command()
def rank(
    path: Path = typer.Argument(..., help="Link file: 'n m', n entity lines, m edge lines"),
    damping: Optional[float] = typer.Option(None, "--damping", "-d", help="Damping factor in (0, 1)"),
    tolerance: Optional[float] = typer.Option(None, "--tolerance", help="Convergence tolerance"),
    threads: Optional[int] = typer.Option(None, "--threads", "-t", help="Worker threads"),
    top_k: Optional[int] = typer.Option(None, "--top-k", "-k", help="Number of entities to report"),
    max_iterations: Optional[int] = typer.Option(None, "--max-iterations", help="Iteration cap"),
    mode: Optional[str] = typer.Option(None, "--mode", help="jacobi or chaotic"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Rank a link file and print the top entities."""
    _configure_logging(verbose)
    try:
        with _engine(damping, tolerance, threads, top_k, max_iterations, mode) as engine:
            typer.echo(engine.load_file(path).report())
    except LinkRankError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def scores(
    path: Path = typer.Argument(..., help="Link file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="CSV destination, stdout if omitted"),
    damping: Optional[float] = typer.Option(None, "--damping", "-d"),
    tolerance: Optional[float] = typer.Option(None, "--tolerance"),
    threads: Optional[int] = typer.Option(None, "--threads", "-t"),
    mode: Optional[str] = typer.Option(None, "--mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Write every entity's score as CSV."""
    _configure_logging(verbose)
    try:
        with _engine(damping, tolerance, threads, None, None, mode) as engine:
            table = engine.load_file(path).scores()
    except LinkRankError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)
    if output:
        pacsv.write_csv(table, str(output))
        typer.echo(f"Wrote {table.num_rows} scores to {output}")
    else:
        sink = pa.BufferOutputStream()
        pacsv.write_csv(table, sink)
        typer.echo(sink.getvalue().to_pybytes().decode("utf-8"), nl=False)


def main():
    app()


if __name__ == "__main__":
    main()
