from pathlib import Path
from typing import Union
from .api import LinkRank
from .core.config import RankConfig
from .core.connection import DuckDBConnection
from .core.errors import (
    LinkRankError,
    InputFormatError,
    ReferentialError,
    ConfigurationError,
    ConvergenceError,
)
from .core.ingestion import LinkData, read_link_file, parse_link_text
from .ranking import (
    build_stochastic_matrix,
    out_degrees,
    DampedSystem,
    assemble_damped_system,
    RelaxationSolver,
    SolveResult,
    solve,
    top_k_indices,
    rank_entities,
)
from .report import format_report
from .datasets import generate_cycle_graph, generate_web_graph

def load(path: Union[str, Path], **config) -> LinkRank:
    engine = LinkRank(config=RankConfig(**config))
    engine.load_file(path)
    return engine

def connect(database=":memory:", **kwargs) -> LinkRank:
    return LinkRank(database=database, **kwargs)

__all__ = [
    "LinkRank",
    "load",
    "connect",
    "RankConfig",
    "DuckDBConnection",
    # Errors
    "LinkRankError",
    "InputFormatError",
    "ReferentialError",
    "ConfigurationError",
    "ConvergenceError",
    # Ingestion
    "LinkData",
    "read_link_file",
    "parse_link_text",
    # Ranking
    "build_stochastic_matrix",
    "out_degrees",
    "DampedSystem",
    "assemble_damped_system",
    "RelaxationSolver",
    "SolveResult",
    "solve",
    "top_k_indices",
    "rank_entities",
    "format_report",
    # Datasets
    "generate_cycle_graph",
    "generate_web_graph",
]
