from .stochastic import build_stochastic_matrix, out_degrees
from .damped import DampedSystem, assemble_damped_system
from .solver import RelaxationSolver, SolveResult, solve
from .topk import top_k_indices, rank_entities

__all__ = [
    "build_stochastic_matrix",
    "out_degrees",
    "DampedSystem",
    "assemble_damped_system",
    "RelaxationSolver",
    "SolveResult",
    "solve",
    "top_k_indices",
    "rank_entities",
]
