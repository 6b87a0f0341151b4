"""
Solver scaling across thread counts and update modes.
Jacobi passes are identical for every thread count; chaotic passes vary
with scheduling but reach the same fixed point.
"""

import numpy as np
from linkrank import RankConfig, assemble_damped_system, build_stochastic_matrix, solve
from linkrank.datasets import generate_web_graph

def benchmark(n_pages: int = 3_000):
    entities, edges = generate_web_graph(n_pages=n_pages)
    system = assemble_damped_system(
        build_stochastic_matrix(len(entities), edges["source"], edges["target"]), 0.75
    )
    reference = None
    print(f"{'mode':<8} {'threads':>7} {'passes':>6} {'seconds':>9} {'max diff':>10}")
    for mode in ("jacobi", "chaotic"):
        for threads in (1, 2, 4, 8):
            result = solve(system, RankConfig(threads=threads, mode=mode))
            if reference is None: reference = result.scores
            diff = float(np.abs(result.scores - reference).max())
            print(f"{mode:<8} {threads:>7} {result.iterations:>6} {result.elapsed:>9.4f} {diff:>10.2e}")

if __name__ == "__main__":
    benchmark()
