"""
linkrank.ranking.solver — Parallel row relaxation for ``A p = b``.

Every pass splits the rows into contiguous blocks, one per worker. A
worker computes ``shift_i = (b[i] - A[i] . p) / A[i][i]`` for its rows and
returns the sum of ``|shift_i|``. The partial sums are added once all
workers finish, which is also the barrier between passes.

Two update modes are available:

- ``jacobi``: reads come from the previous pass and writes go to a second
  buffer. The buffers swap after the barrier, so every run takes the same
  trajectory regardless of thread count.
- ``chaotic``: every worker updates the shared vector in place, row by
  row. A worker sees its own earlier rows and whatever the other workers
  have already written, so the path to the fixed point depends on
  scheduling. Each index still has exactly one writer.
"""
from __future__ import annotations
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np
from linkrank.core.config import RankConfig
from linkrank.core.errors import ConvergenceError, InputFormatError
from linkrank.ranking.damped import DampedSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveResult:
    scores: np.ndarray
    iterations: int
    error: float
    elapsed: float
    converged: bool
    threads: int
    mode: str


def row_blocks(n: int, workers: int) -> List[Tuple[int, int]]:
    """Split ``range(n)`` into at most ``workers`` contiguous, non-empty blocks."""
    count = max(1, min(workers, n))
    bounds = np.linspace(0, n, count + 1).astype(int)
    return [(int(lo), int(hi)) for lo, hi in zip(bounds[:-1], bounds[1:]) if hi > lo]


def _jacobi_block(a, b, diag, current, out, lo, hi) -> float:
    shift = (b[lo:hi] - a[lo:hi] @ current) / diag[lo:hi]
    out[lo:hi] = current[lo:hi] + shift
    return float(np.abs(shift).sum())


def _chaotic_block(a, b, diag, shared, lo, hi) -> float:
    error = 0.0
    for i in range(lo, hi):
        shift = (b[i] - a[i] @ shared) / diag[i]
        shared[i] += shift
        error += abs(shift)
    return float(error)


class RelaxationSolver:
    def __init__(self, config: Optional[RankConfig] = None):
        self.config = config or RankConfig()

    def _initial(self, system: DampedSystem, initial) -> np.ndarray:
        if initial is None:
            return np.full(system.n, 1.0 / system.n)
        p = np.array(initial, dtype=np.float64)
        if p.shape != (system.n,):
            raise InputFormatError(f"initial vector must have shape ({system.n},), got {p.shape}")
        return p

    def solve(self, system: DampedSystem, initial=None, raise_on_divergence: bool = True) -> SolveResult:
        """
        Relax until the summed ``|shift|`` of a pass drops below the tolerance.

        Raises ``ConvergenceError`` when ``max_iterations`` passes run
        without converging, unless ``raise_on_divergence`` is False, in
        which case the last iterate comes back with ``converged=False``.
        """
        cfg = self.config
        a, b, diag = system.matrix, system.constant, system.diagonal
        current = self._initial(system, initial)
        spare = np.empty_like(current)
        blocks = row_blocks(system.n, cfg.threads)
        logger.info("Solving n=%d with %d threads (%s, d=%.4f)", system.n, cfg.threads, cfg.mode, system.damping)

        iterations, error = 0, float("inf")
        started = time.perf_counter()
        with ThreadPoolExecutor(max_workers=cfg.threads) as pool:
            while iterations < cfg.max_iterations:
                if cfg.mode == "jacobi":
                    futures = [pool.submit(_jacobi_block, a, b, diag, current, spare, lo, hi) for lo, hi in blocks]
                else:
                    futures = [pool.submit(_chaotic_block, a, b, diag, current, lo, hi) for lo, hi in blocks]
                error = sum(f.result() for f in futures)
                iterations += 1
                if cfg.mode == "jacobi":
                    current, spare = spare, current
                logger.debug("pass %d error=%.3e", iterations, error)
                if error < cfg.tolerance: break
        elapsed = time.perf_counter() - started

        converged = error < cfg.tolerance
        if not converged:
            logger.warning("No convergence after %d passes (error=%.3e)", iterations, error)
            if raise_on_divergence: raise ConvergenceError(iterations, error, cfg.tolerance)
        else:
            logger.info("Converged in %d passes, %.6f s", iterations, elapsed)
        return SolveResult(
            scores=current, iterations=iterations, error=float(error), elapsed=elapsed,
            converged=converged, threads=cfg.threads, mode=cfg.mode,
        )


def solve(system: DampedSystem, config: Optional[RankConfig] = None, initial=None) -> SolveResult:
    return RelaxationSolver(config).solve(system, initial=initial)
