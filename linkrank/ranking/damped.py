from __future__ import annotations
from dataclasses import dataclass
import numpy as np
from linkrank.core.errors import ConfigurationError, InputFormatError


@dataclass(frozen=True)
class DampedSystem:
    """The linear system ``A p = b`` whose solution is the PageRank vector."""
    matrix: np.ndarray
    constant: np.ndarray
    damping: float

    @property
    def n(self) -> int: return self.constant.shape[0]

    @property
    def diagonal(self) -> np.ndarray: return np.diagonal(self.matrix)

    def residual(self, scores: np.ndarray) -> np.ndarray:
        return self.constant - self.matrix @ scores


def assemble_damped_system(stochastic: np.ndarray, damping: float) -> DampedSystem:
    """``A = I - d * S^T`` and ``b = (1 - d) / n``, for ``0 < d < 1``."""
    if not (0 < damping < 1): raise ConfigurationError(f"damping must be in (0, 1), got {damping}")
    s = np.asarray(stochastic, dtype=np.float64)
    if s.ndim != 2 or s.shape[0] != s.shape[1] or s.shape[0] == 0:
        raise InputFormatError(f"stochastic matrix must be square and non-empty, got shape {s.shape}")

    n = s.shape[0]
    a = np.multiply(s.T, -damping, order="C")
    a[np.diag_indices(n)] += 1.0
    b = np.full(n, (1.0 - damping) / n)
    a.setflags(write=False)
    b.setflags(write=False)
    return DampedSystem(matrix=a, constant=b, damping=float(damping))
