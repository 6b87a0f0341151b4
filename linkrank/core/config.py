from __future__ import annotations
import os
from dataclasses import dataclass, field, replace as _replace
from linkrank.core.errors import ConfigurationError

MODES = ("jacobi", "chaotic")


def _default_threads() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class RankConfig:
    """Configuration shared by the builder, assembler, solver and ranker."""

    damping: float = 0.75
    tolerance: float = 1e-6
    threads: int = field(default_factory=_default_threads)
    top_k: int = 10
    max_iterations: int = 10_000
    mode: str = "jacobi"

    def __post_init__(self):
        self.validate()

    def validate(self) -> RankConfig:
        if not (0 < self.damping < 1): raise ConfigurationError(f"damping must be in (0, 1), got {self.damping}")
        if not self.tolerance > 0: raise ConfigurationError(f"tolerance must be positive, got {self.tolerance}")
        if self.threads < 1: raise ConfigurationError(f"threads must be >= 1, got {self.threads}")
        if self.top_k < 0: raise ConfigurationError(f"top_k must be non-negative, got {self.top_k}")
        if self.max_iterations < 1: raise ConfigurationError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.mode not in MODES: raise ConfigurationError(f"mode must be one of {MODES}, got {self.mode!r}")
        return self

    def replace(self, **changes) -> RankConfig:
        """Validated copy with ``changes`` applied; ``None`` values are ignored."""
        return _replace(self, **{k: v for k, v in changes.items() if v is not None})
