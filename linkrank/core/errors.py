"""
Error types raised by linkrank.

Each error also derives from the builtin the rest of the package would
otherwise raise, so ``except ValueError`` keeps working for callers.
"""

from __future__ import annotations
from typing import Optional


class LinkRankError(Exception):
    """Base class for all linkrank failures."""


class InputFormatError(LinkRankError, ValueError):
    """Malformed counts, missing fields or unreadable sources."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)


class ReferentialError(LinkRankError, ValueError):
    """An edge endpoint outside ``[0, n)``."""

    def __init__(self, source: int, target: int, n: int):
        self.source, self.target, self.n = source, target, n
        super().__init__(f"edge ({source}, {target}) references an entity outside [0, {n})")


class ConfigurationError(LinkRankError, ValueError):
    """Invalid damping factor, tolerance, thread count or top-k."""


class ConvergenceError(LinkRankError, RuntimeError):
    """The relaxation did not reach the tolerance within the iteration cap."""

    def __init__(self, iterations: int, error: float, tolerance: float):
        self.iterations, self.error, self.tolerance = iterations, error, tolerance
        super().__init__(
            f"did not converge within {iterations} iterations "
            f"(error={error:.3e}, tolerance={tolerance:.1e})"
        )
