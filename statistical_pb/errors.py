"""Error types raised at the call boundary of the distribution engine.

All errors derive from :class:`ValueError` so callers that already guard
numeric input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class StatisticalPbError(ValueError):
    """Base class for every precondition failure in this package."""


class InvalidPointCountError(StatisticalPbError):
    """Point count is < 1, or not a power of two where one is required."""


class InvalidFrequencyError(StatisticalPbError):
    """Fundamental angular frequency is not a positive finite number."""


class InvalidDurationError(StatisticalPbError):
    """Window duration is not a positive finite number."""


class DimensionMismatchError(StatisticalPbError):
    """Two distributions differ in point count or window duration."""


class EmptyHistoryError(StatisticalPbError):
    """No historical sample is present for the requested timing method."""


__all__ = [
    "StatisticalPbError",
    "InvalidPointCountError",
    "InvalidFrequencyError",
    "InvalidDurationError",
    "DimensionMismatchError",
    "EmptyHistoryError",
]
