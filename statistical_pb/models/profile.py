"""Distribution profile -- bundles every parameter that shapes a PB estimate.

A DistributionProfile groups the settings used to build segment distributions
into one frozen dataclass. It can be:

- Constructed from a Run (derive the time window from the attempt history)
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, Optional

from statistical_pb.errors import InvalidDurationError, InvalidPointCountError
from statistical_pb.models.timing import TimingMethod
from statistical_pb.utils import is_power_of_two

if TYPE_CHECKING:
    from statistical_pb.models.run import Run


@dataclass(frozen=True)
class DistributionProfile:
    """Frozen configuration for building and combining segment distributions.

    Fields
    ------
    timing_method : TimingMethod
        Which recorded time kind to read from each segment history.
    point_count : int
        Length N of every coefficient vector. Must be a power of two. The
        resolution of the sampled curve is ``max_duration / point_count``.
    max_duration : float or None
        Window length in seconds. ``None`` means "derive from the run", see
        :meth:`resolved_max_duration`.
    window_headroom : float
        Multiplier applied to the sum of the slowest recorded segment times
        when deriving ``max_duration``. Must be >= 1 so the total of the
        slowest segments never wraps around the window.
    weight_per_sample : float or None
        Mass of each historical sample. ``None`` normalizes every segment to
        unit mass (``1 / n_present``).
    """

    timing_method: TimingMethod = TimingMethod.REAL_TIME
    point_count: int = 1024
    max_duration: Optional[float] = None
    window_headroom: float = 2.0
    weight_per_sample: Optional[float] = None

    def __post_init__(self) -> None:
        # Accept plain strings (e.g. from JSON) for the timing method.
        object.__setattr__(self, "timing_method", TimingMethod(self.timing_method))

        if isinstance(self.point_count, bool) or not is_power_of_two(int(self.point_count)):
            raise InvalidPointCountError(
                f"point_count must be a power of two >= 1, got {self.point_count!r}"
            )
        if self.max_duration is not None:
            if not (math.isfinite(self.max_duration) and self.max_duration > 0):
                raise InvalidDurationError(f"max_duration must be > 0, got {self.max_duration!r}")
        if not (math.isfinite(self.window_headroom) and self.window_headroom >= 1.0):
            raise ValueError(f"window_headroom must be >= 1, got {self.window_headroom!r}")
        if self.weight_per_sample is not None and not self.weight_per_sample > 0:
            raise ValueError(f"weight_per_sample must be > 0, got {self.weight_per_sample!r}")

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def from_run(cls, run: "Run", **overrides: Any) -> DistributionProfile:
        """Build a profile with ``max_duration`` fixed from the run's history.

        Example::

            profile = DistributionProfile.from_run(run, point_count=4096,
                                                   timing_method="game_time")
        """
        overrides = dict(overrides)
        max_duration = overrides.pop("max_duration", None)
        base = cls(**overrides)
        if max_duration is None:
            max_duration = base.resolved_max_duration(run)
        return replace(base, max_duration=float(max_duration))

    def resolved_max_duration(self, run: "Run") -> float:
        """Window length to use for ``run``.

        The explicit ``max_duration`` wins. Otherwise the window is
        ``window_headroom`` times the sum of each segment's slowest recorded
        time for this timing method.
        """
        if self.max_duration is not None:
            return float(self.max_duration)

        total = 0.0
        for seg in run.segments:
            t = seg.history.max_time(self.timing_method)
            if t is not None and t > 0:
                total += t
        if total <= 0:
            raise InvalidDurationError(
                f"Cannot derive max_duration: no positive {self.timing_method.value} in run history"
            )
        return float(self.window_headroom * total)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (the timing method becomes its string value)."""
        d = asdict(self)
        d["timing_method"] = self.timing_method.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> DistributionProfile:
        """Reconstruct from a dict (e.g. loaded from JSON)."""
        return cls(**dict(d))
