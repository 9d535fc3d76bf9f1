from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from .history import SegmentHistory
from .timing import Time, TimingMethod


@dataclass(frozen=True)
class Segment:
    """One segment of a run.

    ``personal_best_split`` is the cumulative time at the end of this segment
    in the personal-best attempt, not the duration of the segment itself.
    """

    name: str
    history: SegmentHistory
    personal_best_split: Optional[Time] = None


@dataclass(frozen=True)
class Run:
    """Ordered segments of a timed activity."""

    segments: Tuple[Segment, ...]

    @classmethod
    def from_segments(cls, segments: Sequence[Segment]) -> Run:
        return cls(segments=tuple(segments))

    def __len__(self) -> int:
        return len(self.segments)

    def personal_best(self, method: Union[TimingMethod, str]) -> Optional[float]:
        """Total PB time for ``method``: the PB split of the last segment."""
        if not self.segments:
            return None
        split = self.segments[-1].personal_best_split
        if split is None:
            return None
        return split.get(TimingMethod(method))
