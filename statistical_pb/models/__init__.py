from .history import SegmentHistory
from .profile import DistributionProfile
from .run import Run, Segment
from .timing import Time, TimingMethod

__all__ = [
    "DistributionProfile",
    "Run",
    "Segment",
    "SegmentHistory",
    "Time",
    "TimingMethod",
]
