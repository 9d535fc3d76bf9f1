"""Statistical PB -- chance of a new personal best in a segmented timed run.

This package provides tools for:
- Holding per-segment attempt history for several timing methods
- Building each segment's time distribution directly in the frequency domain
- Combining segment distributions into the distribution of the total time
- Querying the sampled density and cumulative probabilities

Key principles:
- No time-domain histogram: sample times enter as exact impulse coefficients
- Bounded window: every distribution covers ``[0, max_duration)`` and wraps
- Explicit failures: invalid sizes, windows and empty histories raise

Main subpackages:
- analysis: Discontinuous transforms, ProbabilityDistribution, PB chance
- models: Data models (TimingMethod, SegmentHistory, Run, DistributionProfile)
"""

__all__ = []
