"""Analysis package.

Design principle:
  - Models hold attempt history exactly as recorded (no resampling, no binning).
  - Analysis turns history into frequency-domain distributions and answers
    cumulative-probability questions about them.

Every distribution lives on a bounded window ``[0, max_duration)`` sampled at
a power-of-two number of points; mass outside the window wraps around.
"""

from .discontinuous import impulse_coefficients, step_coefficients
from .distribution import ProbabilityDistribution
from .pb_chance import segment_distributions, statistical_pb_chance, total_time_distribution
from .transform import SpectralPlan, get_plan

__all__ = [
    "SpectralPlan",
    "get_plan",
    "impulse_coefficients",
    "step_coefficients",
    "ProbabilityDistribution",
    "segment_distributions",
    "total_time_distribution",
    "statistical_pb_chance",
]
