"""Chance of beating the personal best, from per-segment attempt history.

Each segment's recorded times become a
:class:`~statistical_pb.analysis.distribution.ProbabilityDistribution`; the
segments still ahead of the runner are combined into the distribution of the
remaining time, and the PB chance is its cumulative probability at the time
budget left before the PB is lost.

Segments are treated as independent. All distributions of a run share one
window (:meth:`DistributionProfile.resolved_max_duration`), which is required
for combining them.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from statistical_pb.models.profile import DistributionProfile
from statistical_pb.models.run import Run

from .distribution import ProbabilityDistribution

logger = logging.getLogger(__name__)


def segment_distributions(
    run: Run,
    profile: DistributionProfile,
    *,
    start: int = 0,
) -> List[ProbabilityDistribution]:
    """One distribution per segment from ``start`` on, all on the same window.

    The window is resolved over the whole run, so distributions built for
    different ``start`` values can still be combined.
    """
    max_duration = profile.resolved_max_duration(run)
    return [
        ProbabilityDistribution.from_history(
            seg.history,
            profile.timing_method,
            max_duration,
            profile.point_count,
            profile.weight_per_sample,
        )
        for seg in run.segments[start:]
    ]


def total_time_distribution(
    run: Run,
    profile: DistributionProfile,
    *,
    start: int = 0,
) -> ProbabilityDistribution:
    """Distribution of the time needed for segments ``start`` to the end.

    Raises
    ------
    ValueError
        If ``start`` does not leave at least one segment.
    """
    n = len(run)
    if not (0 <= start < n):
        raise ValueError(f"start must be in [0, {n - 1}], got {start}")
    return ProbabilityDistribution.combine_all(segment_distributions(run, profile, start=start))


def statistical_pb_chance(
    run: Run,
    profile: DistributionProfile,
    *,
    current_time: float = 0.0,
    completed: int = 0,
    personal_best: Optional[float] = None,
) -> float:
    """Probability of finishing under the personal best.

    Parameters
    ----------
    run:
        Segments with their history and PB splits.
    profile:
        Distribution settings (timing method, N, window).
    current_time:
        Time already elapsed in the current attempt, in seconds.
    completed:
        Number of segments already finished in the current attempt.
    personal_best:
        Total time to beat. Default: the run's PB for the profile's timing
        method.

    Returns
    -------
    float
        Chance in ``[0, 1]`` (clipped; the truncated series can overshoot
        slightly). 1.0 if there is no PB to beat yet.
    """
    n = len(run)
    if not (0 <= completed <= n):
        raise ValueError(f"completed must be in [0, {n}], got {completed}")

    pb = run.personal_best(profile.timing_method) if personal_best is None else float(personal_best)
    if pb is None:
        logger.debug("No personal best for %s; any finished run is a PB", profile.timing_method.value)
        return 1.0

    budget = pb - float(current_time)
    if completed == n:
        return 1.0 if budget > 0 else 0.0
    if budget <= 0:
        return 0.0

    remaining = total_time_distribution(run, profile, start=completed)
    p = remaining.probability_below(budget)
    logger.debug(
        "PB chance %.4f (budget %.3f s over %d remaining segment(s))", p, budget, n - completed
    )
    return min(max(p, 0.0), 1.0)
