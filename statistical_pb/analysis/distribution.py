"""Probability distributions of segment times, held in the frequency domain.

A :class:`ProbabilityDistribution` is an empirical distribution (a weighted
sum of point masses, one per historical time) represented by the truncated
Fourier series of its density over a window ``[0, max_duration)``. It is
built analytically from the samples via
:func:`~statistical_pb.analysis.discontinuous.impulse_coefficients`, so no
time-domain histogram is ever materialized.

Mass convention
---------------
``coefficients[0]`` is the total probability mass (1 for a normalized
distribution). ``numpy.fft.ifft`` (which includes the ``1/N`` factor) maps
the coefficients to the probability mass carried by each bin of width
``max_duration / N``.

Combination
-----------
Multiplying coefficient vectors convolves the densities (convolution
theorem). The result is the distribution of the *sum* of two independent
times, e.g. of two consecutive segments. This is exposed as :meth:`combine`
rather than ``+``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from statistical_pb.errors import (
    DimensionMismatchError,
    EmptyHistoryError,
    InvalidDurationError,
    InvalidPointCountError,
)
from statistical_pb.models.history import SegmentHistory
from statistical_pb.models.timing import TimingMethod
from statistical_pb.utils import is_power_of_two

from .discontinuous import impulse_coefficients
from .transform import get_plan

logger = logging.getLogger(__name__)

# Relative tolerance when comparing window durations of two distributions.
_DURATION_RTOL = 1e-12


def _check_window(max_duration: float, point_count: int) -> Tuple[float, int]:
    if isinstance(point_count, bool) or int(point_count) != point_count or not is_power_of_two(int(point_count)):
        raise InvalidPointCountError(f"point_count must be a power of two >= 1, got {point_count!r}")
    T = float(max_duration)
    if not (math.isfinite(T) and T > 0):
        raise InvalidDurationError(f"max_duration must be a positive finite number, got {max_duration!r}")
    return T, int(point_count)


@dataclass(frozen=True, eq=False)
class ProbabilityDistribution:
    """Frequency-domain probability distribution over a bounded time window.

    Attributes
    ----------
    max_duration:
        Window length in seconds. Mass beyond it wraps around.
    coefficients:
        Complex Fourier coefficients, shape ``(N,)`` with N a power of two.
        The array is owned by the distribution; only :meth:`combine_in_place`
        writes to it.
    """

    max_duration: float
    coefficients: np.ndarray

    def __post_init__(self) -> None:
        c = np.array(self.coefficients, dtype=np.complex128, copy=True)
        if c.ndim != 1:
            raise ValueError(f"coefficients must be 1D, got shape {c.shape}")
        T, _ = _check_window(self.max_duration, c.size)
        object.__setattr__(self, "max_duration", T)
        object.__setattr__(self, "coefficients", c)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_samples(
        cls,
        times: Iterable[float],
        max_duration: float,
        point_count: int,
        weight_per_sample: Optional[float] = None,
    ) -> ProbabilityDistribution:
        """Sum of weighted point masses at ``times``.

        Parameters
        ----------
        times:
            Sample times in seconds. Non-finite values are ignored.
        max_duration:
            Window length in seconds (> 0).
        point_count:
            Number of coefficients N (power of two).
        weight_per_sample:
            Mass given to each sample. Default ``1 / n_samples`` (unit total
            mass).

        Raises
        ------
        EmptyHistoryError
            If no finite sample is given.
        """
        T, N = _check_window(max_duration, point_count)
        t = np.asarray(list(times), dtype=np.float64)
        t = t[np.isfinite(t)]
        if t.size == 0:
            raise EmptyHistoryError("Cannot build a distribution from zero samples")

        weight = (1.0 / t.size) if weight_per_sample is None else float(weight_per_sample)
        omega_naught = 2.0 * math.pi / T

        outside = (t < 0) | (t >= T)
        if np.any(outside):
            logger.warning(
                "%d of %d samples lie outside the window [0, %g) and wrap around",
                int(np.count_nonzero(outside)),
                t.size,
                T,
            )

        coeff = np.zeros(N, dtype=np.complex128)
        for value in t:
            coeff += weight * impulse_coefficients(omega_naught, N, value)

        logger.debug("Built distribution from %d samples (N=%d, max_duration=%g)", t.size, N, T)
        return cls(max_duration=T, coefficients=coeff)

    @classmethod
    def from_history(
        cls,
        history: SegmentHistory,
        timing_method: Union[TimingMethod, str],
        max_duration: float,
        point_count: int,
        weight_per_sample: Optional[float] = None,
    ) -> ProbabilityDistribution:
        """Distribution of one segment's recorded times under ``timing_method``.

        Attempts without a value for the timing method contribute nothing.
        See :meth:`from_samples` for the remaining parameters.
        """
        method = TimingMethod(timing_method)
        times = history.times(method)
        if times.size == 0:
            raise EmptyHistoryError(f"No {method.value} recorded in history of {len(history)} attempt(s)")
        return cls.from_samples(times, max_duration, point_count, weight_per_sample)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def point_count(self) -> int:
        return int(self.coefficients.size)

    @property
    def omega_naught(self) -> float:
        return 2.0 * math.pi / self.max_duration

    @property
    def bin_width(self) -> float:
        return self.max_duration / self.point_count

    @property
    def total_mass(self) -> float:
        return float(self.coefficients[0].real)

    def copy(self) -> ProbabilityDistribution:
        return ProbabilityDistribution(max_duration=self.max_duration, coefficients=self.coefficients)

    # ------------------------------------------------------------------
    # Combination
    # ------------------------------------------------------------------

    def _check_compatible(self, other: ProbabilityDistribution) -> None:
        if other.point_count != self.point_count:
            raise DimensionMismatchError(
                f"Cannot combine distributions with point_count {self.point_count} and {other.point_count}"
            )
        if not math.isclose(self.max_duration, other.max_duration, rel_tol=_DURATION_RTOL):
            raise DimensionMismatchError(
                f"Cannot combine distributions with max_duration {self.max_duration!r} "
                f"and {other.max_duration!r}"
            )

    def combine(self, other: ProbabilityDistribution) -> ProbabilityDistribution:
        """Distribution of the sum of two independent times.

        Returns a new distribution; neither operand is modified.
        """
        self._check_compatible(other)
        return ProbabilityDistribution(
            max_duration=self.max_duration,
            coefficients=self.coefficients * other.coefficients,
        )

    def combine_in_place(self, other: ProbabilityDistribution) -> ProbabilityDistribution:
        """In-place :meth:`combine`: absorb ``other`` into this distribution.

        Only this distribution's buffer is written, also when ``other`` is
        ``self``. Returns ``self`` for chaining.
        """
        self._check_compatible(other)
        np.multiply(self.coefficients, other.coefficients, out=self.coefficients)
        return self

    @classmethod
    def combine_all(cls, distributions: Sequence[ProbabilityDistribution]) -> ProbabilityDistribution:
        """Fold :meth:`combine` over a non-empty sequence."""
        if len(distributions) == 0:
            raise ValueError("combine_all needs at least one distribution")
        result = distributions[0].copy()
        for d in distributions[1:]:
            result.combine_in_place(d)
        logger.debug("Combined %d distributions (N=%d)", len(distributions), result.point_count)
        return result

    # ------------------------------------------------------------------
    # Sampling and queries
    # ------------------------------------------------------------------

    def time_points(self) -> np.ndarray:
        """Bin coordinates ``i * max_duration / N``."""
        return np.arange(self.point_count, dtype=np.float64) * self.bin_width

    def sample(self) -> Tuple[np.ndarray, np.ndarray]:
        """Inverse-transform the coefficients onto the time grid.

        Returns
        -------
        times, values
            Both of length N. ``values[i]`` is the probability mass of bin
            ``i``, i.e. the density at ``times[i]`` times the bin width. A
            point mass of weight ``w`` lying on the grid reads ``w``.
            Recomputed on every call.
        """
        plan = get_plan(self.point_count)
        values = plan.inverse(self.coefficients).real
        return self.time_points(), values

    def density(self) -> Tuple[np.ndarray, np.ndarray]:
        """Point samples of the probability density function (per second)."""
        times, mass = self.sample()
        return times, mass / self.bin_width

    def probability_below(self, t: float) -> float:
        """Probability that the time is at or below ``t``.

        Rectangle-rule integral of the sampled density over every grid point
        ``times[i] <= t``. Near point masses and steps the truncated series
        rings (Gibbs phenomenon), so expect errors of a few percent for small
        N.
        """
        times, density = self.density()
        mask = times <= float(t)
        return float(np.sum(density[mask]) * self.bin_width)
