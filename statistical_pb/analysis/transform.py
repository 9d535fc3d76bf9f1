"""Spectral plans: per-size data shared by every transform of that size.

numpy's FFT does the actual inverse transform. A :class:`SpectralPlan` carries
what the coefficient builders need for a given length N, namely the signed
harmonic number of each index and the Nyquist index. Plans are immutable and
cached process-wide by size, so concurrent readers can share them.

Harmonic convention
-------------------
Index ``k`` carries harmonic ``k`` for ``k < N/2`` and the aliased negative
harmonic ``k - N`` above it (``numpy.fft.fftfreq(N, 1/N)``). A real time
function therefore maps to a Hermitian vector whose inverse transform is real.
For event times on the sample grid the two readings coincide. For even N the
Nyquist index ``N/2`` stands for both ``+N/2`` and ``-N/2``; builders store the
mean of the two evaluations there.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import numpy as np

from statistical_pb.errors import InvalidPointCountError


@dataclass(frozen=True)
class SpectralPlan:
    """Reusable transform data for one vector length.

    Attributes
    ----------
    n_points:
        Vector length N.
    harmonics:
        Signed harmonic per index, shape ``(N,)`` float64. Read-only.
    nyquist:
        Index of the Nyquist harmonic for even N >= 2, else None.
    """

    n_points: int
    harmonics: np.ndarray
    nyquist: Optional[int]

    def evaluate(self, coefficient: Callable[[np.ndarray], np.ndarray]) -> np.ndarray:
        """Evaluate ``coefficient(harmonics)`` into a fresh complex vector.

        ``coefficient`` maps an array of harmonic numbers to complex values.
        The Nyquist entry is replaced by the mean over ``+N/2`` and ``-N/2``.
        """
        out = np.asarray(coefficient(self.harmonics), dtype=np.complex128).copy()
        if self.nyquist is not None:
            h = np.array([self.n_points / 2.0, -self.n_points / 2.0])
            out[self.nyquist] = np.mean(np.asarray(coefficient(h), dtype=np.complex128))
        return out

    def inverse(self, coefficients: np.ndarray) -> np.ndarray:
        """Inverse transform with numpy's ``1/N`` normalisation."""
        c = np.asarray(coefficients)
        if c.shape != (self.n_points,):
            raise ValueError(f"Expected coefficient shape ({self.n_points},), got {c.shape}")
        return np.fft.ifft(c)

    def forward(self, samples: np.ndarray) -> np.ndarray:
        """Forward transform, inverse of :meth:`inverse`."""
        x = np.asarray(samples)
        if x.shape != (self.n_points,):
            raise ValueError(f"Expected sample shape ({self.n_points},), got {x.shape}")
        return np.fft.fft(x)


# Process-wide plan cache. Entries are added under the lock and never removed.
_PLANS: Dict[int, SpectralPlan] = {}
_PLANS_LOCK = threading.Lock()


def _build_plan(n_points: int) -> SpectralPlan:
    harmonics = np.fft.fftfreq(n_points, d=1.0 / n_points)
    harmonics.setflags(write=False)
    nyquist = n_points // 2 if (n_points % 2 == 0) else None
    return SpectralPlan(n_points=n_points, harmonics=harmonics, nyquist=nyquist)


def get_plan(n_points: int) -> SpectralPlan:
    """Return the cached plan for length ``n_points``, building it on first use."""
    if isinstance(n_points, bool) or int(n_points) != n_points or n_points < 1:
        raise InvalidPointCountError(f"n_points must be an integer >= 1, got {n_points!r}")
    n = int(n_points)
    plan = _PLANS.get(n)
    if plan is None:
        with _PLANS_LOCK:
            plan = _PLANS.get(n)
            if plan is None:
                plan = _build_plan(n)
                _PLANS[n] = plan
    return plan


def cached_sizes() -> int:
    """Number of plan sizes built so far in this process."""
    return len(_PLANS)
