r"""Closed-form Fourier coefficients of discontinuous time functions.

Sampling an impulse or a step on a time grid and running a forward FFT smears
the event onto the nearest sample whenever its time is not a grid point. The
functions here evaluate the exact Fourier-series coefficient of the continuous
function at every harmonic instead, so event times can be any real number.

Conventions
-----------
- The window length is ``T = 2*pi/omega_naught`` and the functions are
  ``T``-periodic; times outside ``[0, T)`` wrap around and alias onto early
  times of the window.
- Coefficients are in *per-bin* units: after ``numpy.fft.ifft`` a unit impulse
  on the grid reads 1 in its bin, and a unit step reads 1 in every bin it
  covers. Index 0 is the total mass (impulse) or the number of covered bins
  (step).
- Index ``k`` carries the signed harmonic described in
  :mod:`statistical_pb.analysis.transform`.

Functions
---------
impulse_coefficients
    Unit point mass at ``t0``: :math:`c_k = e^{-i h_k \omega_0 t_0}`.
step_coefficients
    Unit onset step, 0 before ``t0`` and 1 until the end of the window.
"""

from __future__ import annotations

import math

import numpy as np

from statistical_pb.errors import InvalidFrequencyError

from .transform import SpectralPlan, get_plan


def _checked(omega_naught: float, n_points: int) -> SpectralPlan:
    plan = get_plan(n_points)
    w = float(omega_naught)
    if not (math.isfinite(w) and w > 0):
        raise InvalidFrequencyError(f"omega_naught must be a positive finite number, got {omega_naught!r}")
    return plan


def impulse_coefficients(omega_naught: float, n_points: int, t0: float) -> np.ndarray:
    r"""Fourier coefficients of a unit impulse at continuous time ``t0``.

    Parameters
    ----------
    omega_naught:
        Fundamental angular frequency :math:`2\pi/T` of the window.
    n_points:
        Number of coefficients N (>= 1).
    t0:
        Event time in seconds. Taken modulo ``T``: an event at ``T + 1.0``
        is indistinguishable from one at ``1.0``.

    Returns
    -------
    np.ndarray
        Complex vector of length N with :math:`c_k = e^{-i h_k \omega_0 t_0}`.
        For k > N/2 this intentionally differs from the one-sided
        :math:`e^{-i k \omega_0 t_0}`: ``h_k = k - N`` is the signed harmonic
        and the Nyquist entry averages :math:`h = \pm N/2`, which keeps the
        inverse transform real for off-grid ``t0``.
    """
    plan = _checked(omega_naught, n_points)
    phase = float(omega_naught) * float(t0)
    return plan.evaluate(lambda h: np.exp(-1j * h * phase))


def step_coefficients(omega_naught: float, n_points: int, t0: float) -> np.ndarray:
    r"""Fourier coefficients of a unit step starting at ``t0``.

    The step is 0 before ``t0`` and 1 from ``t0`` to the end of the window.
    The window is taken bin-centred, :math:`[-\Delta/2, T-\Delta/2)` with
    :math:`\Delta = T/N`, so that neither of its edges lands on a sample
    point; ``t0`` is wrapped into that interval.

    For :math:`h \neq 0`

    .. math::

        c_h = \frac{e^{-i h \omega_0 t_0} - e^{-i h \omega_0 E}}{i h \omega_0 \Delta},
        \qquad E = T - \Delta/2

    i.e. the impulse coefficient at ``t0`` divided by :math:`i h \omega_0`,
    less the term of the window end. The removable singularity at
    :math:`h = 0` is replaced by the covered share of the window,
    :math:`(E - t_0)/\Delta` bins.
    """
    plan = _checked(omega_naught, n_points)
    w = float(omega_naught)
    period = 2.0 * math.pi / w
    bin_width = period / plan.n_points

    start = float(np.mod(float(t0) + 0.5 * bin_width, period)) - 0.5 * bin_width
    end = period - 0.5 * bin_width

    def coefficient(h: np.ndarray) -> np.ndarray:
        h = np.asarray(h, dtype=np.float64)
        zero = h == 0
        denom = 1j * np.where(zero, 1.0, h) * w * bin_width
        c = (np.exp(-1j * h * w * start) - np.exp(-1j * h * w * end)) / denom
        return np.where(zero, (end - start) / bin_width, c)

    return plan.evaluate(coefficient)
