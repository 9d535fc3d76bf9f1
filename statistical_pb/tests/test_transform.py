from __future__ import annotations

import threading

import numpy as np
import pytest

from statistical_pb.analysis.transform import cached_sizes, get_plan
from statistical_pb.errors import InvalidPointCountError


def test_plan_is_cached_per_size() -> None:
    a = get_plan(64)
    b = get_plan(64)
    c = get_plan(128)
    assert a is b
    assert a is not c
    assert cached_sizes() >= 2


def test_harmonics_are_signed() -> None:
    plan = get_plan(8)
    np.testing.assert_array_equal(plan.harmonics, [0, 1, 2, 3, -4, -3, -2, -1])
    assert plan.nyquist == 4


def test_harmonics_read_only() -> None:
    plan = get_plan(8)
    with pytest.raises(ValueError):
        plan.harmonics[0] = 5.0


def test_odd_size_has_no_nyquist() -> None:
    assert get_plan(5).nyquist is None
    assert get_plan(1).nyquist is None


def test_inverse_round_trip() -> None:
    plan = get_plan(16)
    rng = np.random.default_rng(3)
    x = rng.normal(size=16) + 1j * rng.normal(size=16)
    np.testing.assert_allclose(plan.inverse(plan.forward(x)), x, atol=1e-12)


def test_inverse_rejects_wrong_length() -> None:
    with pytest.raises(ValueError):
        get_plan(16).inverse(np.zeros(8, dtype=complex))


def test_evaluate_averages_nyquist() -> None:
    plan = get_plan(4)
    out = plan.evaluate(lambda h: h.astype(complex))
    # +2 and -2 average to 0 at the Nyquist index
    np.testing.assert_allclose(out, [0, 1, 0, -1])


@pytest.mark.parametrize("n", [0, -1, 2.5, True])
def test_bad_sizes_rejected(n) -> None:
    with pytest.raises(InvalidPointCountError):
        get_plan(n)


def test_concurrent_lookup_returns_one_plan() -> None:
    seen = []

    def worker() -> None:
        seen.append(get_plan(2048))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 8
    assert all(p is get_plan(2048) for p in seen)
