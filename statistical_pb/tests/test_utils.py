from __future__ import annotations

import pytest

from statistical_pb.utils import is_power_of_two


@pytest.mark.parametrize("n", [1, 2, 4, 16, 1024, 2**20])
def test_powers_of_two(n) -> None:
    assert is_power_of_two(n)


@pytest.mark.parametrize("n", [0, -2, 3, 6, 1000])
def test_not_powers_of_two(n) -> None:
    assert not is_power_of_two(n)
