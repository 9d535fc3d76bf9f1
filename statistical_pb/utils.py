"""Small numeric helpers shared by the models and the analysis layer."""

from __future__ import annotations


def is_power_of_two(n: int) -> bool:
    return n >= 1 and (n & (n - 1)) == 0
