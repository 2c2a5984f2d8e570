# fpsr_engine/numerics/helpers.py
from __future__ import annotations
from numba import njit


@njit(inline='always', cache=True)
def _floor_mod(a: int, b: int) -> int:
    # b >= 1 here; result in [0, b) also for negative a
    return a % b


@njit(inline='always', cache=True)
def _at_least_one(x: int) -> int:
    return x if x >= 1 else 1


@njit(inline='always', cache=True)
def _window_start(x: int, period: int) -> int:
    return x - _floor_mod(x, period)


@njit(inline='always', cache=True)
def _in_first_half(x: int, period: int) -> bool:
    return _floor_mod(x, period) < period // 2
