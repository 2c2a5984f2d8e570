# ==============================================================================
# File: fpsr_engine/numerics/stacked_modulo.py
# Purpose: FPS-R Stacked Modulo (SM) kernels.
#   1. a random hold duration, rerolled every reseed_interval frames;
#   2. a stable integer "state" for the whole hold window;
#   3. the state hashed to [0, 1).
# Modulo is flooring (Python semantics) for negative frames.
# ==============================================================================
from __future__ import annotations
from typing import Tuple

import numpy as np
from numba import njit, prange

from .helpers import _at_least_one, _window_start
from .portable_rand import portable_rand

F32 = np.float32


@njit(cache=True)
def sm_hold_state(
        frame: int,
        min_hold: int,
        max_hold: int,
        reseed_interval: int,
        seed_inner: int,
        seed_outer: int
) -> Tuple[int, int]:
    """Returns (hold_duration, held_state) for a frame."""
    reseed = _at_least_one(reseed_interval)

    # --- 1. Hold duration, constant across a reseed window ---
    rand_for_duration = portable_rand(seed_inner + _window_start(frame, reseed))
    span = F32(max_hold - min_hold)
    hold = int(np.floor(F32(min_hold) + rand_for_duration * span))
    hold = _at_least_one(hold)

    # --- 2. State, constant across a hold window ---
    state = _window_start(seed_outer + frame, hold)
    return hold, state


@njit(cache=True)
def fpsr_sm(
        frame: int,
        min_hold: int,
        max_hold: int,
        reseed_interval: int,
        seed_inner: int,
        seed_outer: int
) -> F32:
    _, state = sm_hold_state(frame, min_hold, max_hold, reseed_interval, seed_inner, seed_outer)
    return portable_rand(state)


@njit(cache=True, parallel=True)
def sm_sequence(
        frames: np.ndarray,
        min_hold: int,
        max_hold: int,
        reseed_interval: int,
        seed_inner: int,
        seed_outer: int
) -> np.ndarray:
    n = frames.shape[0]
    output = np.empty(n, dtype=F32)
    for i in prange(n):
        output[i] = fpsr_sm(frames[i], min_hold, max_hold, reseed_interval, seed_inner, seed_outer)
    return output


@njit(cache=True)
def sm_hold_sequence(
        frames: np.ndarray,
        min_hold: int,
        max_hold: int,
        reseed_interval: int,
        seed_inner: int,
        seed_outer: int
):
    n = frames.shape[0]
    holds = np.empty(n, dtype=np.int64)
    states = np.empty(n, dtype=np.int64)
    for i in range(n):
        h, s = sm_hold_state(frames[i], min_hold, max_hold, reseed_interval, seed_inner, seed_outer)
        holds[i] = h
        states[i] = s
    return holds, states
