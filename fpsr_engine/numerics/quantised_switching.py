# ==============================================================================
# File: fpsr_engine/numerics/quantised_switching.py
# Purpose: FPS-R Quantised Switching (QS) kernels.
# Two staircase-quantised sine streams, a timer that switches between them,
# and a final hash so the stepped value no longer reads as a sine.
# Sentinel durations (< 1) and multipliers (< 0) are resolved inside the
# kernel; passing already resolved values leaves them unchanged.
# ==============================================================================
from __future__ import annotations
import math
from typing import Tuple

import numpy as np
from numba import njit, prange

from ..core.constants import (
    QS_HASH_SCALE,
    QS_STREAM1_QUANT_DUR_RATIO,
    QS_STREAM2_FREQ_MULT_DEFAULT,
    QS_STREAM2_QUANT_DUR_RATIO,
    QS_STREAM2_QUANT_RATIO_MAX,
    QS_STREAM2_QUANT_RATIO_MIN,
    QS_SWITCH_DUR_RATIO,
)
from .helpers import _at_least_one, _in_first_half
from .portable_rand import portable_rand

F32 = np.float32

# derived durations are capped to the int32 range
_MAX_DURATION = 2147483647.0


@njit(inline='always', cache=True)
def _derived_duration(period: float, ratio: float) -> int:
    scaled = period * ratio
    if not math.isfinite(scaled):
        # zero frequency: the clamp floor takes over
        return 1
    if scaled < 1.0:
        return 0
    return int(np.floor(min(scaled, _MAX_DURATION)))


@njit(cache=True)
def resolve_durations(
        base_wave_freq: F32,
        stream_switch_dur: int,
        stream1_quant_dur: int,
        stream2_quant_dur: int
) -> Tuple[int, int, int]:
    period = 1.0 / np.float64(F32(base_wave_freq)) if F32(base_wave_freq) != F32(0.0) else np.inf
    if stream_switch_dur < 1:
        stream_switch_dur = _derived_duration(period, QS_SWITCH_DUR_RATIO)
    if stream1_quant_dur < 1:
        stream1_quant_dur = _derived_duration(period, QS_STREAM1_QUANT_DUR_RATIO)
    if stream2_quant_dur < 1:
        stream2_quant_dur = _derived_duration(period, QS_STREAM2_QUANT_DUR_RATIO)
    return (
        _at_least_one(stream_switch_dur),
        _at_least_one(stream1_quant_dur),
        _at_least_one(stream2_quant_dur),
    )


@njit(inline='always', cache=True)
def resolve_stream2_freq_mult(stream2_freq_mult: F32) -> F32:
    if F32(stream2_freq_mult) < F32(0.0):
        return QS_STREAM2_FREQ_MULT_DEFAULT
    return F32(stream2_freq_mult)


@njit(inline='always', cache=True)
def quant_levels(
        frame: int,
        quant_min: int,
        quant_max: int,
        offset1: int,
        offset2: int,
        stream1_quant_dur: int,
        stream2_quant_dur: int
) -> Tuple[int, int]:
    # Each level flips halfway through its own duration cycle
    if _in_first_half(offset1 + frame, stream1_quant_dur):
        s1 = quant_min
    else:
        s1 = quant_max

    # Stream 2 rescales the bounds to decorrelate its character
    if _in_first_half(offset2 + frame, stream2_quant_dur):
        s2 = int(np.floor(F32(quant_min) * QS_STREAM2_QUANT_RATIO_MIN))
    else:
        s2 = int(np.floor(F32(quant_max) * QS_STREAM2_QUANT_RATIO_MAX))

    return _at_least_one(s1), _at_least_one(s2)


@njit(inline='always', cache=True)
def stepped_sine(phase: F32, level: int) -> F32:
    return F32(np.floor(math.sin(np.float64(phase)) * level) / level)


@njit(cache=True)
def qs_streams(
        frame: int,
        base_wave_freq: F32,
        stream2_freq_mult: F32,
        quant_min: int,
        quant_max: int,
        offset1: int,
        offset2: int,
        stream1_quant_dur: int,
        stream2_quant_dur: int
) -> Tuple[F32, F32]:
    """Both stepped streams for one frame, before switching."""
    s1_level, s2_level = quant_levels(
        frame, quant_min, quant_max, offset1, offset2, stream1_quant_dur, stream2_quant_dur
    )
    freq1 = F32(base_wave_freq)
    phase1 = F32(offset1 + frame) * freq1
    # left to right in float32: (x * base) * mult
    phase2 = F32(offset2 + frame) * freq1 * resolve_stream2_freq_mult(stream2_freq_mult)
    return stepped_sine(phase1, s1_level), stepped_sine(phase2, s2_level)


@njit(inline='always', cache=True)
def _hash_stepped(value: F32) -> F32:
    scaled = np.float64(value) * QS_HASH_SCALE
    if not math.isfinite(scaled):
        return portable_rand(0)
    return portable_rand(int(scaled))


@njit(cache=True)
def fpsr_qs(
        frame: int,
        base_wave_freq: F32,
        stream2_freq_mult: F32,
        quant_min: int,
        quant_max: int,
        offset1: int,
        offset2: int,
        stream_switch_dur: int,
        stream1_quant_dur: int,
        stream2_quant_dur: int
) -> F32:
    switch_dur, quant1_dur, quant2_dur = resolve_durations(
        base_wave_freq, stream_switch_dur, stream1_quant_dur, stream2_quant_dur
    )
    stream1, stream2 = qs_streams(
        frame, base_wave_freq, stream2_freq_mult,
        quant_min, quant_max, offset1, offset2, quant1_dur, quant2_dur
    )
    if _in_first_half(frame, switch_dur):
        active = stream1
    else:
        active = stream2
    return _hash_stepped(active)


@njit(cache=True, parallel=True)
def qs_sequence(
        frames: np.ndarray,
        base_wave_freq: F32,
        stream2_freq_mult: F32,
        quant_min: int,
        quant_max: int,
        offset1: int,
        offset2: int,
        stream_switch_dur: int,
        stream1_quant_dur: int,
        stream2_quant_dur: int
) -> np.ndarray:
    n = frames.shape[0]
    output = np.empty(n, dtype=F32)
    for i in prange(n):
        output[i] = fpsr_qs(
            frames[i], base_wave_freq, stream2_freq_mult,
            quant_min, quant_max, offset1, offset2,
            stream_switch_dur, stream1_quant_dur, stream2_quant_dur
        )
    return output
