# ==============================================================================
# File: fpsr_engine/api.py
# Purpose: Public Python surface over the numba kernels.
# Parameters are resolved once per call into plain ints / float32 values;
# nothing is cached between calls.
# ==============================================================================
from __future__ import annotations
import logging
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from .core.constants import QS_STREAM2_FREQ_MULT_DEFAULT, SENTINEL_DERIVE
from .core.types import QSConfig, QSParams, SMParams
from .numerics.portable_rand import portable_rand, portable_rand_grid
from .numerics.quantised_switching import fpsr_qs, qs_sequence, qs_streams, resolve_durations
from .numerics.stacked_modulo import fpsr_sm, sm_hold_sequence, sm_hold_state, sm_sequence

logger = logging.getLogger(__name__)

F32 = np.float32
Params = Union[SMParams, QSParams]


def _frames_array(frames: Iterable[int]) -> np.ndarray:
    if not isinstance(frames, np.ndarray):
        frames = list(frames)
    return np.ascontiguousarray(frames, dtype=np.int64).reshape(-1)


def _sentinel(value: Optional[int]) -> int:
    return SENTINEL_DERIVE if value is None else int(value)


def _pair(value: Sequence[int]) -> Tuple[int, int]:
    a, b = value
    return int(a), int(b)


# --- Hash ---

def rand(seed: int) -> float:
    """Deterministic hash of an integer seed to [0, 1)."""
    return float(portable_rand(int(seed)))


def rand_many(seeds: Iterable[int]) -> np.ndarray:
    return portable_rand_grid(_frames_array(seeds))


# --- Stacked Modulo ---

def sm(
        frame: int,
        min_hold: int,
        max_hold: int,
        reseed_interval: int,
        seed_inner: int,
        seed_outer: int,
) -> float:
    """Stacked Modulo value for one frame. Holds for a random 'hold duration'."""
    return float(fpsr_sm(int(frame), int(min_hold), int(max_hold),
                         int(reseed_interval), int(seed_inner), int(seed_outer)))


def sm_hold(frame: int, params: SMParams = SMParams()) -> Tuple[int, int]:
    """(hold_duration, held_state) behind sm() for the same frame."""
    hold, state = sm_hold_state(int(frame), *params.as_args())
    return int(hold), int(state)


def sm_values(frames: Iterable[int], params: SMParams = SMParams()) -> np.ndarray:
    arr = _frames_array(frames)
    logger.debug("SM sequence: %d frames, params=%s", arr.shape[0], params)
    return sm_sequence(arr, *params.as_args())


def sm_holds(frames: Iterable[int], params: SMParams = SMParams()) -> Tuple[np.ndarray, np.ndarray]:
    return sm_hold_sequence(_frames_array(frames), *params.as_args())


# --- Quantised Switching ---

def resolve_qs_config(params: QSParams) -> QSConfig:
    """Replaces QS sentinels with their derived values and clamps every divisor."""
    base = F32(params.base_wave_freq)

    mult = params.stream2_freq_mult
    if mult is None or F32(mult) < F32(0.0):
        mult32 = QS_STREAM2_FREQ_MULT_DEFAULT
    else:
        mult32 = F32(mult)

    switch_dur, quant1_dur, quant2_dur = resolve_durations(
        base,
        _sentinel(params.stream_switch_dur),
        _sentinel(params.stream1_quant_dur),
        _sentinel(params.stream2_quant_dur),
    )
    quant_min, quant_max = _pair(params.quant_levels_min_max)
    offset1, offset2 = _pair(params.streams_offset)

    return QSConfig(
        base_wave_freq=float(base),
        stream2_freq_mult=float(mult32),
        quant_min=quant_min,
        quant_max=quant_max,
        offset1=offset1,
        offset2=offset2,
        stream_switch_dur=int(switch_dur),
        stream1_quant_dur=int(quant1_dur),
        stream2_quant_dur=int(quant2_dur),
    )


def _kernel_args(cfg: QSConfig) -> tuple:
    return (
        F32(cfg.base_wave_freq),
        F32(cfg.stream2_freq_mult),
        cfg.quant_min,
        cfg.quant_max,
        cfg.offset1,
        cfg.offset2,
        cfg.stream_switch_dur,
        cfg.stream1_quant_dur,
        cfg.stream2_quant_dur,
    )


def qs(
        frame: int,
        base_wave_freq: float,
        stream2_freq_mult: Optional[float] = -1.0,
        quant_levels_min_max: Sequence[int] = (12, 22),
        streams_offset: Sequence[int] = (0, 76),
        stream_switch_dur: Optional[int] = SENTINEL_DERIVE,
        stream1_quant_dur: Optional[int] = SENTINEL_DERIVE,
        stream2_quant_dur: Optional[int] = SENTINEL_DERIVE,
) -> float:
    """Quantised Switching value for one frame."""
    cfg = resolve_qs_config(QSParams(
        base_wave_freq=base_wave_freq,
        stream2_freq_mult=stream2_freq_mult,
        quant_levels_min_max=tuple(quant_levels_min_max),
        streams_offset=tuple(streams_offset),
        stream_switch_dur=stream_switch_dur,
        stream1_quant_dur=stream1_quant_dur,
        stream2_quant_dur=stream2_quant_dur,
    ))
    return float(fpsr_qs(int(frame), *_kernel_args(cfg)))


def qs_from_params(frame: int, params: QSParams = QSParams()) -> float:
    return float(fpsr_qs(int(frame), *_kernel_args(resolve_qs_config(params))))


def qs_stream_values(frame: int, params: QSParams = QSParams()) -> Tuple[float, float]:
    """The two stepped streams at a frame, before switching and hashing."""
    cfg = resolve_qs_config(params)
    base, mult, q_min, q_max, off1, off2, _, quant1, quant2 = _kernel_args(cfg)
    s1, s2 = qs_streams(int(frame), base, mult, q_min, q_max, off1, off2, quant1, quant2)
    return float(s1), float(s2)


def qs_values(frames: Iterable[int], params: QSParams = QSParams()) -> np.ndarray:
    arr = _frames_array(frames)
    cfg = resolve_qs_config(params)
    logger.debug("QS sequence: %d frames, config=%s", arr.shape[0], cfg)
    return qs_sequence(arr, *_kernel_args(cfg))


# --- Dispatch ---

def evaluate(params: Params, frames: Iterable[int]) -> np.ndarray:
    """Evaluates a whole frame range for either parameter bundle."""
    if isinstance(params, SMParams):
        return sm_values(frames, params)
    if isinstance(params, QSParams):
        return qs_values(frames, params)
    raise TypeError(f"Unsupported parameter bundle: {type(params).__name__}")


def evaluate_frame(params: Params, frame: int) -> float:
    if isinstance(params, SMParams):
        return sm(frame, *params.as_args())
    if isinstance(params, QSParams):
        return qs_from_params(frame, params)
    raise TypeError(f"Unsupported parameter bundle: {type(params).__name__}")
