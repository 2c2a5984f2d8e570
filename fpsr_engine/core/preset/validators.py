# ========================
# file: fpsr_engine/core/preset/validators.py
# ========================
from __future__ import annotations
from numbers import Integral, Real
from typing import Any, Dict

from .errors import ValidationError
from ..constants import ALGORITHMS, ALGORITHM_SM

SM_INT_KEYS = ("min_hold", "max_hold", "reseed_interval", "seed_inner", "seed_outer")
QS_PAIR_KEYS = ("quant_levels_min_max", "streams_offset")
QS_DURATION_KEYS = ("stream_switch_dur", "stream1_quant_dur", "stream2_quant_dur")


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ValidationError(msg)


def _is_int(v: Any) -> bool:
    return isinstance(v, Integral) and not isinstance(v, bool)


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def _validate_sm(params: Dict[str, Any]) -> None:
    for key in SM_INT_KEYS:
        _require(key in params, f"params.{key} is required")
        _require(_is_int(params[key]), f"params.{key} must be an integer")


def _validate_qs(params: Dict[str, Any]) -> None:
    _require(_is_number(params.get("base_wave_freq")), "params.base_wave_freq must be a number")

    mult = params.get("stream2_freq_mult")
    _require(mult is None or _is_number(mult), "params.stream2_freq_mult must be a number or null")

    for key in QS_PAIR_KEYS:
        pair = params.get(key)
        _require(
            isinstance(pair, (list, tuple)) and len(pair) == 2,
            f"params.{key} must be a pair of integers",
        )
        _require(all(_is_int(v) for v in pair), f"params.{key} must be a pair of integers")

    for key in QS_DURATION_KEYS:
        v = params.get(key)
        _require(v is None or _is_int(v), f"params.{key} must be an integer or null")


def validate_dict(cfg: Dict[str, Any]) -> None:
    """Structural validation of a preset dict.

    Only types and shapes are checked. Values the kernels clamp (zero
    intervals, min_hold > max_hold, zero frequency) are accepted as-is.
    Raises ValidationError on the first failing check.
    """
    _require(
        isinstance(cfg.get("id"), str) and cfg["id"],
        "Preset.id must be non-empty string",
    )
    algorithm = cfg.get("algorithm")
    _require(algorithm in ALGORITHMS, f"Preset.algorithm must be one of {ALGORITHMS}")

    params = cfg.get("params")
    _require(isinstance(params, dict), "Preset.params must be a mapping")

    if algorithm == ALGORITHM_SM:
        allowed = set(SM_INT_KEYS)
        _validate_sm(params)
    else:
        allowed = {"base_wave_freq", "stream2_freq_mult", *QS_PAIR_KEYS, *QS_DURATION_KEYS}
        _validate_qs(params)
    unknown = sorted(set(params) - allowed)
    _require(not unknown, f"Unknown {algorithm} params: {unknown}")

    _require(isinstance(cfg.get("frames"), dict), "Preset.frames must be a mapping")
    frames = cfg["frames"]
    for key in ("start", "stop"):
        _require(_is_int(frames.get(key)), f"frames.{key} must be an integer")
    _require(frames["start"] <= frames["stop"], "frames.start must be <= frames.stop")


