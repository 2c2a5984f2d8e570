# fpsr_engine/analysis/replay.py
from __future__ import annotations
import logging
from typing import Any, Dict, Tuple

import numpy as np

from ..api import evaluate
from ..core.preset import FPSRPreset, ReplayError, load_preset

logger = logging.getLogger(__name__)


def evaluate_preset(preset: FPSRPreset) -> Tuple[np.ndarray, np.ndarray]:
    frames = np.arange(preset.frame_start, preset.frame_stop + 1, dtype=np.int64)
    return frames, evaluate(preset.params, frames)


def _trace_field(trace: Any, key: str, kind: type) -> Any:
    if not isinstance(trace, dict):
        raise ReplayError("Trace must be a mapping")
    value = trace.get(key)
    if not isinstance(value, kind):
        raise ReplayError(f"Trace field '{key}' is missing or malformed")
    return value


def _trace_array(trace: Dict[str, Any], key: str, dtype) -> np.ndarray:
    try:
        return np.asarray(_trace_field(trace, key, list), dtype=dtype).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise ReplayError(f"Trace field '{key}' must be a list of numbers") from exc


def replay_trace(trace: Dict[str, Any]) -> np.ndarray:
    """Recomputes the values of a recorded trace from its preset and frames."""
    preset = load_preset(_trace_field(trace, "preset", dict))
    frames = _trace_array(trace, "frames", np.int64)
    return evaluate(preset.params, frames)


def verify_trace(trace: Dict[str, Any]) -> int:
    """Raises ReplayError unless the replay is bit-identical. Returns the frame count."""
    expected = _trace_array(trace, "values", np.float32)
    actual = replay_trace(trace)
    if expected.shape != actual.shape:
        raise ReplayError(f"Trace has {expected.shape[0]} values, replay produced {actual.shape[0]}")

    # compare bit patterns, not float equality
    mismatch = np.flatnonzero(expected.view(np.uint32) != actual.view(np.uint32))
    if mismatch.size:
        i = int(mismatch[0])
        raise ReplayError(
            f"{mismatch.size} frame(s) differ, first at frame {trace['frames'][i]}: "
            f"recorded {expected[i]!r}, replayed {actual[i]!r}"
        )
    logger.info("Trace '%s' replayed: %d frames identical", trace["preset"].get("id"), expected.shape[0])
    return int(expected.shape[0])
