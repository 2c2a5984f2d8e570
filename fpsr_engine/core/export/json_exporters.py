# ==============================================================================
# File: fpsr_engine/core/export/json_exporters.py
# Purpose: JSON traces of evaluated frame ranges (preset + frames + values).
# A trace is enough to replay the exact float sequence in another process.
# ==============================================================================
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Sequence

import numpy as np

from ..preset.errors import ReplayError
from ..preset.model import FPSRPreset
from ..utils.rle import encode_rle

logger = logging.getLogger(__name__)

TRACE_VERSION = "fpsr_trace_v1"


def _ensure_path_exists(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    """Atomically writes JSON so a crashed run never leaves a half trace."""
    _ensure_path_exists(path)
    tmp_path = path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)
    logger.info("JSON trace saved: %s", path)


def build_trace(preset: FPSRPreset, frames: Sequence[int], values: np.ndarray) -> Dict[str, Any]:
    values = np.asarray(values, dtype=np.float32)
    # float32 -> float64 is exact, and JSON keeps float64 exactly
    as_floats = [float(v) for v in values]
    return {
        "version": TRACE_VERSION,
        "preset": preset.to_dict(),
        "frames": [int(f) for f in frames],
        "values": as_floats,
        "holds": encode_rle(as_floats),
    }


def write_sequence_json(path: str, preset: FPSRPreset, frames: Sequence[int], values: np.ndarray) -> Dict[str, Any]:
    trace = build_trace(preset, frames, values)
    _atomic_write_json(path, trace)
    return trace


def read_sequence_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            trace = json.load(f)
    except OSError as exc:
        raise ReplayError(f"Cannot read trace {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ReplayError(f"Trace {path} is not valid JSON: {exc}") from exc
    if not isinstance(trace, dict):
        raise ReplayError(f"Trace {path} must be a JSON object")
    return trace
