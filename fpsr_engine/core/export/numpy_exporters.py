# ==============================================================================
# File: fpsr_engine/core/export/numpy_exporters.py
# Purpose: Raw frame/value arrays as NPZ plus a .meta.json sidecar.
# ==============================================================================
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from ..preset.model import FPSRPreset

logger = logging.getLogger(__name__)


def _ensure_path_exists(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def write_sequence_npz(path_prefix: str, preset: FPSRPreset, frames: Sequence[int], values: np.ndarray) -> None:
    """Writes <prefix>.npz (frames int64, values float32) and <prefix>.meta.json."""
    meta_path = path_prefix + ".meta.json"
    npz_path = path_prefix + ".npz"
    _ensure_path_exists(npz_path)

    # np.savez_compressed appends .npz to names without it, so keep the suffix on the tmp name
    tmp_path = path_prefix + ".tmp.npz"
    np.savez_compressed(
        tmp_path,
        frames=np.asarray(frames, dtype=np.int64),
        values=np.asarray(values, dtype=np.float32),
    )
    os.replace(tmp_path, npz_path)

    with open(meta_path + ".tmp", "w", encoding="utf-8") as f:
        json.dump({"preset": preset.to_dict(), "count": int(len(frames))}, f, indent=2)
    os.replace(meta_path + ".tmp", meta_path)
    logger.info("NPZ sequence saved: %s", npz_path)


def read_sequence_npz(path_prefix: str) -> Tuple[np.ndarray, np.ndarray, Dict[str, Any]]:
    with np.load(path_prefix + ".npz") as data:
        frames = data["frames"].astype(np.int64)
        values = data["values"].astype(np.float32)
    with open(path_prefix + ".meta.json", "r", encoding="utf-8") as f:
        meta = json.load(f)
    return frames, values, meta
