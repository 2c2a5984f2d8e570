# ==============================================================================
# File: fpsr_engine/analysis/changes.py
# Purpose: Hold/transition bookkeeping on top of the generators.
# A value "changed" at frame f when value(f) != value(f - 1); this is how the
# animation side detects the start of a new hold.
# ==============================================================================
from __future__ import annotations
from typing import Iterable, List, Sequence

import numpy as np

from ..api import Params, evaluate, evaluate_frame
from ..core.types import FrameSample
from ..core.utils.rle import encode_rle


def changed(params: Params, frame: int) -> bool:
    """True when the value at `frame` differs from the one at `frame - 1`."""
    return evaluate_frame(params, frame) != evaluate_frame(params, frame - 1)


def changed_flags(values: np.ndarray) -> np.ndarray:
    """
    Per-element changed flag for a contiguous frame run.
    The first element has no predecessor in the run and is reported unchanged.
    """
    values = np.asarray(values)
    flags = np.zeros(values.shape[0], dtype=bool)
    if values.shape[0] > 1:
        flags[1:] = values[1:] != values[:-1]
    return flags


def sample_range(params: Params, start: int, stop: int) -> List[FrameSample]:
    """Frames start..stop inclusive, each with its changed flag against frame - 1."""
    frames = np.arange(start - 1, stop + 1, dtype=np.int64)
    values = evaluate(params, frames)
    flags = changed_flags(values)
    return [
        FrameSample(frame=int(frames[i]), value=float(values[i]), changed=bool(flags[i]))
        for i in range(1, frames.shape[0])
    ]


def transition_frames(frames: Sequence[int], values: np.ndarray) -> List[int]:
    flags = changed_flags(values)
    return [int(frames[i]) for i in np.flatnonzero(flags)]


def hold_runs(values: Iterable[float]) -> List[List]:
    """[[value, run_length], ...] for consecutive equal values."""
    return encode_rle(float(v) for v in values)["runs"]


def hold_lengths(values: Iterable[float]) -> List[int]:
    return [int(run) for _, run in hold_runs(values)]
