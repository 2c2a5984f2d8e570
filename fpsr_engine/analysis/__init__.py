from .changes import (
    changed,
    changed_flags,
    hold_lengths,
    hold_runs,
    sample_range,
    transition_frames,
)
from .replay import evaluate_preset, replay_trace, verify_trace

__all__ = [
    "changed",
    "changed_flags",
    "hold_lengths",
    "hold_runs",
    "sample_range",
    "transition_frames",
    "evaluate_preset",
    "replay_trace",
    "verify_trace",
]
