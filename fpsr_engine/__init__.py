"""FPS-R: frame-persistent stateless randomness (Stacked Modulo, Quantised Switching)."""
from .api import (
    evaluate,
    evaluate_frame,
    qs,
    qs_from_params,
    qs_stream_values,
    qs_values,
    rand,
    rand_many,
    resolve_qs_config,
    sm,
    sm_hold,
    sm_holds,
    sm_values,
)
from .core.types import FrameSample, QSConfig, QSParams, SMParams

__version__ = "0.1.0"

__all__ = [
    "rand",
    "rand_many",
    "sm",
    "sm_hold",
    "sm_holds",
    "sm_values",
    "qs",
    "qs_from_params",
    "qs_stream_values",
    "qs_values",
    "resolve_qs_config",
    "evaluate",
    "evaluate_frame",
    "SMParams",
    "QSParams",
    "QSConfig",
    "FrameSample",
]
