# fpsr_engine/core/types.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .constants import (
    QS_DEFAULT_BASE_WAVE_FREQ,
    QS_DEFAULT_QUANT_LEVELS,
    QS_DEFAULT_STREAM1_QUANT_DUR,
    QS_DEFAULT_STREAM2_FREQ_MULT,
    QS_DEFAULT_STREAM2_QUANT_DUR,
    QS_DEFAULT_STREAMS_OFFSET,
    QS_DEFAULT_SWITCH_DUR,
    SM_DEFAULT_MAX_HOLD,
    SM_DEFAULT_MIN_HOLD,
    SM_DEFAULT_RESEED_INTERVAL,
    SM_DEFAULT_SEED_INNER,
    SM_DEFAULT_SEED_OUTER,
)


@dataclass(frozen=True)
class SMParams:
    """Stacked Modulo parameter bundle. Defaults are the reference call site."""

    min_hold: int = SM_DEFAULT_MIN_HOLD
    max_hold: int = SM_DEFAULT_MAX_HOLD
    reseed_interval: int = SM_DEFAULT_RESEED_INTERVAL
    seed_inner: int = SM_DEFAULT_SEED_INNER
    seed_outer: int = SM_DEFAULT_SEED_OUTER

    def as_args(self) -> Tuple[int, int, int, int, int]:
        return (
            int(self.min_hold),
            int(self.max_hold),
            int(self.reseed_interval),
            int(self.seed_inner),
            int(self.seed_outer),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "min_hold": self.min_hold,
            "max_hold": self.max_hold,
            "reseed_interval": self.reseed_interval,
            "seed_inner": self.seed_inner,
            "seed_outer": self.seed_outer,
        }


@dataclass(frozen=True)
class QSParams:
    """
    Quantised Switching parameter bundle as the caller writes it.

    stream2_freq_mult < 0 and any duration < 1 are sentinels for
    "derive a default"; None means the same thing.
    """

    base_wave_freq: float = QS_DEFAULT_BASE_WAVE_FREQ
    stream2_freq_mult: Optional[float] = QS_DEFAULT_STREAM2_FREQ_MULT
    quant_levels_min_max: Tuple[int, int] = QS_DEFAULT_QUANT_LEVELS
    streams_offset: Tuple[int, int] = QS_DEFAULT_STREAMS_OFFSET
    stream_switch_dur: Optional[int] = QS_DEFAULT_SWITCH_DUR
    stream1_quant_dur: Optional[int] = QS_DEFAULT_STREAM1_QUANT_DUR
    stream2_quant_dur: Optional[int] = QS_DEFAULT_STREAM2_QUANT_DUR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_wave_freq": self.base_wave_freq,
            "stream2_freq_mult": self.stream2_freq_mult,
            "quant_levels_min_max": list(self.quant_levels_min_max),
            "streams_offset": list(self.streams_offset),
            "stream_switch_dur": self.stream_switch_dur,
            "stream1_quant_dur": self.stream1_quant_dur,
            "stream2_quant_dur": self.stream2_quant_dur,
        }


@dataclass(frozen=True)
class QSConfig:
    """QSParams with every sentinel replaced and every divisor >= 1."""

    base_wave_freq: float
    stream2_freq_mult: float
    quant_min: int
    quant_max: int
    offset1: int
    offset2: int
    stream_switch_dur: int
    stream1_quant_dur: int
    stream2_quant_dur: int

    def as_args(self) -> tuple:
        return (
            self.base_wave_freq,
            self.stream2_freq_mult,
            self.quant_min,
            self.quant_max,
            self.offset1,
            self.offset2,
            self.stream_switch_dur,
            self.stream1_quant_dur,
            self.stream2_quant_dur,
        )


@dataclass(frozen=True)
class FrameSample:
    frame: int
    value: float
    changed: bool
