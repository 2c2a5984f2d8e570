from .portable_rand import portable_rand, portable_rand_grid
from .stacked_modulo import fpsr_sm, sm_hold_sequence, sm_hold_state, sm_sequence
from .quantised_switching import fpsr_qs, qs_sequence, qs_streams, resolve_durations

__all__ = [
    "portable_rand",
    "portable_rand_grid",
    "fpsr_sm",
    "sm_hold_state",
    "sm_sequence",
    "sm_hold_sequence",
    "fpsr_qs",
    "qs_streams",
    "qs_sequence",
    "resolve_durations",
]
