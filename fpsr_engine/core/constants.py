# ==============================================================================
# File: fpsr_engine/core/constants.py
# Purpose: Fixed numeric constants of the FPS-R algorithms.
# Changing any of these changes the visual signature of every caller.
# ==============================================================================
from __future__ import annotations

import numpy as np

F32 = np.float32

# =======================================================================
# HASH (portable_rand)
# =======================================================================
HASH_PHASE_MULT = 12.9898
HASH_AMPLITUDE = 43758.5453

# =======================================================================
# STACKED MODULO (SM)
# =======================================================================
SM_DEFAULT_MIN_HOLD = 16
SM_DEFAULT_MAX_HOLD = 24
SM_DEFAULT_RESEED_INTERVAL = 9
SM_DEFAULT_SEED_INNER = -41
SM_DEFAULT_SEED_OUTER = 23

# =======================================================================
# QUANTISED SWITCHING (QS)
# =======================================================================

# --- Ratios applied to 1 / base_wave_freq when a duration is not given ---
QS_SWITCH_DUR_RATIO = 0.76
QS_STREAM1_QUANT_DUR_RATIO = 1.2
QS_STREAM2_QUANT_DUR_RATIO = 0.9

# --- Stream 2 rescales the quantisation bounds at single precision ---
QS_STREAM2_QUANT_RATIO_MIN = F32(1.24)
QS_STREAM2_QUANT_RATIO_MAX = F32(0.66)

# Used when stream2_freq_mult < 0
QS_STREAM2_FREQ_MULT_DEFAULT = F32(3.7)

# Stepped value -> integer seed for the final hash
QS_HASH_SCALE = 100000.0

# --- Reference call site ---
QS_DEFAULT_BASE_WAVE_FREQ = 0.012
QS_DEFAULT_STREAM2_FREQ_MULT = 3.1
QS_DEFAULT_QUANT_LEVELS = (12, 22)
QS_DEFAULT_STREAMS_OFFSET = (0, 76)
QS_DEFAULT_SWITCH_DUR = 24
QS_DEFAULT_STREAM1_QUANT_DUR = 16
QS_DEFAULT_STREAM2_QUANT_DUR = 20

# Sentinel meaning "derive from base_wave_freq"
SENTINEL_DERIVE = -1

ALGORITHM_SM = "sm"
ALGORITHM_QS = "qs"
ALGORITHMS = (ALGORITHM_SM, ALGORITHM_QS)
