# ==============================================================================
# File: fpsr_engine/numerics/portable_rand.py
# Purpose: Deterministic integer -> [0, 1) hash shared by SM and QS.
# ==============================================================================
from __future__ import annotations
import math

import numpy as np
from numba import njit, prange

from ..core.constants import HASH_AMPLITUDE, HASH_PHASE_MULT

F32 = np.float32


@njit(cache=True)
def portable_rand(seed: int) -> F32:
    """
    fract(sin(seed * 12.9898) * 43758.5453) at single precision.

    The seed goes through float32 first, the sine is taken in double
    precision and the product is stored back to float32.

    A tiny negative product rounds its fraction up to exactly 1.0 in
    float32; that case wraps to 0.0 so the output stays in [0, 1).
    """
    phase = np.float64(F32(seed)) * HASH_PHASE_MULT
    result = F32(math.sin(phase) * HASH_AMPLITUDE)
    frac = result - np.floor(result)
    if frac >= F32(1.0):
        return F32(0.0)
    return frac


@njit(cache=True, parallel=True)
def portable_rand_grid(seeds: np.ndarray) -> np.ndarray:
    n = seeds.shape[0]
    output = np.empty(n, dtype=F32)
    for i in prange(n):
        output[i] = portable_rand(seeds[i])
    return output
