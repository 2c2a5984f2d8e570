# ========================
# file: fpsr_engine/core/preset/defaults.py
# ========================
from __future__ import annotations
from typing import Any, Dict

from ..constants import ALGORITHM_QS, ALGORITHM_SM
from ..types import QSParams, SMParams

CURRENT_PRESET_VERSION = 1

DEFAULT_FRAMES: Dict[str, int] = {"start": 0, "stop": 200}

# Parameter defaults per algorithm, mirrored from the dataclass defaults
DEFAULT_PARAMS: Dict[str, Dict[str, Any]] = {
    ALGORITHM_SM: SMParams().to_dict(),
    ALGORITHM_QS: QSParams().to_dict(),
}


def default_preset_dict(algorithm: str) -> Dict[str, Any]:
    return {
        "id": f"{algorithm}_default",
        "version": CURRENT_PRESET_VERSION,
        "algorithm": algorithm,
        "params": dict(DEFAULT_PARAMS.get(algorithm, {})),
        "frames": dict(DEFAULT_FRAMES),
    }
