# ========================
# file: fpsr_engine/core/preset/__init__.py
# ========================
from .defaults import CURRENT_PRESET_VERSION, DEFAULT_PARAMS
from .errors import NotFoundError, PresetError, ReplayError, ValidationError
from .model import FPSRPreset
from .loader import load_preset, deep_merge, preset_to_dict, save_preset
from .registry import add_search_folder, list_preset_ids, resolve_preset_path

__all__ = [
    "CURRENT_PRESET_VERSION",
    "DEFAULT_PARAMS",
    "FPSRPreset",
    "PresetError",
    "ValidationError",
    "NotFoundError",
    "ReplayError",
    "load_preset",
    "deep_merge",
    "preset_to_dict",
    "save_preset",
    "add_search_folder",
    "list_preset_ids",
    "resolve_preset_path",
]
