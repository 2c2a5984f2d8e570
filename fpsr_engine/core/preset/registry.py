# ========================
# file: fpsr_engine/core/preset/registry.py
# ========================
from __future__ import annotations
from typing import List
import os
from .errors import NotFoundError

PRESET_DIR_ENV = "FPSR_PRESET_DIR"

# Default search roots (can be extended by the app)
_DEFAULT_PRESET_FOLDERS: List[str] = [
    os.path.join(
        os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "presets"
    ),
]


def _search_folders() -> List[str]:
    folders = list(_DEFAULT_PRESET_FOLDERS)
    env_dir = os.environ.get(PRESET_DIR_ENV)
    if env_dir:
        folders.insert(0, os.path.abspath(env_dir))
    return folders


def resolve_preset_path(preset_id: str) -> str:
    """Map an id like 'sm_reference' to a JSON file path in presets/ tree."""
    rel = preset_id.replace("\\", "/").strip("/") + ".json"
    for root in _search_folders():
        candidate = os.path.join(root, rel)
        if os.path.isfile(candidate):
            return candidate
    raise NotFoundError(f"Preset id '{preset_id}' not found in presets/ folders")


def list_preset_ids() -> List[str]:
    ids: List[str] = []
    for root in _search_folders():
        if not os.path.isdir(root):
            continue
        for name in sorted(os.listdir(root)):
            if name.endswith(".json") and name[:-5] not in ids:
                ids.append(name[:-5])
    return ids


def add_search_folder(path: str) -> None:
    path = os.path.abspath(path)
    if path not in _DEFAULT_PRESET_FOLDERS:
        _DEFAULT_PRESET_FOLDERS.append(path)
