# ========================
# file: fpsr_engine/core/preset/loader.py
# ========================
from __future__ import annotations
import copy
import json
import logging
import os
from typing import Any, Dict, Mapping, Union

from .defaults import CURRENT_PRESET_VERSION, default_preset_dict
from .errors import ValidationError
from .model import FPSRPreset
from .registry import resolve_preset_path
from .validators import validate_dict
from ..constants import ALGORITHMS, ALGORITHM_SM
from ..types import QSParams, SMParams

logger = logging.getLogger(__name__)


def deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge. Lists/tuples are replaced, not merged element-wise."""
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def _load_json_file(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Preset file {path} is not valid JSON: {exc}") from exc


def _build_params(algorithm: str, params: Dict[str, Any]):
    if algorithm == ALGORITHM_SM:
        return SMParams(**{k: int(v) for k, v in params.items()})
    qs = dict(params)
    qs["quant_levels_min_max"] = tuple(int(v) for v in qs["quant_levels_min_max"])
    qs["streams_offset"] = tuple(int(v) for v in qs["streams_offset"])
    return QSParams(**qs)


def load_preset(
    source: Union[str, Dict[str, Any]], overrides: Mapping[str, Any] | None = None
) -> FPSRPreset:
    """Load a preset from id/path/dict, merge with algorithm defaults and apply overrides.

    Args:
        source: preset id (e.g., 'sm_reference'), or file path to JSON, or raw dict
        overrides: mapping of ad-hoc overrides (last layer)
    Returns:
        FPSRPreset (immutable dataclass) ready for use
    """
    if isinstance(source, str):
        if os.path.isfile(source):
            data = _load_json_file(source)
        else:
            # treat as id
            path = resolve_preset_path(source)
            data = _load_json_file(path)
    elif isinstance(source, dict):
        data = source
    else:
        raise TypeError("source must be str path/id or dict")

    if not isinstance(data, dict):
        raise ValidationError("Preset document must be a JSON object")

    algorithm = (overrides or {}).get("algorithm", data.get("algorithm"))
    if algorithm not in ALGORITHMS:
        raise ValidationError(f"Preset.algorithm must be one of {ALGORITHMS}")

    merged = deep_merge(default_preset_dict(algorithm), data)
    if overrides:
        merged = deep_merge(merged, overrides)
    merged["version"] = CURRENT_PRESET_VERSION

    validate_dict(merged)

    preset = FPSRPreset(
        id=merged["id"],
        version=int(merged["version"]),
        algorithm=algorithm,
        params=_build_params(algorithm, merged["params"]),
        frame_start=int(merged["frames"]["start"]),
        frame_stop=int(merged["frames"]["stop"]),
    )
    logger.debug("Loaded preset '%s' (%s)", preset.id, preset.algorithm)
    return preset


def preset_to_dict(preset: FPSRPreset) -> Dict[str, Any]:
    return preset.to_dict()


def save_preset(path: str, preset: FPSRPreset) -> None:
    """Writes a preset as JSON; load_preset(path) gives back an equal preset."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    tmp_path = path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(preset.to_dict(), f, indent=2)
    os.replace(tmp_path, path)
    logger.info("Preset '%s' saved to %s", preset.id, path)
