# ==============================================================================
# File: fpsr_engine/core/export/__init__.py
# Purpose: Entry point for sequence exports.
# ==============================================================================
from __future__ import annotations

from .json_exporters import build_trace, read_sequence_json, write_sequence_json
from .numpy_exporters import read_sequence_npz, write_sequence_npz

__all__ = [
    "build_trace",
    "write_sequence_json",
    "read_sequence_json",
    "write_sequence_npz",
    "read_sequence_npz",
]
