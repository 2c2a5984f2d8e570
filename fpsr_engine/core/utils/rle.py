# fpsr_engine/core/utils/rle.py
from __future__ import annotations
from itertools import groupby
from typing import Any, Dict, Iterable, List


def encode_rle(values: Iterable[Any]) -> Dict[str, Any]:
    """{"encoding": "rle_v1", "runs": [[value, run], ...]} for consecutive equal values."""
    return {"encoding": "rle_v1", "runs": [[v, sum(1 for _ in run)] for v, run in groupby(values)]}


def decode_rle_line(runs: List[List[Any]]) -> List[Any]:
    line: List[Any] = []
    for val, run in runs:
        line.extend([val] * int(run))
    return line
