from dataclasses import dataclass
from typing import Any, Dict, Union

from ..types import QSParams, SMParams


@dataclass(frozen=True)
class FPSRPreset:
    id: str
    version: int
    algorithm: str
    params: Union[SMParams, QSParams]
    frame_start: int = 0
    frame_stop: int = 200

    def frame_range(self) -> range:
        # inclusive of frame_stop
        return range(self.frame_start, self.frame_stop + 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "version": self.version,
            "algorithm": self.algorithm,
            "params": self.params.to_dict(),
            "frames": {"start": self.frame_start, "stop": self.frame_stop},
        }
