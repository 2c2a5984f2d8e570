import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s"


def setup_logging(log_file: Optional[Union[str, Path]] = None, level: int = logging.INFO) -> None:
    """
    Configures the process-wide logger.
    - Message format with millisecond timestamps.
    - Console output (stdout).
    - Optional log file, truncated on every run.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(log_path, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,  # drop handlers from earlier calls so lines are not duplicated
    )

    # our package at the requested level, numba compiler chatter muted
    logging.getLogger("fpsr_engine").setLevel(level)
    logging.getLogger("numba").setLevel(logging.WARNING)
