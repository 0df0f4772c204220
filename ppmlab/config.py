"""Run configuration and logging setup for the command line."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass
class RenderConfig:
    scene_path: str
    out_path: Optional[str] = None           # defaults to the scene path with a .ppm suffix
    size: Optional[Tuple[int, int]] = None   # overrides the scene's width/height
    png_path: Optional[str] = None           # also save a PNG preview here
    retries: int = 5                         # retries while the output file is locked
    retry_delay: float = 0.05                # seconds between retries
    log_level: str = "WARNING"


def configure_logging(level: Union[str, int] = "WARNING") -> None:
    """Route ppmlab's log records to stderr at ``level``."""
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = numeric
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("ppmlab").setLevel(level)
