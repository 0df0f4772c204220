"""Plain-text PPM (P3) serialization.

Layout::

    P3
    #<name>
    <width> <height>
    255
    <r g b of every pixel in the top row, each value followed by a space>
    ...

Image viewers that auto-reload the file can hold a lock on it for a moment,
so a PermissionError while writing is retried a few times before giving up.
"""

import logging
import os
import time
from pathlib import Path
from typing import Union

import numpy as np

from .errors import SerializationError

logger = logging.getLogger(__name__)

PPM_SUFFIX = ".ppm"
MAGIC = "P3"
MAX_VALUE = 255


def check_suffix(path: Union[str, os.PathLike]) -> Path:
    path = Path(path)
    if path.suffix.lower() != PPM_SUFFIX:
        raise SerializationError(f"file is not of the ppm file format: {str(path)!r}")
    return path


def format_ppm(pixels: np.ndarray, name: str) -> str:
    """Render an (height, width, 3) array as P3 text, top row first."""
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise SerializationError(f"expected an (height, width, 3) pixel array, got shape {pixels.shape}")
    if not np.issubdtype(pixels.dtype, np.integer):
        raise SerializationError(f"pixel values must be integers, got {pixels.dtype}")
    if pixels.size and (pixels.min() < 0 or pixels.max() > MAX_VALUE):
        raise SerializationError(f"pixel values must be within 0..{MAX_VALUE}")

    height, width = pixels.shape[:2]
    lines = [f"{MAGIC}\n#{name}\n{width} {height}\n{MAX_VALUE}\n"]
    for row in pixels:
        lines.append("".join(f"{int(v)} " for v in row.ravel()) + "\n")
    return "".join(lines)


def write_ppm(
    path: Union[str, os.PathLike],
    pixels: np.ndarray,
    retries: int = 5,
    retry_delay: float = 0.05,
) -> Path:
    """Write ``pixels`` to ``path`` and return the path.

    The comment line carries the file name. Raises SerializationError for a
    non-.ppm path, malformed pixels, or a write that keeps failing.
    """
    path = check_suffix(path)
    pixels = np.asarray(pixels)
    text = format_ppm(pixels, path.name)

    attempt = 0
    while True:
        try:
            with open(path, "w", encoding="ascii", newline="\n") as fh:
                fh.write(text)
            break
        except PermissionError as e:
            attempt += 1
            if attempt > retries:
                raise SerializationError(f"Error: couldn't write to file {str(path)!r}") from e
            logger.warning("%s is locked, retrying in %.2fs (%d/%d)", path, retry_delay, attempt, retries)
            time.sleep(retry_delay)
        except OSError as e:
            raise SerializationError(f"Error: couldn't write to file {str(path)!r}") from e

    logger.info("wrote %dx%d image to %s", pixels.shape[1], pixels.shape[0], path)
    return path
