"""Pixel buffer addressed with 1-based, bottom-left origin coordinates."""

import os
from typing import Union

import numpy as np
from PIL import Image

from .colors import Color
from .errors import InvalidCoordinateError, InvalidColorError


class Canvas:
    """A ``height x width`` RGB buffer.

    Pixel (1, 1) is the bottom-left corner; buffer row 0 holds y == height,
    so ``pixels`` can be written out top row first as is.
    """

    def __init__(self, width: int, height: int, background: Color = Color(0, 0, 0)) -> None:
        if width < 1 or height < 1:
            raise InvalidCoordinateError(f"canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = background.as_tuple()

    def _index(self, x: int, y: int):
        if x < 1 or x > self.width:
            raise InvalidCoordinateError(f"x={x} is out of bounds (1..{self.width})")
        if y < 1 or y > self.height:
            raise InvalidCoordinateError(f"y={y} is out of bounds (1..{self.height})")
        return self.height - y, x - 1

    def contains(self, x: int, y: int) -> bool:
        return 1 <= x <= self.width and 1 <= y <= self.height

    def get_pixel(self, x: int, y: int) -> Color:
        row, col = self._index(x, y)
        return Color(*(int(c) for c in self.pixels[row, col]))

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if not isinstance(color, Color):
            raise InvalidColorError(f"expected a Color, got {type(color).__name__}")
        row, col = self._index(x, y)
        self.pixels[row, col] = color.as_tuple()

    def fill(self, color: Color) -> None:
        self.pixels[:, :] = color.as_tuple()

    def fill_rect(self, min_x: int, min_y: int, max_x: int, max_y: int, color: Color) -> None:
        """Paint the inclusive box with one color; both corners must be on the canvas."""
        top, left = self._index(min_x, max_y)
        bottom, right = self._index(max_x, min_y)
        self.pixels[top:bottom + 1, left:right + 1] = color.as_tuple()

    def to_image(self) -> Image.Image:
        """Pillow RGB image of the canvas (a copy)."""
        return Image.fromarray(self.pixels.copy())

    def save_png(self, path: Union[str, os.PathLike]) -> str:
        """Save a PNG preview next to (or instead of) the PPM output."""
        self.to_image().save(path, format="PNG", optimize=True)
        return str(path)
