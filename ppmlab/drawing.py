"""Drawing operations on a canvas.

:class:`Bitmap` pairs a :class:`~ppmlab.canvas.Canvas` with the
:class:`~ppmlab.autorange.RangeTable` its drawing calls resolve auto patterns
into. Every operation takes a color provider (Color or Pattern) and accepts
its two corners in any order.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .autorange import RangeTable
from .canvas import Canvas
from .colors import BLACK, WHITE, Color
from .errors import SerializationError
from .patterns import ColorProvider, Pattern, check_provider, evaluate
from .ppm import write_ppm

logger = logging.getLogger(__name__)


@dataclass
class Outline:
    """Border drawn around a shape, outside its area."""
    active: bool = True
    thickness: int = 1
    color: ColorProvider = WHITE

    def __post_init__(self) -> None:
        check_provider(self.color, "outline color")

    @classmethod
    def none(cls) -> "Outline":
        return cls(active=False)


def normalize_box(x_p1: int, y_p1: int, x_p2: int, y_p2: int) -> Tuple[int, int, int, int]:
    """Return (min_x, min_y, max_x, max_y) for two opposite corners."""
    return min(x_p1, x_p2), min(y_p1, y_p2), max(x_p1, x_p2), max(y_p1, y_p2)


class Bitmap:
    """A canvas plus the drawing operations that paint on it."""

    def __init__(
        self,
        width: int,
        height: int,
        path: Optional[Union[str, os.PathLike]] = None,
        background: Color = BLACK,
    ) -> None:
        self.canvas = Canvas(width, height, background)
        self.ranges = RangeTable()
        self.path = Path(path) if path is not None else None

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    @property
    def pixels(self):
        return self.canvas.pixels

    # ---------------------------- Pixels ------------------------------------

    def get_pixel(self, x: int, y: int) -> Color:
        return self.canvas.get_pixel(x, y)

    def set_pixel(self, x: int, y: int, color_provider: ColorProvider) -> None:
        """Evaluate the provider at (x, y) and write the result."""
        color = evaluate(color_provider, x, y, self.ranges, self.canvas)
        self.canvas.set_pixel(x, y, color)

    # ---------------------------- Areas -------------------------------------

    def fill_area(
        self,
        x_p1: int,
        y_p1: int,
        x_p2: int,
        y_p2: int,
        color_provider: ColorProvider,
        outline: Optional[Outline] = None,
    ) -> None:
        """Fill the box spanned by two corners, optionally with an outline around it."""
        check_provider(color_provider)
        min_x, min_y, max_x, max_y = normalize_box(x_p1, y_p1, x_p2, y_p2)

        if isinstance(color_provider, Pattern):
            self.ranges.resolve(color_provider, (min_x, max_x), (min_y, max_y), lock=False)

        if outline is not None and outline.active:
            self.border(min_x, min_y, max_x, max_y, outline.thickness, outline.color)

        if isinstance(color_provider, Color):
            self.canvas.fill_rect(min_x, min_y, max_x, max_y, color_provider)
            return
        for y in range(min_y, max_y + 1):
            for x in range(min_x, max_x + 1):
                self.set_pixel(x, y, color_provider)

    def border(
        self,
        x_p1: int,
        y_p1: int,
        x_p2: int,
        y_p2: int,
        thickness: int,
        color_provider: ColorProvider,
    ) -> None:
        """Draw a frame of ``thickness`` pixels just outside the box.

        Auto patterns are locked to the box itself, so all four sides share one
        range.
        """
        check_provider(color_provider)
        if thickness < 1:
            return
        min_x, min_y, max_x, max_y = normalize_box(x_p1, y_p1, x_p2, y_p2)
        t = thickness
        with self.ranges.locked(color_provider, (min_x, max_x), (min_y, max_y)):
            # X-Axis
            self.fill_area(min_x - t, min_y - t, max_x + t, min_y - 1, color_provider)
            self.fill_area(min_x - t, max_y + 1, max_x + t, max_y + t, color_provider)
            # Y-Axis
            self.fill_area(min_x - t, min_y, min_x - 1, max_y, color_provider)
            self.fill_area(max_x + 1, min_y, max_x + t, max_y, color_provider)

    def line_h(
        self,
        x_from: int,
        x_to: int,
        y_pos: int,
        color_provider: ColorProvider = BLACK,
        thickness: int = 1,
    ) -> None:
        """Horizontal line growing upward with thickness."""
        self.fill_area(x_from, y_pos, x_to, y_pos + thickness - 1, color_provider)

    def line_v(
        self,
        y_from: int,
        y_to: int,
        x_pos: int,
        color_provider: ColorProvider = BLACK,
        thickness: int = 1,
    ) -> None:
        """Vertical line growing to the right with thickness."""
        self.fill_area(x_pos, y_from, x_pos + thickness - 1, y_to, color_provider)

    def fill(self, color_provider: ColorProvider = BLACK) -> None:
        """Fill the whole canvas."""
        check_provider(color_provider)
        if isinstance(color_provider, Color):
            self.canvas.fill(color_provider)
        else:
            self.fill_area(1, 1, self.width, self.height, color_provider)

    def clear(self) -> None:
        self.fill(BLACK)

    # ---------------------------- Output ------------------------------------

    def render(
        self,
        path: Optional[Union[str, os.PathLike]] = None,
        retries: int = 5,
        retry_delay: float = 0.05,
    ) -> Path:
        """Write the canvas as a PPM file; the path is remembered for later calls."""
        if path is not None:
            self.path = Path(path)
        if self.path is None:
            raise SerializationError("no output path given")
        logger.debug("rendering %dx%d bitmap to %s", self.width, self.height, self.path)
        return write_ppm(self.path, self.canvas.pixels, retries=retries, retry_delay=retry_delay)

    def save_png(self, path: Union[str, os.PathLike]) -> str:
        return self.canvas.save_png(path)
