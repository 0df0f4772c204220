"""Predefined shapes drawn onto a :class:`~ppmlab.drawing.Bitmap`."""

from typing import Optional

from .colors import BLACK, BROWN, GREEN
from .drawing import Bitmap, Outline
from .patterns import ColorProvider, check_provider


def cross(
    bitmap: Bitmap,
    pos_x: int,
    pos_y: int,
    size: int,
    thickness: int,
    color_provider: ColorProvider = BLACK,
    outline: Optional[Outline] = None,
) -> None:
    """A plus-shaped cross centred on (pos_x, pos_y), ``size`` pixels across each bar.

    Auto patterns of the body and the outline are locked to the cross's full
    box, so both bars share one range.
    """
    check_provider(color_provider)
    box_x = (pos_x - size, pos_x + size)
    box_y = (pos_y - size, pos_y + size)
    locked = bitmap.ranges.resolve(color_provider, box_x, box_y, lock=True)
    if outline is not None and outline.active:
        locked += bitmap.ranges.resolve(outline.color, box_x, box_y, lock=True)

    half_t = thickness // 2
    half_s = size // 2
    try:
        bitmap.fill_area(pos_x - half_s, pos_y - half_t, pos_x + half_s, pos_y + half_t, color_provider, outline)
        bitmap.fill_area(pos_x - half_t, pos_y - half_s, pos_x + half_t, pos_y + half_s, color_provider, outline)
        # paint the horizontal bar again over the vertical bar's outline
        bitmap.fill_area(pos_x - half_s, pos_y - half_t, pos_x + half_s, pos_y + half_t, color_provider)
    finally:
        bitmap.ranges.unlock(locked)


def circle(
    bitmap: Bitmap,
    pos_x: int,
    pos_y: int,
    radius: int,
    color_provider: ColorProvider,
    outline_color_provider: Optional[ColorProvider] = None,
    borderclip: bool = False,
) -> None:
    """A filled circle with an optional ring in ``outline_color_provider``.

    Pixels off the canvas are skipped unless ``borderclip`` is set, in which
    case they raise InvalidCoordinateError.
    """
    check_provider(color_provider)
    if outline_color_provider is not None:
        check_provider(outline_color_provider, "outline_color_provider")

    box_x = (pos_x - radius, pos_x + radius)
    box_y = (pos_y - radius, pos_y + radius)
    bitmap.ranges.resolve(color_provider, box_x, box_y)
    if outline_color_provider is not None:
        bitmap.ranges.resolve(outline_color_provider, box_x, box_y)

    border_factor = radius * 2 - radius / 4.0
    for y in range(pos_y - radius, pos_y + radius):
        for x in range(pos_x - radius, pos_x + radius):
            equation = int(radius ** 2 - ((pos_x - x) ** 2 + (pos_y - y) ** 2))
            if outline_color_provider is not None and 0 < abs(equation) < border_factor:
                provider = outline_color_provider
            elif equation > 0:
                provider = color_provider
            else:
                continue
            if not borderclip and not bitmap.canvas.contains(x, y):
                continue
            bitmap.set_pixel(x, y, provider)


def tree(bitmap: Bitmap, x_pos: int, y_pos: int, size: float = 1.0) -> None:
    """A brown trunk with three stacked green crowns."""
    trunk = max(1, int(8 * size))
    center_x = x_pos + trunk // 2
    bitmap.line_v(y_pos, y_pos + int(22 * size), x_pos, BROWN, trunk)
    for offset, radius, brightness in ((22, 18, 0.5), (37, 14, 0.6), (50, 10, 0.7)):
        circle(bitmap, center_x, y_pos + int(offset * size), int(radius * size), GREEN.with_brightness(brightness))


SHAPES = {
    "cross": cross,
    "circle": circle,
    "tree": tree,
}

