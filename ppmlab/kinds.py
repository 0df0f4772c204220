"""The closed set of pattern kinds and their per-pixel selection rules."""

import math
from enum import Enum
from typing import Callable, Dict

from .errors import UnknownPatternKindError


class PatternKind(str, Enum):
    NORMAL = "normal"
    OPACITY = "opacity"
    GRID = "grid"
    STRIPES = "stripes"
    CHECKERBOARD = "checkerboard"
    GRADIENT = "gradient"
    CELLS = "cells"
    BIGCELLS = "bigcells"
    SPACE = "space"
    DOTGRID = "dotgrid"
    BIGGRID = "biggrid"
    HUGEGRID = "hugegrid"
    SUPERHUGEGRID = "superhugegrid"
    FLOWERGRID = "flowergrid"
    DOTLINES = "dotlines"
    WAVE = "wave"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, name) -> "PatternKind":
        """Coerce a kind name (or a PatternKind) to a PatternKind."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError as e:
            raise UnknownPatternKindError(f"{name!r} is an unknown pattern") from e


# A selector answers "slot_1?" for an (already shifted and oriented) coordinate.
# The shift flag is passed along because cells uses it as its polarity.
Selector = Callable[[int, int, bool], bool]


def _product_mod(n: int) -> Selector:
    return lambda x, y, shift: x * y % n == 0


KIND_SELECTORS: Dict[PatternKind, Selector] = {
    PatternKind.GRID: _product_mod(2),
    PatternKind.DOTGRID: _product_mod(4),
    PatternKind.BIGGRID: _product_mod(5),
    PatternKind.FLOWERGRID: _product_mod(6),
    PatternKind.HUGEGRID: _product_mod(19),
    PatternKind.SUPERHUGEGRID: _product_mod(73),
    PatternKind.STRIPES: lambda x, y, shift: x % 2 == 0,
    PatternKind.CHECKERBOARD: lambda x, y, shift: (x + y) % 2 == 0,
    PatternKind.CELLS: lambda x, y, shift: shift == (math.sin(x * y) > 0.5),
    PatternKind.BIGCELLS: lambda x, y, shift: math.sin(math.degrees(x * y)) > 0.1,
    PatternKind.SPACE: lambda x, y, shift: math.floor(math.degrees(math.sin(x * y)) * 1.5) % 2 == 0,
    PatternKind.DOTLINES: lambda x, y, shift: math.floor(math.sin(math.radians(x * y))) % 2 == 0,
    PatternKind.WAVE: lambda x, y, shift: math.sin(x / y) > 0.05,
}
