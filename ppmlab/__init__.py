"""
ppmlab
======

Render composable color patterns to plain-text PPM images.

A *color provider* is either a flat :class:`Color` or a :class:`Pattern`
that picks between two other providers per pixel (stripes, grids, gradients,
opacity, custom predicates...). Providers nest freely and may be shared.
Drawing operations on a :class:`Bitmap` evaluate a provider for every pixel
they touch.

Quick start
-----------
>>> from ppmlab import Bitmap, colors, merge
>>> bm = Bitmap(800, 800)
>>> sky = merge(colors.GREEN, colors.BLUE, "gradientV=auto")
>>> bm.fill_area(100, 100, 700, 700, merge(colors.WHITE, sky, "stripesV"))
>>> bm.border(100, 100, 700, 700, 4, sky)
>>> bm.render("bitmap.ppm")                                # doctest: +SKIP

Fast patterns
-------------
``"gradientV=100-700"`` vertical gradient over x 100..700; ``"stripesV>"``
shifted vertical stripes; ``"opacity=0.34"``; ``"gradientH=auto"`` takes its
range from the box of whatever operation draws it.

License: MIT
"""

import logging

from . import colors
from .autorange import RangeTable
from .canvas import Canvas
from .colors import Color, mix, parse_color, random_color
from .drawing import Bitmap, Outline
from .errors import (
    InvalidColorError,
    InvalidCoordinateError,
    InvalidPatternError,
    InvalidProviderTypeError,
    InvalidRangeError,
    MalformedFastPatternError,
    PpmlabError,
    SceneError,
    SerializationError,
    UnknownPatternKindError,
)
from .fastpattern import FastPattern, parse_fast_pattern
from .kinds import PatternKind
from .patterns import (
    ColorProvider,
    Pattern,
    evaluate,
    gradient,
    merge,
    opacity,
    pattern_from_color,
    transparent,
)
from .ppm import format_ppm, write_ppm
from .scene import Scene, draw_scene, load_scene
from .shapes import circle, cross, tree

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Bitmap", "Canvas", "Color", "ColorProvider", "FastPattern", "Outline",
    "Pattern", "PatternKind", "RangeTable", "Scene",
    "circle", "colors", "cross", "draw_scene", "evaluate", "format_ppm",
    "gradient", "load_scene", "merge", "mix", "opacity", "parse_color",
    "parse_fast_pattern", "pattern_from_color", "random_color", "transparent",
    "tree", "write_ppm",
    "PpmlabError", "InvalidColorError", "InvalidCoordinateError",
    "InvalidPatternError", "InvalidProviderTypeError", "InvalidRangeError",
    "MalformedFastPatternError", "SceneError", "SerializationError",
    "UnknownPatternKindError",
]
