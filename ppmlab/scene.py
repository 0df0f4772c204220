"""Scene files: a JSON description of a canvas and the operations drawn on it.

Example::

    {
      "width": 800, "height": 800, "background": "white",
      "providers": {
        "sky": {"pattern": "gradientV=auto", "slots": ["green", "blue"]}
      },
      "operations": [
        {"op": "border", "box": [100, 100, 700, 700], "thickness": 4, "color": {"ref": "sky"}},
        {"op": "fill_area", "box": [200, 200, 600, 600],
         "color": {"pattern": "stripesV", "slots": ["white", {"ref": "sky"}]}},
        {"op": "cross", "x": 400, "y": 400, "size": 100, "thickness": 6,
         "color": "black", "outline": {"thickness": 3}}
      ]
    }

A color is a palette name, ``#RRGGBB`` or ``"r g b"``. A pattern is an object
with a fast pattern and two slots. Entries under ``providers`` are built once
and shared wherever ``{"ref": name}`` points at them.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from .colors import BLACK, WHITE, Color, parse_color
from .drawing import Bitmap, Outline
from .errors import SceneError
from .kinds import PatternKind
from .patterns import ColorProvider, Pattern
from .shapes import SHAPES

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class Scene:
    width: int
    height: int
    background: Color = BLACK
    providers: Dict[str, ColorProvider] = field(default_factory=dict)
    operations: List[Dict[str, Any]] = field(default_factory=list)


def _get(entry: Dict[str, Any], key: str, default: Any = _MISSING) -> Any:
    if key in entry:
        return entry[key]
    if default is _MISSING:
        raise SceneError(f"missing {key!r} in {entry!r}")
    return default


def _int(entry: Dict[str, Any], key: str, default: Any = _MISSING) -> int:
    value = _get(entry, key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneError(f"{key!r} must be an integer, got {value!r}")
    return value


def build_provider(spec: Any, providers: Optional[Dict[str, ColorProvider]] = None) -> ColorProvider:
    """Turn a JSON provider description into a Color or a Pattern."""
    providers = providers or {}
    if isinstance(spec, str):
        return parse_color(spec)
    if isinstance(spec, list):
        return Color.from_sequence(spec)
    if not isinstance(spec, dict):
        raise SceneError(f"cannot build a color provider from {spec!r}")
    if "ref" in spec:
        name = spec["ref"]
        if name not in providers:
            raise SceneError(f"unknown provider reference {name!r}")
        return providers[name]
    token = _get(spec, "pattern")
    slots = _get(spec, "slots")
    if not isinstance(slots, list) or len(slots) != 2:
        raise SceneError(f"a pattern needs exactly two slots, got {slots!r}")
    pattern = Pattern.from_fast_pattern(
        build_provider(slots[0], providers), build_provider(slots[1], providers), token
    )
    if pattern.kind is PatternKind.CUSTOM:
        raise SceneError("custom patterns need a predicate and cannot be described in a scene")
    return pattern


def _outline(entry: Dict[str, Any], providers: Dict[str, ColorProvider]) -> Optional[Outline]:
    spec = entry.get("outline")
    if spec is None:
        return None
    if not isinstance(spec, dict):
        raise SceneError(f"outline must be an object, got {spec!r}")
    color = build_provider(spec["color"], providers) if "color" in spec else WHITE
    return Outline(active=bool(spec.get("active", True)), thickness=_int(spec, "thickness", 1), color=color)


def _box(entry: Dict[str, Any]) -> List[int]:
    box = _get(entry, "box")
    if not isinstance(box, list) or len(box) != 4 or not all(isinstance(v, int) for v in box):
        raise SceneError(f"box must be four integers [x1, y1, x2, y2], got {box!r}")
    return box


# ---------------------------- Operations ------------------------------------

Operation = Callable[[Bitmap, Dict[str, Any], Dict[str, ColorProvider]], None]


def op_fill(bitmap, entry, providers):
    bitmap.fill(build_provider(entry.get("color", "black"), providers))


def op_fill_area(bitmap, entry, providers):
    outline = _outline(entry, providers)
    bitmap.fill_area(*_box(entry), build_provider(_get(entry, "color"), providers), outline)


def op_border(bitmap, entry, providers):
    bitmap.border(*_box(entry), _int(entry, "thickness", 1), build_provider(_get(entry, "color"), providers))


def op_line_h(bitmap, entry, providers):
    bitmap.line_h(
        _int(entry, "x_from"), _int(entry, "x_to"), _int(entry, "y"),
        build_provider(entry.get("color", "black"), providers), _int(entry, "thickness", 1),
    )


def op_line_v(bitmap, entry, providers):
    bitmap.line_v(
        _int(entry, "y_from"), _int(entry, "y_to"), _int(entry, "x"),
        build_provider(entry.get("color", "black"), providers), _int(entry, "thickness", 1),
    )


def op_pixel(bitmap, entry, providers):
    bitmap.set_pixel(_int(entry, "x"), _int(entry, "y"), build_provider(_get(entry, "color"), providers))


def _cross_args(entry, providers):
    return (
        _int(entry, "x"), _int(entry, "y"), _int(entry, "size"), _int(entry, "thickness"),
        build_provider(entry.get("color", "black"), providers), _outline(entry, providers),
    )


def _circle_args(entry, providers):
    outline = entry.get("outline_color")
    return (
        _int(entry, "x"), _int(entry, "y"), _int(entry, "radius"),
        build_provider(_get(entry, "color"), providers),
        build_provider(outline, providers) if outline is not None else None,
        bool(entry.get("borderclip", False)),
    )


def _tree_args(entry, providers):
    size = _get(entry, "size", 1.0)
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        raise SceneError(f"'size' must be a number, got {size!r}")
    return (_int(entry, "x"), _int(entry, "y"), float(size))


# Scene arguments of each entry in SHAPES, after the bitmap.
SHAPE_ARGS = {
    "cross": _cross_args,
    "circle": _circle_args,
    "tree": _tree_args,
}


def op_shape(bitmap, entry, providers):
    name = entry["op"]
    SHAPES[name](bitmap, *SHAPE_ARGS[name](entry, providers))


OPERATIONS: Dict[str, Operation] = {
    "fill": op_fill,
    "fill_area": op_fill_area,
    "border": op_border,
    "line_h": op_line_h,
    "line_v": op_line_v,
    "pixel": op_pixel,
}
OPERATIONS.update((name, op_shape) for name in SHAPES)


# ---------------------------- Loading ---------------------------------------

def scene_from_dict(data: Dict[str, Any]) -> Scene:
    if not isinstance(data, dict):
        raise SceneError("scene JSON must be an object")
    background = build_provider(data.get("background", "black"))
    if not isinstance(background, Color):
        raise SceneError("background must be a plain color")

    providers: Dict[str, ColorProvider] = {}
    named = data.get("providers", {})
    if not isinstance(named, dict):
        raise SceneError("'providers' must be an object")
    # Later entries may reference earlier ones.
    for name, spec in named.items():
        providers[name] = build_provider(spec, providers)

    operations = data.get("operations", [])
    if not isinstance(operations, list):
        raise SceneError("'operations' must be a list")
    for entry in operations:
        if not isinstance(entry, dict) or entry.get("op") not in OPERATIONS:
            raise SceneError(f"unknown operation {entry!r}. Choose from {list(OPERATIONS)}")

    return Scene(
        width=_int(data, "width"),
        height=_int(data, "height"),
        background=background,
        providers=providers,
        operations=operations,
    )


def load_scene(path: Union[str, os.PathLike]) -> Scene:
    with open(path, "r") as jf:
        try:
            data = json.load(jf)
        except json.JSONDecodeError as e:
            raise SceneError(f"{path}: invalid JSON: {e}") from e
    return scene_from_dict(data)


def draw_scene(scene: Scene, bitmap: Optional[Bitmap] = None) -> Bitmap:
    """Run every operation of the scene, on a fresh Bitmap unless one is given."""
    if bitmap is None:
        bitmap = Bitmap(scene.width, scene.height, background=scene.background)

    for i, entry in enumerate(scene.operations):
        logger.debug("operation %d: %s", i, entry["op"])
        OPERATIONS[entry["op"]](bitmap, entry, scene.providers)
    return bitmap
