"""Per-pixel evaluation of every pattern kind, plus the builders.

Run:
    pytest tests/test_patterns.py -v
"""

import math

import pytest

from ppmlab.autorange import RangeTable
from ppmlab.canvas import Canvas
from ppmlab.colors import BLACK, BLUE, GREEN, RED, WHITE, Color, mix
from ppmlab.errors import (
    InvalidPatternError,
    InvalidProviderTypeError,
    InvalidRangeError,
    UnknownPatternKindError,
)
from ppmlab.kinds import PatternKind
from ppmlab.patterns import (
    Pattern,
    evaluate,
    gradient,
    is_gradient,
    merge,
    opacity,
    pattern_from_color,
    transparent,
)

COORDS = [(x, y) for x in range(1, 13) for y in range(1, 13)]


def test_color_leaf_evaluates_to_itself():
    assert evaluate(RED, 5, 9) is RED


def test_non_provider_rejected():
    with pytest.raises(InvalidProviderTypeError):
        evaluate("red", 1, 1)
    with pytest.raises(InvalidProviderTypeError):
        Pattern("red", BLUE)
    with pytest.raises(InvalidProviderTypeError):
        Pattern(RED, (0, 0, 255))


def test_unknown_kind_rejected():
    with pytest.raises(UnknownPatternKindError):
        Pattern(RED, BLUE, kind="zigzag")


def test_kind_string_is_coerced():
    assert Pattern(RED, BLUE, kind="grid").kind is PatternKind.GRID


def test_vertical_is_negation_of_horizontal():
    assert Pattern(RED, BLUE).vertical is False
    assert Pattern(RED, BLUE, horizontal=False).vertical is True


def test_patterns_compare_by_identity():
    p1 = Pattern(RED, BLUE, kind="grid")
    p2 = Pattern(RED, BLUE, kind="grid")
    assert p1 != p2
    assert len({p1, p2}) == 2


def test_normal_returns_slot_1():
    p = pattern_from_color(GREEN)
    assert all(evaluate(p, x, y) == GREEN for x, y in COORDS)


def test_stripes_vertical(a, b):
    p = merge(a, b, "stripesV")
    for x, y in COORDS:
        assert evaluate(p, x, y) == (a if x % 2 == 0 else b)


def test_stripes_horizontal_uses_y(a, b):
    p = merge(a, b, "stripesH")
    for x, y in COORDS:
        assert evaluate(p, x, y) == (a if y % 2 == 0 else b)


def test_shift_moves_pattern_by_one(a, b):
    p = merge(a, b, "stripesV>")
    for x, y in COORDS:
        assert evaluate(p, x, y) == (a if (x + 1) % 2 == 0 else b)


def test_checkerboard_shifted(a, b):
    p = merge(a, b, "checkerboard>")
    for x, y in COORDS:
        assert evaluate(p, x, y) == (a if (x + y + 2) % 2 == 0 else b)


@pytest.mark.parametrize("kind, rule", [
    ("grid", lambda x, y: x * y % 2 == 0),
    ("dotgrid", lambda x, y: x * y % 4 == 0),
    ("biggrid", lambda x, y: x * y % 5 == 0),
    ("hugegrid", lambda x, y: x * y % 19 == 0),
    ("superhugegrid", lambda x, y: x * y % 73 == 0),
    ("flowergrid", lambda x, y: x * y % 6 == 0),
    ("stripes", lambda x, y: x % 2 == 0),
    ("checkerboard", lambda x, y: (x + y) % 2 == 0),
    ("cells", lambda x, y: (math.sin(x * y) > 0.5) is False),
    ("bigcells", lambda x, y: math.sin(math.degrees(x * y)) > 0.1),
    ("space", lambda x, y: math.floor(math.degrees(math.sin(x * y)) * 1.5) % 2 == 0),
    ("dotlines", lambda x, y: math.floor(math.sin(math.radians(x * y))) % 2 == 0),
    ("wave", lambda x, y: math.sin(x / y) > 0.05),
])
def test_selector_kinds(kind, rule, a, b):
    p = Pattern(a, b, kind=kind, horizontal=False)
    for x, y in COORDS:
        assert evaluate(p, x, y) == (a if rule(x, y) else b), (kind, x, y)


def test_cells_uses_shift_as_polarity(a, b):
    p = Pattern(a, b, kind="cells", horizontal=False, shift=True)
    for x, y in COORDS:
        expected = a if math.sin((x + 1) * (y + 1)) > 0.5 else b
        assert evaluate(p, x, y) == expected


def test_vertical_gradient_endpoints(a, b):
    p = gradient(a, b, 100, 700, horizontal=False)
    assert evaluate(p, 100, 5) == a
    assert evaluate(p, 700, 5) == b
    assert evaluate(p, 400, 5) == mix(a, b, 0.5)
    # clamped outside the range
    assert evaluate(p, 1, 5) == a
    assert evaluate(p, 900, 5) == b


def test_horizontal_gradient_runs_along_y(a, b):
    p = gradient(a, b, 10, 20, horizontal=True)
    assert evaluate(p, 999, 10) == a
    assert evaluate(p, 1, 20) == b
    assert evaluate(p, 3, 15) == mix(a, b, 0.5)


def test_gradient_with_empty_range(a, b):
    p = gradient(a, b, 5, 5, horizontal=False)
    assert evaluate(p, 5, 1) == a
    assert evaluate(p, 6, 1) == b


def test_gradient_reversed_range_rejected(a, b):
    with pytest.raises(InvalidRangeError):
        gradient(a, b, 700, 100)


def test_chained_gradients_mix_evenly():
    red = gradient(RED, RED, 0, 10, horizontal=False)
    blue = gradient(BLUE, BLUE, 0, 10, horizontal=False)
    outer = gradient(red, blue, 0, 10, horizontal=False)
    assert is_gradient(outer)
    for x in (0, 3, 10):
        assert evaluate(outer, x, 1) == mix(RED, BLUE, 0.5)


def test_nested_pattern_evaluates_recursively():
    inner = merge(GREEN, BLUE, "gradientV=0-10")
    p = merge(WHITE, inner, "stripesV")
    assert evaluate(p, 2, 1) == WHITE
    assert evaluate(p, 1, 1) == mix(GREEN, BLUE, 0.1)


def test_slots_see_the_swapped_coordinate(a, b):
    outer = Pattern(merge(a, b, "stripesV"), WHITE, kind="normal", horizontal=True)
    # the inner vertical stripes see x == 1
    assert evaluate(outer, 2, 1) == b
    assert evaluate(outer, 1, 2) == a


def test_slots_see_the_shifted_coordinate(a, b):
    outer = Pattern(merge(a, b, "stripesV"), WHITE, kind="normal", horizontal=False, shift=True)
    assert evaluate(outer, 1, 5) == a
    assert evaluate(outer, 2, 5) == b


def test_nested_gradient_under_shifted_checkerboard():
    inner = merge(BLUE, WHITE, "gradientV=350-450")
    p = merge(BLACK, inner, "checkerboard>")
    # shifted and swapped: the checkerboard and the gradient see (352, 401)
    assert evaluate(p, 400, 351) == mix(BLUE, WHITE, 0.02)
    assert evaluate(p, 400, 350) == BLACK


def test_auto_gradient_needs_a_range(a, b):
    p = gradient(a, b)
    assert p.auto
    with pytest.raises(InvalidRangeError):
        evaluate(p, 1, 1)
    with pytest.raises(InvalidRangeError):
        evaluate(p, 1, 1, RangeTable())


def test_auto_gradient_reads_range_table(a, b):
    p = gradient(a, b, horizontal=False)
    table = RangeTable()
    table.resolve(p, (10, 20), (1, 5))
    assert evaluate(p, 10, 1, table) == a
    assert evaluate(p, 20, 1, table) == b


def test_fast_pattern_equals_direct_construction(a, b):
    parsed = Pattern.from_fast_pattern(a, b, "gradientH=100-700")
    direct = Pattern(a, b, kind=PatternKind.GRADIENT, horizontal=True, from_=100, to=700)
    assert parsed.horizontal and not parsed.auto
    assert (parsed.from_, parsed.to) == (100, 700)
    for y in (50, 100, 250, 400, 699, 700, 800):
        assert evaluate(parsed, 3, y) == evaluate(direct, 3, y)


def test_custom_predicate_gets_oriented_coordinates(a, b):
    seen = []

    def predicate(x, y):
        seen.append((x, y))
        return x == 3

    p = merge(a, b, predicate)
    assert p.kind is PatternKind.CUSTOM
    # horizontal by default, so the predicate sees (y, x)
    assert evaluate(p, 1, 3) == a
    assert evaluate(p, 3, 1) == b
    assert seen == [(3, 1), (1, 3)]


def test_custom_without_predicate(a, b):
    p = merge(a, b, "customV=auto")
    with pytest.raises(InvalidPatternError):
        evaluate(p, 1, 1)
    q = p.with_predicate(lambda x, y: x > y)
    assert q is not p and q.auto and q.vertical
    assert evaluate(q, 2, 1) == a
    assert evaluate(q, 1, 2) == b


def test_non_callable_predicate_rejected(a, b):
    with pytest.raises(InvalidPatternError):
        Pattern(a, b, kind="custom", predicate=42)


def test_opacity_blends_with_canvas():
    canvas = Canvas(4, 4, background=WHITE)
    p = opacity(BLACK, 0.5)
    assert evaluate(p, 2, 3, canvas=canvas) == mix(BLACK, WHITE, 0.5)
    assert evaluate(opacity(RED, 0.0), 1, 1, canvas=canvas) == RED
    assert evaluate(transparent(), 1, 1, canvas=Canvas(2, 2, background=GREEN)) == GREEN


def test_opacity_reads_the_pixel_being_drawn():
    canvas = Canvas(3, 3)
    canvas.set_pixel(1, 3, WHITE)
    p = Pattern(BLACK, BLACK, kind="opacity", horizontal=True, shift=True, opacity=1.0)
    assert evaluate(p, 1, 3, canvas=canvas) == WHITE
    assert evaluate(p, 3, 1, canvas=canvas) == BLACK


def test_opacity_needs_canvas():
    with pytest.raises(InvalidPatternError):
        evaluate(opacity(RED), 1, 1)


@pytest.mark.parametrize("value", [-0.1, 1.5])
def test_opacity_out_of_range(value):
    with pytest.raises(InvalidRangeError):
        opacity(RED, value)


def test_merge_with_fast_pattern_string(a, b):
    p = merge(a, b, "stripesV>")
    assert p.kind is PatternKind.STRIPES
    assert p.vertical and p.shift
    assert p.slot_1 is a and p.slot_2 is b


def test_shared_slot_is_not_copied(a, b):
    shared = merge(a, b, "grid")
    parent = merge(shared, Color(1, 2, 3), "stripes")
    assert parent.slot_1 is shared
