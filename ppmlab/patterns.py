"""Patterns: color providers that combine two other providers per pixel.

A color provider is either a flat :class:`~ppmlab.colors.Color` or a
:class:`Pattern`. Patterns nest freely, so a slot may hold another pattern,
and a single pattern instance may be shared by several parents or drawing
calls. Pattern nodes are immutable; gradients in auto mode get their range
from a :class:`~ppmlab.autorange.RangeTable` at draw time instead of storing
it on the node.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple, Union

from .colors import BLACK, WHITE, Color, mix
from .errors import InvalidPatternError, InvalidProviderTypeError, InvalidRangeError
from .fastpattern import parse_fast_pattern
from .kinds import KIND_SELECTORS, PatternKind

Predicate = Callable[[int, int], bool]

DEFAULT_OPACITY = 0.5


def check_provider(value, name: str = "color_provider") -> None:
    """Raise InvalidProviderTypeError unless value is a Color or a Pattern."""
    if not isinstance(value, (Color, Pattern)):
        raise InvalidProviderTypeError(
            f"{name} can only be a Pattern or a Color, got {type(value).__name__}"
        )


@dataclass(frozen=True, eq=False)
class Pattern:
    """A node mixing ``slot_1`` and ``slot_2`` according to ``kind``.

    Nodes compare and hash by identity, which is what the range table keys on.

    from_/to: coordinate range of a gradient (ignored when auto is set).
    opacity: weight of the existing canvas pixel for the opacity kind.
    predicate: (x, y) -> bool selector for the custom kind.
    """
    slot_1: "ColorProvider"
    slot_2: "ColorProvider"
    kind: PatternKind = PatternKind.NORMAL
    horizontal: bool = True
    shift: bool = False
    from_: int = 0
    to: int = 0
    auto: bool = False
    opacity: float = DEFAULT_OPACITY
    predicate: Optional[Predicate] = None

    def __post_init__(self) -> None:
        check_provider(self.slot_1, "slot_1")
        check_provider(self.slot_2, "slot_2")
        object.__setattr__(self, "kind", PatternKind.parse(self.kind))
        if self.kind is PatternKind.GRADIENT and self.from_ > self.to:
            raise InvalidRangeError(f"from must be smaller than to, got {self.from_} > {self.to}")
        if self.kind is PatternKind.OPACITY and not 0.0 <= self.opacity <= 1.0:
            raise InvalidRangeError(f"opacity must be between 0.0 and 1.0, got {self.opacity}")
        if self.predicate is not None and not callable(self.predicate):
            raise InvalidPatternError(f"predicate must be callable, got {self.predicate!r}")

    @classmethod
    def from_fast_pattern(
        cls,
        slot_1: "ColorProvider",
        slot_2: "ColorProvider",
        fast_pattern: str,
        predicate: Optional[Predicate] = None,
    ) -> "Pattern":
        """Build a pattern from a fast-pattern token such as ``"gradientV=auto"``."""
        fp = parse_fast_pattern(fast_pattern)
        return cls(
            slot_1, slot_2,
            kind=fp.kind,
            horizontal=fp.horizontal,
            shift=fp.shift,
            from_=fp.from_,
            to=fp.to,
            auto=fp.auto,
            opacity=DEFAULT_OPACITY if fp.opacity is None else fp.opacity,
            predicate=predicate,
        )

    @property
    def vertical(self) -> bool:
        return not self.horizontal

    def with_predicate(self, predicate: Predicate) -> "Pattern":
        """Copy of this node carrying ``predicate``."""
        return replace(self, predicate=predicate)

    def range_in(self, ranges=None) -> Tuple[int, int]:
        """The (from, to) range in effect, looked up in ``ranges`` for auto nodes."""
        if ranges is not None:
            return ranges.range_of(self)
        if self.auto:
            raise InvalidRangeError("auto range has not been resolved by a drawing operation")
        return (self.from_, self.to)

    def evaluate(self, x: int, y: int, ranges=None, canvas=None) -> Color:
        """Color of pixel (x, y).

        ``ranges`` supplies auto ranges (a RangeTable); ``canvas`` supplies the
        backdrop the opacity kind blends with.
        """
        px, py = x, y
        if self.shift:
            px += 1
            py += 1
        if self.horizontal:
            px, py = py, px

        kind = self.kind
        if kind is PatternKind.NORMAL:
            return evaluate(self.slot_1, px, py, ranges, canvas)
        if kind is PatternKind.OPACITY:
            if canvas is None:
                raise InvalidPatternError("an opacity pattern needs a canvas to blend with")
            return mix(evaluate(self.slot_1, px, py, ranges, canvas), canvas.get_pixel(x, y), self.opacity)
        if kind is PatternKind.GRADIENT:
            return self._gradient(px, py, ranges, canvas)
        if kind is PatternKind.CUSTOM:
            if self.predicate is None:
                raise InvalidPatternError("custom pattern has no predicate")
            first = self.predicate(px, py)
        else:
            selector = KIND_SELECTORS.get(kind)
            if selector is None:
                raise InvalidPatternError(f"{kind!r} is an unknown pattern")
            first = selector(px, py, self.shift)
        return evaluate(self.slot_1 if first else self.slot_2, px, py, ranges, canvas)

    def _gradient(self, x: int, y: int, ranges, canvas) -> Color:
        lo, hi = self.range_in(ranges)
        if hi == lo:
            balance = 0.0 if x <= lo else 1.0
        else:
            balance = max(min((x - lo) / (hi - lo), 1.0), 0.0)
        # Chained gradients already carry their own ratio, so blend them evenly.
        if is_gradient(self.slot_1) and is_gradient(self.slot_2):
            balance = 0.5
        return mix(
            evaluate(self.slot_1, x, y, ranges, canvas),
            evaluate(self.slot_2, x, y, ranges, canvas),
            balance,
        )


ColorProvider = Union[Color, Pattern]


def is_gradient(provider: ColorProvider) -> bool:
    return isinstance(provider, Pattern) and provider.kind is PatternKind.GRADIENT


def evaluate(provider: ColorProvider, x: int, y: int, ranges=None, canvas=None) -> Color:
    """Resolve any color provider to the Color of pixel (x, y)."""
    if isinstance(provider, Color):
        return provider
    if isinstance(provider, Pattern):
        return provider.evaluate(x, y, ranges, canvas)
    raise InvalidProviderTypeError(
        f"color_provider can only be a Pattern or a Color, got {type(provider).__name__}"
    )


# ---------------------------- Builders --------------------------------------

def merge(
    slot_1: ColorProvider,
    slot_2: ColorProvider,
    pattern: Union[str, Predicate],
) -> Pattern:
    """Combine two providers with a fast pattern, or with a custom predicate."""
    if callable(pattern):
        return Pattern(slot_1, slot_2, kind=PatternKind.CUSTOM, predicate=pattern)
    return Pattern.from_fast_pattern(slot_1, slot_2, pattern)


def gradient(
    slot_1: ColorProvider,
    slot_2: ColorProvider,
    from_: Optional[int] = None,
    to: Optional[int] = None,
    horizontal: bool = True,
) -> Pattern:
    """Gradient from slot_1 to slot_2; auto-ranged unless from_ and to are given."""
    if from_ is None or to is None:
        return Pattern(slot_1, slot_2, kind=PatternKind.GRADIENT, horizontal=horizontal, auto=True)
    return Pattern(slot_1, slot_2, kind=PatternKind.GRADIENT, horizontal=horizontal, from_=from_, to=to)


def opacity(provider: ColorProvider, opacity: float = DEFAULT_OPACITY) -> Pattern:
    """Blend provider over the existing canvas; 0.0 covers, 1.0 is invisible."""
    return Pattern(provider, WHITE, kind=PatternKind.OPACITY, opacity=opacity)


def transparent() -> Pattern:
    """A provider that leaves the canvas unchanged."""
    return opacity(WHITE, 1.0)


def pattern_from_color(color: Color) -> Pattern:
    return Pattern(color, BLACK, kind=PatternKind.NORMAL)
