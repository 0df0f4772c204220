"""RGB colors, mixing and the stock palette."""

import numbers
import random
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from .errors import InvalidColorError, InvalidRangeError


# ---------------------------- Color -----------------------------------------

@dataclass(frozen=True)
class Color:
    """An immutable RGB color with integer channels in 0..255."""
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidColorError(f"channel {name} must be an integer, got {value!r}")
            if value < 0 or value > 255:
                raise InvalidColorError(f"channel {name}={value} is outside 0..255")
            # numpy integers are normalised to plain ints
            object.__setattr__(self, name, int(value))

    @classmethod
    def from_sequence(cls, values: Sequence[int], brightness: float = 1.0) -> "Color":
        """Build a color from exactly three channel values, optionally dimmed."""
        values = list(values)
        if len(values) != 3:
            raise InvalidColorError(f"a color needs exactly 3 channels, got {len(values)}")
        color = cls(*values)
        if brightness != 1.0:
            color = color.with_brightness(brightness)
        return color

    @classmethod
    def parse(cls, text: str, brightness: float = 1.0) -> "Color":
        """Parse an ``"r g b"`` string."""
        try:
            values = [int(part) for part in text.split()]
        except ValueError as e:
            raise InvalidColorError(f"Invalid color string: {text!r}") from e
        return cls.from_sequence(values, brightness)

    @classmethod
    def from_hex(cls, hex_color: str) -> "Color":
        """Convert '#RRGGBB' or 'RRGGBB'. Handles shorthand '#RGB' too."""
        return cls(*hex_to_rgb(hex_color))

    def with_brightness(self, brightness: float) -> "Color":
        """Scale every channel by ``brightness`` (0.0 darkest, 1.0 unchanged).

        Channels are truncated toward zero.
        """
        if brightness < 0.0 or brightness > 1.0:
            raise InvalidColorError(f"brightness must be between 0.0 and 1.0, got {brightness}")
        return Color(*(int(c * brightness) for c in self))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __iter__(self) -> Iterator[int]:
        return iter((self.r, self.g, self.b))

    def __str__(self) -> str:
        return f"{self.r} {self.g} {self.b}"


# ---------------------------- Utilities ------------------------------------

def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' to (r,g,b). Handles shorthand '#RGB' too."""
    h = hex_color.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c*2 for c in h)
    if len(h) != 6:
        raise InvalidColorError(f"Invalid hex color: {hex_color!r}")
    try:
        r = int(h[0:2], 16)
        g = int(h[2:4], 16)
        b = int(h[4:6], 16)
    except ValueError as e:
        raise InvalidColorError(f"Invalid hex color: {hex_color!r}") from e
    return (r, g, b)


def mix(color_1: Color, color_2: Color, balance: float = 0.5) -> Color:
    """Blend two colors; balance 0.0 gives color_1, 1.0 gives color_2."""
    if balance < 0.0 or balance > 1.0:
        raise InvalidRangeError(
            f"balance should be a value between 0.0 (color_1) and 1.0 (color_2), got {balance}"
        )
    return Color(*(int(a * (1.0 - balance) + b * balance) for a, b in zip(color_1, color_2)))


def rng_from_seed(seed: Optional[int]) -> random.Random:
    """Return a Random instance from seed (or system)."""
    r = random.Random()
    if seed is not None:
        r.seed(int(seed))
    else:
        r.seed()
    return r


# ---------------------------- Palette ---------------------------------------

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
YELLOW = Color(255, 255, 0)
PURPLE = Color(255, 0, 255)
TURQUOISE = Color(0, 255, 255)
ORANGE = Color(255, 100, 0)
BROWN = Color(170, 80, 0)
PINK = Color(255, 105, 180)
BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
LIGHT_GREY = Color(210, 210, 210)
GREY = Color(140, 140, 140)
DARK_GREY = Color(70, 70, 70)
LIGHT_BLUE = mix(BLUE, WHITE)

NAMED_COLORS = {
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "yellow": YELLOW,
    "purple": PURPLE,
    "turquoise": TURQUOISE,
    "orange": ORANGE,
    "brown": BROWN,
    "pink": PINK,
    "black": BLACK,
    "white": WHITE,
    "light_grey": LIGHT_GREY,
    "grey": GREY,
    "dark_grey": DARK_GREY,
    "light_blue": LIGHT_BLUE,
}

# Colors random_color() picks from when not truly random.
PALETTE = (RED, GREEN, BLUE, YELLOW, PURPLE, TURQUOISE, ORANGE, BROWN, PINK, BLACK, WHITE, GREY)


def random_color(rng: Optional[random.Random] = None, true_random: bool = False) -> Color:
    """Pick a color from PALETTE, or any RGB value when true_random is set."""
    rng = rng or rng_from_seed(None)
    if true_random:
        return Color(rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255))
    return rng.choice(PALETTE)


def parse_color(text: str) -> Color:
    """Accept a palette name, a hex string or an ``"r g b"`` triple."""
    key = text.strip().lower()
    if key in NAMED_COLORS:
        return NAMED_COLORS[key]
    if key.startswith("#"):
        return Color.from_hex(key)
    return Color.parse(key)
