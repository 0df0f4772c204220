"""Parser for fast patterns, the one-token pattern notation.

A fast pattern starts with a kind name and may be followed, in any order, by

- ``H`` or ``V``: horizontal (the default) or vertical orientation,
- ``>``: shift the pattern by one unit,
- ``=`` and a parameter: ``auto``, a ``from-to`` integer range, or a decimal
  opacity. The parameter runs to the end of the token.

Examples: ``"gradientV=100-700"``, ``"stripesV>"``, ``"opacity=0.34"``,
``"customV=auto"``.

The ``custom`` kind is recognized by name only; its predicate has to be
supplied in code.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidRangeError, MalformedFastPatternError
from .kinds import PatternKind

logger = logging.getLogger(__name__)

ORIENTATION_MARKERS = "HV"
SHIFT_MARKER = ">"
PARAMETER_MARKER = "="
AUTO = "auto"


@dataclass(frozen=True)
class FastPattern:
    kind: PatternKind
    horizontal: bool = True
    shift: bool = False
    from_: int = 0
    to: int = 0
    opacity: Optional[float] = None
    auto: bool = False

    @property
    def vertical(self) -> bool:
        return not self.horizontal


def _parse_parameter(value: str, token: str) -> dict:
    if value == AUTO:
        return {"auto": True}
    parts = value.split("-")
    if len(parts) == 2:
        try:
            return {"from_": int(parts[0]), "to": int(parts[1])}
        except ValueError:
            pass
    try:
        opacity = float(value)
    except ValueError:
        opacity = None
    if opacity is None or not math.isfinite(opacity):
        raise MalformedFastPatternError(
            f"from-to / opacity was not declared properly in fast pattern {token!r}"
        )
    return {"opacity": opacity}


def parse_fast_pattern(token: str) -> FastPattern:
    """Parse ``token`` into a :class:`FastPattern`.

    Raises MalformedFastPatternError for unparsable tokens,
    UnknownPatternKindError for unknown kind names and InvalidRangeError
    for a reversed gradient range or a negative opacity.
    """
    if not isinstance(token, str) or not token:
        raise MalformedFastPatternError(f"fast pattern must be a non-empty string, got {token!r}")

    boundary = None
    horizontal = None
    shift = False
    params = {}
    for i, ch in enumerate(token):
        if ch in ORIENTATION_MARKERS:
            if boundary is None:
                boundary = i
            if horizontal is None:
                horizontal = ch == "H"
        elif ch == SHIFT_MARKER:
            if boundary is None:
                boundary = i
            shift = True
        elif ch == PARAMETER_MARKER:
            if boundary is None:
                boundary = i
            params = _parse_parameter(token[i + 1:], token)
            break
        elif boundary is not None:
            raise MalformedFastPatternError(f"unexpected {ch!r} in fast pattern {token!r}")

    name = token if boundary is None else token[:boundary]
    kind = PatternKind.parse(name)
    parsed = FastPattern(
        kind=kind,
        horizontal=True if horizontal is None else horizontal,
        shift=shift,
        **params,
    )
    if kind is PatternKind.GRADIENT and parsed.from_ > parsed.to:
        raise InvalidRangeError(f"from must be smaller than to in {token!r}")
    if kind is PatternKind.OPACITY and parsed.opacity is not None and parsed.opacity < 0:
        raise InvalidRangeError(f"opacity can't be below 0.0 in {token!r}")
    logger.debug("parsed fast pattern %r -> %s", token, parsed)
    return parsed
