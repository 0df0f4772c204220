"""Exception types raised by ppmlab.

Every error derives from :class:`PpmlabError` and from the builtin exception
that best describes it, so callers can catch either.
"""


class PpmlabError(Exception):
    """Base class for all ppmlab errors."""


class InvalidColorError(PpmlabError, ValueError):
    """Wrong channel count, a non-integer channel or a channel outside 0..255."""


class InvalidCoordinateError(PpmlabError, IndexError):
    """Pixel address outside the canvas."""


class InvalidProviderTypeError(PpmlabError, TypeError):
    """A value that is neither a Color nor a Pattern was used as a color provider."""


class UnknownPatternKindError(PpmlabError, ValueError):
    """The pattern name is not one of the recognized kinds."""


class MalformedFastPatternError(PpmlabError, ValueError):
    """A fast-pattern token could not be parsed."""


class InvalidRangeError(PpmlabError, ValueError):
    """Gradient with from > to, an unresolved auto range, or an opacity/balance outside 0..1."""


class InvalidPatternError(PpmlabError, ValueError):
    """A pattern node is internally inconsistent and cannot be evaluated."""


class SerializationError(PpmlabError, OSError):
    """The canvas could not be written to disk."""


class SceneError(PpmlabError, ValueError):
    """A scene description is malformed."""
