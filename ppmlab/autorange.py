"""Auto-range resolution for patterns.

A gradient's range only means something relative to the bounding box of one
drawing call, yet patterns are shared values. Drawing operations therefore
bind the range of every auto node right before they draw, and the binding
lives in a :class:`RangeTable` rather than on the node.

Plain fills resolve without locking, so the next call with another box
rebinds. Composite operations (a border's four rectangles, a cross's two
bars) resolve once with ``lock=True`` against the logical box, draw their
parts, then unlock. Parts drawn in between see the locked range instead of
deriving a smaller one from their own rectangle.

The table assumes strictly sequential use. Resolving a shared node from two
overlapping operations at once is not supported.
"""

import logging
import weakref
from contextlib import contextmanager
from typing import Iterable, Iterator, List, MutableMapping, MutableSet, Tuple

from .colors import Color
from .errors import InvalidProviderTypeError, InvalidRangeError
from .patterns import ColorProvider, Pattern

logger = logging.getLogger(__name__)

Range = Tuple[int, int]


class RangeTable:
    """Auto ranges bound by drawing operations, keyed by pattern identity.

    Entries are weak, so a pattern nothing else refers to drops out.
    """

    def __init__(self) -> None:
        self._bound: MutableMapping[Pattern, Range] = weakref.WeakKeyDictionary()
        self._locked: MutableSet[Pattern] = weakref.WeakSet()

    def resolve(
        self,
        provider: ColorProvider,
        x_range: Range,
        y_range: Range,
        lock: bool = False,
    ) -> List[Pattern]:
        """Bind every unlocked auto node under ``provider`` to the box.

        Horizontal nodes take ``y_range``, vertical nodes ``x_range``. Both
        slots are always visited, because which one a pixel ends up using is
        not known in advance. Returns the nodes locked by this call.
        """
        locked: List[Pattern] = []
        self._visit(provider, tuple(x_range), tuple(y_range), lock, locked)
        if locked:
            logger.debug("locked %d auto pattern(s) to x=%s y=%s", len(locked), x_range, y_range)
        return locked

    def _visit(self, provider, x_range: Range, y_range: Range, lock: bool, locked: List[Pattern]) -> None:
        if isinstance(provider, Color):
            return
        if not isinstance(provider, Pattern):
            raise InvalidProviderTypeError(
                f"color_provider can only be a Pattern or a Color, got {type(provider).__name__}"
            )
        self._visit(provider.slot_1, x_range, y_range, lock, locked)
        self._visit(provider.slot_2, x_range, y_range, lock, locked)
        if not self.is_auto(provider):
            return
        lo, hi = y_range if provider.horizontal else x_range
        self._bound[provider] = (lo, hi)
        if lock:
            self._locked.add(provider)
            locked.append(provider)

    def unlock(self, nodes: Iterable[Pattern]) -> None:
        """Make previously locked nodes resolvable again."""
        for node in nodes:
            self._locked.discard(node)

    @contextmanager
    def locked(self, provider: ColorProvider, x_range: Range, y_range: Range) -> Iterator[List[Pattern]]:
        """Lock ``provider`` to the box for the duration of the block."""
        nodes = self.resolve(provider, x_range, y_range, lock=True)
        try:
            yield nodes
        finally:
            self.unlock(nodes)

    def is_locked(self, pattern: Pattern) -> bool:
        return pattern in self._locked

    def is_auto(self, pattern: Pattern) -> bool:
        """True while the node still takes its range from the next resolve."""
        return pattern.auto and pattern not in self._locked

    def range_of(self, pattern: Pattern) -> Range:
        if not pattern.auto:
            return (pattern.from_, pattern.to)
        if pattern not in self._bound:
            raise InvalidRangeError("auto range has not been resolved by a drawing operation")
        return self._bound[pattern]

    def clear(self) -> None:
        self._bound.clear()
        self._locked.clear()
