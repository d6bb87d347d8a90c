"""
Cycle detection and memoization of equality results between pairs of objects.

Every pair of (non-primitive) objects compared is recorded here keyed by the ordered pair of their id()'s. A pair is
marked in-progress before its contents are compared, and resolved once the comparison finishes. Finding an
in-progress pair again means we came back around a cycle, which is optimistically treated as equal: the cycle can only
close on the same pair if both structures have lined up the whole way there.

The optimistic value can leak into other verdicts, True or False (a set comparison can use up the wrong candidate on
an optimistic True and then fail). So a verdict reached after looking at an in-progress pair deeper than its own is
only provisional: it is kept for as long as that pair is in progress, and retracted once it resolves either way. A
verdict that never looked at an enclosing pair is final.
"""

import logging
from enum import Enum
from .errors import TrackerStateError
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Optional, List, Tuple, Dict

    PairKey = Tuple[int, int]


_LOGGER = logging.getLogger(__name__)


class PairState(Enum):
    ABSENT = 'absent'
    IN_PROGRESS = 'in_progress'
    RESOLVED_TRUE = 'resolved_true'
    RESOLVED_FALSE = 'resolved_false'


class _Frame:
    """An in-progress pair on the tracker's stack"""

    __slots__ = ('key', 'depth', 'low', 'provisional')

    def __init__(self, key: 'PairKey', depth: 'int') -> None:
        self.key = key
        self.depth = depth

        # Shallowest in-progress pair this one's comparison has relied on so far
        self.low = depth

        # Pairs whose verdicts rest on this one being equal
        self.provisional: 'List[PairKey]' = []


class EqualityTracker:
    """Tracks which pairs of objects have been (or are being) compared, and what the results were.

    A fresh tracker is made for each top-level call to :func:`~structeq.equality.is_equal`. One can be made and passed
    to :func:`~structeq.equality.is_equal_with_shared_tracker` instead to reuse results across many comparisons of
    values that share substructure.

    NOTE: the tracker keeps a reference to every object it has recorded, that way no id() can be reused by a new object
    while the tracker is alive. Drop the tracker (or call clear()) to release them.

    NOTE: there is no locking, don't use one tracker from multiple threads at once.
    """

    def __init__(self) -> None:
        # Each entry also holds the stack depth of the in-progress pair it rests on, None once it is final
        self._entries: 'Dict[PairKey, Tuple[Any, Any, PairState, Optional[int]]]' = {}
        self._frames: 'List[_Frame]' = []

    def __len__(self) -> 'int':
        return len(self._entries)

    def __repr__(self) -> 'str':
        return "%s(pairs=%d, in_progress=%d)" % (self.__class__.__name__, len(self._entries), len(self._frames))

    @property
    def depth(self) -> 'int':
        """The number of pairs currently in progress"""
        return len(self._frames)

    def state(self, a: 'Any', b: 'Any') -> 'PairState':
        """Returns the current state of the ordered pair (a, b)"""
        entry = self._entries.get((id(a), id(b)))
        return PairState.ABSENT if entry is None else entry[2]

    def lookup(self, a: 'Any', b: 'Any') -> 'Optional[bool]':
        """Returns the known result for the pair (a, b): True/False if resolved, True if in progress, None if unseen.

        Looking up an in-progress or provisional pair makes the innermost in-progress pair's own verdict provisional.
        """
        entry = self._entries.get((id(a), id(b)))
        if entry is None:
            return None

        state, rests_on = entry[2:]
        if rests_on is not None and self._frames:
            frame = self._frames[-1]
            frame.low = min(frame.low, rests_on)
        return state is not PairState.RESOLVED_FALSE

    def begin(self, a: 'Any', b: 'Any') -> 'None':
        """Marks the pair (a, b) as in progress. It must be resolved (or abandoned) before any enclosing pair is"""
        key = (id(a), id(b))
        if key in self._entries:
            raise TrackerStateError("Cannot begin pair of %s and %s, it is already %s" %
                (repr(type(a).__name__), repr(type(b).__name__), self._entries[key][2].value))
        depth = len(self._frames)
        self._entries[key] = (a, b, PairState.IN_PROGRESS, depth)
        self._frames.append(_Frame(key, depth))

    def resolve(self, a: 'Any', b: 'Any', result: 'bool') -> 'bool':
        """Stores the result for the in-progress pair (a, b) and returns it.

        Every verdict that rested on this pair is retracted. If this pair's own verdict rested on an enclosing pair, it
        is stored as provisional on that pair, and the enclosing pair's verdict becomes provisional in turn.
        """
        frame = self._pop_frame(a, b)
        result = bool(result)
        self._retract(frame.provisional)

        state = PairState.RESOLVED_TRUE if result else PairState.RESOLVED_FALSE
        if frame.low < frame.depth:
            self._entries[frame.key] = (a, b, state, frame.low)
            self._frames[frame.low].provisional.append(frame.key)
            parent = self._frames[-1]
            parent.low = min(parent.low, frame.low)
        else:
            self._entries[frame.key] = (a, b, state, None)

        return result

    def abandon(self, a: 'Any', b: 'Any') -> 'None':
        """Forgets the in-progress pair (a, b) and every verdict that rested on it. Used when a comparison raises"""
        frame = self._pop_frame(a, b)
        del self._entries[frame.key]
        self._retract(frame.provisional)

    def clear(self) -> 'None':
        """Forgets every pair, releasing all references held by this tracker"""
        if self._frames:
            raise TrackerStateError("Cannot clear tracker while %d pair(s) are still in progress" % len(self._frames))
        _LOGGER.debug("Clearing tracker holding %d pair(s)", len(self._entries))
        self._entries.clear()

    def _pop_frame(self, a: 'Any', b: 'Any') -> '_Frame':
        key = (id(a), id(b))
        if not self._frames or self._frames[-1].key != key:
            raise TrackerStateError("Pair of %s and %s is not the innermost in-progress pair" %
                (repr(type(a).__name__), repr(type(b).__name__)))
        return self._frames.pop()

    def _retract(self, keys: 'List[PairKey]') -> 'None':
        for key in keys:
            del self._entries[key]
        if keys:
            _LOGGER.debug("Retracted %d provisional verdict(s) after the pair they rested on was resolved", len(keys))
