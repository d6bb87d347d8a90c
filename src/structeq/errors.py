"""
Errors raised by the structeq package
"""

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any


_MAX_STR_LEN = 1000


def _limit_str(a: 'Any', limit: 'int' = _MAX_STR_LEN) -> 'str':
    """repr() of a, cut down to at most `limit` characters"""
    a_str = repr(a)
    return a_str if len(a_str) < limit else (a_str[:limit] + '...')


class EqualityError(Exception):
    """Error raised whenever an :func:`~structeq.equality.is_equal` check returns false and `raise_err=True`"""

    def __init__(self, a, b, message=None):
        message = "Values are not equal" if message is None else message
        super().__init__("Object a (%s) is not equal to object b (%s)\na: %s\nb: %s\nMessage: %s" % \
            (repr(type(a).__name__), repr(type(b).__name__), _limit_str(a), _limit_str(b), message))


class EqualityCheckingError(Exception):
    """Error raised whenever there is an unexpected problem attempting to check equality between two objects"""


class TrackerStateError(RuntimeError):
    """Error raised when an :class:`~structeq.tracker.EqualityTracker` pair is moved through an illegal transition"""
