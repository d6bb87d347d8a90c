"""
Utils for determining deep structural equality of objects

Handled types:
    - singleton objects (None, Ellipsis, NotImplemented, UNDEFINED, HOLE) and enum members, by identity
    - bool
    - int, float, complex, Decimal, Fraction, np.number (all comparable with each other, NaN's are equal)
    - str, bytes, range
    - functions, methods, classes and other callables, by reference
    - list, tuple, deque, object numpy arrays and other sequences (with HOLE's for sparse sequences)
    - datetime, date, np.datetime64
    - compiled regex patterns
    - bytearray, memoryview, array.array, numpy arrays (byte-for-byte)
    - set, frozenset, dict views (unordered)
    - dict and other mappings (unordered)
    - subclasses of int, float, complex, str, bytes ('boxed' primitives)
    - falls back on comparing attributes (__dict__ and __slots__), or built-in __eq__ if an object has none

Self-referencing objects are handled: two cyclic structures are equal if their cycles line up.
"""

import functools
from .classify import Category, classify, is_nan, is_primitive, unbox
from .comparators import compare_primitive, compare_callable, compare_sequence, compare_instant, compare_pattern, \
    compare_buffer, compare_set, compare_map, compare_boxed, compare_structured
from .errors import EqualityError
from .options import EqualityOptions
from .tracker import EqualityTracker
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Optional


def is_equal(a: 'Any', b: 'Any', options: 'Optional[EqualityOptions]' = None, raise_err: 'bool' = False,
    **option_flags: 'bool') -> 'bool':
    """
    Determines whether a and b are deeply, structurally equal. Neither object is modified.

    Args:
        a (Any): object to check equality
        b (Any): object to check equality
        options (Optional[EqualityOptions]): the semantic relaxations to use. Defaults to None (all off).
        raise_err (bool): if True, then an ``EqualityError`` will be raised whenever `a` and `b` are unequal instead of
            returning False. Defaults to False.
        option_flags (bool): any of the fields of :class:`~structeq.options.EqualityOptions`, which override the ones
            in `options` (eg: ``is_equal(a, b, strict_sparse_arrays=True)``)

    Returns:
        bool: True if a and b are equal, False otherwise
    """
    return is_equal_with_shared_tracker(a, b, EqualityTracker(), options, raise_err, **option_flags)


def is_equal_with_shared_tracker(a: 'Any', b: 'Any', tracker: 'EqualityTracker',
    options: 'Optional[EqualityOptions]' = None, raise_err: 'bool' = False, **option_flags: 'bool') -> 'bool':
    """
    Same as :func:`is_equal`, but uses (and fills) the given tracker, so that results for pairs of objects that were
    already compared can be reused across many calls.

    NOTE: a result cached in the tracker was computed with whatever options were used at the time. Don't share one
    tracker between calls using different options.
    """
    if not isinstance(tracker, EqualityTracker):
        raise TypeError("`tracker` must be an EqualityTracker, not %s" % repr(type(tracker).__name__))
    options = EqualityOptions.resolve(options, **option_flags)

    if _equal(a, b, tracker, options):
        return True
    if raise_err:
        raise EqualityError(a, b)
    return False


def all_equal(*values: 'Any', options: 'Optional[EqualityOptions]' = None,
    tracker: 'Optional[EqualityTracker]' = None, raise_err: 'bool' = False, **option_flags: 'bool') -> 'bool':
    """
    Checks that every value is equal to the first one, sharing one tracker for all of the comparisons.

    Returns True if there are fewer than two values.
    """
    if tracker is None:
        tracker = EqualityTracker()
    elif not isinstance(tracker, EqualityTracker):
        raise TypeError("`tracker` must be an EqualityTracker or None, not %s" % repr(type(tracker).__name__))
    options = EqualityOptions.resolve(options, **option_flags)

    for i, value in enumerate(values[1:], start=1):
        if not _equal(values[0], value, tracker, options):
            if raise_err:
                raise EqualityError(values[0], value, "Value at position %d is not equal to the first value" % i)
            return False
    return True


def _equal(a, b, tracker, options):
    """The recursive engine. Every nested comparison comes back through here"""
    # Do a quick first check for 'is' as they should always be equal, no matter what
    if a is b:
        return True

    # NaN != NaN, but they should be equal here
    if is_nan(a) and is_nan(b):
        return True

    if options.normalize_boxed_primitives:
        a, b = unbox(a), unbox(b)
        if is_primitive(a) and is_primitive(b):
            return compare_primitive(a, b)

    # A primitive can only ever be equal to another primitive
    a_primitive, b_primitive = is_primitive(a), is_primitive(b)
    if a_primitive or b_primitive:
        return a_primitive and b_primitive and compare_primitive(a, b)

    if callable(a) or callable(b):
        return compare_callable(a, b)

    # Have we seen this pair before? (in progress means we went around a cycle)
    known = tracker.lookup(a, b)
    if known is not None:
        return known

    tracker.begin(a, b)
    try:
        result = _dispatch(a, b, tracker, options)
    except BaseException:
        tracker.abandon(a, b)
        raise
    return tracker.resolve(a, b, result)


def _dispatch(a, b, tracker, options):
    """Picks the comparator for two non-primitive, non-callable objects"""
    category = classify(a)
    if category is not classify(b):
        return False

    recurse = functools.partial(_equal, tracker=tracker, options=options)

    if category is Category.SEQUENCE:
        return compare_sequence(a, b, recurse, options)
    elif category is Category.INSTANT:
        return compare_instant(a, b)
    elif category is Category.PATTERN:
        return compare_pattern(a, b)
    elif category is Category.FIXED_BUFFER:
        return compare_buffer(a, b)
    elif category is Category.ORDERED_SET:
        return compare_set(a, b, recurse, options)
    elif category is Category.ORDERED_MAP:
        return compare_map(a, b, recurse, options)
    elif category is Category.BOXED_PRIMITIVE:
        return compare_boxed(a, b, recurse, options)
    else:
        return compare_structured(a, b, recurse, options)
