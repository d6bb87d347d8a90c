"""
One equality rule per category of value.

Container comparators take a `recurse(x, y) -> bool` callable which they use for every nested comparison, that way
all sub-objects go back through the engine (and its tracker) in :mod:`structeq.equality`.
"""

import array
import datetime
import logging
import numpy as np
from types import BuiltinMethodType, MethodType, MethodWrapperType
from .classify import is_nan, is_primitive, primitive_kind, unbox
from .errors import EqualityCheckingError, _limit_str
from .pytypes import HOLE, UNDEFINED
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Set, Tuple
    from .options import EqualityOptions

    Recurse = Callable[[Any, Any], bool]


_LOGGER = logging.getLogger(__name__)

_BuiltinBoundTypes = (BuiltinMethodType, MethodWrapperType)


def compare_primitive(a: 'Any', b: 'Any') -> 'bool':
    """Primitives are equal if they are the same kind of primitive and compare equal (two NaN's are equal).

    NOTE: 0.0 and -0.0 are equal, same as with '=='
    """
    if a is b:
        return True
    if is_nan(a) or is_nan(b):
        return is_nan(a) and is_nan(b)

    kind = primitive_kind(a)
    if kind != primitive_kind(b) or kind == 'identity':
        return False
    return bool(a == b)


def compare_callable(a: 'Any', b: 'Any') -> 'bool':
    """Callables are only equal by reference.

    A bound method's reference is its (function, self) pair. Methods bound by C code (eg: `[].append`) have no
    function object to check, so they go by (self, name) instead.
    """
    if a is b:
        return True
    if isinstance(a, MethodType) and isinstance(b, MethodType):
        return a.__func__ is b.__func__ and a.__self__ is b.__self__
    if isinstance(a, _BuiltinBoundTypes) and isinstance(b, _BuiltinBoundTypes):
        return type(a) is type(b) and a.__self__ is b.__self__ and a.__name__ == b.__name__
    return False


def compare_sequence(a: 'Sequence', b: 'Sequence', recurse: 'Recurse', options: 'EqualityOptions') -> 'bool':
    """Element-wise comparison of two sequences of the same length.

    If `options.strict_sparse_arrays`, a HOLE only matches another HOLE. Otherwise holes read as UNDEFINED.
    """
    if len(a) != len(b):
        return False

    for a_val, b_val in zip(a, b):
        if options.strict_sparse_arrays:
            if (a_val is HOLE) != (b_val is HOLE):
                return False
            if a_val is HOLE:
                continue
        else:
            a_val, b_val = _read_slot(a_val), _read_slot(b_val)

        if not recurse(a_val, b_val):
            return False

    return True


def _read_slot(value):
    return UNDEFINED if value is HOLE else value


def buffer_kind(buf: 'Any') -> 'Tuple':
    """The element-kind tag of a fixed buffer: its type, element type, and shape where it has one"""
    if isinstance(buf, np.ndarray):
        return type(buf), buf.dtype, buf.shape
    if isinstance(buf, memoryview):
        return memoryview, buf.format, buf.itemsize, buf.shape
    if isinstance(buf, array.array):
        return type(buf), buf.typecode
    return type(buf), 'B'


def _buffer_nbytes(buf):
    if isinstance(buf, (np.ndarray, memoryview)):
        return buf.nbytes
    if isinstance(buf, array.array):
        return len(buf) * buf.itemsize
    return len(buf)


def _buffer_bytes(buf):
    if isinstance(buf, (np.ndarray, memoryview, array.array)):
        return buf.tobytes()
    return bytes(buf)


def compare_buffer(a: 'Any', b: 'Any') -> 'bool':
    """Buffers are equal if they have the same element kind and exactly the same bytes (C order)"""
    if buffer_kind(a) != buffer_kind(b) or _buffer_nbytes(a) != _buffer_nbytes(b):
        return False
    return _buffer_bytes(a) == _buffer_bytes(b)


def _instant_kind(value):
    if isinstance(value, np.datetime64):
        return 'datetime64'
    if isinstance(value, datetime.datetime):
        return 'datetime'
    return 'date'


def compare_instant(a: 'Any', b: 'Any') -> 'bool':
    """Instants are equal if they are the same kind of instant and denote the same point in time"""
    kind = _instant_kind(a)
    if kind != _instant_kind(b):
        return False

    # NaT is to datetime64 what NaN is to floats
    if kind == 'datetime64' and (np.isnat(a) or np.isnat(b)):
        return bool(np.isnat(a) and np.isnat(b))

    # Naive and aware datetimes are never equal, aware ones are compared in UTC
    return bool(a == b)


def compare_pattern(a: 'Any', b: 'Any') -> 'bool':
    return a.pattern == b.pattern and a.flags == b.flags


def _find_unused(candidates: 'Sequence', used: 'Set[int]', predicate: 'Callable[[Any], bool]') -> 'Optional[int]':
    """Index of the first candidate not in `used` that satisfies predicate, or None"""
    return next((i for i, c in enumerate(candidates) if i not in used and predicate(c)), None)


def compare_set(a: 'Iterable', b: 'Iterable', recurse: 'Recurse', options: 'EqualityOptions') -> 'bool':
    """Unordered comparison of two sets.

    Each element of `a` is paired up with the first unused element of `b` that is equal to it (trying the identical
    object first). This is a greedy match, not a full bipartite matching: if `a` has elements that are equal to more
    than one element of `b`, an unlucky early pairing can make two equal sets compare unequal.
    """
    if len(a) != len(b):
        return False

    candidates = list(b)
    used = set()
    for a_val in a:
        index = _find_unused(candidates, used, lambda b_val: b_val is a_val)
        if index is None:
            index = _find_unused(candidates, used, lambda b_val: recurse(a_val, b_val))
        if index is None:
            return False
        used.add(index)

    return True


def compare_map(a: 'Any', b: 'Any', recurse: 'Recurse', options: 'EqualityOptions') -> 'bool':
    """Unordered comparison of two mappings.

    Each entry of `a` is paired up with an unused entry of `b` whose key and value are both equal to its own. Primitive
    keys first try the entry `b` itself would find for them by hashing, which is only taken if the two keys are also
    equal as primitives (so `True` never finds `1`). Anything else, including a NaN key or a primitive key that missed,
    is greedily matched against the remaining entries of `b`.
    """
    if len(a) != len(b):
        return False

    entries = list(b.items())
    # Finds the entry `b[key]` would for a primitive key, without calling `b.__getitem__` (no defaultdict inserts) or
    # hashing any user-defined key
    hashed = {key: i for i, (key, _) in enumerate(entries) if is_primitive(key)}
    used = set()
    for a_key, a_val in a.items():
        if is_primitive(a_key):
            index = hashed.get(a_key)
            if index is not None and index not in used and compare_primitive(a_key, entries[index][0]) \
                    and recurse(a_val, entries[index][1]):
                used.add(index)
                continue

        index = _find_unused(entries, used, lambda entry: recurse(a_key, entry[0]) and recurse(a_val, entry[1]))
        if index is None:
            return False
        used.add(index)

    return True


def own_state(obj: 'Any') -> 'Optional[Dict[Any, Any]]':
    """Returns the 'own properties' of an object: its __dict__ entries along with all set __slots__ members.

    Slot values are read straight from the slot descriptors, so properties and __getattr__ hooks are never run.
    Returns None if the object has no attribute storage at all (eg: most C-implemented objects).
    """
    obj_dict = getattr(obj, '__dict__', None)
    state = dict(obj_dict) if isinstance(obj_dict, dict) else None

    for cls in type(obj).__mro__:
        if '__slots__' not in cls.__dict__:
            continue
        if state is None:
            state = {}

        names = cls.__dict__['__slots__']
        for name in ((names,) if isinstance(names, str) else names):
            if name in ('__dict__', '__weakref__'):
                continue
            if name.startswith('__') and not name.endswith('__'):
                name = '_%s%s' % (cls.__name__.lstrip('_'), name)

            descriptor = cls.__dict__.get(name)
            if descriptor is None:
                continue
            try:
                state[name] = descriptor.__get__(obj, cls)
            except AttributeError:  # Slot was never assigned
                continue

    return state


def _compare_own_state(a, b, recurse):
    a_state, b_state = own_state(a), own_state(b)

    # Nothing to look inside of, let the object decide
    if a_state is None or b_state is None:
        _LOGGER.debug("Falling back on built-in __eq__ to compare %s and %s", type(a).__name__, type(b).__name__)
        try:
            return bool(a == b)
        except Exception as e:
            raise EqualityCheckingError("Could not determine equality between objects\na: %s\nb: %s" %
                (_limit_str(a), _limit_str(b))) from e

    count = 0
    for key, a_val in a_state.items():
        if key not in b_state or not recurse(a_val, b_state[key]):
            return False
        count += 1

    return len(b_state) == count


def compare_structured(a: 'Any', b: 'Any', recurse: 'Recurse', options: 'EqualityOptions') -> 'bool':
    """Fallback comparison for any other object: same type (unless allowed not to be) and equal own attributes"""
    if not options.allow_prototype_mismatch and type(a) is not type(b):
        return False
    return _compare_own_state(a, b, recurse)


def compare_boxed(a: 'Any', b: 'Any', recurse: 'Recurse', options: 'EqualityOptions') -> 'bool':
    """Boxed primitives that weren't normalized: same type, same underlying primitive, and equal own attributes"""
    if not options.allow_prototype_mismatch and type(a) is not type(b):
        return False
    if not compare_primitive(unbox(a), unbox(b)):
        return False
    return _compare_own_state(a, b, recurse)
