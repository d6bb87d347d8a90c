"""
Classification of values into the categories that decide how they are compared.

Categories are checked in a fixed order since some values would match more than one of them (a numpy array is both
a buffer and a plain object, a str subclass is both a sequence and a boxed primitive, etc.):

    absent/None -> primitive -> callable -> sequence -> instant -> pattern -> fixed buffer -> set -> mapping
        -> boxed primitive -> plain structured object
"""

import numbers
import numpy as np
from collections import abc
from decimal import Decimal
from enum import Enum
from .pytypes import Absent, SingletonObjects, PrimitiveTypes, BoxablePrimitiveTypes, SequenceTypes, SequenceExcludedTypes, \
    InstantTypes, PatternType, BufferTypes
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from typing import Any


class Category(Enum):
    PRIMITIVE = 'primitive'
    CALLABLE = 'callable'
    SEQUENCE = 'sequence'
    INSTANT = 'instant'
    PATTERN = 'pattern'
    FIXED_BUFFER = 'fixed_buffer'
    ORDERED_SET = 'ordered_set'
    ORDERED_MAP = 'ordered_map'
    BOXED_PRIMITIVE = 'boxed_primitive'
    PLAIN_STRUCTURED = 'plain_structured'


def classify(value: 'Any') -> 'Category':
    """Returns the category of the given value. Never raises, anything unrecognized is a PLAIN_STRUCTURED object"""
    if value is None or isinstance(value, Absent):
        return Category.PRIMITIVE
    if is_primitive(value):
        return Category.PRIMITIVE
    if callable(value):
        return Category.CALLABLE
    if is_sequence(value):
        return Category.SEQUENCE
    if isinstance(value, InstantTypes):
        return Category.INSTANT
    if isinstance(value, PatternType):
        return Category.PATTERN
    if isinstance(value, BufferTypes) and not (isinstance(value, np.ndarray) and value.dtype == object):
        return Category.FIXED_BUFFER
    if isinstance(value, abc.Set):
        return Category.ORDERED_SET
    if isinstance(value, abc.Mapping):
        return Category.ORDERED_MAP
    if is_boxed_primitive(value):
        return Category.BOXED_PRIMITIVE
    return Category.PLAIN_STRUCTURED


def is_primitive(value: 'Any') -> 'bool':
    """True if value is a plain primitive: a singleton, an enum member, a numpy scalar, or an exact builtin value type"""
    return type(value) in PrimitiveTypes or isinstance(value, Enum) \
        or (isinstance(value, np.generic) and not isinstance(value, np.datetime64))


def is_boxed_primitive(value: 'Any') -> 'bool':
    """True if value is an instance of a strict subclass of a builtin primitive type"""
    return isinstance(value, BoxablePrimitiveTypes) and not is_primitive(value)


def is_sequence(value: 'Any') -> 'bool':
    # Only object arrays are sequences, everything else in numpy is a fixed-width buffer
    if isinstance(value, np.ndarray):
        return value.dtype == object and value.ndim > 0
    return isinstance(value, SequenceTypes) \
        or (isinstance(value, abc.Sequence) and not isinstance(value, SequenceExcludedTypes))


def unbox(value: 'Any') -> 'Any':
    """Returns the plain primitive inside a boxed primitive, or the value itself if it isn't boxed.

    Goes through the base type's own methods so that any overridden dunder methods on the subclass are never called.
    """
    if not is_boxed_primitive(value):
        return value
    for base in type(value).__mro__:
        if base is complex:
            return complex(complex.real.__get__(value), complex.imag.__get__(value))
        if base in BoxablePrimitiveTypes:
            return base.__getnewargs__(value)[0]
    return value


def primitive_kind(value: 'Any') -> 'str':
    """Returns the kind of a primitive. Primitives can only be equal to other primitives of the same kind.

    Bool's are NOT numbers, all numbers (int, float, Decimal, numpy scalars, ...) are comparable with one another, and
    anything without a kind of its own ('identity') is only ever equal to itself.
    """
    if isinstance(value, Enum) or any(value is x for x in SingletonObjects):
        return 'identity'
    if isinstance(value, (bool, np.bool_)):
        return 'bool'
    if isinstance(value, numbers.Number):
        return 'number'
    if isinstance(value, str):
        return 'str'
    if isinstance(value, bytes):
        return 'bytes'
    if isinstance(value, range):
        return 'range'
    if isinstance(value, np.generic):
        return 'numpy'
    return 'identity'


def is_nan(value: 'Any') -> 'bool':
    """True if value is a primitive 'not a number' (float, complex, numpy inexact, or Decimal)"""
    if type(value) is Decimal:
        return value.is_nan()
    if type(value) in (float, complex) or isinstance(value, np.inexact):
        return bool(value != value)
    return False
