"""
Tests for the structeq.classify file
"""

import array
import datetime
import re
import numpy as np
from collections import OrderedDict, UserList, deque
from decimal import Decimal
from enum import Enum, IntEnum
from types import MappingProxyType, SimpleNamespace
from structeq import Category, classify, UNDEFINED, HOLE
from structeq.classify import is_nan, is_primitive, is_boxed_primitive, primitive_kind, unbox


class _Color(Enum):
    RED = 1


class _Level(IntEnum):
    LOW = 1


class _MyStr(str):
    pass


class _LoudStr(str):
    def __str__(self):
        return self.upper()


class _MyInt(int):
    def __int__(self):
        return 1000


class _MyFloat(float):
    pass


class _MyComplex(complex):
    @property
    def real(self):
        return -1.0


class _MyBytes(bytes):
    pass


class _Callable:
    def __call__(self):
        pass


def test_classify():
    """Each value lands in the right category"""
    expected = {
        Category.PRIMITIVE: [None, UNDEFINED, HOLE, Ellipsis, NotImplemented, True, 1, 2 ** 80, 1.5, 1j, Decimal(1),
            'a', b'a', range(3), _Color.RED, _Level.LOW, np.float64(1), np.int8(1), np.bool_(True), np.str_('a')],
        Category.CALLABLE: [len, lambda: None, int, _Callable(), SimpleNamespace().__eq__, str.upper],
        Category.SEQUENCE: [[], (), deque(), UserList(), np.array([1, 'a'], dtype=object)],
        Category.INSTANT: [datetime.datetime(2020, 1, 1), datetime.date(2020, 1, 1), np.datetime64('2020-01-01')],
        Category.PATTERN: [re.compile('a')],
        Category.FIXED_BUFFER: [np.array([1, 2]), np.zeros((2, 2)), bytearray(b'a'), memoryview(b'a'),
            array.array('i', [1])],
        Category.ORDERED_SET: [set(), frozenset(), {}.keys(), {}.items()],
        Category.ORDERED_MAP: [{}, OrderedDict(), MappingProxyType({})],
        Category.BOXED_PRIMITIVE: [_MyStr('a'), _MyInt(1), _MyFloat(1), _MyComplex(1), _MyBytes(b'a')],
        Category.PLAIN_STRUCTURED: [object(), SimpleNamespace(x=1), datetime.time(1), {}.values()],
    }

    for category, vals in expected.items():
        for v in vals:
            assert classify(v) is category, "Expected %r to be %s, got %s" % (v, category, classify(v))


def test_is_primitive():
    assert is_primitive(None)
    assert is_primitive(_Level.LOW)
    assert not is_primitive(_MyStr('a'))
    assert not is_primitive(np.datetime64('2020-01-01'))
    assert not is_primitive([])


def test_is_boxed_primitive():
    assert is_boxed_primitive(_MyStr('a'))
    assert is_boxed_primitive(_MyBytes(b'a'))
    assert not is_boxed_primitive('a')
    assert not is_boxed_primitive(_Level.LOW)
    assert not is_boxed_primitive(np.float64(1))


def test_unbox():
    """Unboxing gets the plain value without calling any overridden methods"""
    for boxed, expected in [(_MyStr('a'), 'a'), (_LoudStr('a'), 'a'), (_MyInt(3), 3), (_MyFloat(1.5), 1.5),
            (_MyComplex(1 + 2j), 1 + 2j), (_MyBytes(b'a'), b'a')]:
        val = unbox(boxed)
        assert type(val) is type(expected)
        assert val == expected

    vals = ['a', 1, [], None]
    for v in vals:
        assert unbox(v) is v


def test_primitive_kind():
    assert primitive_kind(True) == 'bool'
    assert primitive_kind(np.False_) == 'bool'
    assert primitive_kind(1) == primitive_kind(1.0) == primitive_kind(Decimal(1)) == primitive_kind(np.int8(1)) \
        == 'number'
    assert primitive_kind('a') == primitive_kind(np.str_('a')) == 'str'
    assert primitive_kind(b'a') == 'bytes'
    assert primitive_kind(range(2)) == 'range'
    assert primitive_kind(None) == primitive_kind(UNDEFINED) == primitive_kind(_Color.RED) == 'identity'
    assert primitive_kind(_Level.LOW) == 'identity'


def test_is_nan():
    assert is_nan(float('nan'))
    assert is_nan(np.float32('nan'))
    assert is_nan(complex(0, float('nan')))
    assert is_nan(Decimal('NaN'))

    assert not is_nan(1.0)
    assert not is_nan('nan')
    assert not is_nan(None)
    assert not is_nan(_MyFloat('nan'))
