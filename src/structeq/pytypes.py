"""
Python types and sentinel objects that make up the value model used by :func:`~structeq.equality.is_equal`
"""

import array
import re
import datetime
import numpy as np
from collections import deque, UserList
from decimal import Decimal
from enum import Enum
from fractions import Fraction


class Absent(Enum):
    """Sentinels for 'no stored value'.

    UNDEFINED is an explicit absent value. HOLE marks a slot in a sequence that exists positionally but has nothing
    stored in it (eg: the middle of ``[1, HOLE, 3]``). Reading a hole yields UNDEFINED.
    """
    UNDEFINED = 'undefined'
    HOLE = 'hole'

    def __repr__(self):
        return self.name


UNDEFINED = Absent.UNDEFINED
HOLE = Absent.HOLE

# Objects that only ever equal themselves
SingletonObjects = (None, Ellipsis, NotImplemented, UNDEFINED, HOLE)

# Exact types of values that are always treated as primitives. Subclasses of the value types are boxed primitives
PrimitiveTypes = (type(None), type(Ellipsis), type(NotImplemented), bool, int, float, complex, Decimal, Fraction,
    str, bytes, range)

# Primitive types that can be subclassed, and thus can show up boxed
BoxablePrimitiveTypes = (int, float, complex, str, bytes)

# Known sequence types. Other collections.abc.Sequence's are picked up as long as they aren't in SequenceExcludedTypes
SequenceTypes = (list, tuple, deque, UserList)
SequenceExcludedTypes = (str, bytes, bytearray, memoryview, range, array.array)

InstantTypes = (datetime.datetime, datetime.date, np.datetime64)
PatternType = re.Pattern
BufferTypes = (bytearray, memoryview, array.array, np.ndarray)
