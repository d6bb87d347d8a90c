from .classify import Category, classify
from .equality import is_equal, is_equal_with_shared_tracker, all_equal
from .errors import EqualityError, EqualityCheckingError, TrackerStateError
from .options import EqualityOptions
from .pytypes import UNDEFINED, HOLE
from .tracker import EqualityTracker, PairState

__all__ = ['Category', 'classify', 'is_equal', 'is_equal_with_shared_tracker', 'all_equal', 'EqualityError',
    'EqualityCheckingError', 'TrackerStateError', 'EqualityOptions', 'UNDEFINED', 'HOLE', 'EqualityTracker',
    'PairState']
