"""
Configuration for equality checks
"""

import dataclasses
from typing import TYPE_CHECKING
from typing_extensions import Self


if TYPE_CHECKING:
    from typing import Optional


@dataclasses.dataclass(frozen=True)
class EqualityOptions:
    """Semantic relaxations for :func:`~structeq.equality.is_equal`. Read-only for the whole of one comparison.

    Args:
        strict_sparse_arrays (bool): if True, a sequence slot holding ``HOLE`` is only equal to another ``HOLE``,
            never to an explicit ``UNDEFINED``. Defaults to False.
        normalize_boxed_primitives (bool): if True, boxed primitives (instances of subclasses of int, float, complex,
            str, bytes) are unwrapped to their plain value before comparing. Defaults to False.
        allow_prototype_mismatch (bool): if True, structured objects of different runtime types can still be equal
            if their attributes are. Defaults to False.
    """
    strict_sparse_arrays: bool = False
    normalize_boxed_primitives: bool = False
    allow_prototype_mismatch: bool = False

    def __post_init__(self):
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, bool):
                raise TypeError("EqualityOptions.%s must be a bool, not %s" % (field.name, repr(type(value).__name__)))

    def replace(self, **flags: bool) -> Self:
        """Returns a copy of these options with the given flags changed. Unknown flags raise a TypeError"""
        return dataclasses.replace(self, **flags) if flags else self

    @classmethod
    def resolve(cls, options: 'Optional[EqualityOptions]' = None, **flags: bool) -> 'EqualityOptions':
        """Builds the options for one call from an optional options object and keyword overrides"""
        if options is None:
            return cls(**flags) if flags else DEFAULT_OPTIONS
        if not isinstance(options, EqualityOptions):
            raise TypeError("`options` must be an EqualityOptions object or None, not %s" % repr(type(options).__name__))
        return options.replace(**flags)


DEFAULT_OPTIONS = EqualityOptions()
