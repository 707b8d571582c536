"""
seqdelta.traits — the diff / transform capabilities.

Two orthogonal capabilities:

    Diffable          a.diff(b) → delta such that applying it to a gives b
    Transformable     a.transform(delta) updates a in place

plus TryTransformable, the fallible transform used by derived
structures such as Tokenization, where applying a delta can raise.
The functional form ``transformed(a, delta)`` copies then transforms.

The orientation is always self → other:

    v = EditableList([1, 2, 3])
    v.transform(v.diff([1, 4, 3]))      # v == [1, 4, 3]
"""

import copy
from typing import Any, Protocol, Sequence, TypeVar, runtime_checkable

from .core import diff
from .delta import SequenceDelta

T = TypeVar("T")


@runtime_checkable
class Diffable(Protocol):
    """Something a delta can be computed from, towards another value."""

    def diff(self, other: Any) -> Any:
        """A delta ``d`` with ``transformed(self, d) == other``."""
        ...


@runtime_checkable
class Transformable(Protocol):
    """Something that can be updated in place by applying a delta."""

    def transform(self, delta: Any) -> None:
        ...


@runtime_checkable
class TryTransformable(Protocol):
    """Something that can be updated in place by a delta, or raise trying."""

    def try_transform(self, delta: Any) -> None:
        ...


def transformed(value: T, delta: Any) -> T:
    """
    Copy ``value`` and apply ``delta`` to the copy, leaving ``value``
    untouched.  Works for Transformable and TryTransformable values.
    """
    result = copy.deepcopy(value)
    if isinstance(result, Transformable):
        result.transform(delta)
    elif isinstance(result, TryTransformable):
        result.try_transform(delta)
    else:
        raise TypeError(f"{type(value).__name__} cannot be transformed")
    return result


class EditableList(list):
    """A list that can diff itself against any sequence and apply deltas."""

    def diff(self, other: Sequence[Any]) -> SequenceDelta:
        return diff(self, other)

    def transform(self, delta: SequenceDelta) -> None:
        delta.apply(self)

    def try_transform(self, delta: SequenceDelta) -> None:
        delta.apply(self, transactional=True)
