"""
seqdelta.delta — ordered rewrites over a packed payload arena.

A SequenceDelta is a list of rewrites, stored as two parallel structures:

    entries:  [(target_region, payload_slice), ...]
    arena:    every payload, concatenated in entry order

Consider two rewrites of "HeLLLO WoRld":

     0 1 2 3 4 5 6 7 8 9 A B
    +-+-+-+-+-+-+-+-+-+-+-+-+
    |H|e|L|L|L|O| |W|o|R|l|d|
    +-+-+-+-+-+-+-+-+-+-+-+-+
        | : : : |      |
        +-------+      +
            |          |
        +-+-+-+-+-+-+-+-+
     ...|l|l|o|.|.|.|r|...
        +-+-+-+-+-+-+-+-+
     0 1 2 3 4 5 6 7 8 9 A

The offset of each target region is counted in the TARGET sequence, i.e.
after every earlier rewrite has already been applied.  The example is
therefore encoded as

    entries = [(Region(2, 4), Region(0, 3)), (Region(8, 1), Region(3, 1))]
    arena   = ['l', 'l', 'o', 'r']

and applying the entries left to right never needs to rebase an offset.

INVARIANTS
──────────
    - consecutive target regions are strictly before one another
      (no overlap, and no touching: touching rewrites would be one)
    - payload slices partition the arena contiguously, in entry order
    - len(arena) == sum of payload slice lengths
    - at application time each region fits inside the target

``append`` is the only mutator and keeps the first three by
construction; ``apply`` checks the last.
"""

import logging
from collections.abc import Sequence
from typing import Any, Callable, Iterator, MutableSequence, Optional

from .errors import OutOfRange, OverlappingRewrite
from .region import Region, Rewrite, as_region, strictly_before

logger = logging.getLogger(__name__)

# Default for ``SequenceDelta.apply(..., transactional=...)``.
TRANSACTIONAL_APPLY = False


class PayloadView(Sequence):
    """Read-only window onto a slice of a delta's arena.  No items are copied."""
    __slots__ = ("_arena", "_region")

    def __init__(self, arena: list, region: Region):
        self._arena = arena
        self._region = region

    def __len__(self) -> int:
        return self._region.length

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self._arena[self._region.offset + i]
                    for i in range(*index.indices(self._region.length))]
        if index < 0:
            index += self._region.length
        if not 0 <= index < self._region.length:
            raise IndexError("payload index out of range")
        return self._arena[self._region.offset + index]

    def __iter__(self) -> Iterator[Any]:
        for i in self._region.as_range():
            yield self._arena[i]

    def __eq__(self, other) -> bool:
        # Compares item-wise with any sequence, strings included
        if not isinstance(other, Sequence):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self) -> str:
        return f"PayloadView({list(self)!r})"


class SequenceDelta:
    """
    An ordered set of non-overlapping, non-adjacent rewrites whose
    offsets are expressed in the target coordinate system.

    Examples:
        d = SequenceDelta()
        d.append(range(0, 1), [4, 5]).append(range(3, 4), [6, 7])
        v = [1, 2, 3]
        d.apply(v)               # v == [4, 5, 2, 6, 7]
    """
    __slots__ = ("_entries", "_arena")

    def __init__(self):
        self._entries: list[tuple[Region, Region]] = []
        self._arena: list = []

    # ── inspection ────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def get(self, ith: int) -> Optional[Rewrite]:
        """
        The ``ith`` rewrite, as a view onto the arena, or None when
        ``ith`` is not in ``[0, len(self))``.
        """
        if not 0 <= ith < len(self._entries):
            return None
        target, payload = self._entries[ith]
        return Rewrite(target, PayloadView(self._arena, payload))

    def __iter__(self) -> Iterator[Rewrite]:
        for target, payload in self._entries:
            yield Rewrite(target, PayloadView(self._arena, payload))

    def entries(self) -> tuple[tuple[Region, Region], ...]:
        """The raw ``(target_region, payload_slice)`` pairs."""
        return tuple(self._entries)

    @property
    def arena(self) -> tuple:
        return tuple(self._arena)

    # ── construction ──────────────────────────────────────────────

    def append(self, target: Any, payload: Sequence) -> "SequenceDelta":
        """
        Append a rewrite which must lie strictly after every rewrite
        already held (at least one untouched position in between).

        ``target`` is a Region or a ``range``.  Violating the ordering
        is a programming error and raises OverlappingRewrite.
        Returns ``self`` so calls can be chained.
        """
        region = as_region(target)
        if self._entries:
            last = self._entries[-1][0]
            if not strictly_before(last, region):
                raise OverlappingRewrite(
                    f"rewrite {region!r} does not follow {last!r} with a gap"
                )
        start = len(self._arena)
        self._arena.extend(payload)
        self._entries.append((region, Region(start, len(self._arena) - start)))
        return self

    and_replace = append

    def map(self, func: Callable[[Any], Any]) -> "SequenceDelta":
        """
        A delta with the same target regions whose payload items are
        ``func(item)``.  Used to derive deltas over metadata that runs
        parallel to the original sequence.
        """
        mapped = SequenceDelta()
        mapped._entries = list(self._entries)
        mapped._arena = [func(item) for item in self._arena]
        return mapped

    # ── application ───────────────────────────────────────────────

    def apply(self, target: MutableSequence, transactional: Optional[bool] = None) -> None:
        """
        Transform ``target`` in place by executing every rewrite in order.

        Raises OutOfRange when a region extends past the current length
        of the target.  Rewrites before the failing one stay applied,
        unless ``transactional`` is set, in which case the work happens
        on a copy and ``target`` is only updated on success.
        """
        if transactional is None:
            transactional = TRANSACTIONAL_APPLY
        if transactional:
            work = list(target)
            self._apply(work)
            target[:] = work
        else:
            self._apply(target)

    def _apply(self, target: MutableSequence) -> None:
        for i, (region, payload) in enumerate(self._entries):
            if region.end > len(target):
                raise OutOfRange(
                    f"rewrite {i} targets {region!r} but the target has "
                    f"only {len(target)} items"
                )
            target[region.offset:region.end] = self._arena[payload.offset:payload.end]
        logger.debug("applied %d rewrites, target now has %d items",
                      len(self._entries), len(target))

    # ── dunder ────────────────────────────────────────────────────

    def __eq__(self, other) -> bool:
        if not isinstance(other, SequenceDelta):
            return NotImplemented
        return self._entries == other._entries and self._arena == other._arena

    __hash__ = None

    def __repr__(self) -> str:
        if len(self._entries) <= 3:
            return f"SequenceDelta({list(self)!r})"
        return f"SequenceDelta([{self.get(0)!r}, ...] len={len(self._entries)})"


# ═══════════════════════════════════════════════════════════════════
#  ONE-REWRITE CONSTRUCTORS
# ═══════════════════════════════════════════════════════════════════

def insert(index: int, payload: Sequence) -> SequenceDelta:
    """A delta which inserts ``payload`` before position ``index``."""
    return SequenceDelta().append(Region(index, 0), payload)


def replace(target: Any, payload: Sequence) -> SequenceDelta:
    """A delta which replaces the items in ``target`` by ``payload``."""
    return SequenceDelta().append(target, payload)


def remove(target: Any) -> SequenceDelta:
    """A delta which removes the items in ``target``."""
    return SequenceDelta().append(target, ())
