"""
seqdelta.region — half-open intervals and atomic rewrites.

A Region names a contiguous run of positions ``[offset, offset+length)``.
Regions are only partially ordered:

    Region(0, 2) < Region(2, 1)     → True   (touching is still "before")
    Region(0, 2) < Region(1, 1)     → False  (overlap)
    Region(1, 1) > Region(0, 2)     → False  (overlap)

A Rewrite pairs a Region with a replacement payload:

     0 1 2 3 4 5 6 7 8 9 A B
    +-+-+-+-+-+-+-+-+-+-+-+-+
    |H|e|L|L|L|O| |W|o|r|l|d|
    +-+-+-+-+-+-+-+-+-+-+-+-+
        | : : : |
        +-------+
            |
          +-+-+-+
          |l|l|o|
          +-+-+-+

is ``Rewrite(Region(2, 4), "llo")`` and turns "HeLLLO World" into
"Hello World".  The payload may be shorter or longer than the region.
"""

from dataclasses import dataclass
from typing import Any, Callable, Sequence


@dataclass(frozen=True, slots=True)
class Region:
    """
    The half-open interval ``[offset, offset + length)``.

    Examples:
        Region(2, 4)                    # positions 2, 3, 4, 5
        Region(3, 0)                    # empty: a pure insertion point
        Region.from_range(range(2, 6))  # same as Region(2, 4)
    """
    offset: int
    length: int

    def __post_init__(self):
        if self.offset < 0 or self.length < 0:
            raise ValueError(f"invalid region ({self.offset}, {self.length})")

    @classmethod
    def from_range(cls, r: Any) -> "Region":
        """Build a region from a ``range`` (or anything with start/stop)."""
        step = getattr(r, "step", 1)
        if step not in (None, 1):
            raise ValueError(f"region ranges must have step 1, got {step}")
        start = r.start
        stop = r.stop
        if stop < start:
            raise ValueError(f"reversed range {start}..{stop}")
        return cls(start, stop - start)

    @classmethod
    def from_bounds(cls, start: int, end: int) -> "Region":
        return cls.from_range(range(start, end))

    @property
    def end(self) -> int:
        """One past the last position covered."""
        return self.offset + self.length

    def as_range(self) -> range:
        return range(self.offset, self.end)

    def as_slice(self) -> slice:
        return slice(self.offset, self.end)

    # Partial order.  Overlapping regions are incomparable, so both
    # ``<`` and ``>`` are False for them.

    def __lt__(self, other: "Region") -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return self.end <= other.offset

    def __gt__(self, other: "Region") -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return other.end <= self.offset

    def __le__(self, other: "Region") -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return self == other or self < other

    def __ge__(self, other: "Region") -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return self == other or self > other

    def __repr__(self) -> str:
        return f"Region({self.offset}..{self.end})"


def strictly_before(a: Region, b: Region) -> bool:
    """True iff ``a`` ends before ``b`` starts with at least one position between."""
    return a.end < b.offset


def as_region(target: Any) -> Region:
    """Coerce a Region or a ``range`` into a Region."""
    if isinstance(target, Region):
        return target
    if isinstance(target, range):
        return Region.from_range(target)
    raise TypeError(f"expected Region or range, got {type(target).__name__}")


@dataclass(frozen=True, slots=True)
class Rewrite:
    """
    Replace the positions in ``region`` with ``payload``.

        Rewrite(Region(0, 0), [9])      # insert 9 at the front
        Rewrite(Region(1, 2), [])       # delete positions 1 and 2
        Rewrite(Region(1, 1), [4, 5])   # replace position 1 by 4, 5
    """
    region: Region
    payload: Sequence[Any]

    def map(self, func: Callable[[Any], Any]) -> "Rewrite":
        """A rewrite over the same region whose payload is ``func`` of each item."""
        return Rewrite(self.region, [func(item) for item in self.payload])

    def __repr__(self) -> str:
        return f"Rewrite({self.region!r}, {list(self.payload)!r})"
