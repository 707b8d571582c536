"""
seqdelta.lex — incrementally maintained tokenizations.

A Tokenization is the result of lexing a sequence of items (the
"underlying sequence") into tokens, kept as a DATA STRUCTURE rather than
a function result so that it can be updated from a SequenceDelta on the
underlying sequence.  Tokens may span several items, and lexing can
fail (some item sequences map to no token at all).

Token boundaries are recorded in a bitmap parallel to the items:

            0 1 2 3 4 5 6 7 8 9
            +-+-+-+-+-+-+-+-+-+-+
    items:  |(|1|2|3|)|h|e|l|l|o|
            +-+-+-+-+-+-+-+-+-+-+
             | |     | |
            +-+-+-+-+-+-+-+-+-+-+
    starts: |*|*| | |*|*| | | | |
            +-+-+-+-+-+-+-+-+-+-+

``*`` marks a position where a token starts when scanning from 0.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Protocol, Sequence, runtime_checkable

from .delta import SequenceDelta
from .errors import InvalidSpan, ScanError, StaleTokenization

logger = logging.getLogger(__name__)

# Default for ``Tokenization(..., incremental=...)``.
INCREMENTAL_RESCAN = False


# ═══════════════════════════════════════════════════════════════════
#  SPANS AND TOKENIZERS
# ═══════════════════════════════════════════════════════════════════

@runtime_checkable
class Span(Protocol):
    """
    A token covering ``items[start..end]``.  ``end`` is INCLUSIVE:
    tokens are never empty, so ``start == end`` is a one-item token.
    """
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Token:
    """
    A concrete Span tagged with a kind.

    Examples:
        Token("number", 0, 2)      # three digits
        Token(Kind.LPAREN, 4, 4)   # a single brace
    """
    kind: Any
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1


@runtime_checkable
class Tokenizer(Protocol):
    """
    Folds one or more items starting at ``index`` into a single token.

    ``scan`` must return a span with ``start == index`` and
    ``end >= start``, or raise a ScanError when no token starts at
    ``index`` (including when ``index`` is past the end).  Tokenizers
    are pure: a scan never changes what later scans return.

    A tokenizer may also declare how far a scan reads, which lets an
    incremental Tokenization rescan only around an edit:

        lookahead    items past the end of the returned token   (int)
        lookbehind   items before ``index``, default 0           (int)

    Without ``lookahead`` every update rescans from scratch.
    """

    def scan(self, items: Sequence[Any], index: int) -> Span:
        ...


def _scan(tokenizer: Tokenizer, items: Sequence[Any], index: int) -> Span:
    span = tokenizer.scan(items, index)
    if span.start != index or span.end < span.start:
        raise InvalidSpan(
            f"scan at {index} returned span {span.start}..{span.end}"
        )
    return span


class TokenIterator:
    """Scans tokens from position 0 until the items run out or a scan fails."""

    def __init__(self, items: Sequence[Any], tokenizer: Tokenizer):
        self._items = items
        self._tokenizer = tokenizer
        self._index = 0

    def __iter__(self) -> "TokenIterator":
        return self

    def __next__(self) -> Span:
        if self._index >= len(self._items):
            raise StopIteration
        try:
            span = _scan(self._tokenizer, self._items, self._index)
        except ScanError:
            # An unscannable position ends the stream
            self._index = len(self._items)
            raise StopIteration
        self._index = span.end + 1
        return span


# ═══════════════════════════════════════════════════════════════════
#  TOKENIZATION
# ═══════════════════════════════════════════════════════════════════

def _reach(tokenizer: Tokenizer) -> Optional[tuple[int, int]]:
    """The declared ``(lookahead, lookbehind)`` of a tokenizer, or None."""
    lookahead = getattr(tokenizer, "lookahead", None)
    if lookahead is None:
        return None
    return lookahead, getattr(tokenizer, "lookbehind", 0)


def generate_starts(items: Sequence[Any], tokenizer: Tokenizer) -> list[bool]:
    """Token-start bitmap for ``items``, scanning from 0.  Scan errors propagate."""
    starts = [False] * len(items)
    i = 0
    while i < len(items):
        starts[i] = True
        i = _scan(tokenizer, items, i).end + 1
    return starts


class Tokenization:
    """
    A sequence of items plus the boundaries of the tokens it lexes into.

    Construction lexes the whole sequence and therefore raises whatever
    the tokenizer raises.  ``apply`` updates the items from a delta and
    re-establishes the boundaries.

    With ``incremental=True`` and a tokenizer that declares its
    ``lookahead``, an update only rescans the stretch around the edits:
    from the first token whose scan could read an edited item, until
    the new boundaries meet the old ones past the last edit.  The
    result is the same as a full rescan.  Tokenizers without a declared
    ``lookahead`` are always rescanned in full.
    """

    def __init__(self, items: Sequence[Any], tokenizer: Tokenizer, incremental: Optional[bool] = None):
        self._items = list(items)
        self._tokenizer = tokenizer
        self._incremental = INCREMENTAL_RESCAN if incremental is None else incremental
        self._starts = generate_starts(self._items, tokenizer)

    @property
    def items(self) -> tuple:
        return tuple(self._items)

    @property
    def starts(self) -> tuple[bool, ...]:
        return tuple(self._starts)

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    def __len__(self) -> int:
        return len(self._items)

    def iter(self) -> TokenIterator:
        return TokenIterator(self._items, self._tokenizer)

    def __iter__(self) -> Iterator[Span]:
        return self.iter()

    # ── updates ───────────────────────────────────────────────────

    def apply(self, delta: SequenceDelta) -> None:
        """
        Apply ``delta`` to the underlying items and bring the token
        boundaries up to date.

        Scan errors propagate.  The tokenization then still has one
        boundary flag per item but may be stale, and should be
        discarded.
        """
        delta.apply(self._items, transactional=True)
        # Keep the bitmap aligned with the items before rescanning
        delta.map(lambda _: False).apply(self._starts)
        assert len(self._starts) == len(self._items)

        if delta.is_empty():
            return
        reach = _reach(self._tokenizer) if self._incremental else None
        if reach is not None:
            first, last = delta.get(0), delta.get(len(delta) - 1)
            self._rescan(first.region.offset, last.region.offset + len(last.payload), *reach)
        else:
            logger.debug("full rescan of %d items", len(self._items))
            self._starts = generate_starts(self._items, self._tokenizer)

    try_transform = apply

    def _rescan(self, lo: int, hi: int, lookahead: int, lookbehind: int) -> None:
        """
        Rescan so that every boundary whose token can see ``[lo, hi)``
        is recomputed.
        """
        items, starts = self._items, self._starts
        # A token ending at or after lo - lookahead may have read the edit
        p = min(lo - max(lookahead, 1), len(items) - 1)
        while p > 0 and not starts[p]:
            p -= 1
        p = max(p, 0)
        logger.debug("rescanning from %d (edits span %d..%d)", p, lo, hi)

        while p < len(items):
            if p >= hi + lookbehind and starts[p]:
                logger.debug("boundaries realigned at %d", p)
                return
            span = _scan(self._tokenizer, items, p)
            starts[p] = True
            for i in range(p + 1, min(span.end + 1, len(items))):
                starts[i] = False
            p = span.end + 1

    def validate(self) -> None:
        """
        Regenerate the boundaries from scratch and check they match the
        stored ones.  Raises StaleTokenization on any difference.
        """
        fresh = generate_starts(self._items, self._tokenizer)
        if fresh != self._starts:
            first = next((i for i, (a, b) in enumerate(zip(fresh, self._starts)) if a != b),
                         min(len(fresh), len(self._starts)))
            raise StaleTokenization(f"token boundaries disagree at position {first}")

    def __repr__(self) -> str:
        return f"Tokenization(items={len(self._items)}, tokens={sum(self._starts)})"
