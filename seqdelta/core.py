"""
seqdelta.core — LCS diff and delta extraction
==============================================

§1  THE PROBLEM
───────────────

Given two sequences ``lhs`` (before) and ``rhs`` (after) over any type
with equality, compute a SequenceDelta ``d`` such that

    v = list(lhs); d.apply(v); v == rhs

The delta should touch as few positions as reasonably possible: items
that survive unchanged from ``lhs`` to ``rhs`` should not appear in any
rewrite.  The longest common subsequence (LCS) identifies a maximal set
of such survivors.


§2  LCS TABLE
─────────────

For m = |lhs|, n = |rhs| build an (m+1) × (n+1) table:

    c[0][j] = c[i][0] = 0
    c[i+1][j+1] = c[i][j] + 1                    if lhs[i] == rhs[j]
                = max(c[i+1][j], c[i][j+1])      otherwise

c[m][n] is the length of an LCS.  (Cormen, Leiserson, Rivest & Stein,
Introduction to Algorithms, 2nd ed., ch. 15.)


§3  MAPPING
───────────

Walking back from (m, n) yields a mapping ``map`` of length m where
map[i] is the index in ``rhs`` matched by lhs[i], or None:

    if c[i][j] == c[i-1][j]:   map[i-1] = None, go to (i-1, j)
    elif c[i][j] == c[i][j-1]: map[i-1] = None, go to (i, j-1)
    else:                      map[i-1] = j-1,  go to (i-1, j-1)

The order of the first two tests fixes WHICH longest common subsequence
is chosen when several exist.  For

    lhs = a b b c b c d
    rhs = b b e c d e

the mapping is [None, 0, 1, 3, None, None, 4].


§4  EXTRACTION
──────────────

The mapping is walked left to right with two cursor pairs, one in
``lhs`` (b_start, b_pos) and one in ``rhs`` (a_start, a_pos).  Each
matched item (an "anchor") closes the hunk of unmatched items before it:

     0 1 2 3 4
    +-+-+-+-+-+
    |a|b|c|d|e|          (before)       map = [None, 0, 1, None, None]
    +-+-+-+-+-+
       | |
      / /
     | |
    +-+-+-+-+
    |b|c|f|g|            (after)
    +-+-+-+-+

gives the hunks (offset 0, consumed 1, payload []) and (offset 2,
consumed 2, payload [f, g]).  A hunk's target offset is a_start: the
number of ``rhs`` items already produced when it is applied.


§5  COALESCING
──────────────

A hunk that deletes more items than it inserts has a region reaching
further right than its payload.  When the next hunk starts inside that
reach the two are not strictly ordered, so they are merged into one
rewrite that also swallows the anchors between them:

    lhs = 1 2 3 4 5        rhs = 1 5 x
    hunks   (1, consumed 3, payload [])   (2, consumed 0, payload [x])
    merged  (1, consumed 4, payload [5, x])

Hunks that do not delete more than they insert are never merged, so
the number of rewrites is otherwise exactly the number of hunks.


§6  COMPLEXITY
──────────────

    • LCS table: O(m·n) time and space
    • Mapping walk: O(m + n)
    • Extraction and coalescing: O(m + n)

Author: seqdelta contributors
License: MIT
"""

import logging
from typing import Any, Optional, Sequence

from .delta import SequenceDelta
from .region import Region

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  LONGEST COMMON SUBSEQUENCE
# ═══════════════════════════════════════════════════════════════════

def lcs_length(lhs: Sequence[Any], rhs: Sequence[Any]) -> int:
    """Length of a longest common subsequence of two sequences."""
    m, n = len(lhs), len(rhs)
    if m == 0 or n == 0:
        return 0

    # Space-optimized DP (two rows)
    prev = [0] * (n + 1)
    curr = [0] * (n + 1)

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if lhs[i - 1] == rhs[j - 1]:
                curr[j] = prev[j - 1] + 1
            else:
                curr[j] = max(curr[j - 1], prev[j])
        prev, curr = curr, prev

    return prev[n]


def _lcs_table(lhs: Sequence[Any], rhs: Sequence[Any]) -> list[list[int]]:
    m, n = len(lhs), len(rhs)
    c = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m):
        row, nxt = c[i], c[i + 1]
        for j in range(n):
            if lhs[i] == rhs[j]:
                nxt[j + 1] = row[j] + 1
            else:
                nxt[j + 1] = max(nxt[j], row[j + 1])
    return c


def longest_common_subsequence(lhs: Sequence[Any], rhs: Sequence[Any]) -> list[Optional[int]]:
    """
    Map every position of ``lhs`` onto the ``rhs`` position it is
    matched with in a longest common subsequence, or None.

    The result has length ``len(lhs)``; its non-None entries are
    strictly increasing and lie in ``[0, len(rhs))``.  When several
    longest common subsequences exist, the tie-break of §3 picks one.
    """
    c = _lcs_table(lhs, rhs)
    mapping: list[Optional[int]] = [None] * len(lhs)

    i, j = len(lhs), len(rhs)
    while i > 0 and j > 0:
        if c[i][j] == c[i - 1][j]:
            i -= 1
        elif c[i][j] == c[i][j - 1]:
            j -= 1
        else:
            mapping[i - 1] = j - 1
            i -= 1
            j -= 1

    return mapping


# ═══════════════════════════════════════════════════════════════════
#  DELTA EXTRACTION
# ═══════════════════════════════════════════════════════════════════

def _hunks(mapping: Sequence[Optional[int]], n_after: int) -> list[tuple[int, int, int]]:
    """
    Walk a mapping and collect hunks ``(a_start, consumed, a_end)``:
    ``consumed`` before-items at target offset ``a_start`` are replaced
    by ``after[a_start:a_end]``.
    """
    hunks: list[tuple[int, int, int]] = []
    a_start = a_pos = 0
    b_start = b_pos = 0

    while b_pos < len(mapping) and a_pos < n_after:
        v = mapping[b_pos]
        if v is None or v < a_pos:
            # Dropped or replaced before-item
            b_pos += 1
        elif v > a_pos:
            # Unmatched after-items up to the anchor
            a_pos = v
        else:
            # Anchor: flush whatever accumulated since the last one
            if b_start < b_pos or a_start < a_pos:
                hunks.append((a_start, b_pos - b_start, a_pos))
            a_pos += 1
            b_pos += 1
            a_start, b_start = a_pos, b_pos

    if b_start < len(mapping) or a_start < n_after:
        hunks.append((a_start, len(mapping) - b_start, n_after))

    return hunks


def _coalesce(hunks: list[tuple[int, int, int]]) -> list[tuple[int, int, int]]:
    """Merge each hunk into its predecessor while the two are not strictly ordered."""
    merged: list[tuple[int, int, int]] = []
    for offset, consumed, end in hunks:
        if merged:
            p_offset, p_consumed, p_end = merged[-1]
            if p_offset + p_consumed >= offset:
                # The anchors between the two hunks are rewritten as themselves
                anchors = offset - p_end
                merged[-1] = (p_offset, p_consumed + anchors + consumed, end)
                logger.debug("coalesced hunk at %d into hunk at %d", offset, p_offset)
                continue
        merged.append((offset, consumed, end))
    return merged


def extract_delta(mapping: Sequence[Optional[int]], after: Sequence[Any]) -> SequenceDelta:
    """
    Convert an LCS mapping from a before-sequence onto ``after`` into
    the SequenceDelta that rewrites before into ``after``.
    """
    delta = SequenceDelta()
    for offset, consumed, end in _coalesce(_hunks(mapping, len(after))):
        logger.debug("rewrite %d..%d <- after[%d:%d]", offset, offset + consumed, offset, end)
        delta.append(Region(offset, consumed), after[offset:end])
    return delta


def diff(lhs: Sequence[Any], rhs: Sequence[Any]) -> SequenceDelta:
    """
    Compute a delta ``d`` such that applying ``d`` to a copy of ``lhs``
    yields ``rhs``.

        diff([1, 2, 3], [1, 2, 3])        → empty delta
        diff([1, 2, 3], [4, 1, 2, 3])     → 1 rewrite (insert at 0)
        diff([1, 2, 3], [4, 1, 2, 5, 6])  → 2 rewrites
    """
    mapping = longest_common_subsequence(lhs, rhs)
    logger.debug("mapping: %r", mapping)
    return extract_delta(mapping, rhs)
