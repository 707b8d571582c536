"""
Sequence Deltas
===============

Compact, position-indexed edit deltas over sequences.

    d = diff([1, 2, 3], [4, 1, 2, 5, 6])    → 2 rewrites
    v = [1, 2, 3]; d.apply(v)               → v == [4, 1, 2, 5, 6]

A delta is an ordered list of rewrites ("replace these positions with
this payload") whose offsets are counted in the TARGET sequence, so it
applies left to right without rebasing.  Payloads share one arena.

The same delta drives incremental maintenance of derived structures:
a Tokenization keeps the token boundaries of a sequence and updates
them from a delta on the sequence instead of lexing from scratch.
"""

from seqdelta.core import (
    diff,
    extract_delta,
    lcs_length,
    longest_common_subsequence,
)
from seqdelta.delta import (
    PayloadView,
    SequenceDelta,
    insert,
    remove,
    replace,
)
from seqdelta.errors import (
    DeltaError,
    InvalidSpan,
    MalformedDelta,
    OutOfRange,
    OverlappingRewrite,
    ScanError,
    StaleTokenization,
)
from seqdelta.formats import diff_strings, patch_string, seq_to_string, string_to_seq
from seqdelta.lex import Span, Token, TokenIterator, Tokenization, Tokenizer
from seqdelta.region import Region, Rewrite, strictly_before
from seqdelta.traits import (
    Diffable, EditableList, Transformable, TryTransformable, transformed,
)

__version__ = "0.1.0"
__all__ = [
    "Region", "Rewrite", "strictly_before",
    "SequenceDelta", "PayloadView", "insert", "replace", "remove",
    "diff", "extract_delta", "lcs_length", "longest_common_subsequence",
    "Span", "Token", "Tokenizer", "TokenIterator", "Tokenization",
    "Diffable", "Transformable", "TryTransformable", "EditableList", "transformed",
    "string_to_seq", "seq_to_string", "diff_strings", "patch_string",
    "DeltaError", "MalformedDelta", "OutOfRange", "OverlappingRewrite",
    "ScanError", "InvalidSpan", "StaleTokenization",
]
