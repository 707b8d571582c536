"""
seqdelta.formats — strings as sequences.

Strings are immutable, so the delta machinery works on their character
lists:

    • string → list of characters  (string_to_seq)
    • list of characters → string  (seq_to_string)
    • diff / patch directly on strings
"""

from .core import diff
from .delta import SequenceDelta


def string_to_seq(s: str) -> list[str]:
    """Split a string into a list of single characters."""
    return list(s)


def seq_to_string(seq: list) -> str:
    """
    Join a list of single characters back into a string.

    Inverse of string_to_seq.  Non-string items become "?".
    """
    return "".join(item if isinstance(item, str) else "?" for item in seq)


def diff_strings(a: str, b: str) -> SequenceDelta:
    """Character-level delta taking ``a`` to ``b``."""
    return diff(a, b)


def patch_string(s: str, delta: SequenceDelta) -> str:
    """
    Apply a character-level delta to a string.

        patch_string(a, diff_strings(a, b)) == b
    """
    chars = string_to_seq(s)
    delta.apply(chars)
    return seq_to_string(chars)
