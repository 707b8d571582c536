"""
Test suite for seqdelta.traits and seqdelta.formats.

    §1  Capability protocols
    §2  EditableList diff / transform
    §3  String helpers
"""

import sys
import os
import pytest

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from seqdelta.delta import SequenceDelta, insert, replace
from seqdelta.errors import OutOfRange, ScanError
from seqdelta.formats import diff_strings, patch_string, seq_to_string, string_to_seq
from seqdelta.lex import Token, Tokenization
from seqdelta.traits import (
    Diffable, EditableList, Transformable, TryTransformable, transformed,
)


class DigitTokenizer:
    """One token per digit; anything else fails."""

    def scan(self, items, i):
        if i < len(items) and items[i].isdigit():
            return Token("digit", i, i)
        raise ScanError(f"no digit at {i}")


# ═══════════════════════════════════════════════════════════════════
#  §1  PROTOCOLS
# ═══════════════════════════════════════════════════════════════════

class TestProtocols:

    def test_editable_list(self):
        v = EditableList([1, 2])
        assert isinstance(v, Diffable)
        assert isinstance(v, Transformable)
        assert isinstance(v, TryTransformable)

    def test_tokenization_is_try_transformable(self):
        tok = Tokenization(["1"], DigitTokenizer())
        assert isinstance(tok, TryTransformable)
        assert not isinstance(tok, Diffable)

    def test_plain_list_is_not_transformable(self):
        assert not isinstance([1, 2], Transformable)
        with pytest.raises(TypeError):
            transformed([1, 2], SequenceDelta())


# ═══════════════════════════════════════════════════════════════════
#  §2  EDITABLE LIST
# ═══════════════════════════════════════════════════════════════════

class TestEditableList:

    def test_diff_orientation(self):
        """self.diff(other) takes self to other."""
        v = EditableList([1, 2, 3])
        v.transform(v.diff([1, 4, 3]))
        assert v == [1, 4, 3]

    def test_transformed_leaves_original(self):
        v = EditableList([1, 2, 3])
        w = transformed(v, insert(0, [0]))
        assert w == [0, 1, 2, 3]
        assert isinstance(w, EditableList)
        assert v == [1, 2, 3]

    def test_try_transform_is_all_or_nothing(self):
        v = EditableList([1, 2, 3])
        d = SequenceDelta().append(range(0, 1), [9]).append(range(2, 9), [])
        with pytest.raises(OutOfRange):
            v.try_transform(d)
        assert v == [1, 2, 3]

    def test_transformed_tokenization(self):
        tok = Tokenization(["1", "2"], DigitTokenizer())
        grown = transformed(tok, insert(2, ["3"]))
        assert grown.items == ("1", "2", "3")
        assert grown.starts == (True, True, True)
        assert tok.items == ("1", "2")

    def test_transformed_tokenization_error(self):
        tok = Tokenization(["1", "2"], DigitTokenizer())
        with pytest.raises(ScanError):
            transformed(tok, replace(range(0, 1), ["x"]))
        assert tok.items == ("1", "2")
        tok.validate()


# ═══════════════════════════════════════════════════════════════════
#  §3  STRINGS
# ═══════════════════════════════════════════════════════════════════

class TestStrings:

    def test_string_seq_round_trip(self):
        assert string_to_seq("abc") == ["a", "b", "c"]
        assert seq_to_string(["a", "b", "c"]) == "abc"
        assert seq_to_string(string_to_seq("")) == ""

    def test_non_string_items(self):
        assert seq_to_string(["a", 1, "b"]) == "a?b"

    @pytest.mark.parametrize("a,b", [
        ("kitten", "sitting"),
        ("", "abc"),
        ("abc", ""),
        ("same", "same"),
        ("intention", "execution"),
    ])
    def test_patch(self, a, b):
        assert patch_string(a, diff_strings(a, b)) == b

    def test_payload_compares_with_string(self):
        payload = diff_strings("abc", "axc").get(0).payload
        assert payload == "x"
        assert payload == ["x"]
        assert payload != "y"
        assert "x" == payload

    def test_identical_strings_empty_delta(self):
        assert diff_strings("abc", "abc").is_empty()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
