"""
Tests for the cyclic message source (CharGen)
"""

from itertools import islice

import pytest

from animations.char_gen import CharGen


class TestCycling:

    def test_returns_message_in_order(self):
        chars = CharGen("Hello World ")
        assert "".join(islice(chars, 12)) == "Hello World "

    def test_repeats_with_message_period(self):
        chars = CharGen("abc")
        assert "".join(islice(chars, 10)) == "abcabcabca"

    def test_single_character_repeats_forever(self):
        chars = CharGen("x")
        assert list(islice(chars, 5)) == ["x"] * 5
        assert chars.position == 0

    def test_position_wraps(self):
        chars = CharGen("ab")
        next(chars)
        assert chars.position == 1
        next(chars)
        assert chars.position == 0


class TestUpdate:

    def test_update_keeps_phase(self):
        """Position 5 of a 6-char message becomes 5 % 3 = 2"""
        chars = CharGen("abcdef")
        for _ in range(5):
            next(chars)
        assert chars.position == 5

        chars.update("xyz")

        assert chars.position == 2
        assert next(chars) == "z"
        assert next(chars) == "x"

    def test_update_with_longer_message_keeps_position(self):
        chars = CharGen("ab")
        next(chars)
        chars.update("Hello")
        assert chars.position == 1
        assert next(chars) == "e"

    def test_update_replaces_text(self):
        chars = CharGen("old")
        chars.update("new text")
        assert chars.text == "new text"

    def test_empty_update_rejected(self):
        chars = CharGen("abc")
        with pytest.raises(ValueError):
            chars.update("")
        assert chars.text == "abc"


def test_empty_message_rejected():
    with pytest.raises(ValueError):
        CharGen("")
