"""Tests for the string analyzer functions."""

import hashlib
from datetime import datetime, timezone

import pytest

from string_analyzer.errors import InvalidInput
from string_analyzer.utils import (
    analyze_string,
    build_string_record,
    compute_sha256,
    count_words,
    is_palindrome,
    trim,
)


class TestAnalyzeString:
    def test_properties_of_simple_word(self):
        result = analyze_string("hello")
        assert result == {
            "length": 5,
            "is_palindrome": False,
            "unique_characters": 4,
            "word_count": 1,
            "sha256_hash": hashlib.sha256(b"hello").hexdigest(),
            "character_frequency_map": {"h": 1, "e": 1, "l": 2, "o": 1},
        }

    def test_palindrome_ignores_case(self):
        assert analyze_string("Racecar")["is_palindrome"] is True

    def test_whitespace_only_is_empty_palindrome(self):
        result = analyze_string("  ")
        assert result["is_palindrome"] is True
        assert result["length"] == 0
        assert result["word_count"] == 0
        assert result["unique_characters"] == 0
        assert result["character_frequency_map"] == {}

    def test_palindrome_keeps_inner_spaces(self):
        # spaces are compared like any other character
        assert analyze_string("nurses run")["is_palindrome"] is False
        assert analyze_string("step on no pets")["is_palindrome"] is True

    @pytest.mark.parametrize("value, expected", [
        ("  a  b   c ", 3),
        ("", 0),
        ("one", 1),
        ("tab\tseparated\nlines", 3),
    ])
    def test_word_count(self, value, expected):
        assert analyze_string(value)["word_count"] == expected

    def test_character_frequency(self):
        assert analyze_string("aab")["character_frequency_map"] == {"a": 2, "b": 1}

    def test_character_frequency_is_case_sensitive(self):
        assert analyze_string("Aa")["character_frequency_map"] == {"A": 1, "a": 1}

    def test_length_uses_trimmed_value(self):
        value = "   spaced out\t\n"
        assert analyze_string(value)["length"] == len(value.strip())

    def test_hash_uses_trimmed_value(self):
        assert analyze_string("  hello  ")["sha256_hash"] == analyze_string("hello")["sha256_hash"]
        assert analyze_string("hello")["sha256_hash"] != analyze_string("Hello")["sha256_hash"]

    def test_hash_is_utf8_lowercase_hex(self):
        digest = analyze_string("héllo")["sha256_hash"]
        assert digest == hashlib.sha256("héllo".encode("utf-8")).hexdigest()
        assert digest == digest.lower()
        assert len(digest) == 64

    def test_is_deterministic(self):
        assert analyze_string(" same text ") == analyze_string("same text")

    @pytest.mark.parametrize("value, trimmed", [
        ("\ufeffbom\ufeff", "bom"),
        ("\u00a0\u2003wide\u3000", "wide"),
        ("\u2028line\u2029", "line"),
        ("\x1cunit\x1f", "\x1cunit\x1f"),
        ("\x85next\x85", "\x85next\x85"),
    ])
    def test_trims_the_same_whitespace_set(self, value, trimmed):
        assert trim(value) == trimmed
        assert analyze_string(value)["sha256_hash"] == compute_sha256(trimmed)

    def test_word_count_splits_on_the_same_whitespace_set(self):
        assert analyze_string("one\ufefftwo\u3000three")["word_count"] == 3
        assert analyze_string("one\x1ctwo\x85three")["word_count"] == 1

    def test_astral_characters_count_as_one_code_point(self):
        result = analyze_string("\U0001f600")
        assert result["length"] == 1
        assert result["is_palindrome"] is True
        assert result["character_frequency_map"] == {"\U0001f600": 1}

    @pytest.mark.parametrize("value", [None, 42, 3.5, ["a"], b"bytes"])
    def test_rejects_non_string(self, value):
        with pytest.raises(InvalidInput):
            analyze_string(value)


class TestHelpers:
    def test_compute_sha256(self):
        assert compute_sha256("") == hashlib.sha256(b"").hexdigest()

    def test_is_palindrome_reverses_code_points(self):
        assert is_palindrome("Abba")
        assert not is_palindrome("abc")

    def test_count_words_collapses_whitespace(self):
        assert count_words("a   b") == 2


class TestBuildStringRecord:
    def test_keeps_original_value(self):
        record = build_string_record("  Level ")
        assert record["value"] == "  Level "
        assert record["id"] == compute_sha256("Level")
        assert record["properties"]["sha256_hash"] == record["id"]
        assert record["properties"]["length"] == 5

    def test_created_at_defaults_to_now_utc(self):
        before = datetime.now(timezone.utc)
        record = build_string_record("x")
        assert before <= record["created_at"] <= datetime.now(timezone.utc)

    def test_created_at_can_be_given(self):
        created_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert build_string_record("x", created_at)["created_at"] == created_at
