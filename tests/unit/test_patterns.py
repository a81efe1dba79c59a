"""Unit tests for RegExp-compatible pattern compilation."""

from __future__ import annotations

import re

import pytest

from framegate.patterns import compile_pattern, translate_pattern


class TestTranslatePattern:
    @pytest.mark.parametrize(
        "source, expected",
        [
            (r"^ABC-\d+-DEF$", r"^ABC-\d+-DEF\Z"),
            (r"a|b$", r"a|b\Z"),
            (r"price \$5", r"price \$5"),
            (r"[$]x", r"[$]x"),
            (r"[\]$]$", r"[\]$]\Z"),
            (r"no anchors", r"no anchors"),
        ],
    )
    def test_end_anchor_rewrite(self, source: str, expected: str) -> None:
        assert translate_pattern(source) == expected


class TestCompilePattern:
    def test_end_anchor_rejects_trailing_newline(self) -> None:
        pattern = compile_pattern(r"^ABC-\d+-DEF$")
        assert pattern.search("ABC-123-DEF")
        assert pattern.search("ABC-123-DEF\n") is None

    def test_digit_class_is_ascii_only(self) -> None:
        pattern = compile_pattern(r"^\d+$")
        assert pattern.search("123")
        assert pattern.search("١٢٣") is None

    def test_literal_dollar_still_matches(self) -> None:
        assert compile_pattern(r"cost: \$\d+").search("cost: $40")

    def test_invalid_pattern_raises(self) -> None:
        with pytest.raises(re.error):
            compile_pattern("([unclosed")
