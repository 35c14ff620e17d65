#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit Tests for the document accessor

Tests cover:
- Offset <-> position conversion
- CRLF line endings
- Ranges and range text
- Language inference from file extensions
"""

import pytest

from interline.document import Position, Range, TextDocument


class TestPositions:
    """Offset and position conversion"""

    def test_position_at_first_line(self):
        doc = TextDocument("hello world\nsecond line")
        assert doc.position_at(0) == Position(0, 0)
        assert doc.position_at(6) == Position(0, 6)

    def test_position_at_next_line(self):
        doc = TextDocument("hello world\nsecond line")
        assert doc.position_at(12) == Position(1, 0)
        assert doc.position_at(19) == Position(1, 7)

    def test_offset_roundtrip_every_character(self):
        text = "ab\ncd ef\n\nlast"
        doc = TextDocument(text)
        for offset in range(len(text) + 1):
            if offset < len(text) and text[offset] == "\n":
                continue
            assert doc.offset_at(doc.position_at(offset)) == offset

    def test_offsets_are_clamped(self):
        doc = TextDocument("abc\ndef")
        assert doc.position_at(-5) == Position(0, 0)
        assert doc.position_at(100) == Position(1, 3)
        assert doc.offset_at(Position(0, 99)) == 3
        assert doc.offset_at(Position(10, 0)) == len("abc\ndef")

    def test_crlf_is_not_part_of_line(self):
        doc = TextDocument("first\r\nsecond")
        assert doc.lines == ["first", "second"]
        assert doc.offset_at(Position(1, 0)) == 7
        assert doc.position_at(5) == Position(0, 5)
        # Offset of "\r" maps to end of line
        assert doc.position_at(6) == Position(0, 5)

    def test_line_count_and_text(self):
        doc = TextDocument("a\nb\n")
        assert doc.line_count == 3
        assert doc.line_text(2) == ""
        with pytest.raises(IndexError):
            doc.line_text(3)


class TestRanges:
    """Range validation and text extraction"""

    def test_get_text_of_range(self):
        doc = TextDocument("let x = 1;\n/* block\ncomment */ y")
        rng = Range(Position(1, 0), Position(2, 10))
        assert doc.get_text(rng) == "/* block\ncomment */"

    def test_get_text_without_range(self):
        doc = TextDocument("whole text")
        assert doc.get_text() == "whole text"

    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            Range(Position(2, 0), Position(1, 5))

    def test_contains(self):
        rng = Range(Position(0, 2), Position(1, 3))
        assert rng.contains(Position(0, 2))
        assert rng.contains(Position(1, 0))
        assert not rng.contains(Position(1, 3))
        assert not rng.contains(Position(0, 1))


class TestFromPath:
    """Loading documents from disk"""

    @pytest.mark.parametrize("name,language", [
        ("app.py", "python"),
        ("index.ts", "typescript"),
        ("main.C", "c"),
        ("README.md", "markdown"),
        ("notes.unknown", "plaintext"),
    ])
    def test_language_from_extension(self, tmp_path, name, language):
        path = tmp_path / name
        path.write_text("content here", encoding="utf-8")
        doc = TextDocument.from_path(path)
        assert doc.language_id == language
        assert doc.uri.startswith("file://")

    def test_explicit_language_wins(self, tmp_path):
        path = tmp_path / "script.txt"
        path.write_text("echo hi", encoding="utf-8")
        assert TextDocument.from_path(path, "shellscript").language_id == "shellscript"
