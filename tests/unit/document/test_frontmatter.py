"""
Unit tests for frontmatter splitting.
"""

import pytest

from notedex.document.frontmatter import NOTE_HANDLER, dump_frontmatter, split_frontmatter
from notedex.exceptions import ParseError


class TestSplitFrontmatter:
    """Tests for the split_frontmatter function."""

    def test_opening_delimiter(self):
        """Test a block opened and closed by delimiter lines."""
        meta, body = split_frontmatter("---\ntitle: Hello\n---\nBody text")
        assert meta == "title: Hello\n"
        assert body == "Body text"

    def test_without_opening_delimiter(self):
        """Test a block with only the closing delimiter."""
        meta, body = split_frontmatter("title: Hello\ntags: foo\n---\nBody text")
        assert meta == "title: Hello\ntags: foo\n"
        assert body == "Body text"

    def test_body_kept_verbatim(self):
        """Test that the body, including later delimiters, is untouched."""
        text = "---\ntitle: x\n---\n\n  line one\n---\nline two\n"
        _, body = split_frontmatter(text)
        assert body == "\n  line one\n---\nline two\n"

    def test_empty_body(self):
        """Test a note whose closing delimiter ends the text."""
        meta, body = split_frontmatter("title: x\n---")
        assert meta == "title: x\n"
        assert body == ""

    def test_crlf_line_endings(self):
        """Test Windows line endings."""
        meta, body = split_frontmatter("---\r\ntitle: x\r\n---\r\nBody")
        assert "title: x" in meta
        assert body == "Body"

    def test_no_delimiter(self):
        """Test text without any delimiter."""
        with pytest.raises(ParseError) as excinfo:
            split_frontmatter("title: Hello\nBody text")
        assert excinfo.value.message == "No metadata found"

    def test_blank_block(self):
        """Test an empty metadata block."""
        with pytest.raises(ParseError):
            split_frontmatter("---\n\n---\nBody")


class TestNoteYAMLHandler:
    """Tests for the python-frontmatter handler and dump_frontmatter."""

    def test_detect(self):
        """Test that a closing delimiter alone is detected."""
        assert NOTE_HANDLER.detect("title: x\n---\nbody")
        assert not NOTE_HANDLER.detect("title: x\nbody")

    def test_load(self):
        """Test that the block loads as YAML."""
        meta, _ = split_frontmatter("title: Hello\ntags: [a, b]\n---\n")
        assert NOTE_HANDLER.load(meta) == {"title": "Hello", "tags": ["a", "b"]}

    def test_dump_keeps_order_and_content(self):
        """Test key order and the untouched content after the block."""
        text = dump_frontmatter({"title": "x", "date": 1, "body": "b"}, "\n  body\n")
        assert text == "---\ntitle: x\ndate: 1\nbody: b\n---\n\n  body\n"

    def test_dump_without_content(self):
        """Test a metadata block on its own."""
        assert dump_frontmatter({"title": "x"}) == "---\ntitle: x\n---\n"

    def test_dump_splits_back(self):
        """Test that a dumped block splits back into block and body."""
        meta, body = split_frontmatter(dump_frontmatter({"title": "x"}, "Body\n"))
        assert meta == "title: x\n"
        assert body == "Body\n"
