"""Tests for front matter splitting and parsing."""

import pytest
from datetime import datetime, timedelta, timezone

from bindery_pkg.frontmatter import FrontMatter, split_document, parse_front_matter, parse_document
from bindery_pkg.errors import InvalidFrontMatterError, UnmarshalFrontMatterError


class TestSplitDocument:
    """Test cases for split_document."""

    def test_three_segments(self):
        """Test that a well-formed document yields metadata and body."""
        metadata, body = split_document(b"---\ntitle: Hello\n---\n# Hi\n")
        assert metadata == "\ntitle: Hello\n"
        assert body == "\n# Hi\n"

    def test_body_keeps_later_delimiters(self):
        """Test that horizontal rules in the body are not treated as delimiters."""
        _, body = split_document(b"---\ntitle: x\n---\nabove\n\n---\n\nbelow\n")
        assert "above" in body
        assert "---" in body
        assert "below" in body

    def test_missing_second_delimiter(self):
        """Test that a document with only one delimiter is rejected."""
        with pytest.raises(InvalidFrontMatterError) as excinfo:
            split_document(b"---\ntitle: Hello\n# Hi\n", path='content/hello.md')
        assert excinfo.value.path == 'content/hello.md'
        assert excinfo.value.kind == 'InvalidFrontMatter'

    def test_no_front_matter(self):
        """Test that a document without front matter is rejected."""
        with pytest.raises(InvalidFrontMatterError):
            split_document(b"# Just markdown\n")

    def test_text_before_front_matter(self):
        """Test that content before the first delimiter is rejected."""
        with pytest.raises(InvalidFrontMatterError):
            split_document(b"intro\n---\ntitle: x\n---\nbody\n")

    def test_byte_order_mark_is_tolerated(self):
        """Test that a UTF-8 BOM does not count as leading content."""
        metadata, _ = split_document("\ufeff---\ntitle: x\n---\nbody".encode('utf-8'))
        assert "title: x" in metadata

    def test_invalid_utf8(self):
        """Test that undecodable bytes are reported as invalid front matter."""
        with pytest.raises(InvalidFrontMatterError, match="UTF-8"):
            split_document(b"---\ntitle: \xff\xfe\n---\nbody")


class TestParseFrontMatter:
    """Test cases for parse_front_matter."""

    def test_full_record(self):
        """Test parsing every field."""
        fm = parse_front_matter(
            "title: Hello\ndate: 2024-01-02\ndescription: Greeting\ndraft: false\nlayout: wide\n")
        assert fm == FrontMatter(
            title='Hello',
            date=datetime(2024, 1, 2, tzinfo=timezone.utc),
            description='Greeting',
            draft=False,
            layout='wide',
        )

    def test_defaults(self):
        """Test that optional fields fall back to defaults."""
        fm = parse_front_matter("date: 2024-01-02\n")
        assert fm.title == ''
        assert fm.description == ''
        assert fm.draft is False
        assert fm.layout == ''

    def test_timestamp_with_offset(self):
        """Test that timezone offsets are preserved."""
        fm = parse_front_matter("date: 2024-01-02T10:30:00+02:00\n")
        assert fm.date.utcoffset() == timedelta(hours=2)
        assert fm.date.hour == 10

    def test_quoted_iso_date(self):
        """Test that ISO dates given as strings are accepted."""
        fm = parse_front_matter('date: "2024-03-04 05:06:07"\n')
        assert fm.date == datetime(2024, 3, 4, 5, 6, 7, tzinfo=timezone.utc)

    def test_quoted_utc_designator(self):
        """Test that a trailing Z is read as UTC on every supported Python."""
        fm = parse_front_matter('date: "2024-01-02T08:00:00Z"\n')
        assert fm.date == datetime(2024, 1, 2, 8, tzinfo=timezone.utc)

    def test_unknown_keys_are_ignored(self):
        """Test that extra metadata does not cause an error."""
        fm = parse_front_matter("date: 2024-01-02\ntags: [a, b]\n")
        assert fm.date.year == 2024

    @pytest.mark.parametrize('metadata', [
        "title: [unclosed\n",
        "- just\n- a list\n",
        "",
        "title: No date\n",
        "date: not a date\n",
        "date: 12\n",
        "date: 2024-02-30\n",
        "date: 2024-13-45\n",
        "title: 123\ndate: 2024-01-02\n",
        'date: 2024-01-02\ndraft: "maybe"\n',
        "date: 2024-01-02\nlayout: [a]\n",
    ])
    def test_schema_violations(self, metadata):
        """Test that malformed metadata is rejected with UnmarshalFrontMatterError."""
        with pytest.raises(UnmarshalFrontMatterError):
            parse_front_matter(metadata, path='content/bad.md')

    def test_yaml_safe_loading(self):
        """Test that YAML tags cannot construct arbitrary Python objects."""
        with pytest.raises(UnmarshalFrontMatterError):
            parse_front_matter("!!python/object/apply:os.system\n- echo pwned\n")


class TestParseDocument:
    """Test cases for parse_document."""

    def test_draft_is_still_parsed(self):
        """Test that drafts go through full validation."""
        fm, body = parse_document(b"---\ntitle: Later\ndate: 2024-01-02\ndraft: true\n---\nbody")
        assert fm.draft is True
        assert body == "\nbody"

    def test_malformed_draft_fails(self):
        """Test that a draft with broken metadata still fails."""
        with pytest.raises(UnmarshalFrontMatterError):
            parse_document(b"---\ndraft: true\n---\nbody")
