"""
Unit tests for media type parsing (parsing/media_type.py).

Tests cover:
- Type/subtype normalization
- Token and quoted parameter values
- Bare disposition tokens
- RFC 2231 extended and continued parameters
- Malformed values
"""

import pytest

from eml_reader.parsing.media_type import parse_media_type


class TestParseMediaType:
    """Tests for parse_media_type() function."""

    @pytest.mark.unit
    def test_simple_type(self):
        """Test a media type without parameters."""
        parsed = parse_media_type("Text/HTML")

        assert parsed.media_type == "text/html"
        assert parsed.params == {}
        assert parsed.is_multipart is False

    @pytest.mark.unit
    def test_parameters(self):
        """Test token and quoted parameters with case-insensitive names."""
        parsed = parse_media_type('multipart/mixed; BOUNDARY="a b;c"; charset=utf-8')

        assert parsed.is_multipart is True
        assert parsed.param("boundary") == "a b;c"
        assert parsed.param("charset") == "utf-8"
        assert parsed.param("name") == ""

    @pytest.mark.unit
    def test_quoted_escapes(self):
        """Test backslash escapes inside quoted strings."""
        parsed = parse_media_type(r'attachment; filename="say \"hi\".txt"')

        assert parsed.params["filename"] == 'say "hi".txt'

    @pytest.mark.unit
    def test_bare_disposition(self):
        """Test a disposition token without a subtype."""
        parsed = parse_media_type("inline; filename=x.png")

        assert parsed.media_type == "inline"
        assert parsed.params["filename"] == "x.png"

    @pytest.mark.unit
    def test_trailing_semicolon(self):
        """Test that a trailing semicolon is tolerated."""
        parsed = parse_media_type("text/plain; charset=us-ascii;")

        assert parsed.params == {"charset": "us-ascii"}

    @pytest.mark.unit
    def test_rfc2231_extended(self):
        """Test charset'language'value parameters."""
        parsed = parse_media_type("attachment; filename*=UTF-8'en'na%C3%AFve.txt")

        assert parsed.params["filename"] == "naïve.txt"

    @pytest.mark.unit
    def test_rfc2231_continuations(self):
        """Test continued parameters are assembled in order."""
        parsed = parse_media_type(
            "attachment; filename*0*=utf-8''long%20; filename*1=name; filename*2=.pdf"
        )

        assert parsed.params["filename"] == "long name.pdf"

    @pytest.mark.unit
    def test_rfc2231_quoted_continuations(self):
        """Test quoted continuation pieces keep their escaped characters."""
        parsed = parse_media_type(r'attachment; title*0="say \"hi\""; title*1=" now"')

        assert parsed.params["title"] == 'say "hi" now'

    @pytest.mark.unit
    def test_rfc2231_extended_wins_over_plain(self):
        """Test the extended form replaces a plain parameter of the same name."""
        parsed = parse_media_type(
            "attachment; filename=fallback.txt; filename*=iso-8859-1''caf%E9.txt"
        )

        assert parsed.params["filename"] == "café.txt"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        [
            "",
            "   ",
            "text/",
            "/plain",
            "text/plain garbage",
            "text/plain; charset",
            "text/plain; charset=",
            'text/plain; name="unterminated',
            "text/plain; charset=utf-8; charset=latin1",
            "text/plain; charset=utf-8; charset=utf-8",
            "text/plain; name=a; NAME=a",
            "attachment; filename*=utf-8''a; filename*=utf-8''a",
        ],
    )
    def test_malformed(self, value):
        """Test malformed values raise ValueError."""
        with pytest.raises(ValueError):
            parse_media_type(value)
