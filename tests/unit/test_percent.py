"""Unit tests for percent-encoding normalization and decoding."""

import pytest

from iri.encoding import (
    decode_component,
    lowercase_outside_triplets,
    normalize_encoding,
    normalize_triplets,
    percent_encode_byte,
)
from iri.grammar.charsets import (
    IRI_PATH_ALLOWED,
    IRI_QUERY_ALLOWED,
    URI_FRAGMENT_ALLOWED,
    URI_PATH_ALLOWED,
    URI_QUERY_ALLOWED,
    URI_USERINFO_ALLOWED,
)


class TestNormalizeEncoding:
    """Test suite for mapping IRI components to their URI form."""

    def test_non_ascii_is_encoded(self):
        """Test UTF-8 bytes of non-ASCII characters become triplets."""
        assert normalize_encoding("pȧth", URI_PATH_ALLOWED) == "p%C8%A7th"
        assert normalize_encoding("例子", URI_PATH_ALLOWED) == "%E4%BE%8B%E5%AD%90"

    def test_allowed_ascii_is_kept(self):
        """Test allowed ASCII characters pass through."""
        assert normalize_encoding("/a-b_c~d:e@f!$", URI_PATH_ALLOWED) == "/a-b_c~d:e@f!$"

    def test_disallowed_ascii_is_encoded(self):
        """Test ASCII outside the allowed set is encoded."""
        assert normalize_encoding("a b", URI_PATH_ALLOWED) == "a%20b"
        assert normalize_encoding("a?b", URI_PATH_ALLOWED) == "a%3Fb"
        assert normalize_encoding("a?b", URI_QUERY_ALLOWED) == "a?b"

    def test_existing_triplets_are_copied(self):
        """Test existing triplets are copied without changing their case."""
        assert normalize_encoding("%e2%82%ac", URI_PATH_ALLOWED) == "%e2%82%ac"
        assert normalize_encoding("%2F", URI_PATH_ALLOWED) == "%2F"

    def test_lone_percent_is_encoded(self):
        """Test a percent sign without two hex digits is encoded."""
        assert normalize_encoding("100%", URI_PATH_ALLOWED) == "100%25"
        assert normalize_encoding("%zz", URI_PATH_ALLOWED) == "%25zz"
        assert normalize_encoding("%a", URI_PATH_ALLOWED) == "%25a"

    def test_output_is_ascii(self):
        """Test output never contains non-ASCII characters."""
        result = normalize_encoding("ñ€\U0001F600 x", URI_QUERY_ALLOWED)
        assert result.isascii()
        assert result == "%C3%B1%E2%82%AC%F0%9F%98%80%20x"

    @pytest.mark.parametrize(
        "allowed",
        [URI_USERINFO_ALLOWED, URI_PATH_ALLOWED, URI_QUERY_ALLOWED, URI_FRAGMENT_ALLOWED],
        ids=["userinfo", "path", "query", "fragment"],
    )
    @pytest.mark.parametrize(
        "raw",
        [
            "pȧth/ñ €",
            "100%",
            "%zz%",
            "%%41",
            "%e2%82%ac and %E2%82%AC",
            "a?b#c[d]@e:f/g",
            "user:pw@例子",
            "",
        ],
    )
    def test_idempotent(self, raw, allowed):
        """Test normalizing an already normalized component changes nothing."""
        once = normalize_encoding(raw, allowed)

        assert once.isascii()
        assert normalize_encoding(once, allowed) == once

    def test_percent_encode_byte(self):
        """Test triplets use uppercase hex."""
        assert percent_encode_byte(0x0A) == "%0A"
        assert percent_encode_byte(0xAB) == "%AB"


class TestDecodeComponent:
    """Test suite for mapping URI components back to their IRI form."""

    def test_decodes_ucschar(self):
        """Test multi-byte sequences of ucschar are decoded."""
        assert decode_component("p%C8%A7th", IRI_PATH_ALLOWED) == "pȧth"
        assert decode_component("%e2%82%ac", IRI_PATH_ALLOWED) == "€"
        assert decode_component("%c3%a4", IRI_PATH_ALLOWED) == "ä"

    def test_decodes_allowed_ascii(self):
        """Test triplets of allowed ASCII characters are decoded."""
        assert decode_component("%41%7E", IRI_PATH_ALLOWED) == "A~"

    def test_keeps_reserved_triplets(self):
        """Test characters that must stay encoded are re-emitted uppercase."""
        assert decode_component("a%2fb", IRI_PATH_ALLOWED) == "a%2Fb"
        assert decode_component("a%20b", IRI_PATH_ALLOWED) == "a%20b"
        assert decode_component("a%2Fb", IRI_QUERY_ALLOWED) == "a/b"

    def test_iprivate(self):
        """Test private-use characters are only decoded when allowed."""
        assert decode_component("%EE%80%80", IRI_QUERY_ALLOWED, allow_iprivate=True) == "\ue000"
        assert decode_component("%EE%80%80", IRI_QUERY_ALLOWED) == "%EE%80%80"

    @pytest.mark.parametrize(
        "encoded,expected",
        [
            # Incomplete sequence at the end
            ("%E2%82", "%E2%82"),
            # Sequence interrupted by an ASCII byte
            ("%C3%28", "%C3("),
            # Sequence interrupted by a literal character
            ("%C3x", "%C3x"),
            # Overlong encoding of "/"
            ("%C0%AF", "%C0%AF"),
            # Encoded surrogate
            ("%ED%A0%80", "%ED%A0%80"),
            # Stray continuation byte
            ("%80a", "%80a"),
            # Beyond U+10FFFF
            ("%F4%90%80%80", "%F4%90%80%80"),
        ],
    )
    def test_malformed_utf8_is_preserved(self, encoded, expected):
        """Test invalid UTF-8 degrades to uppercase triplets instead of raising."""
        assert decode_component(encoded, IRI_PATH_ALLOWED) == expected

    def test_literal_percent_is_kept(self):
        """Test a percent sign without hex digits is not a decode marker."""
        assert decode_component("100%", IRI_PATH_ALLOWED) == "100%"

    def test_literal_text_is_kept(self):
        """Test literal characters pass through unchanged."""
        assert decode_component("ñ/a", IRI_PATH_ALLOWED) == "ñ/a"


class TestNormalizeTriplets:
    """Test suite for URI case and percent-encoding normalization."""

    def test_unreserved_decoded(self):
        """Test triplets of unreserved characters are decoded."""
        assert normalize_triplets("%7Euser") == "~user"
        assert normalize_triplets("%41%2d") == "A-"

    def test_other_triplets_uppercased(self):
        """Test remaining triplets get uppercase hex."""
        assert normalize_triplets("%e2%82%ac%2f") == "%E2%82%AC%2F"

    def test_lowercase_outside_triplets(self):
        """Test lowercasing leaves triplet hex digits untouched."""
        assert lowercase_outside_triplets("EX%C3%A4.COM") == "ex%C3%A4.com"
        assert lowercase_outside_triplets("%e4%BE.Com") == "%e4%BE.com"
