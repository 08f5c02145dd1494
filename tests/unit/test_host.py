"""Unit tests for host classification."""

import pytest

from iri.errors import MalformedIri
from iri.normalization import IpLiteral, Ipv4Address, RegisteredName, classify_host


class TestClassifyHost:
    """Test suite for classify_host."""

    def test_registered_name(self):
        """Test registered names are lowercased."""
        host = classify_host("Example.COM")

        assert isinstance(host, RegisteredName)
        assert host.raw == "Example.COM"
        assert host.normalized == "example.com"

    def test_ipv4(self):
        """Test dotted quads are classified as IPv4."""
        host = classify_host("192.168.0.1")

        assert isinstance(host, Ipv4Address)
        assert host.normalized == "192.168.0.1"

    def test_registered_name_triplets(self):
        """Test triplets keep uppercase hex and unreserved ones are decoded."""
        assert classify_host("%e4%be%8b.COM").normalized == "%E4%BE%8B.com"
        assert classify_host("EX%41MPLE.COM").normalized == "example.com"

    def test_invalid_ipv4_is_registered_name(self):
        """Test out-of-range octets fall back to a registered name."""
        assert isinstance(classify_host("999.1.1.1"), RegisteredName)

    def test_ip_literal(self):
        """Test IPv6 literals keep brackets and get lowercase hex."""
        host = classify_host("[2001:DB8::1]")

        assert isinstance(host, IpLiteral)
        assert host.normalized == "[2001:db8::1]"

    def test_empty_host(self):
        """Test an empty host is rejected."""
        with pytest.raises(MalformedIri, match="Host cannot be empty"):
            classify_host("")

    def test_ipvfuture_rejected(self):
        """Test IPvFuture literals are unsupported."""
        with pytest.raises(MalformedIri, match="IPvFuture"):
            classify_host("[v1.fe]")

    @pytest.mark.parametrize("raw", ["[::1", "::1]", "[example.com]"])
    def test_malformed_brackets(self, raw):
        """Test unbalanced or non-IP brackets are rejected."""
        with pytest.raises(MalformedIri, match="Malformed IP literal"):
            classify_host(raw)


class TestToUriHost:
    """Test suite for the URI form of each host kind."""

    def test_registered_name_punycode(self):
        """Test registered names are transcoded to Punycode."""
        assert classify_host("例子.com").to_uri_host() == "xn--fsqu00a.com"
        assert classify_host("Exämple.org").to_uri_host() == "xn--exmple-cua.org"

    def test_addresses_unchanged(self):
        """Test IP hosts are used as-is."""
        assert classify_host("[::1]").to_uri_host() == "[::1]"
        assert classify_host("10.0.0.1").to_uri_host() == "10.0.0.1"

    def test_punycode_failure(self):
        """Test transcoding failures surface as MalformedIri."""
        with pytest.raises(MalformedIri) as exc_info:
            classify_host("☃.com").to_uri_host(validate_idna=True)

        assert exc_info.value.reason == "Punycode encoding failed for host"
        assert exc_info.value.value == "☃.com"
