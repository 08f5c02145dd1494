"""
Host classification and normalization.

A host is exactly one of an IP-literal, an IPv4 address or a registered name.
Each kind is its own frozen type so that a normalized host can never exist
without its classification.
"""

from dataclasses import dataclass
from typing import Union

from ..encoding.percent import lowercase_outside_triplets, normalize_triplets
from ..encoding.punycode import PunycodeError, domain_to_ascii
from ..errors import MalformedIri
from ..grammar.patterns import is_ip_literal, is_ipv4_address


@dataclass(frozen=True)
class IpLiteral:
    """Bracketed IPv6 literal; ``normalized`` keeps the brackets, hex is lowercased."""

    raw: str
    normalized: str

    def to_uri_host(self, validate_idna: bool = False) -> str:
        return self.normalized


@dataclass(frozen=True)
class Ipv4Address:
    """Dotted-quad IPv4 address, used unchanged."""

    raw: str
    normalized: str

    def to_uri_host(self, validate_idna: bool = False) -> str:
        return self.normalized


@dataclass(frozen=True)
class RegisteredName:
    """
    DNS-style host name; Punycode-encoded for the URI form.

    ``normalized`` is lowercased outside percent-encoded triplets, whose hex
    digits are uppercased (unreserved triplets are decoded first).
    """

    raw: str
    normalized: str

    def to_uri_host(self, validate_idna: bool = False) -> str:
        """
        Transcode the name to its ASCII-compatible form.

        Raises:
            MalformedIri: If Punycode encoding fails
        """
        try:
            return domain_to_ascii(self.normalized, validate=validate_idna)
        except PunycodeError as e:
            raise MalformedIri(
                "Punycode encoding failed for host", self.normalized
            ) from e


Host = Union[IpLiteral, Ipv4Address, RegisteredName]


def classify_host(raw: str) -> Host:
    """
    Classify and normalize a raw host string.

    Args:
        raw: Host as extracted from the authority (brackets included)

    Returns:
        IpLiteral, Ipv4Address or RegisteredName

    Raises:
        MalformedIri: For an empty host, an IPvFuture literal or a malformed
            bracket structure
    """
    if not raw:
        raise MalformedIri("Host cannot be empty when authority is present", raw)

    if is_ip_literal(raw):
        content = raw[1:-1]
        if content[:1] in ("v", "V"):
            raise MalformedIri("IPvFuture literals are not supported", raw)
        return IpLiteral(raw=raw, normalized=f"[{content.lower()}]")

    if raw.startswith("[") or raw.endswith("]"):
        raise MalformedIri("Malformed IP literal host", raw)

    if is_ipv4_address(raw):
        return Ipv4Address(raw=raw, normalized=raw)

    return RegisteredName(
        raw=raw, normalized=lowercase_outside_triplets(normalize_triplets(raw))
    )
