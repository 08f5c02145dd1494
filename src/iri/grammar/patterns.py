"""
Regular expressions for the RFC 3987 IRI grammar.

The ABNF productions below are compiled into a single pattern. Where the
grammar is ambiguous the "first-match-wins" rule of RFC 3986 applies, which
maps onto leftmost alternation in the regular expression engine::

    IRI-reference  = IRI / irelative-ref
    IRI            = scheme ":" ihier-part [ "?" iquery ] [ "#" ifragment ]
    ihier-part     = "//" iauthority ipath-abempty
                   / ipath-absolute / ipath-rootless / ipath-empty
    irelative-ref  = irelative-part [ "?" iquery ] [ "#" ifragment ]
    irelative-part = "//" iauthority ipath-abempty
                   / ipath-absolute / ipath-noscheme / ipath-empty
    iauthority     = [ iuserinfo "@" ] ihost [ ":" port ]
    iuserinfo      = *( iunreserved / pct-encoded / sub-delims / ":" )
    ihost          = IP-literal / IPv4address / ireg-name
    ireg-name      = *( iunreserved / pct-encoded / sub-delims )
    ipath-abempty  = *( "/" isegment )
    ipath-absolute = "/" [ isegment-nz *( "/" isegment ) ]
    ipath-noscheme = isegment-nz-nc *( "/" isegment )
    ipath-rootless = isegment-nz *( "/" isegment )
    ipath-empty    = 0<ipchar>
    isegment       = *ipchar
    isegment-nz    = 1*ipchar
    isegment-nz-nc = 1*( iunreserved / pct-encoded / sub-delims / "@" )
    ipchar         = iunreserved / pct-encoded / sub-delims / ":" / "@"
    iquery         = *( ipchar / iprivate / "/" / "?" )
    ifragment      = *( ipchar / "/" / "?" )
    iunreserved    = ALPHA / DIGIT / "-" / "." / "_" / "~" / ucschar

Scheme, port, IP-literal, IPv4address and pct-encoded are shared with
RFC 3986.
"""

import re

from .charsets import IPRIVATE_RANGES, UCSCHAR_RANGES, ranges_to_class

# Bodies of character classes (without the surrounding brackets)
_UNRESERVED = r"A-Za-z0-9\-._~"
_SUB_DELIMS = r"!$&'()*+,;="
_UCSCHAR = ranges_to_class(UCSCHAR_RANGES)
_IPRIVATE = ranges_to_class(IPRIVATE_RANGES)
_IUNRESERVED = _UNRESERVED + _UCSCHAR

PCT_ENCODED = r"%[0-9A-Fa-f]{2}"

SCHEME = r"[A-Za-z][A-Za-z0-9+\-.]*"
PORT = r"[0-9]*"

H16 = r"[0-9A-Fa-f]{1,4}"
DEC_OCTET = r"(?:25[0-5]|2[0-4][0-9]|1[0-9]{2}|[1-9][0-9]|[0-9])"
IPV4_ADDRESS = rf"{DEC_OCTET}\.{DEC_OCTET}\.{DEC_OCTET}\.{DEC_OCTET}"
LS32 = rf"(?:{H16}:{H16}|{IPV4_ADDRESS})"
IPV6_ADDRESS = (
    r"(?:"
    rf"(?:{H16}:){{6}}{LS32}"
    rf"|::(?:{H16}:){{5}}{LS32}"
    rf"|(?:{H16})?::(?:{H16}:){{4}}{LS32}"
    rf"|(?:(?:{H16}:){{0,1}}{H16})?::(?:{H16}:){{3}}{LS32}"
    rf"|(?:(?:{H16}:){{0,2}}{H16})?::(?:{H16}:){{2}}{LS32}"
    rf"|(?:(?:{H16}:){{0,3}}{H16})?::{H16}:{LS32}"
    rf"|(?:(?:{H16}:){{0,4}}{H16})?::{LS32}"
    rf"|(?:(?:{H16}:){{0,5}}{H16})?::{H16}"
    rf"|(?:(?:{H16}:){{0,6}}{H16})?::"
    r")"
)
IPV_FUTURE = rf"[vV][0-9A-Fa-f]+\.[{_UNRESERVED}{_SUB_DELIMS}:]+"
IP_LITERAL = rf"\[(?:{IPV6_ADDRESS}|{IPV_FUTURE})\]"

IUSERINFO = rf"(?:[{_IUNRESERVED}{_SUB_DELIMS}:]|{PCT_ENCODED})*"
IREG_NAME = rf"(?:[{_IUNRESERVED}{_SUB_DELIMS}]|{PCT_ENCODED})*"
IHOST = rf"(?:{IP_LITERAL}|{IPV4_ADDRESS}|{IREG_NAME})"
IAUTHORITY = rf"(?:{IUSERINFO}@)?{IHOST}(?::{PORT})?"

IPCHAR = rf"(?:[{_IUNRESERVED}{_SUB_DELIMS}:@]|{PCT_ENCODED})"
ISEGMENT = rf"{IPCHAR}*"
ISEGMENT_NZ = rf"{IPCHAR}+"
ISEGMENT_NZ_NC = rf"(?:[{_IUNRESERVED}{_SUB_DELIMS}@]|{PCT_ENCODED})+"

IPATH_ABEMPTY = rf"(?:/{ISEGMENT})*"
IPATH_ABSOLUTE = rf"/(?:{ISEGMENT_NZ}(?:/{ISEGMENT})*)?"
IPATH_NOSCHEME = rf"{ISEGMENT_NZ_NC}(?:/{ISEGMENT})*"
IPATH_ROOTLESS = rf"{ISEGMENT_NZ}(?:/{ISEGMENT})*"
IPATH_EMPTY = r""

IHIER_PART = (
    rf"(?://{IAUTHORITY}{IPATH_ABEMPTY}|{IPATH_ABSOLUTE}"
    rf"|{IPATH_ROOTLESS}|{IPATH_EMPTY})"
)
IRELATIVE_PART = (
    rf"(?://{IAUTHORITY}{IPATH_ABEMPTY}|{IPATH_ABSOLUTE}"
    rf"|{IPATH_NOSCHEME}|{IPATH_EMPTY})"
)

IQUERY = rf"(?:[{_IUNRESERVED}{_SUB_DELIMS}:@/?{_IPRIVATE}]|{PCT_ENCODED})*"
IFRAGMENT = rf"(?:[{_IUNRESERVED}{_SUB_DELIMS}:@/?]|{PCT_ENCODED})*"

ABSOLUTE_IRI = rf"{SCHEME}:{IHIER_PART}(?:\?{IQUERY})?"
IRI = rf"{ABSOLUTE_IRI}(?:#{IFRAGMENT})?"
IRELATIVE_REF = rf"{IRELATIVE_PART}(?:\?{IQUERY})?(?:#{IFRAGMENT})?"
IRI_REFERENCE = rf"(?:{IRI}|{IRELATIVE_REF})"

_IRI_REFERENCE_RE = re.compile(IRI_REFERENCE)
_ABSOLUTE_IRI_RE = re.compile(ABSOLUTE_IRI)
_SCHEME_RE = re.compile(SCHEME)
_IP_LITERAL_RE = re.compile(IP_LITERAL)
_IPV4_ADDRESS_RE = re.compile(IPV4_ADDRESS)
_IPV6_ADDRESS_RE = re.compile(IPV6_ADDRESS)


def is_valid_iri_reference(text: str) -> bool:
    """Check whether the whole string is an RFC 3987 IRI-reference."""
    return _IRI_REFERENCE_RE.fullmatch(text) is not None


def is_absolute_iri(text: str) -> bool:
    """Check whether the whole string is an absolute-IRI (scheme, no fragment)."""
    return _ABSOLUTE_IRI_RE.fullmatch(text) is not None


def match_scheme(text: str) -> bool:
    """Check whether the string is a valid scheme token."""
    return _SCHEME_RE.fullmatch(text) is not None


def is_ip_literal(text: str) -> bool:
    """Check whether the string is a bracketed IPv6 or IPvFuture literal."""
    return _IP_LITERAL_RE.fullmatch(text) is not None


def is_ipv4_address(text: str) -> bool:
    """Check whether the string is a dotted-quad IPv4 address."""
    return _IPV4_ADDRESS_RE.fullmatch(text) is not None


def is_ipv6_address(text: str) -> bool:
    """Check whether the string (without brackets) is an IPv6 address."""
    return _IPV6_ADDRESS_RE.fullmatch(text) is not None
