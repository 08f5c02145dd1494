"""
Character sets and code point classes from RFC 3986 and RFC 3987.

The ``URI_*`` sets list the ASCII characters that may appear unencoded in the
URI projection of a component. The ``IRI_*`` sets are the ASCII characters
that are left decoded when a URI component is mapped back to its IRI form.
"""

import string

UNRESERVED_CHARS = string.ascii_letters + string.digits + "-._~"
SUB_DELIMS_CHARS = "!$&'()*+,;="

UNRESERVED = frozenset(UNRESERVED_CHARS)
SUB_DELIMS = frozenset(SUB_DELIMS_CHARS)

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
URI_USERINFO_ALLOWED = UNRESERVED | SUB_DELIMS | frozenset(":")

# pchar plus the "/" separator; the path is normalized as a whole
URI_PATH_ALLOWED = UNRESERVED | SUB_DELIMS | frozenset(":@/")

# query / fragment = *( pchar / "/" / "?" )
URI_QUERY_ALLOWED = URI_PATH_ALLOWED | frozenset("/?")
URI_FRAGMENT_ALLOWED = URI_PATH_ALLOWED | frozenset("/?")

IRI_USERINFO_ALLOWED = UNRESERVED | SUB_DELIMS | frozenset(":")

# ipchar without "/": an encoded slash must stay encoded inside a segment
IRI_PATH_ALLOWED = UNRESERVED | SUB_DELIMS | frozenset(":@")

IRI_QUERY_ALLOWED = IRI_PATH_ALLOWED | frozenset("/?")
IRI_FRAGMENT_ALLOWED = IRI_PATH_ALLOWED | frozenset("/?")

UCSCHAR_RANGES = (
    (0xA0, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFEF),
    (0x10000, 0x1FFFD),
    (0x20000, 0x2FFFD),
    (0x30000, 0x3FFFD),
    (0x40000, 0x4FFFD),
    (0x50000, 0x5FFFD),
    (0x60000, 0x6FFFD),
    (0x70000, 0x7FFFD),
    (0x80000, 0x8FFFD),
    (0x90000, 0x9FFFD),
    (0xA0000, 0xAFFFD),
    (0xB0000, 0xBFFFD),
    (0xC0000, 0xCFFFD),
    (0xD0000, 0xDFFFD),
    (0xE1000, 0xEFFFD),
)

IPRIVATE_RANGES = (
    (0xE000, 0xF8FF),
    (0xF0000, 0xFFFFD),
    (0x100000, 0x10FFFD),
)


def _in_ranges(code_point: int, ranges) -> bool:
    for low, high in ranges:
        if code_point < low:
            return False
        if code_point <= high:
            return True
    return False


def is_ucschar(code_point: int) -> bool:
    """Check whether a code point is in the RFC 3987 ``ucschar`` ranges."""
    return _in_ranges(code_point, UCSCHAR_RANGES)


def is_iprivate(code_point: int) -> bool:
    """Check whether a code point is in the RFC 3987 ``iprivate`` ranges."""
    return _in_ranges(code_point, IPRIVATE_RANGES)


def is_iunreserved(code_point: int) -> bool:
    """Check whether a code point is ``iunreserved`` (ASCII unreserved or ucschar)."""
    if code_point < 0x80:
        return chr(code_point) in UNRESERVED
    return is_ucschar(code_point)


def ranges_to_class(ranges) -> str:
    """Render code point ranges as the body of a regular expression class."""
    return "".join(f"\\U{low:08X}-\\U{high:08X}" for low, high in ranges)
