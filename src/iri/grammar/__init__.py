"""
RFC 3987 grammar: character classes and the compiled IRI-reference matcher.
"""

from .charsets import is_iprivate, is_iunreserved, is_ucschar
from .patterns import (
    is_absolute_iri,
    is_ip_literal,
    is_ipv4_address,
    is_ipv6_address,
    is_valid_iri_reference,
    match_scheme,
)

__all__ = [
    "is_valid_iri_reference",
    "is_absolute_iri",
    "match_scheme",
    "is_ip_literal",
    "is_ipv4_address",
    "is_ipv6_address",
    "is_ucschar",
    "is_iprivate",
    "is_iunreserved",
]
