"""
Text encodings used by IRI normalization.

Handles percent-encoding, Punycode host transcoding and NFKC normalization.
"""

from .percent import (
    decode_component,
    lowercase_outside_triplets,
    normalize_encoding,
    normalize_triplets,
    percent_encode_byte,
)
from .punycode import PunycodeError, domain_to_ascii, domain_to_unicode
from .text import normalize_text

__all__ = [
    "normalize_encoding",
    "decode_component",
    "percent_encode_byte",
    "normalize_triplets",
    "lowercase_outside_triplets",
    "domain_to_ascii",
    "domain_to_unicode",
    "PunycodeError",
    "normalize_text",
]
