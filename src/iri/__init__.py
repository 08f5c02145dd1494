"""
IRI toolkit: RFC 3987 validation and IRI to URI normalization.

Parses Internationalized Resource Identifiers, validates them against the
RFC 3987 grammar and maps them to canonical, ASCII-only URIs.
"""

from .config import IRISettings, get_config, reset_config
from .conversion import convert_to_uri, normalize_uri
from .errors import MalformedIri
from .identifier import IRI
from .uri import Uri

__version__ = "0.1.0"

__all__ = [
    "IRI",
    "Uri",
    "MalformedIri",
    "IRISettings",
    "get_config",
    "reset_config",
    "convert_to_uri",
    "normalize_uri",
]
