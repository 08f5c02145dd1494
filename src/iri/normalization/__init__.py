"""
Component parsing and normalization for IRI-references.

Handles decomposition, host classification and dot-segment removal.
"""

from .components import Components, parse_components, split_authority
from .host import Host, IpLiteral, Ipv4Address, RegisteredName, classify_host
from .path import normalize_path, remove_dot_segments

__all__ = [
    "Components",
    "parse_components",
    "split_authority",
    "Host",
    "IpLiteral",
    "Ipv4Address",
    "RegisteredName",
    "classify_host",
    "normalize_path",
    "remove_dot_segments",
]
