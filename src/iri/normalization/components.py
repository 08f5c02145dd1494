"""
Decomposition of an IRI string into normalized components.

The string is split in a fixed order (fragment, query, scheme, authority,
path); once the earlier delimiters are stripped each later one is
unambiguous. Every subcomponent is then percent-normalized into its URI form.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..encoding.percent import normalize_encoding
from ..errors import MalformedIri
from ..grammar.charsets import (
    URI_FRAGMENT_ALLOWED,
    URI_PATH_ALLOWED,
    URI_QUERY_ALLOWED,
    URI_USERINFO_ALLOWED,
)
from ..grammar.patterns import match_scheme
from .host import Host, classify_host

logger = logging.getLogger(__name__)

MAX_PORT = 65535


@dataclass(frozen=True)
class Components:
    """
    Normalized components of a single IRI.

    Attributes:
        scheme: Lowercased scheme, None if absent
        user_info: Percent-normalized userinfo, None if absent
        host: Classified host, present iff an authority was present
        port: Explicit port, None if absent or empty
        path: Percent-normalized path (may be empty)
        query: Percent-normalized query, None if absent
        fragment: Percent-normalized fragment, None if absent
    """

    scheme: Optional[str]
    user_info: Optional[str]
    host: Optional[Host]
    port: Optional[int]
    path: str
    query: Optional[str]
    fragment: Optional[str]

    @property
    def has_authority(self) -> bool:
        return self.host is not None


def split_authority(authority: str) -> Tuple[Optional[str], str, Optional[int]]:
    """
    Split an authority into userinfo, host and port.

    The userinfo ends at the last "@". The port separator is the first ":"
    after any closing "]" so IPv6 colons are never mistaken for it. An empty
    port ("host:") means no port; a non-numeric port stays part of the host.

    Args:
        authority: Authority text without the leading "//"

    Returns:
        Tuple of (user_info or None, host, port or None)
    """
    user_info: Optional[str] = None
    at_index = authority.rfind("@")
    if at_index >= 0:
        user_info = authority[:at_index]
    host_and_port = authority[at_index + 1 :]

    bracket_index = host_and_port.rfind("]")
    colon_index = host_and_port.find(":", bracket_index + 1)
    if colon_index == -1:
        return user_info, host_and_port, None

    port_text = host_and_port[colon_index + 1 :]
    if not port_text:
        return user_info, host_and_port[:colon_index], None
    if port_text.isascii() and port_text.isdigit():
        return user_info, host_and_port[:colon_index], int(port_text)

    return user_info, host_and_port, None


def parse_components(iri: str) -> Components:
    """
    Parse and normalize the components of an IRI-reference.

    Args:
        iri: IRI-reference that already passed grammar validation

    Returns:
        Components with URI-form (percent-normalized) text

    Raises:
        MalformedIri: For a leading colon, an invalid scheme token, an empty
            authority or host, an out-of-range port, an invalid host or a
            path ending in an encoded percent sign
    """
    remaining = iri
    fragment: Optional[str] = None
    query: Optional[str] = None
    scheme: Optional[str] = None
    user_info: Optional[str] = None
    host: Optional[Host] = None
    port: Optional[int] = None

    # 1. Fragment
    fragment_index = remaining.find("#")
    if fragment_index >= 0:
        fragment = remaining[fragment_index + 1 :]
        remaining = remaining[:fragment_index]

    # 2. Query
    query_index = remaining.find("?")
    if query_index >= 0:
        query = remaining[query_index + 1 :]
        remaining = remaining[:query_index]

    # 3. Scheme
    scheme_index = remaining.find(":")
    slash_index = remaining.find("/")
    if scheme_index == 0:
        raise MalformedIri("IRI cannot start with a colon", iri)
    if scheme_index > 0 and (slash_index == -1 or scheme_index < slash_index):
        candidate = remaining[:scheme_index]
        if not match_scheme(candidate):
            raise MalformedIri("Invalid scheme format", candidate)
        scheme = candidate.lower()
        remaining = remaining[scheme_index + 1 :]

    # 4. Authority and path
    if remaining.startswith("//"):
        remaining = remaining[2:]
        path_index = remaining.find("/")
        if path_index == -1:
            authority = remaining
            # An empty path with an authority is presented as the root
            path = "/"
        else:
            authority = remaining[:path_index]
            path = remaining[path_index:]

        if not authority:
            raise MalformedIri(
                'Authority cannot be empty when the authority marker "//" is present',
                iri,
            )

        user_info, host_text, port = split_authority(authority)
        if port is not None and port > MAX_PORT:
            raise MalformedIri("Port out of range", str(port))
        host = classify_host(host_text)
    else:
        # 5. No authority, the remainder is the path
        path = remaining

    # 6. Percent-encoding normalization
    if user_info is not None:
        user_info = normalize_encoding(user_info, URI_USERINFO_ALLOWED)
    path = normalize_encoding(path, URI_PATH_ALLOWED)
    if query is not None:
        query = normalize_encoding(query, URI_QUERY_ALLOWED)
    if fragment is not None:
        fragment = normalize_encoding(fragment, URI_FRAGMENT_ALLOWED)

    if path.endswith("%25"):
        raise MalformedIri("Path ends with an encoded percent sign", path)

    logger.debug(
        f"Parsed components of '{iri}': scheme={scheme!r} host={host!r} "
        f"port={port!r} path={path!r} query={query!r} fragment={fragment!r}"
    )

    return Components(
        scheme=scheme,
        user_info=user_info,
        host=host,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )
