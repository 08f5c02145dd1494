"""
Construction of the canonical URI for an IRI.
"""

import logging

from .encoding.percent import normalize_encoding
from .errors import MalformedIri
from .grammar.charsets import (
    URI_FRAGMENT_ALLOWED,
    URI_PATH_ALLOWED,
    URI_QUERY_ALLOWED,
    URI_USERINFO_ALLOWED,
)
from .grammar.patterns import is_valid_iri_reference
from .normalization.components import Components, parse_components
from .normalization.host import classify_host
from .uri import Uri

logger = logging.getLogger(__name__)


def build_uri(components: Components, validate_idna: bool = False) -> Uri:
    """
    Assemble normalized components into a URI and remove dot segments.

    Dot segments are removed last: segment boundaries are only reliable once
    the percent-encoding of the path has been normalized.

    Args:
        components: Output of ``parse_components``
        validate_idna: Validate registered names against IDNA2008

    Returns:
        Canonical Uri

    Raises:
        MalformedIri: If Punycode encoding fails or the components do not
            form a valid URI
    """
    host = None
    if components.host is not None:
        host = components.host.to_uri_host(validate_idna)

    try:
        uri = Uri(
            scheme=components.scheme or "",
            user_info=components.user_info or "",
            host=host,
            port=components.port,
            path=components.path,
            query=components.query,
            fragment=components.fragment,
        )
    except ValueError as e:
        raise MalformedIri(f"Invalid URI components ({e})") from e

    return uri.normalize_path()


def convert_to_uri(iri: str, validate_idna: bool = False) -> Uri:
    """
    Validate an IRI-reference and convert it to its canonical URI.

    Args:
        iri: IRI-reference text (already NFKC-normalized if desired)
        validate_idna: Validate registered names against IDNA2008

    Returns:
        Canonical Uri

    Raises:
        MalformedIri: If the text is not a valid IRI-reference
    """
    if not is_valid_iri_reference(iri):
        logger.debug(f"Rejected '{iri}': does not match the IRI grammar")
        raise MalformedIri("Invalid IRI", iri)

    return build_uri(parse_components(iri), validate_idna=validate_idna)


def normalize_uri(uri: Uri, validate_idna: bool = False) -> Uri:
    """
    Bring a foreign Uri to the canonical form produced by ``convert_to_uri``.

    Percent-encoding is normalized, registered names are transcoded to
    Punycode and dot segments are removed. Already canonical input is
    returned unchanged.

    Args:
        uri: Any Uri value
        validate_idna: Validate registered names against IDNA2008

    Returns:
        Canonical Uri

    Raises:
        MalformedIri: If the host cannot be transcoded or the
            normalized URI does not match the grammar
    """
    host = uri.host
    if host:
        literal = f"[{host}]" if ":" in host else host
        host = classify_host(literal).to_uri_host(validate_idna)

    try:
        normalized = uri.replace(
            user_info=normalize_encoding(uri.user_info, URI_USERINFO_ALLOWED),
            host=host,
            path=normalize_encoding(uri.path, URI_PATH_ALLOWED),
            query=(
                None
                if uri.query is None
                else normalize_encoding(uri.query, URI_QUERY_ALLOWED)
            ),
            fragment=(
                None
                if uri.fragment is None
                else normalize_encoding(uri.fragment, URI_FRAGMENT_ALLOWED)
            ),
        )
    except ValueError as e:
        raise MalformedIri(f"Invalid URI components ({e})") from e

    normalized = normalized.normalize_path()
    text = str(normalized)
    if not is_valid_iri_reference(text):
        logger.debug(f"Rejected URI '{text}': does not match the URI grammar")
        raise MalformedIri("Invalid URI", text)

    return normalized
