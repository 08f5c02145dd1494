"""
Internationalized Resource Identifier value type (RFC 3987).

An ``IRI`` keeps the text it was created from and the canonical ``Uri``
derived from it. Equality follows RFC 3987 §5.3.1 simple string comparison:
two IRIs are equal iff they consist of the same code points.
"""

import logging
from typing import AbstractSet, Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import xxhash

from .config import IRISettings, get_config
from .conversion import convert_to_uri, normalize_uri
from .encoding.percent import decode_component, normalize_encoding
from .encoding.punycode import domain_to_unicode
from .encoding.text import normalize_text
from .errors import MalformedIri
from .grammar.charsets import (
    IRI_FRAGMENT_ALLOWED,
    IRI_PATH_ALLOWED,
    IRI_QUERY_ALLOWED,
    IRI_USERINFO_ALLOWED,
    is_ucschar,
)
from .uri import Uri

logger = logging.getLogger(__name__)

QueryParameters = Mapping[str, Union[str, Iterable[str]]]


def _decode_user_info(uri: Uri) -> str:
    return decode_component(uri.user_info, IRI_USERINFO_ALLOWED)


def _decode_host(uri: Uri) -> str:
    if uri.host is None:
        return ""
    if ":" in uri.host:
        return uri.host
    return domain_to_unicode(uri.host)


def _decode_path(uri: Uri) -> str:
    return decode_component(uri.path, IRI_PATH_ALLOWED)


def _decode_query(uri: Uri) -> str:
    return decode_component(uri.query or "", IRI_QUERY_ALLOWED, allow_iprivate=True)


def _decode_fragment(uri: Uri) -> str:
    return decode_component(uri.fragment or "", IRI_FRAGMENT_ALLOWED)


def _iri_authority(uri: Uri) -> str:
    """Authority in IRI form: decoded userinfo, Unicode host, explicit port."""
    if uri.host is None:
        return ""
    host = _decode_host(uri)
    if ":" in host:
        host = f"[{host}]"
    if uri.user_info:
        host = f"{_decode_user_info(uri)}@{host}"
    if uri.port is not None:
        host = f"{host}:{uri.port}"
    return host


def _render(uri: Uri) -> str:
    """Rebuild the Unicode IRI string for a canonical URI."""
    parts = []
    if uri.has_scheme:
        parts.append(f"{uri.scheme}:")
    if uri.has_authority:
        # Network-path references keep "//" even without a scheme
        parts.append(f"//{_iri_authority(uri)}")
    parts.append(_decode_path(uri))
    if uri.has_query:
        parts.append(f"?{_decode_query(uri)}")
    if uri.has_fragment:
        parts.append(f"#{_decode_fragment(uri)}")
    return "".join(parts)


def _escape(text: str, allowed: AbstractSet[str]) -> str:
    """Percent-encode characters that may not appear literally, keep ucschar."""
    return "".join(
        char
        if char in allowed or is_ucschar(ord(char))
        else normalize_encoding(char, frozenset())
        for char in text
    )


def _compose(
    scheme: str,
    authority: Optional[str],
    path: str,
    query: Optional[str],
    fragment: Optional[str],
) -> str:
    parts = []
    if scheme:
        parts.append(f"{scheme}:")
    if authority is not None:
        parts.append(f"//{authority}")
        if path and not path.startswith("/"):
            path = f"/{path}"
    parts.append(path)
    if query is not None:
        parts.append(f"?{query}")
    if fragment is not None:
        parts.append(f"#{fragment}")
    return "".join(parts)


class IRI:
    """
    Immutable Internationalized Resource Identifier.

    Usage:
        iri = IRI("https://例子.com/pȧth?q=1")
        print(iri.to_uri())  # https://xn--fsqu00a.com/p%C8%A7th?q=1
        print(iri.host)      # 例子.com
        print(iri.path)      # /pȧth

    Component accessors return the IRI (decoded) form; ``to_uri()`` returns
    the canonical, ASCII-only URI computed at construction time.
    """

    __slots__ = ("_original", "_uri")

    def __init__(self, value: str, settings: Optional[IRISettings] = None):
        """
        Parse and validate an IRI-reference.

        Args:
            value: IRI-reference text
            settings: Normalization settings (defaults to the global config)

        Raises:
            TypeError: If value is not a string
            MalformedIri: If value is not a valid IRI-reference
        """
        if not isinstance(value, str):
            raise TypeError(f"IRI value must be a string, not {type(value).__name__}")

        settings = settings or get_config()
        if settings.nfkc_normalize:
            value = normalize_text(value)

        uri = convert_to_uri(value, validate_idna=settings.idna_validate)
        object.__setattr__(self, "_original", value)
        object.__setattr__(self, "_uri", uri)

    @classmethod
    def _from_parts(cls, original: str, uri: Uri) -> "IRI":
        instance = object.__new__(cls)
        object.__setattr__(instance, "_original", original)
        object.__setattr__(instance, "_uri", uri)
        return instance

    @classmethod
    def try_parse(
        cls, value: str, settings: Optional[IRISettings] = None
    ) -> Optional["IRI"]:
        """Parse an IRI-reference, returning None instead of raising MalformedIri."""
        try:
            return cls(value, settings)
        except MalformedIri as e:
            logger.debug(f"Could not parse IRI '{value}': {e}")
            return None

    @classmethod
    def from_uri(
        cls, uri: Union[Uri, str], settings: Optional[IRISettings] = None
    ) -> "IRI":
        """
        Wrap an existing URI.

        The URI is brought to canonical form (percent-encoding, Punycode host,
        dot segments). The original value of the result is its IRI string.

        Args:
            uri: Uri value or URI-reference string
            settings: Normalization settings (defaults to the global config)

        Raises:
            MalformedIri: If the URI string is invalid, its host cannot be
                transcoded or the normalized URI does not match the grammar
        """
        settings = settings or get_config()
        if isinstance(uri, str):
            try:
                uri = Uri.parse(uri)
            except ValueError as e:
                raise MalformedIri(f"Invalid URI ({e})", uri) from e

        uri = normalize_uri(uri, validate_idna=settings.idna_validate)
        return cls._from_parts(_render(uri), uri)

    @classmethod
    def http(
        cls,
        authority: str,
        path: str = "",
        query_parameters: Optional[QueryParameters] = None,
        settings: Optional[IRISettings] = None,
    ) -> "IRI":
        """
        Create an ``http`` IRI from an authority, an unencoded path and
        query parameters.
        """
        return cls._for_scheme("http", authority, path, query_parameters, settings)

    @classmethod
    def https(
        cls,
        authority: str,
        path: str = "",
        query_parameters: Optional[QueryParameters] = None,
        settings: Optional[IRISettings] = None,
    ) -> "IRI":
        """
        Create an ``https`` IRI from an authority, an unencoded path and
        query parameters.
        """
        return cls._for_scheme("https", authority, path, query_parameters, settings)

    @classmethod
    def _for_scheme(
        cls,
        scheme: str,
        authority: str,
        path: str,
        query_parameters: Optional[QueryParameters],
        settings: Optional[IRISettings],
    ) -> "IRI":
        query = None
        if query_parameters is not None:
            query = urlencode(query_parameters, doseq=True)
        text = _compose(
            scheme,
            authority,
            _escape(path, IRI_PATH_ALLOWED | frozenset("/")),
            query,
            None,
        )
        return cls(text, settings)

    @classmethod
    def file(cls, path: str, settings: Optional[IRISettings] = None) -> "IRI":
        """
        Create an IRI for a POSIX file path.

        Absolute paths become ``file:`` IRIs without an authority (RFC 8089
        minimal form); relative paths become relative references.
        """
        escaped = _escape(path, IRI_PATH_ALLOWED | frozenset("/"))
        if path.startswith("/"):
            return cls(_compose("file", None, escaped, None, None), settings)
        if ":" in escaped.split("/", 1)[0]:
            escaped = f"./{escaped}"
        return cls(escaped, settings)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("IRI objects are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("IRI objects are immutable")

    def __reduce__(self):
        return (IRI._from_parts, (self._original, self._uri))

    # Accessors

    @property
    def original_value(self) -> str:
        """The text this IRI was created from (after NFKC normalization)."""
        return self._original

    @property
    def codepoints(self) -> Tuple[int, ...]:
        """The original value as a sequence of Unicode code points."""
        return tuple(ord(char) for char in self._original)

    @property
    def scheme(self) -> str:
        """Lowercased scheme, empty string if there is none."""
        return self._uri.scheme

    @property
    def authority(self) -> str:
        """
        The authority in IRI form, empty string if there is none.

        Built from the decoded user info, the Unicode host and an explicit
        non-default port.
        """
        return _iri_authority(self._uri)

    @property
    def user_info(self) -> str:
        """Decoded user info, empty string if there is none."""
        return _decode_user_info(self._uri)

    @property
    def host(self) -> str:
        """
        The host with Punycode labels decoded to Unicode.

        IPv6 literals are returned without brackets. Empty string if there is
        no authority.
        """
        return _decode_host(self._uri)

    @property
    def port(self) -> Optional[int]:
        """Explicit port, else the scheme's default port, else None."""
        return self._uri.effective_port

    @property
    def path(self) -> str:
        """Decoded path; characters that must stay encoded keep their triplets."""
        return _decode_path(self._uri)

    @property
    def query(self) -> str:
        """Decoded query (private-use characters allowed), empty if absent."""
        return _decode_query(self._uri)

    @property
    def fragment(self) -> str:
        """Decoded fragment, empty string if absent."""
        return _decode_fragment(self._uri)

    @property
    def is_absolute(self) -> bool:
        return self._uri.is_absolute

    @property
    def has_scheme(self) -> bool:
        return self._uri.has_scheme

    @property
    def has_authority(self) -> bool:
        return self._uri.has_authority

    @property
    def has_port(self) -> bool:
        """Whether the IRI has an explicit, non-default port."""
        return self._uri.has_port

    @property
    def has_query(self) -> bool:
        return self._uri.has_query

    @property
    def has_fragment(self) -> bool:
        return self._uri.has_fragment

    @property
    def has_empty_path(self) -> bool:
        return self._uri.has_empty_path

    @property
    def has_absolute_path(self) -> bool:
        return self._uri.has_absolute_path

    @property
    def path_segments(self) -> Tuple[str, ...]:
        """Fully decoded path segments."""
        return self._uri.path_segments

    @property
    def query_parameters(self) -> Dict[str, str]:
        """
        Decoded query parameters (HTML form rules).

        Keys without a value map to the empty string. If a key occurs more
        than once its first value is used; see ``query_parameters_all``.
        """
        return self._uri.query_parameters

    @property
    def query_parameters_all(self) -> Dict[str, List[str]]:
        """Decoded query parameters mapped to all of their values."""
        return self._uri.query_parameters_all

    # Conversion

    def to_uri(self) -> Uri:
        """The canonical URI derived at construction time."""
        return self._uri

    def to_uri_string(self) -> str:
        """The canonical URI as a string."""
        return str(self._uri)

    def to_string(self) -> str:
        """
        Rebuild the Unicode IRI string from the canonical components.

        Scheme and host come out lowercased, default ports are dropped and
        dot segments are removed; everything that may appear literally in an
        IRI is decoded.
        """
        return _render(self._uri)

    def fingerprint(self) -> int:
        """
        Stable 64-bit identifier of the original value.

        Uses xxh3_64 over the UTF-8 bytes and returns a signed int64, so it
        can be stored in columnar formats and compared across processes.
        """
        hash_val = xxhash.xxh3_64(self._original.encode("utf-8")).intdigest()
        # Convert to signed int64 range
        if hash_val >= 2**63:
            hash_val -= 2**64
        return hash_val

    # Derivation

    def resolve(self, reference: str, settings: Optional[IRISettings] = None) -> "IRI":
        """
        Resolve an IRI-reference string against this IRI (RFC 3986 §5.2).

        The reference is NFKC-normalized (if enabled) and validated first.

        Raises:
            MalformedIri: If the reference is not a valid IRI-reference
        """
        return self.resolve_iri(IRI(reference, settings), settings)

    def resolve_iri(
        self, reference: "IRI", settings: Optional[IRISettings] = None
    ) -> "IRI":
        """Resolve another IRI against this IRI (RFC 3986 §5.2)."""
        target = self._uri.resolve(reference.to_uri())
        return IRI.from_uri(target, settings)

    def replace(
        self,
        scheme: Optional[str] = None,
        user_info: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        path: Optional[str] = None,
        path_segments: Optional[Iterable[str]] = None,
        query: Optional[str] = None,
        query_parameters: Optional[QueryParameters] = None,
        fragment: Optional[str] = None,
        settings: Optional[IRISettings] = None,
    ) -> "IRI":
        """
        Create a new IRI with some components replaced.

        Components are given in IRI form. Omitted (None) components are kept
        from this IRI. The result is validated like any other IRI.
        ``path_segments`` are unencoded; a "/" inside a segment is percent-encoded
        so it stays part of the segment.

        Raises:
            ValueError: If both query and query_parameters, or both path and
                path_segments are given
            MalformedIri: If the resulting IRI is invalid
        """
        settings = settings or get_config()

        if query is not None and query_parameters is not None:
            raise ValueError("Cannot replace both query and query_parameters")
        if path is not None and path_segments is not None:
            raise ValueError("Cannot replace both path and path_segments")
        if query_parameters is not None:
            query = urlencode(query_parameters, doseq=True)

        def prepare(value: Optional[str], current: str) -> str:
            if value is None:
                return current
            return normalize_text(value) if settings.nfkc_normalize else value

        if path_segments is not None:
            path = "/".join(
                _escape(prepare(segment, ""), IRI_PATH_ALLOWED)
                for segment in path_segments
            )
            if self.has_absolute_path:
                path = f"/{path}"

        authority: Optional[str] = None
        if self.has_authority or host is not None:
            new_host = prepare(host, self.host)
            if ":" in new_host and not new_host.startswith("["):
                new_host = f"[{new_host}]"
            new_user_info = prepare(user_info, self.user_info)
            authority = f"{new_user_info}@{new_host}" if new_user_info else new_host
            new_port = port if port is not None else self._uri.port
            if new_port is not None:
                authority = f"{authority}:{new_port}"

        new_query = None
        if query is not None or self.has_query:
            new_query = prepare(query, self.query)

        new_fragment = None
        if fragment is not None or self.has_fragment:
            new_fragment = prepare(fragment, self.fragment)

        text = _compose(
            prepare(scheme, self.scheme),
            authority,
            prepare(path, self.path),
            new_query,
            new_fragment,
        )
        return IRI(text, settings)

    # Comparison

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, IRI):
            return NotImplemented
        return self._original == other._original

    def __hash__(self) -> int:
        return hash(self._original)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"IRI({self._original!r})"
