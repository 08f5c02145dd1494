"""
URI value type.

``Uri`` stores the components of an RFC 3986 URI-reference in their encoded
form. It validates structural combinations on construction, applies
the RFC 3986 §6.2.2 case and percent-encoding normalization, knows the
default ports of common schemes and implements reference resolution.
"""

import dataclasses
import re
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qs, parse_qsl, unquote

from .encoding.percent import lowercase_outside_triplets, normalize_triplets
from .grammar.patterns import match_scheme
from .normalization.components import split_authority
from .normalization.path import normalize_path, remove_dot_segments

# RFC 3986 Appendix B
_URI_SPLIT_RE = re.compile(
    r"(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?", re.DOTALL
)


@dataclass(frozen=True)
class Uri:
    """
    An encoded URI-reference.

    Attributes:
        scheme: Lowercased scheme, empty string if absent
        user_info: Encoded userinfo, empty string if absent
        host: Host without IPv6 brackets, None if there is no authority
        port: Explicit port, None if absent or the scheme default
        path: Encoded path (may be empty)
        query: Encoded query, None if absent
        fragment: Encoded fragment, None if absent
    """

    scheme: str = ""
    user_info: str = ""
    host: Optional[str] = None
    port: Optional[int] = None
    path: str = ""
    query: Optional[str] = None
    fragment: Optional[str] = None

    # Default ports for common schemes
    DEFAULT_PORTS: ClassVar[Dict[str, int]] = {
        "http": 80,
        "https": 443,
        "ws": 80,
        "wss": 443,
        "ftp": 21,
        "ftps": 990,
    }

    def __post_init__(self):
        if self.scheme:
            if not match_scheme(self.scheme):
                raise ValueError(f"Invalid scheme: {self.scheme}")
            object.__setattr__(self, "scheme", self.scheme.lower())

        if self.host is None:
            if self.user_info or self.port is not None:
                raise ValueError("User info and port require a host")
        else:
            host = self.host
            if host.startswith("[") and host.endswith("]"):
                host = host[1:-1]
            host = lowercase_outside_triplets(normalize_triplets(host))
            object.__setattr__(self, "host", host)

        object.__setattr__(self, "user_info", normalize_triplets(self.user_info))
        object.__setattr__(self, "path", normalize_triplets(self.path))
        if self.query is not None:
            object.__setattr__(self, "query", normalize_triplets(self.query))
        if self.fragment is not None:
            object.__setattr__(self, "fragment", normalize_triplets(self.fragment))

        if self.port is not None:
            if isinstance(self.port, bool) or not isinstance(self.port, int):
                raise ValueError(f"Invalid port: {self.port!r}")
            if not 0 <= self.port <= 65535:
                raise ValueError(f"Port out of range: {self.port}")
            if self.port == self.default_port(self.scheme):
                object.__setattr__(self, "port", None)

        if self.host is not None:
            if self.path and not self.path.startswith("/"):
                raise ValueError(
                    f"Path must be empty or absolute when an authority is present: {self.path}"
                )
        else:
            if self.path.startswith("//"):
                raise ValueError(
                    f"Path cannot start with '//' without an authority: {self.path}"
                )
            if not self.scheme and ":" in self.path.split("/", 1)[0]:
                raise ValueError(
                    f"First segment of a relative path cannot contain ':': {self.path}"
                )

    @classmethod
    def default_port(cls, scheme: str) -> Optional[int]:
        """Get the default port of a scheme, None if unknown."""
        return cls.DEFAULT_PORTS.get(scheme.lower())

    @classmethod
    def parse(cls, text: str) -> "Uri":
        """
        Parse a URI-reference string.

        Args:
            text: URI-reference in encoded form

        Returns:
            Uri with the components of ``text``

        Raises:
            ValueError: If the components form an invalid combination
        """
        match = _URI_SPLIT_RE.fullmatch(text)
        scheme, authority, path, query, fragment = match.groups()

        user_info: Optional[str] = None
        host: Optional[str] = None
        port: Optional[int] = None
        if authority is not None:
            user_info, host, port = split_authority(authority)
            if ":" in host and not (host.startswith("[") and host.endswith("]")):
                raise ValueError(f"Invalid port in authority: {authority}")

        return cls(
            scheme=scheme or "",
            user_info=user_info or "",
            host=host,
            port=port,
            path=path,
            query=query,
            fragment=fragment,
        )

    @property
    def authority(self) -> str:
        """Encoded authority (``userinfo@host:port``), empty if absent."""
        if self.host is None:
            return ""
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.user_info:
            host = f"{self.user_info}@{host}"
        if self.port is not None:
            host = f"{host}:{self.port}"
        return host

    @property
    def effective_port(self) -> Optional[int]:
        """Explicit port, else the scheme default, else None."""
        if self.port is not None:
            return self.port
        return self.default_port(self.scheme)

    @property
    def has_scheme(self) -> bool:
        return bool(self.scheme)

    @property
    def has_authority(self) -> bool:
        return self.host is not None

    @property
    def has_port(self) -> bool:
        return self.port is not None

    @property
    def has_query(self) -> bool:
        return self.query is not None

    @property
    def has_fragment(self) -> bool:
        return self.fragment is not None

    @property
    def has_empty_path(self) -> bool:
        return not self.path

    @property
    def has_absolute_path(self) -> bool:
        return self.path.startswith("/")

    @property
    def is_absolute(self) -> bool:
        """Absolute in the sense of RFC 3986: a scheme and no fragment."""
        return self.has_scheme and not self.has_fragment

    @property
    def path_segments(self) -> Tuple[str, ...]:
        """Decoded path segments; a leading "/" does not produce a segment."""
        path = self.path[1:] if self.path.startswith("/") else self.path
        if not path:
            return ()
        return tuple(unquote(segment) for segment in path.split("/"))

    @property
    def query_parameters(self) -> Dict[str, str]:
        """Decoded query parameters; the first value of a repeated key wins."""
        params: Dict[str, str] = {}
        for key, value in parse_qsl(self.query or "", keep_blank_values=True):
            params.setdefault(key, value)
        return params

    @property
    def query_parameters_all(self) -> Dict[str, List[str]]:
        """Decoded query parameters with every value of each key."""
        return parse_qs(self.query or "", keep_blank_values=True)

    def normalize_path(self) -> "Uri":
        """Return a copy with dot segments removed from the path."""
        return dataclasses.replace(
            self,
            path=normalize_path(self.path, self.has_scheme, self.has_authority),
        )

    def replace(self, **changes) -> "Uri":
        """Return a copy with the given components replaced."""
        return dataclasses.replace(self, **changes)

    def resolve(self, reference: Union["Uri", str]) -> "Uri":
        """
        Resolve a reference against this URI (RFC 3986 §5.2.2).

        Args:
            reference: Uri or URI-reference string

        Returns:
            Target Uri
        """
        if isinstance(reference, str):
            reference = Uri.parse(reference)

        if reference.has_scheme:
            return reference.normalize_path()

        if reference.has_authority:
            return dataclasses.replace(reference, scheme=self.scheme).normalize_path()

        if not reference.path:
            path = self.path
            query = reference.query if reference.has_query else self.query
        else:
            if reference.path.startswith("/"):
                path = reference.path
            else:
                path = self._merge(reference.path)
            query = reference.query
            path = remove_dot_segments(path)

        return Uri(
            scheme=self.scheme,
            user_info=self.user_info,
            host=self.host,
            port=self.port,
            path=normalize_path(path, self.has_scheme, self.has_authority),
            query=query,
            fragment=reference.fragment,
        )

    def _merge(self, reference_path: str) -> str:
        """Merge a relative-path reference with this URI's path (RFC 3986 §5.2.3)."""
        if self.has_authority and not self.path:
            return "/" + reference_path
        slash_index = self.path.rfind("/")
        return self.path[: slash_index + 1] + reference_path

    def __str__(self) -> str:
        parts = []
        if self.scheme:
            parts.append(f"{self.scheme}:")
        if self.host is not None:
            parts.append(f"//{self.authority}")
        parts.append(self.path)
        if self.query is not None:
            parts.append(f"?{self.query}")
        if self.fragment is not None:
            parts.append(f"#{self.fragment}")
        return "".join(parts)
