"""
Percent-encoding normalization and selective decoding.

``normalize_encoding`` maps an IRI component onto its URI form: every byte of
the UTF-8 encoding that is not an allowed ASCII character is percent-encoded,
while existing ``%XX`` triplets are kept. ``decode_component`` goes the other
way and only decodes triplets whose character may appear literally in the IRI
component.
"""

import re
from typing import AbstractSet, List

from ..grammar.charsets import UNRESERVED, is_iprivate, is_iunreserved

_HEX_DIGITS = frozenset(b"0123456789ABCDEFabcdef")

# A percent-encoded triplet or any other single character
_TOKEN_RE = re.compile(r"%[0-9A-Fa-f]{2}|.", re.DOTALL)
_TRIPLET_RE = re.compile(r"%[0-9A-Fa-f]{2}")
_TRIPLET_SPLIT_RE = re.compile(r"(%[0-9A-Fa-f]{2})")


def percent_encode_byte(byte: int) -> str:
    """Render a byte as a ``%XX`` triplet with uppercase hex digits."""
    return f"%{byte:02X}"


def normalize_encoding(raw: str, allowed: AbstractSet[str]) -> str:
    """
    Percent-encode a component so that it only contains allowed ASCII.

    Args:
        raw: Component text, may contain any Unicode characters
        allowed: ASCII characters permitted unencoded in the URI component

    Returns:
        ASCII string; disallowed bytes are encoded as uppercase ``%XX`` and
        existing ``%XX`` triplets are copied through unchanged
    """
    data = raw.encode("utf-8", "surrogatepass")
    output: List[str] = []

    i = 0
    length = len(data)
    while i < length:
        byte = data[i]

        if (
            byte == 0x25
            and i + 2 < length
            and data[i + 1] in _HEX_DIGITS
            and data[i + 2] in _HEX_DIGITS
        ):
            output.append(data[i : i + 3].decode("ascii"))
            i += 3
            continue

        # A lone "%" falls through and gets encoded like any other byte
        if byte < 0x80 and chr(byte) in allowed:
            output.append(chr(byte))
        else:
            output.append(percent_encode_byte(byte))
        i += 1

    return "".join(output)


def _normalize_triplet(match: re.Match) -> str:
    char = chr(int(match.group(0)[1:], 16))
    if char in UNRESERVED:
        return char
    return match.group(0).upper()


def normalize_triplets(encoded: str) -> str:
    """
    Case- and percent-encoding normalization of a URI component (RFC 3986 §6.2.2).

    Triplets of unreserved characters are decoded, every other triplet gets
    uppercase hex digits.
    """
    return _TRIPLET_RE.sub(_normalize_triplet, encoded)


def lowercase_outside_triplets(text: str) -> str:
    """Lowercase a host while leaving the hex digits of ``%XX`` triplets alone."""
    parts = _TRIPLET_SPLIT_RE.split(text)
    # Odd indexes hold the captured triplets
    return "".join(
        part if index % 2 else part.lower() for index, part in enumerate(parts)
    )


def _sequence_length(lead: int) -> int:
    """Expected UTF-8 sequence length for a lead byte, 0 if it cannot start one."""
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def decode_component(
    encoded: str, allowed_ascii: AbstractSet[str], allow_iprivate: bool = False
) -> str:
    """
    Decode the percent-encoded triplets that may appear literally in an IRI.

    Runs of triplets are collected as bytes and decoded as strict UTF-8. A
    decoded character is kept literal if it is in ``allowed_ascii``, is
    ``iunreserved`` or, when ``allow_iprivate`` is set, ``iprivate``.
    Everything else, including invalid or incomplete UTF-8, is written back
    as uppercase triplets. This function never raises on malformed input.

    Args:
        encoded: Component text in URI form
        allowed_ascii: ASCII characters allowed unencoded in the IRI component
        allow_iprivate: Keep private-use characters decoded (query only)

    Returns:
        Component text in IRI form
    """
    output: List[str] = []
    pending = bytearray()
    expected = 0

    def flush() -> None:
        nonlocal expected
        output.extend(percent_encode_byte(b) for b in pending)
        pending.clear()
        expected = 0

    def emit(code_point: int, sequence: bytes) -> None:
        char = chr(code_point)
        if (
            (code_point < 0x80 and char in allowed_ascii)
            or is_iunreserved(code_point)
            or (allow_iprivate and is_iprivate(code_point))
        ):
            output.append(char)
        else:
            output.extend(percent_encode_byte(b) for b in sequence)

    for token in _TOKEN_RE.findall(encoded):
        if len(token) != 3 or token[0] != "%":
            flush()
            output.append(token)
            continue

        byte = int(token[1:], 16)

        if pending:
            if 0x80 <= byte <= 0xBF:
                pending.append(byte)
                if len(pending) < expected:
                    continue
                sequence = bytes(pending)
                pending.clear()
                expected = 0
                try:
                    decoded = sequence.decode("utf-8")
                except UnicodeDecodeError:
                    # Overlong forms, encoded surrogates, out of range
                    output.extend(percent_encode_byte(b) for b in sequence)
                else:
                    emit(ord(decoded), sequence)
                continue
            # Sequence interrupted before completion
            flush()

        if byte < 0x80:
            emit(byte, bytes((byte,)))
            continue

        expected = _sequence_length(byte)
        if expected:
            pending.append(byte)
        else:
            output.append(percent_encode_byte(byte))

    flush()
    return "".join(output)
