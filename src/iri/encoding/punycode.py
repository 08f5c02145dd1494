"""
Punycode / IDNA transcoding of registered names.

Only labels that contain non-ASCII characters are transcoded; ASCII labels
(including labels that are already in ``xn--`` form) pass through untouched.
"""

import logging

import idna

logger = logging.getLogger(__name__)

ACE_PREFIX = "xn--"


class PunycodeError(ValueError):
    """Raised when a domain label cannot be transcoded to ASCII."""


def _label_to_ascii(label: str, validate: bool) -> str:
    if validate:
        return idna.alabel(label).decode("ascii")
    return ACE_PREFIX + label.encode("punycode").decode("ascii")


def domain_to_ascii(host: str, validate: bool = False) -> str:
    """
    Convert a (lowercased) registered name to its ASCII-compatible form.

    Args:
        host: Registered name, possibly containing non-ASCII labels
        validate: Check non-ASCII labels against IDNA2008 with the ``idna``
            package instead of encoding them as plain Punycode

    Returns:
        Host with every non-ASCII label replaced by its ``xn--`` form

    Raises:
        PunycodeError: If a label cannot be transcoded
    """
    if host.isascii():
        return host

    labels = []
    for label in host.split("."):
        if label.isascii():
            labels.append(label)
            continue
        try:
            labels.append(_label_to_ascii(label, validate))
        except (idna.IDNAError, UnicodeError) as e:
            raise PunycodeError(f"Cannot encode label '{label}': {e}") from e

    return ".".join(labels)


def _label_to_unicode(label: str) -> str:
    try:
        return idna.ulabel(label)
    except (idna.IDNAError, UnicodeError):
        pass

    # Labels that were encoded without IDNA2008 validation
    try:
        return label[len(ACE_PREFIX):].encode("ascii").decode("punycode")
    except UnicodeError:
        logger.debug(f"Label '{label}' is not valid Punycode, keeping it as-is")
        return label


def domain_to_unicode(host: str) -> str:
    """
    Convert ``xn--`` labels of a host back to Unicode.

    Labels that are not Punycode, or fail to decode, are returned unchanged,
    so the function is safe to call on any host and is idempotent.

    Args:
        host: Host in ASCII-compatible form

    Returns:
        Host with decodable ``xn--`` labels converted to Unicode
    """
    labels = []
    for label in host.split("."):
        if label[: len(ACE_PREFIX)].lower() == ACE_PREFIX and label.isascii():
            labels.append(_label_to_unicode(label.lower()))
        else:
            labels.append(label)
    return ".".join(labels)
