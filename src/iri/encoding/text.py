"""
Unicode text normalization applied to IRI input.
"""

import unicodedata


def normalize_text(text: str) -> str:
    """
    Normalize text to Unicode Normalization Form KC.

    RFC 3987 recommends NFKC for IRIs created from user input so that
    compatibility variants (full-width letters, ligatures, ...) collapse to a
    single representation before comparison.

    Args:
        text: Raw input text

    Returns:
        NFKC-normalized text
    """
    return unicodedata.normalize("NFKC", text)
