"""Unit tests for NFKC text normalization."""

from iri.encoding import normalize_text


def test_compatibility_characters_are_folded():
    """Test compatibility characters map to their canonical equivalents."""
    assert normalize_text("ﬁle") == "file"
    assert normalize_text("™") == "TM"
    assert normalize_text("Ａ") == "A"


def test_composition():
    """Test decomposed sequences are composed."""
    assert normalize_text("a\u0308") == "ä"
    assert normalize_text("\u212b") == "Å"


def test_plain_text_unchanged():
    """Test text already in NFKC is returned unchanged."""
    assert normalize_text("http://例子.com/pȧth") == "http://例子.com/pȧth"
