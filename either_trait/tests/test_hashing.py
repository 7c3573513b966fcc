"""
Tests for report fingerprints
"""

from either_trait.utils.hashing import fingerprint, fingerprint_file, pair_fingerprint


def test_fingerprint_ignores_line_endings():
    """Test CRLF and LF text fingerprint the same"""
    assert fingerprint("a\r\nb\r\n") == fingerprint("a\nb\n")
    assert fingerprint("a") != fingerprint("b")
    assert len(fingerprint("")) == 64


def test_fingerprint_file(tmp_path):
    """Test files hash like their text and missing files give None"""
    path = tmp_path / "module.py"
    path.write_text("x = 1\n", encoding="utf-8")

    assert fingerprint_file(str(path)) == fingerprint("x = 1\n")
    assert fingerprint_file(str(tmp_path / "missing.py")) is None


def test_pair_fingerprint_depends_on_both_sides():
    """Test the combined fingerprint changes with either input"""
    base = pair_fingerprint("a", "b")
    assert base != pair_fingerprint("a", "c")
    assert base != pair_fingerprint("c", "b")
    assert base == pair_fingerprint("a", "b")
