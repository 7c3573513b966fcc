"""
Fingerprints tying a generated class to the interface text it came from
"""

import hashlib
from pathlib import Path
from typing import Optional


def fingerprint(text: str) -> str:
    """SHA-256 of source text; line endings are normalized first"""
    normalized = text.replace("\r\n", "\n")
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def fingerprint_file(path: str) -> Optional[str]:
    """Fingerprint of a file's text, or None when it cannot be read"""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return None
    return fingerprint(text)


def pair_fingerprint(interface_hash: str, implementation_hash: str) -> str:
    """Fingerprint of an interface and its implementation together"""
    return fingerprint(f"{interface_hash}:{implementation_hash}")
