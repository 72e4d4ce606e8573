"""Content fingerprints used as verification cache keys."""

import hashlib


def normalize_content(text: str) -> str:
    """Strip and collapse whitespace runs to a single space."""
    return " ".join(text.split())


def content_fingerprint(text: str) -> str:
    """Stable hash of the normalized text."""
    digest = hashlib.sha256(normalize_content(text).encode("utf-8")).hexdigest()
    return f"0x{digest}"
