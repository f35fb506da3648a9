"""Helper functions: hashing, safe text reads, git-style value parsing."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Optional

_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}
_INT_SUFFIXES = {"k": 1024, "m": 1024 ** 2, "g": 1024 ** 3}


def sha1_hash(data: bytes) -> str:
    """Compute SHA-1 hex digest of data."""
    return hashlib.sha1(data).hexdigest()


def read_text_safe(path: Path) -> Optional[str]:
    """Read file as text; return None if not found or error."""
    try:
        return path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return None


def parse_git_bool(value: str) -> Optional[bool]:
    """Interpret a git config boolean. Return None if not a boolean."""
    word = value.strip().lower()
    if word == "":
        return False
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return None


def parse_git_int(value: str) -> int:
    """Parse a git config integer with optional k/m/g suffix. Raises ValueError."""
    text = value.strip().lower()
    if not text:
        raise ValueError("empty integer value")
    scale = 1
    if text[-1] in _INT_SUFFIXES:
        scale = _INT_SUFFIXES[text[-1]]
        text = text[:-1]
    return int(text) * scale
