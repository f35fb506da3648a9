"""Git-like configuration: read a git config file (INI format)."""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Optional

from .errors import InvalidConfigKeyError
from .util import read_text_safe


def _parse_key(key: str) -> tuple[str, str]:
    """Return (section, option). Raises InvalidConfigKeyError if key invalid."""
    parts = key.split(".")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise InvalidConfigKeyError(f"invalid config key: {key!r} (expected section.option)")
    return parts[0].strip(), parts[1].strip()


def read_config(path: Path) -> configparser.ConfigParser:
    """Read a git config file. Return empty parser if file missing or unreadable. Does not raise."""
    cfg = configparser.ConfigParser(
        allow_no_value=True,
        interpolation=None,
        strict=False,
        comment_prefixes=("#", ";"),
        inline_comment_prefixes=("#", ";"),
    )
    content = read_text_safe(Path(path))
    if content:
        try:
            cfg.read_string(content)
        except configparser.Error:
            pass
    return cfg


def get_value(cfg: configparser.ConfigParser, key: str) -> Optional[str]:
    """Get config value for key (section.option), sections matched case-insensitively.

    Returns None if missing. A bare key without "=" is git's implicit true and reads as "true".
    """
    section, option = _parse_key(key)
    for name in cfg.sections():
        if name.lower() != section.lower():
            continue
        if cfg.has_option(name, option):
            value = cfg.get(name, option)
            return "true" if value is None else value.strip().strip('"')
    return None
