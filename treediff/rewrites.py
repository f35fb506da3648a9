"""Rename tracking options and their defaults from git configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import get_value, read_config
from .constants import CONFIG_DIFF_RENAME_LIMIT, CONFIG_DIFF_RENAMES, DEFAULT_PERCENTAGE, DEFAULT_RENAME_LIMIT
from .errors import InvalidConfigValueError
from .rename import RenameDetector
from .util import parse_git_bool, parse_git_int

logger = logging.getLogger(__name__)


class CopySource(Enum):
    """Where to look for the source of a copy."""

    FROM_SET_OF_CHANGED_FILES = "changed"


class Tracking(Enum):
    """What diff.renames asks for."""

    DISABLED = "disabled"
    RENAMES = "renames"
    RENAMES_AND_COPIES = "copies"


@dataclass(frozen=True)
class Copies:
    """How to determine copied files. `percentage` None means identity only."""

    source: CopySource = CopySource.FROM_SET_OF_CHANGED_FILES
    percentage: Optional[float] = None


@dataclass(frozen=True)
class Rewrites:
    """Rename tracking options.

    `percentage` is the minimum similarity of a content rename; None matches
    identical content only. `limit` bounds the similarity pass (see
    RenameDetector). `copies` is kept for configuration fidelity; tree diffs
    report renames only.
    """

    copies: Optional[Copies] = None
    percentage: Optional[float] = DEFAULT_PERCENTAGE
    limit: int = DEFAULT_RENAME_LIMIT

    @property
    def threshold(self) -> float:
        """Similarity threshold handed to the detector."""
        if self.percentage is None or self.percentage >= 1.0:
            return 1.0
        return self.percentage

    def detector(self) -> RenameDetector:
        if self.copies is not None:
            logger.warning("copy tracking is not supported; detecting renames only")
        return RenameDetector(self.threshold, self.limit)


def parse_tracking(value: str) -> Tracking:
    """Interpret a diff.renames value. Raises InvalidConfigValueError."""
    word = value.strip().lower()
    if word in ("copies", "copy"):
        return Tracking.RENAMES_AND_COPIES
    flag = parse_git_bool(word)
    if flag is None:
        raise InvalidConfigValueError(f"invalid value for {CONFIG_DIFF_RENAMES}: {value!r}")
    return Tracking.RENAMES if flag else Tracking.DISABLED


def _rename_limit(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_RENAME_LIMIT
    try:
        limit = parse_git_int(value)
    except ValueError:
        raise InvalidConfigValueError(f"invalid value for {CONFIG_DIFF_RENAME_LIMIT}: {value!r}") from None
    if limit < 0:
        raise InvalidConfigValueError(f"invalid value for {CONFIG_DIFF_RENAME_LIMIT}: {value!r}")
    return limit


def rewrites_from_config(config_path: Path, lenient: bool = False) -> Optional[Rewrites]:
    """Read diff.renames and diff.renameLimit from a git config file.

    Returns None if rename tracking is not configured or disabled. Invalid
    values raise InvalidConfigValueError, or fall back to git's defaults when
    `lenient` is set (an unreadable diff.renames then counts as unset).
    """
    cfg = read_config(config_path)
    raw = get_value(cfg, CONFIG_DIFF_RENAMES)
    if raw is None:
        return None
    try:
        tracking = parse_tracking(raw)
    except InvalidConfigValueError:
        if not lenient:
            raise
        logger.debug("ignoring invalid %s=%r", CONFIG_DIFF_RENAMES, raw)
        return None
    if tracking is Tracking.DISABLED:
        return None

    default = Rewrites()
    copies = Copies() if tracking is Tracking.RENAMES_AND_COPIES else None
    try:
        limit = _rename_limit(get_value(cfg, CONFIG_DIFF_RENAME_LIMIT))
    except InvalidConfigValueError:
        if not lenient:
            raise
        logger.debug("ignoring invalid %s", CONFIG_DIFF_RENAME_LIMIT)
        limit = default.limit
    return replace(default, copies=copies, limit=limit)
