"""Custom exceptions for treediff."""

from __future__ import annotations


class TreediffError(Exception):
    """Base exception for treediff."""

    pass


class InvalidThresholdError(TreediffError, ValueError):
    """Raised when a similarity threshold is outside (0, 1]."""

    pass


class InvalidConfigKeyError(TreediffError):
    """Raised when a config key is invalid (e.g. not section.option)."""

    pass


class InvalidConfigValueError(TreediffError):
    """Raised when diff.renames or diff.renameLimit holds an unusable value."""

    pass


class BackendError(TreediffError):
    """Raised when git is unavailable or a git command fails."""

    pass


class InvalidRevError(BackendError):
    """Raised when a revision cannot be resolved."""

    pass
