"""treediff: rename/move detection between git snapshots (identity, ambiguous and modified renames)."""

from .changes import ChangeSet
from .errors import InvalidThresholdError, TreediffError
from .rename import DetectionResult, RenameDetector, RenamePair, detect
from .rewrites import Rewrites

__all__ = [
    "ChangeSet",
    "DetectionResult",
    "InvalidThresholdError",
    "RenameDetector",
    "RenamePair",
    "Rewrites",
    "TreediffError",
    "detect",
]
