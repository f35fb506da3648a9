"""Rename detection: pair removed and added paths of one change set by identical or similar content."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set, Tuple

from .changes import ChangeSet
from .constants import DEFAULT_PERCENTAGE, DEFAULT_RENAME_LIMIT
from .errors import InvalidThresholdError
from .similarity import SimilarityIndex

logger = logging.getLogger(__name__)

BlobReader = Callable[[str], bytes]


@dataclass(frozen=True)
class RenamePair:
    """A removed path and an added path judged to be the same file."""

    old_path: str
    new_path: str
    similarity: float
    content_changed: bool
    old_hash: str = ""
    new_hash: str = ""


@dataclass
class DetectionResult:
    """Renames in detection order; pure adds and deletes sorted by path."""

    renames: List[RenamePair] = field(default_factory=list)
    pure_adds: List[str] = field(default_factory=list)
    pure_deletes: List[str] = field(default_factory=list)


def validate_threshold(threshold: float) -> float:
    """Return threshold as float. Raises InvalidThresholdError unless 0 < threshold <= 1."""
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidThresholdError(f"similarity threshold must be a number, got {threshold!r}")
    if math.isnan(threshold) or not 0.0 < threshold <= 1.0:
        raise InvalidThresholdError(f"similarity threshold must be in (0, 1], got {threshold!r}")
    return float(threshold)


def _group_by_hash(side: Dict[str, str]) -> Dict[str, List[str]]:
    groups: Dict[str, List[str]] = defaultdict(list)
    for path, sha in side.items():
        groups[sha].append(path)
    return groups


class RenameDetector:
    """Pairs the removed and added paths of a change set into renames.

    Identical content is matched first; among several removed and added paths
    sharing one blob, both sides are sorted and paired positionally. What is
    left is scored by content similarity and chosen greedily, best score first,
    ties going to the lexicographically smaller (old path, new path). Scores
    below the threshold are never accepted; a score equal to it is.

    `limit` caps the similarity pass: when the leftover removed x added count
    exceeds limit ** 2 only identical-content renames are reported. 0 disables
    the cap.
    """

    def __init__(
        self,
        similarity_threshold: float = DEFAULT_PERCENTAGE,
        limit: int = DEFAULT_RENAME_LIMIT,
    ) -> None:
        self.similarity_threshold = validate_threshold(similarity_threshold)
        if limit < 0:
            raise ValueError(f"rename limit must not be negative, got {limit}")
        self.limit = limit

    def detect(self, change_set: ChangeSet, read_blob: Optional[BlobReader] = None) -> DetectionResult:
        """Classify the change set into renames, pure adds and pure deletes.

        Blob contents come from `read_blob`, or from `change_set.blobs` when not given.
        """
        removed = change_set.removed
        added = change_set.added
        if not removed or not added:
            return DetectionResult([], sorted(added), sorted(removed))

        renames, removed_left, added_left = self._find_exact_renames(removed, added)
        if self.similarity_threshold < 1.0 and removed_left and added_left:
            renames.extend(
                self._find_content_renames(change_set, removed_left, added_left, read_blob)
            )

        paired_old = {r.old_path for r in renames}
        paired_new = {r.new_path for r in renames}
        result = DetectionResult(
            renames=renames,
            pure_adds=sorted(p for p in added if p not in paired_new),
            pure_deletes=sorted(p for p in removed if p not in paired_old),
        )
        logger.debug(
            "rename detection: %d removed, %d added -> %d renames, %d adds, %d deletes",
            len(removed),
            len(added),
            len(result.renames),
            len(result.pure_adds),
            len(result.pure_deletes),
        )
        return result

    def _find_exact_renames(
        self,
        removed: Dict[str, str],
        added: Dict[str, str],
    ) -> Tuple[List[RenamePair], Dict[str, str], Dict[str, str]]:
        delete_map = _group_by_hash(removed)
        add_map = _group_by_hash(added)
        renames: List[RenamePair] = []
        for sha in set(delete_map) & set(add_map):
            for old, new in zip(sorted(delete_map[sha]), sorted(add_map[sha])):
                renames.append(RenamePair(old, new, 1.0, False, sha, sha))
        renames.sort(key=lambda r: (r.old_path, r.new_path))
        paired_old = {r.old_path for r in renames}
        paired_new = {r.new_path for r in renames}
        removed_left = {p: sha for p, sha in removed.items() if p not in paired_old}
        added_left = {p: sha for p, sha in added.items() if p not in paired_new}
        return renames, removed_left, added_left

    def _find_content_renames(
        self,
        change_set: ChangeSet,
        removed: Dict[str, str],
        added: Dict[str, str],
        read_blob: Optional[BlobReader],
    ) -> List[RenamePair]:
        if read_blob is None:
            blobs = change_set.blobs
            removed = self._with_known_content(removed, blobs)
            added = self._with_known_content(added, blobs)
            read_blob = blobs.__getitem__
        if self.limit and len(removed) * len(added) > self.limit ** 2:
            logger.warning(
                "skipping inexact rename detection: %d x %d candidates exceed rename limit %d",
                len(removed),
                len(added),
                self.limit,
            )
            return []

        index = SimilarityIndex(read_blob)
        candidates: List[Tuple[float, str, str]] = []
        for old_path, old_sha in removed.items():
            for new_path, new_sha in added.items():
                score = index.score(old_sha, new_sha)
                if score >= self.similarity_threshold:
                    candidates.append((-score, old_path, new_path))
        # Highest score first, then (old, new) ascending
        candidates.sort()

        renames: List[RenamePair] = []
        used_old: Set[str] = set()
        used_new: Set[str] = set()
        for neg_score, old_path, new_path in candidates:
            if old_path in used_old or new_path in used_new:
                continue
            used_old.add(old_path)
            used_new.add(new_path)
            old_sha = removed[old_path]
            new_sha = added[new_path]
            renames.append(
                RenamePair(old_path, new_path, -neg_score, old_sha != new_sha, old_sha, new_sha)
            )
        return renames

    @staticmethod
    def _with_known_content(side: Dict[str, str], blobs: Dict[str, bytes]) -> Dict[str, str]:
        known = {}
        for path, sha in side.items():
            if sha in blobs:
                known[path] = sha
            else:
                logger.debug("no content for %s (%s); not a rename candidate", path, sha)
        return known


def detect(
    change_set: ChangeSet,
    similarity_threshold: float = DEFAULT_PERCENTAGE,
    read_blob: Optional[BlobReader] = None,
    limit: int = DEFAULT_RENAME_LIMIT,
) -> DetectionResult:
    """Run rename detection over one change set. Raises InvalidThresholdError for a threshold outside (0, 1]."""
    return RenameDetector(similarity_threshold, limit).detect(change_set, read_blob)
