"""Tree diff with rename tracking: changes between two revisions, or a commit and its first parent."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

from .backend import GitBackend
from .changes import Addition, Change, Deletion, Rewrite, split_snapshots
from .rewrites import Rewrites

logger = logging.getLogger(__name__)


def tree_changes(
    backend: GitBackend,
    old_rev: Optional[str],
    new_rev: str,
    rewrites: Optional[Rewrites] = None,
) -> List[Change]:
    """Changes from old_rev's tree to new_rev's tree (old_rev None: the empty tree).

    Modifications, additions and deletions come first, sorted by location,
    followed by rewrites in detection order. Without `rewrites` no renames are tracked.
    """
    old = backend.tree_snapshot(old_rev)
    new = backend.tree_snapshot(new_rev)
    change_set, modifications = split_snapshots(old, new)

    changes: List[Change] = list(modifications)
    if rewrites is None:
        changes.extend(Addition(p, sha) for p, sha in change_set.added.items())
        changes.extend(Deletion(p, sha) for p, sha in change_set.removed.items())
        changes.sort(key=lambda c: c.location)
        return changes

    detection = rewrites.detector().detect(change_set, read_blob=backend.read_blob)
    changes.extend(Addition(p, change_set.added[p]) for p in detection.pure_adds)
    changes.extend(Deletion(p, change_set.removed[p]) for p in detection.pure_deletes)
    changes.sort(key=lambda c: c.location)
    for pair in detection.renames:
        changes.append(
            Rewrite(
                source_location=pair.old_path,
                source_id=pair.old_hash,
                location=pair.new_path,
                id=pair.new_hash,
                similarity=pair.similarity,
            )
        )
    return changes


def commit_changes(
    backend: GitBackend,
    rev: str,
    rewrites: Optional[Rewrites] = None,
) -> List[Change]:
    """Changes introduced by a commit relative to its first parent (root commits: the empty tree)."""
    parent = backend.first_parent(rev)
    return tree_changes(backend, parent, rev, rewrites)


def changes_for_commits(
    backend: GitBackend,
    revs: Sequence[str],
    rewrites: Optional[Rewrites] = None,
    max_workers: int = 4,
) -> Dict[str, List[Change]]:
    """Run commit_changes for each rev concurrently; results keyed by the given rev."""
    if not revs:
        return {}
    results: Dict[str, List[Change]] = {}
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        futures = {rev: pool.submit(commit_changes, backend, rev, rewrites) for rev in revs}
        for rev, future in futures.items():
            results[rev] = future.result()
    logger.debug("diffed %d commits", len(results))
    return results


def renames_only(changes: Sequence[Change]) -> List[Rewrite]:
    """The rewrites among changes, in order."""
    return [c for c in changes if isinstance(c, Rewrite)]
