"""Change sets between two snapshots and the change events reported to callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple, Union

from .objects import blob_hash


@dataclass
class ChangeSet:
    """Paths removed and added between two snapshots (path -> blob hash).

    A path may appear in only one of the two mappings; a path present on both
    sides is a modification and is reported as such, never as a rename candidate.
    `blobs` optionally maps blob hash -> content for the similarity pass.
    """

    removed: Dict[str, str] = field(default_factory=dict)
    added: Dict[str, str] = field(default_factory=dict)
    blobs: Dict[str, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        both = set(self.removed) & set(self.added)
        if both:
            raise ValueError(f"paths both removed and added: {sorted(both)}")

    @classmethod
    def from_contents(
        cls,
        removed: Mapping[str, bytes],
        added: Mapping[str, bytes],
    ) -> "ChangeSet":
        """Build a change set from raw contents, hashing each blob as git does."""
        blobs: Dict[str, bytes] = {}

        def hashed(side: Mapping[str, bytes]) -> Dict[str, str]:
            out: Dict[str, str] = {}
            for path, content in side.items():
                sha = blob_hash(content)
                blobs[sha] = content
                out[path] = sha
            return out

        return cls(removed=hashed(removed), added=hashed(added), blobs=blobs)


@dataclass(frozen=True)
class Addition:
    location: str
    id: str


@dataclass(frozen=True)
class Deletion:
    location: str
    id: str


@dataclass(frozen=True)
class Modification:
    location: str
    previous_id: str
    id: str


@dataclass(frozen=True)
class Rewrite:
    """A rename: the file at source_location now lives at location."""

    source_location: str
    source_id: str
    location: str
    id: str
    similarity: float

    @property
    def content_changed(self) -> bool:
        return self.source_id != self.id


Change = Union[Addition, Deletion, Modification, Rewrite]


def split_snapshots(
    old: Mapping[str, str],
    new: Mapping[str, str],
) -> Tuple[ChangeSet, List[Modification]]:
    """Compare two snapshots (path -> blob hash). Same-path changes become modifications; the rest a ChangeSet."""
    removed: Dict[str, str] = {}
    added: Dict[str, str] = {}
    modifications: List[Modification] = []
    for path in sorted(set(old) | set(new)):
        sha_a = old.get(path, "")
        sha_b = new.get(path, "")
        if sha_a == sha_b:
            continue
        if not sha_a:
            added[path] = sha_b
        elif not sha_b:
            removed[path] = sha_a
        else:
            modifications.append(Modification(path, sha_a, sha_b))
    return ChangeSet(removed=removed, added=added), modifications
