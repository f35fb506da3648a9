"""Git objects as seen by rename tracking: blobs and the entries of a tree listing."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import MODE_DIR, MODE_GITLINK, OBJ_BLOB
from .util import sha1_hash


def _object_header(obj_type: str, content: bytes) -> bytes:
    """Header: '<type> <size>\\0'."""
    return f"{obj_type} {len(content)}\0".encode()


class GitObject:
    """Base git object: type and raw content."""

    def __init__(self, obj_type: str, content: bytes) -> None:
        self.type = obj_type
        self.content = content

    def hash_id(self) -> str:
        """SHA-1 of uncompressed representation: header + content."""
        header = _object_header(self.type, self.content)
        return sha1_hash(header + self.content)


class Blob(GitObject):
    """Blob object: raw file content."""

    def __init__(self, content: bytes) -> None:
        super().__init__(OBJ_BLOB, content)


def blob_hash(content: bytes) -> str:
    """Return the id git assigns to a blob with this content."""
    return Blob(content).hash_id()


@dataclass(frozen=True)
class TreeEntry:
    """Single entry of a recursive tree listing: mode, full path, object hash."""
    mode: str
    path: str
    sha: str

    @property
    def is_blob(self) -> bool:
        """Regular files and symlinks; trees and submodules are not tracked."""
        return self.mode not in (MODE_DIR, MODE_GITLINK)

    @classmethod
    def from_ls_tree(cls, record: bytes) -> "TreeEntry":
        """Parse one NUL-terminated `git ls-tree -z` record: '<mode> <type> <sha>\\t<path>'."""
        meta, sep, path = record.partition(b"\t")
        if not sep:
            raise ValueError(f"invalid ls-tree record: {record!r}")
        parts = meta.decode().split()
        if len(parts) != 3:
            raise ValueError(f"invalid ls-tree record: {record!r}")
        mode, _, sha = parts
        return cls(mode=mode, path=path.decode("utf-8", errors="surrogateescape"), sha=sha)
