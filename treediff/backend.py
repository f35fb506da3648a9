"""Git backend: resolve revisions, list tree snapshots and read blobs by running system git."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import threading
from pathlib import Path
from typing import Dict, List, Optional

from .errors import BackendError, InvalidRevError
from .objects import TreeEntry

logger = logging.getLogger(__name__)


def git_available() -> bool:
    """Return True if system git is available."""
    return shutil.which("git") is not None


class GitBackend:
    """Read-only access to a git repository through the `git` executable."""

    def __init__(
        self,
        path: str | Path = ".",
        git_exe: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        self.path = Path(path).resolve()
        self._git = git_exe or shutil.which("git")
        if not self._git:
            raise BackendError("git not found")
        self.timeout = timeout
        self._blobs: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def run(self, args: List[str], env: Optional[dict] = None) -> bytes:
        """Run git in the repository. Returns stdout; raises BackendError on failure."""
        full = [self._git] + args
        e = os.environ.copy()
        if env:
            e.update(env)
        try:
            r = subprocess.run(
                full,
                cwd=self.path,
                capture_output=True,
                timeout=self.timeout,
                env=e,
            )
        except subprocess.TimeoutExpired:
            raise BackendError(f"git {' '.join(args)}: timeout") from None
        except FileNotFoundError:
            raise BackendError("git not found") from None
        if r.returncode != 0:
            stderr = (r.stderr or b"").decode("utf-8", errors="replace").strip()
            raise BackendError(f"git {' '.join(args)} failed ({r.returncode}): {stderr}")
        return r.stdout or b""

    def rev_parse(self, rev: str) -> str:
        """Resolve rev to a full object id. Raises InvalidRevError."""
        try:
            out = self.run(["rev-parse", "--verify", "--quiet", rev])
        except BackendError as e:
            raise InvalidRevError(f"cannot resolve revision {rev!r}") from e
        return out.decode().strip()

    def first_parent(self, rev: str) -> Optional[str]:
        """Return the first parent of a commit, or None for a root commit."""
        # ':/<text>' takes the rest of the string as its pattern; peel the resolved id
        commit = self.rev_parse(f"{self.rev_parse(rev)}^{{commit}}")
        out = self.run(["rev-list", "--parents", "-n", "1", commit]).decode().split()
        return out[1] if len(out) > 1 else None

    def tree_snapshot(self, rev: Optional[str]) -> Dict[str, str]:
        """Return path -> blob hash for every file under rev's tree. None is the empty tree."""
        if rev is None:
            return {}
        tree = self.rev_parse(f"{self.rev_parse(rev)}^{{tree}}")
        out = self.run(["ls-tree", "-r", "-z", "--full-tree", tree])
        snapshot: Dict[str, str] = {}
        for record in out.split(b"\0"):
            if not record:
                continue
            entry = TreeEntry.from_ls_tree(record)
            if entry.is_blob:
                snapshot[entry.path] = entry.sha
        logger.debug("snapshot %s: %d files", rev, len(snapshot))
        return snapshot

    def read_blob(self, sha: str) -> bytes:
        """Return blob content (cached)."""
        with self._lock:
            cached = self._blobs.get(sha)
        if cached is not None:
            return cached
        data = self.run(["cat-file", "blob", sha])
        with self._lock:
            self._blobs[sha] = data
        return data

    def config_path(self) -> Path:
        """Path of the repository's config file."""
        out = self.run(["rev-parse", "--git-dir"]).decode().strip()
        return (self.path / out / "config").resolve()
