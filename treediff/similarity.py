"""Content similarity between blobs: shared line blocks over the larger size."""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, Dict

from .constants import MAX_INEXACT_SCORE, SIMILARITY_BLOCK_SIZE


def count_blocks(data: bytes) -> Dict[bytes, int]:
    """Split data into lines (chunks of at most SIMILARITY_BLOCK_SIZE bytes) and total the bytes per distinct block."""
    counts: Dict[bytes, int] = defaultdict(int)
    start = 0
    size = len(data)
    while start < size:
        end = data.find(b"\n", start, start + SIMILARITY_BLOCK_SIZE)
        if end == -1:
            end = min(start + SIMILARITY_BLOCK_SIZE, size)
        else:
            end += 1
        block = data[start:end]
        counts[block] += len(block)
        start = end
    return dict(counts)


def common_bytes(blocks1: Dict[bytes, int], blocks2: Dict[bytes, int]) -> int:
    """Bytes the two block counts have in common."""
    # Iterate over the smaller of the two, the sum is symmetric
    if len(blocks1) > len(blocks2):
        blocks1, blocks2 = blocks2, blocks1
    score = 0
    for block, count1 in blocks1.items():
        count2 = blocks2.get(block)
        if count2:
            score += min(count1, count2)
    return score


def similarity(a: bytes, b: bytes) -> float:
    """Similarity in [0, 1]: common bytes divided by the larger size.

    Only identical content scores 1.0; differing blobs with the same lines in
    another order score just below it.
    """
    if a == b:
        return 1.0
    return _inexact(common_bytes(count_blocks(a), count_blocks(b)), max(len(a), len(b)))


def _inexact(common: int, max_size: int) -> float:
    if not max_size:
        return MAX_INEXACT_SCORE
    return min(common / max_size, MAX_INEXACT_SCORE)


class SimilarityIndex:
    """Scores blob pairs by hash, counting each blob's blocks only once."""

    def __init__(self, read_blob: Callable[[str], bytes]) -> None:
        self._read_blob = read_blob
        self._blocks: Dict[str, Dict[bytes, int]] = {}
        self._sizes: Dict[str, int] = {}

    def _load(self, sha: str) -> None:
        if sha in self._blocks:
            return
        data = self._read_blob(sha)
        self._blocks[sha] = count_blocks(data)
        self._sizes[sha] = len(data)

    def score(self, sha_a: str, sha_b: str) -> float:
        if sha_a == sha_b:
            return 1.0
        self._load(sha_a)
        self._load(sha_b)
        max_size = max(self._sizes[sha_a], self._sizes[sha_b])
        return _inexact(common_bytes(self._blocks[sha_a], self._blocks[sha_b]), max_size)
