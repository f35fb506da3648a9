"""Tests for change sets: snapshot splitting, construction from contents, change events."""

import unittest

from treediff.changes import ChangeSet, Modification, Rewrite, split_snapshots
from treediff.objects import blob_hash


class TestSplitSnapshots(unittest.TestCase):
    def test_split(self) -> None:
        old = {"a": "1" * 40, "b": "2" * 40, "dir/c": "3" * 40, "d": "4" * 40}
        new = {"dir/a-moved": "1" * 40, "b": "5" * 40, "dir/c-moved": "6" * 40, "d": "4" * 40}
        cs, mods = split_snapshots(old, new)
        self.assertEqual(cs.removed, {"a": "1" * 40, "dir/c": "3" * 40})
        self.assertEqual(cs.added, {"dir/a-moved": "1" * 40, "dir/c-moved": "6" * 40})
        self.assertEqual(mods, [Modification("b", "2" * 40, "5" * 40)])

    def test_same_path_never_a_candidate(self) -> None:
        cs, mods = split_snapshots({"a": "1" * 40}, {"a": "2" * 40})
        self.assertEqual((cs.removed, cs.added), ({}, {}))
        self.assertEqual(len(mods), 1)

    def test_identical_snapshots(self) -> None:
        snap = {"a": "1" * 40}
        cs, mods = split_snapshots(snap, dict(snap))
        self.assertEqual((cs.removed, cs.added), ({}, {}))
        self.assertEqual(mods, [])

    def test_from_empty(self) -> None:
        cs, mods = split_snapshots({}, {"a": "1" * 40, "b": "1" * 40})
        self.assertEqual(sorted(cs.added), ["a", "b"])
        self.assertEqual(cs.removed, {})
        self.assertEqual(mods, [])


class TestChangeSetFromContents(unittest.TestCase):
    def test_hashes_and_blobs(self) -> None:
        cs = ChangeSet.from_contents(removed={"s1": b""}, added={"z": b"", "y": b"y\n"})
        self.assertEqual(cs.removed["s1"], blob_hash(b""))
        self.assertEqual(cs.added["z"], cs.removed["s1"])
        self.assertEqual(cs.blobs[cs.added["y"]], b"y\n")
        self.assertEqual(len(cs.blobs), 2)

    def test_overlap_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ChangeSet.from_contents(removed={"a": b"1"}, added={"a": b"2"})


class TestRewriteEvent(unittest.TestCase):
    def test_content_changed(self) -> None:
        self.assertFalse(Rewrite("a", "1" * 40, "b", "1" * 40, 1.0).content_changed)
        self.assertTrue(Rewrite("a", "1" * 40, "b", "2" * 40, 0.75).content_changed)


if __name__ == "__main__":
    unittest.main()
