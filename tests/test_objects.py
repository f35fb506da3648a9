"""Tests for objects: blob hashing as git does, ls-tree record parsing."""

import unittest

from treediff.objects import Blob, TreeEntry, blob_hash
from treediff.util import parse_git_bool, parse_git_int, sha1_hash


class TestBlob(unittest.TestCase):
    def test_blob_hash_format(self) -> None:
        blob = Blob(b"x")
        expected = sha1_hash(b"blob 1\0" + b"x")
        self.assertEqual(blob.hash_id(), expected)
        self.assertEqual(blob_hash(b"x"), expected)

    def test_empty_blob_matches_git(self) -> None:
        self.assertEqual(blob_hash(b""), "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391")

    def test_hash_depends_on_content_only(self) -> None:
        self.assertEqual(blob_hash(b"dir/c\n"), blob_hash(b"dir/c\n"))
        self.assertNotEqual(blob_hash(b"dir/c\n"), blob_hash(b"dir/c\nn\n"))


class TestTreeEntry(unittest.TestCase):
    def test_parse_file_record(self) -> None:
        sha = "a" * 40
        entry = TreeEntry.from_ls_tree(f"100644 blob {sha}\tdir/a-moved".encode())
        self.assertEqual(entry, TreeEntry("100644", "dir/a-moved", sha))
        self.assertTrue(entry.is_blob)

    def test_path_with_spaces(self) -> None:
        entry = TreeEntry.from_ls_tree(b"100755 blob " + b"b" * 40 + b"\tmy file.sh")
        self.assertEqual(entry.path, "my file.sh")
        self.assertTrue(entry.is_blob)

    def test_symlink_is_tracked(self) -> None:
        entry = TreeEntry.from_ls_tree(b"120000 blob " + b"c" * 40 + b"\tlink")
        self.assertTrue(entry.is_blob)

    def test_submodule_and_tree_not_tracked(self) -> None:
        self.assertFalse(TreeEntry.from_ls_tree(b"160000 commit " + b"d" * 40 + b"\tsub").is_blob)
        self.assertFalse(TreeEntry.from_ls_tree(b"040000 tree " + b"e" * 40 + b"\tdir").is_blob)

    def test_invalid_record_raises(self) -> None:
        with self.assertRaises(ValueError):
            TreeEntry.from_ls_tree(b"100644 blob no-tab")
        with self.assertRaises(ValueError):
            TreeEntry.from_ls_tree(b"100644\tpath")


class TestGitValues(unittest.TestCase):
    def test_bool(self) -> None:
        self.assertTrue(parse_git_bool("Yes"))
        self.assertFalse(parse_git_bool("off"))
        self.assertFalse(parse_git_bool(""))
        self.assertIsNone(parse_git_bool("maybe"))

    def test_int(self) -> None:
        self.assertEqual(parse_git_int("200"), 200)
        self.assertEqual(parse_git_int("1k"), 1024)
        self.assertEqual(parse_git_int("1M"), 1024 ** 2)
        with self.assertRaises(ValueError):
            parse_git_int("")
        with self.assertRaises(ValueError):
            parse_git_int("many")


if __name__ == "__main__":
    unittest.main()
