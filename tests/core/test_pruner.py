# tests/core/test_pruner.py
import os
import tempfile
import unittest

from dupliclean.core.errors import TraversalError
from dupliclean.core.pruner import prune_empty_directories
from dupliclean.core.remover import delete_files
from dupliclean.core.scanner import scan_directory

from fake_fs import FakeFileSystem


class TestPruneEmptyDirectories(unittest.TestCase):

    def test_cascade_after_deletion(self):
        fs = FakeFileSystem({"root/a/b/c/file.txt": b"dup", "root/keep.txt": b"dup"})
        delete_files(["root/a/b/c/file.txt"], fs=fs)
        report = prune_empty_directories("root", fs=fs)
        self.assertEqual(report.removed, ["root/a/b/c", "root/a/b", "root/a"])
        self.assertEqual(fs.dirs, {"root"})
        self.assertTrue(report.ok)

    def test_cascade_stops_at_non_empty_ancestor(self):
        fs = FakeFileSystem({"root/a/b/c/file.txt": b"dup", "root/a/other.txt": b"x"})
        delete_files(["root/a/b/c/file.txt"], fs=fs)
        report = prune_empty_directories("root", fs=fs)
        self.assertEqual(report.removed, ["root/a/b/c", "root/a/b"])
        self.assertIn("root/a", fs.dirs)

    def test_root_is_never_removed(self):
        fs = FakeFileSystem(dirs=["root/empty"])
        report = prune_empty_directories("root", fs=fs, directories=["root", "root/empty"])
        self.assertEqual(report.removed, ["root/empty"])
        self.assertIn("root", fs.dirs)

    def test_stale_list_is_rechecked(self):
        fs = FakeFileSystem({"root/full/f": b"x"}, dirs=["root/empty"])
        directories = ["root/empty", "root/full"]
        report = prune_empty_directories("root", fs=fs, directories=directories)
        self.assertEqual(report.removed, ["root/empty"])
        self.assertIn("root/full", fs.dirs)

    def test_vanished_directory_is_reported(self):
        fs = FakeFileSystem(dirs=["root/empty"])
        report = prune_empty_directories("root", fs=fs, directories=["root/empty", "root/gone"])
        self.assertEqual(report.removed, ["root/empty"])
        self.assertEqual([r.path for r in report.failed], ["root/gone"])

    def test_delete_failure_continues(self):
        fs = FakeFileSystem(dirs=["root/a", "root/b"])
        fs.undeletable.add("root/b")
        with self.assertLogs("dupliclean.core.pruner", level="WARNING"):
            report = prune_empty_directories("root", fs=fs)
        self.assertEqual(report.removed, ["root/a"])
        self.assertEqual([r.path for r in report.failed], ["root/b"])
        self.assertFalse(report.ok)

    def test_works_without_prior_deduplication(self):
        fs = FakeFileSystem({"root/x/f": b"1"}, dirs=["root/x/empty", "root/y/z"])
        report = prune_empty_directories("root", fs=fs)
        self.assertEqual(sorted(report.removed), ["root/x/empty", "root/y", "root/y/z"])
        self.assertEqual(fs.dirs, {"root", "root/x"})

    def test_unlistable_subtree_aborts_fresh_scan(self):
        fs = FakeFileSystem(dirs=["root/locked/inner"])
        fs.unlistable.add("root/locked")
        with self.assertRaises(TraversalError):
            prune_empty_directories("root", fs=fs)

    def test_on_local_disk(self):
        with tempfile.TemporaryDirectory() as tmp:
            os.makedirs(os.path.join(tmp, "a", "b", "c"))
            os.makedirs(os.path.join(tmp, "d"))
            with open(os.path.join(tmp, "d", "keep.txt"), "wb") as f:
                f.write(b"keep")

            report = prune_empty_directories(tmp)
            self.assertEqual(len(report.removed), 3)
            self.assertFalse(os.path.exists(os.path.join(tmp, "a")))
            self.assertTrue(os.path.exists(os.path.join(tmp, "d", "keep.txt")))
            self.assertTrue(os.path.isdir(tmp))
            self.assertEqual(scan_directory(tmp).dirs[0].rsplit("/", 1)[1], "d")


if __name__ == '__main__':
    unittest.main()
