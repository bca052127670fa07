# tests/core/test_hashing.py
import hashlib
import os
import tempfile
import unittest

from dupliclean.core.errors import ReadError
from dupliclean.core.hashing import calculate_digest, calculate_entry_digest, calculate_file_digest

from fake_fs import FakeFileSystem


class TestHashing(unittest.TestCase):

    def test_calculate_digest_defaults_to_sha256(self):
        content = b"hello world"
        self.assertEqual(calculate_digest(content), hashlib.sha256(content).hexdigest())

    def test_calculate_digest_other_algorithm(self):
        content = b"hello world"
        self.assertEqual(calculate_digest(content, "md5"), hashlib.md5(content).hexdigest())

    def test_unsupported_algorithm(self):
        with self.assertRaises(ValueError):
            calculate_digest(b"x", "crc32")

    def test_calculate_file_digest_reads_in_blocks(self):
        content = os.urandom(200000)
        with tempfile.NamedTemporaryFile(delete=False, mode='wb') as tmp:
            tmp.write(content)
            tmp_path = tmp.name
        try:
            digest = calculate_file_digest(tmp_path, block_size=4096)
        finally:
            os.remove(tmp_path)
        self.assertEqual(digest, hashlib.sha256(content).hexdigest())

    def test_calculate_file_digest_through_provider(self):
        fs = FakeFileSystem({"root/f": b"payload"})
        self.assertEqual(
            calculate_file_digest("root/f", fs=fs, algorithm="sha1"),
            hashlib.sha1(b"payload").hexdigest(),
        )

    def test_unreadable_file_raises_read_error(self):
        fs = FakeFileSystem({"root/f": b"payload"})
        fs.unreadable.add("root/f")
        with self.assertRaises(ReadError) as ctx:
            calculate_file_digest("root/f", fs=fs)
        self.assertEqual(ctx.exception.path, "root/f")
        self.assertEqual(ctx.exception.reason, "Permission denied")

    def test_missing_file_raises_read_error(self):
        with self.assertRaises(ReadError):
            calculate_file_digest("root/missing", fs=FakeFileSystem())

    def test_link_hashed_by_target_text(self):
        fs = FakeFileSystem({"root/real": b"payload"})
        fs.add_link("root/alias", "real")
        digest = calculate_entry_digest("root/alias", fs=fs)
        self.assertEqual(digest, "link:" + hashlib.sha256(b"real").hexdigest())
        self.assertNotEqual(digest, calculate_entry_digest("root/real", fs=fs))
        self.assertNotIn("root/alias", fs.read_log)

    def test_entry_digest_of_plain_file(self):
        fs = FakeFileSystem({"root/real": b"payload"})
        self.assertEqual(calculate_entry_digest("root/real", fs=fs), hashlib.sha256(b"payload").hexdigest())

    def test_entry_digest_of_missing_entry(self):
        with self.assertRaises(ReadError):
            calculate_entry_digest("root/missing", fs=FakeFileSystem())


if __name__ == '__main__':
    unittest.main()
