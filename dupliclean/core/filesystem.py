# dupliclean/core/filesystem.py
import os
import stat
from typing import Iterator, List

from .models import EntryType

DEFAULT_BLOCK_SIZE = 65536


def normalize_path(path) -> str:
    """Returns `path` as a string with forward-slash separators."""
    return os.fspath(path).replace("\\", "/")


def join_path(directory: str, name: str) -> str:
    directory = normalize_path(directory)
    if directory.endswith("/"):
        directory = directory.rstrip("/")
    return f"{directory}/{name}"


class FileSystemProvider:
    """
    Filesystem operations the scanner, detector, remover and pruner rely on.
    All paths returned are normalized. Failures surface as OSError.
    """

    def list_dir(self, path: str) -> List[str]:
        raise NotImplementedError

    def stat_type(self, path: str) -> EntryType:
        raise NotImplementedError

    def file_size(self, path: str) -> int:
        raise NotImplementedError

    def read_all(self, path: str) -> bytes:
        raise NotImplementedError

    def read_blocks(self, path: str, block_size: int = DEFAULT_BLOCK_SIZE) -> Iterator[bytes]:
        yield self.read_all(path)

    def read_link(self, path: str) -> str:
        raise NotImplementedError

    def delete_file(self, path: str) -> None:
        raise NotImplementedError

    def delete_directory(self, path: str) -> None:
        raise NotImplementedError


class LocalFileSystem(FileSystemProvider):
    """FileSystemProvider backed by the local disk through `os`."""

    def list_dir(self, path: str) -> List[str]:
        path = normalize_path(path)
        return [join_path(path, name) for name in os.listdir(path)]

    def stat_type(self, path: str) -> EntryType:
        mode = os.lstat(path).st_mode
        if stat.S_ISLNK(mode):
            return EntryType.SYMLINK
        if stat.S_ISDIR(mode):
            return EntryType.DIRECTORY
        return EntryType.FILE

    def file_size(self, path: str) -> int:
        return os.lstat(path).st_size

    def read_all(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    def read_blocks(self, path: str, block_size: int = DEFAULT_BLOCK_SIZE) -> Iterator[bytes]:
        with open(path, 'rb') as f:
            for block in iter(lambda: f.read(block_size), b''):
                yield block

    def read_link(self, path: str) -> str:
        return os.readlink(path)

    def delete_file(self, path: str) -> None:
        os.unlink(path)

    def delete_directory(self, path: str) -> None:
        # os.rmdir refuses non-empty directories
        os.rmdir(path)
