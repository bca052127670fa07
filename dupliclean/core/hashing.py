# dupliclean/core/hashing.py
import hashlib
import os
from typing import Optional

from .errors import ReadError
from .filesystem import DEFAULT_BLOCK_SIZE, FileSystemProvider, LocalFileSystem
from .models import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS, EntryType

LINK_DIGEST_PREFIX = "link:"


def new_hasher(algorithm: str = DEFAULT_ALGORITHM):
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(
            f"Unsupported digest algorithm '{algorithm}'. "
            f"Choose one of: {', '.join(SUPPORTED_ALGORITHMS)}"
        )
    return hashlib.new(algorithm)


def calculate_digest(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    hasher = new_hasher(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def calculate_file_digest(
    path: str,
    fs: Optional[FileSystemProvider] = None,
    algorithm: str = DEFAULT_ALGORITHM,
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> str:
    """
    Digest of the complete contents of `path`, read block by block.
    Raises ReadError if the file cannot be read.
    """
    fs = fs or LocalFileSystem()
    hasher = new_hasher(algorithm)
    try:
        for block in fs.read_blocks(path, block_size):
            hasher.update(block)
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e
    return hasher.hexdigest()


def calculate_entry_digest(
    path: str,
    fs: Optional[FileSystemProvider] = None,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """
    Digest identifying a scanned entry. A symbolic link is hashed by its
    target text and never followed, under a `link:` prefix so that it can
    only ever match another link. Raises ReadError if the entry cannot be
    read.
    """
    fs = fs or LocalFileSystem()
    try:
        entry_type = fs.stat_type(path)
        if entry_type is EntryType.SYMLINK:
            target = fs.read_link(path)
            return LINK_DIGEST_PREFIX + calculate_digest(os.fsencode(target), algorithm)
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e
    return calculate_file_digest(path, fs=fs, algorithm=algorithm)
