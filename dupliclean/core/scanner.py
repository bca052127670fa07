# dupliclean/core/scanner.py
import logging
from typing import List, Optional

from .errors import TraversalError
from .filesystem import FileSystemProvider, LocalFileSystem, normalize_path
from .models import EntryType, ScanResult, SymlinkPolicy, UnreadablePolicy

logger = logging.getLogger(__name__)


def scan_directory(
    root: str,
    fs: Optional[FileSystemProvider] = None,
    on_unreadable: UnreadablePolicy = UnreadablePolicy.ABORT,
    symlinks: SymlinkPolicy = SymlinkPolicy.SKIP,
) -> ScanResult:
    """
    Collects every directory and file below `root`.

    Order is level-then-descend: the children of a directory are sorted by
    path, its subdirectories and files are appended, and only then does the
    walk descend into each subdirectory in that same order. A directory thus
    always precedes its descendants in `dirs`, and the file order (which
    decides which duplicate is kept) is the same on every run over an
    unchanged tree. The root itself is not included in `dirs`.

    Raises TraversalError when the root, or with UnreadablePolicy.ABORT any
    directory below it, cannot be listed.
    """
    fs = fs or LocalFileSystem()
    root = normalize_path(root)

    try:
        root_type = fs.stat_type(root)
    except OSError as e:
        raise TraversalError(root, e.strerror or str(e)) from e
    if root_type is not EntryType.DIRECTORY:
        raise TraversalError(root, "Not a directory")

    logger.debug(f"Scanning {root} (unreadable={on_unreadable.value}, symlinks={symlinks.value})")
    try:
        children = fs.list_dir(root)
    except OSError as e:
        raise TraversalError(root, e.strerror or str(e)) from e

    result = ScanResult(root=root)
    # Directories still to list, next one on top. Pushing a level's
    # subdirectories in reverse keeps them in sorted order below it.
    pending = []
    while True:
        level_dirs = _classify_children(children, fs, on_unreadable, symlinks, result)
        pending.extend(reversed(level_dirs))

        children = None
        while pending and children is None:
            subdir = pending.pop()
            try:
                children = fs.list_dir(subdir)
            except OSError as e:
                _handle_unreadable(subdir, e, on_unreadable, result)
        if children is None:
            break

    logger.debug(f"Scan of {root} found {len(result.dirs)} directories and {len(result.files)} files")
    return result


def _classify_children(children, fs, on_unreadable, symlinks, result: ScanResult) -> List[str]:
    """Appends one directory's children to `result`; returns its subdirectories."""
    level_dirs = []
    level_files = []

    for child in sorted(normalize_path(c) for c in children):
        try:
            entry_type = fs.stat_type(child)
        except FileNotFoundError:
            logger.debug(f"Entry vanished during scan: {child}")
            continue
        except OSError as e:
            _handle_unreadable(child, e, on_unreadable, result)
            continue

        if entry_type is EntryType.DIRECTORY:
            level_dirs.append(child)
        elif entry_type is EntryType.SYMLINK:
            if symlinks is SymlinkPolicy.ERROR:
                raise TraversalError(child, "Symbolic link found")
            if symlinks is SymlinkPolicy.FILE:
                level_files.append(child)
            else:
                logger.debug(f"Skipping symbolic link: {child}")
        else:
            level_files.append(child)

    result.dirs.extend(level_dirs)
    result.files.extend(level_files)
    return level_dirs


def _handle_unreadable(path: str, error: OSError, policy: UnreadablePolicy, result: ScanResult) -> None:
    reason = error.strerror or str(error)
    if policy is UnreadablePolicy.ABORT:
        raise TraversalError(path, reason) from error
    logger.warning(f"Skipping unreadable entry {path}: {reason}")
    result.skipped.append(path)
