# dupliclean/core/pruner.py
import logging
from typing import List, Optional

from tqdm import tqdm

from .errors import DeletionError
from .filesystem import FileSystemProvider, LocalFileSystem, normalize_path
from .models import DeletionResult, PruneReport, UnreadablePolicy
from .scanner import scan_directory

logger = logging.getLogger(__name__)


def prune_empty_directories(
    root: str,
    fs: Optional[FileSystemProvider] = None,
    directories: Optional[List[str]] = None,
    show_progress: bool = False,
    on_unreadable: UnreadablePolicy = UnreadablePolicy.ABORT,
) -> PruneReport:
    """
    Removes every directory below `root` that is empty when it is checked.

    Directories are visited in reverse scan order, so children come before
    their parents and removing a leaf can empty its parent in the same pass.
    Emptiness is always re-checked with a fresh listing; `directories` only
    supplies the candidates and their order. `root` itself is kept.
    """
    fs = fs or LocalFileSystem()
    root = normalize_path(root)
    if directories is None:
        directories = scan_directory(root, fs=fs, on_unreadable=on_unreadable).dirs

    report = PruneReport(root=root)
    candidates = [normalize_path(d) for d in reversed(directories)]
    for directory in tqdm(candidates, desc="Pruning directories", unit="dir", disable=not show_progress):
        if directory.rstrip("/") == root.rstrip("/"):
            continue
        try:
            if fs.list_dir(directory):
                continue
            logger.info(f"Removing directory: {directory}")
            fs.delete_directory(directory)
        except OSError as e:
            error = DeletionError(directory, e.strerror or str(e))
            logger.warning(f"Could not remove directory: {error}")
            report.failed.append(DeletionResult(path=directory, success=False, error=error.reason))
            continue
        report.removed.append(directory)

    logger.info(f"Removed {len(report.removed)} empty directories under {root}")
    return report
