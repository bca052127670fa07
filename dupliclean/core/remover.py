# dupliclean/core/remover.py
import logging
from typing import List, Optional

from tqdm import tqdm

from .duplicate_detector import find_duplicates
from .errors import DeletionError
from .filesystem import FileSystemProvider, LocalFileSystem
from .models import DEFAULT_ALGORITHM, DeletionResult, RemovalReport
from .progress import ProgressReporter

logger = logging.getLogger(__name__)


def _delete_one(path: str, fs: FileSystemProvider) -> DeletionResult:
    try:
        size = fs.file_size(path)
    except OSError:
        size = 0

    logger.info(f"Removing file: {path}")
    try:
        fs.delete_file(path)
    except OSError as e:
        error = DeletionError(path, e.strerror or str(e))
        logger.warning(f"Could not remove file: {error}")
        return DeletionResult(path=path, success=False, error=error.reason)
    return DeletionResult(path=path, success=True, size=size)


def delete_files(
    paths: List[str],
    fs: Optional[FileSystemProvider] = None,
    show_progress: bool = False,
) -> RemovalReport:
    """
    Deletes `paths` in order. A failed deletion is recorded in the report and
    does not stop the remaining ones.
    """
    fs = fs or LocalFileSystem()
    report = RemovalReport()
    for path in tqdm(paths, desc="Removing duplicates", unit="file", disable=not show_progress):
        report.results.append(_delete_one(path, fs))

    if report.failed:
        logger.warning(f"{len(report.failed)} of {len(paths)} file(s) could not be removed")
    return report


def remove_duplicates(
    files: List[str],
    fs: Optional[FileSystemProvider] = None,
    algorithm: str = DEFAULT_ALGORITHM,
    reporter: Optional[ProgressReporter] = None,
    show_progress: bool = False,
) -> RemovalReport:
    """Removes every file of `files` that duplicates an earlier one."""
    fs = fs or LocalFileSystem()
    duplicates = find_duplicates(files, fs=fs, algorithm=algorithm, reporter=reporter)
    return delete_files(duplicates, fs=fs, show_progress=show_progress)
