# dupliclean/core/duplicate_detector.py
import logging
from typing import Dict, List, Optional

from .errors import ReadError
from .filesystem import FileSystemProvider, LocalFileSystem
from .hashing import calculate_entry_digest, new_hasher
from .models import DEFAULT_ALGORITHM, DuplicateMatch
from .progress import ProgressReporter

logger = logging.getLogger(__name__)


def find_duplicate_matches(
    files: List[str],
    fs: Optional[FileSystemProvider] = None,
    algorithm: str = DEFAULT_ALGORITHM,
    reporter: Optional[ProgressReporter] = None,
) -> List[DuplicateMatch]:
    """
    Single ordered pass over `files`. The first file seen with a given digest
    is kept; every later file with that digest is returned, in input order,
    together with the path it duplicates.

    Files that cannot be read are logged and left out: they are neither
    indexed nor reported, whatever their content.
    """
    new_hasher(algorithm)  # fail fast on an unknown algorithm
    fs = fs or LocalFileSystem()
    reporter = reporter or ProgressReporter()
    total = len(files)
    logger.info(f"Searching {total} files")

    first_seen: Dict[str, str] = {}
    matches: List[DuplicateMatch] = []

    for index, path in enumerate(files):
        try:
            digest = calculate_entry_digest(path, fs=fs, algorithm=algorithm)
        except ReadError as e:
            logger.info(f"Ignoring file \"{path}\": {e.reason}")
        else:
            if digest in first_seen:
                first = first_seen[digest]
                logger.info(f"Found duplicate: {path} (First occurrence: {first})")
                matches.append(DuplicateMatch(path=path, first_occurrence=first, digest=digest))
            else:
                first_seen[digest] = path
        reporter.update(index, total)

    return matches


def find_duplicates(
    files: List[str],
    fs: Optional[FileSystemProvider] = None,
    algorithm: str = DEFAULT_ALGORITHM,
    reporter: Optional[ProgressReporter] = None,
) -> List[str]:
    return [m.path for m in find_duplicate_matches(files, fs=fs, algorithm=algorithm, reporter=reporter)]
