# dupliclean/core/models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

DEFAULT_ALGORITHM = "sha256"
SUPPORTED_ALGORITHMS = ("md5", "sha1", "sha256", "sha512", "blake2b", "blake2s")
DEFAULT_PROGRESS_INTERVAL = 5.0  # seconds


class EntryType(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class UnreadablePolicy(Enum):
    """What the scanner does with a directory it cannot list."""
    ABORT = "abort"
    SKIP = "skip"


class SymlinkPolicy(Enum):
    """How the scanner treats symbolic links. Links are never descended into."""
    SKIP = "skip"
    FILE = "file"
    ERROR = "error"


@dataclass
class ScanResult:
    root: str
    dirs: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # unreadable entries left out


@dataclass(frozen=True)
class DuplicateMatch:
    path: str
    first_occurrence: str
    digest: str


@dataclass
class DeletionResult:
    path: str
    success: bool
    error: Optional[str] = None
    size: int = 0  # in bytes, 0 when unknown


@dataclass
class RemovalReport:
    results: List[DeletionResult] = field(default_factory=list)

    @property
    def removed(self) -> List[str]:
        return [r.path for r in self.results if r.success]

    @property
    def failed(self) -> List[DeletionResult]:
        return [r for r in self.results if not r.success]

    @property
    def bytes_freed(self) -> int:
        return sum(r.size for r in self.results if r.success)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class PruneReport:
    root: str
    removed: List[str] = field(default_factory=list)
    failed: List[DeletionResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class CleanupOptions:
    root_dir: str
    dry_run: bool = False
    prune: bool = True
    prune_only: bool = False
    algorithm: str = DEFAULT_ALGORITHM
    on_unreadable: UnreadablePolicy = UnreadablePolicy.ABORT
    symlinks: SymlinkPolicy = SymlinkPolicy.SKIP
    progress_interval: float = DEFAULT_PROGRESS_INTERVAL
    progress_bar: bool = False
