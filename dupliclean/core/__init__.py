# dupliclean/core/__init__.py
from .errors import DupliCleanError, TraversalError, ReadError, DeletionError
from .models import (
    EntryType, UnreadablePolicy, SymlinkPolicy, ScanResult, DuplicateMatch,
    DeletionResult, RemovalReport, PruneReport, CleanupOptions,
)
from .filesystem import FileSystemProvider, LocalFileSystem, normalize_path
from .hashing import calculate_digest, calculate_file_digest, calculate_entry_digest
from .scanner import scan_directory
from .progress import ProgressReporter, estimate_seconds_remaining
from .duplicate_detector import find_duplicates, find_duplicate_matches
from .remover import delete_files, remove_duplicates
from .pruner import prune_empty_directories
