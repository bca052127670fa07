import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from tqdm.contrib.logging import logging_redirect_tqdm

from dupliclean.core import (
    TraversalError,
    ProgressReporter,
    scan_directory,
    find_duplicate_matches,
    delete_files,
    prune_empty_directories,
)
from dupliclean.core.models import (
    CleanupOptions, UnreadablePolicy, SymlinkPolicy,
    DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS, DEFAULT_PROGRESS_INTERVAL,
)

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="DupliClean: delete duplicate files (keeping the first copy found) and prune empty directories."
    )
    parser.add_argument("scan_directory", metavar="DIRECTORY", type=str, help="The root directory to clean.")
    parser.add_argument("--dry-run", action="store_true", help="Report duplicates without deleting anything.")
    parser.add_argument("--no-prune", action="store_true", help="Do not remove directories left empty.")
    parser.add_argument("--prune-only", action="store_true", help="Only remove empty directories, skip duplicate detection.")
    parser.add_argument("--algorithm", choices=SUPPORTED_ALGORITHMS, default=DEFAULT_ALGORITHM,
                        help=f"Content digest algorithm. Default: {DEFAULT_ALGORITHM}")
    parser.add_argument("--on-unreadable", choices=[p.value for p in UnreadablePolicy], default=UnreadablePolicy.ABORT.value,
                        help="What to do with a directory that cannot be listed: abort the run or skip its subtree. Default: abort")
    parser.add_argument("--symlinks", choices=[p.value for p in SymlinkPolicy], default=SymlinkPolicy.SKIP.value,
                        help="Ignore symbolic links, treat them as plain files, or stop on the first one. Default: skip")
    parser.add_argument("--progress-interval", type=float, default=DEFAULT_PROGRESS_INTERVAL, metavar="SECONDS",
                        help=f"Seconds between progress lines while hashing. Default: {DEFAULT_PROGRESS_INTERVAL:g}")
    parser.add_argument("--progress-bar", action="store_true", help="Show progress bars while deleting and pruning.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors.")
    args = parser.parse_args(argv)

    if args.prune_only and args.no_prune:
        parser.error("--prune-only cannot be combined with --no-prune")
    if args.verbose and args.quiet:
        parser.error("--verbose cannot be combined with --quiet")
    if args.progress_interval <= 0:
        parser.error("--progress-interval must be positive")
    return args


def build_options(args: argparse.Namespace) -> CleanupOptions:
    return CleanupOptions(
        root_dir=args.scan_directory,
        dry_run=args.dry_run,
        prune=not args.no_prune,
        prune_only=args.prune_only,
        algorithm=args.algorithm,
        on_unreadable=UnreadablePolicy(args.on_unreadable),
        symlinks=SymlinkPolicy(args.symlinks),
        progress_interval=args.progress_interval,
        progress_bar=args.progress_bar,
    )


def configure_console() -> None:
    # Undecodable file names arrive with surrogate escapes; print them escaped
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(errors="backslashreplace")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def run(options: CleanupOptions) -> int:
    """Runs the cleanup described by `options` and returns the exit code."""
    root = options.root_dir
    failures = 0

    if not options.prune_only:
        print("Phase: Scanning directory tree...")
        scan = scan_directory(root, on_unreadable=options.on_unreadable, symlinks=options.symlinks)
        print(f"Found {len(scan.files)} files in {len(scan.dirs)} directories.")
        if scan.skipped:
            print(f"Skipped {len(scan.skipped)} unreadable entries.")

        print("Phase: Finding duplicates...")
        reporter = ProgressReporter(interval=options.progress_interval)
        matches = find_duplicate_matches(scan.files, algorithm=options.algorithm, reporter=reporter)
        if not matches:
            print("No duplicate files found.")
        else:
            print(f"Found {len(matches)} duplicate files.")

        if options.dry_run:
            for match in matches:
                print(f"Would remove: {match.path} (duplicate of {match.first_occurrence})")
        elif matches:
            print("Phase: Removing duplicates...")
            report = delete_files([m.path for m in matches], show_progress=options.progress_bar)
            freed_mb = report.bytes_freed / (1024 * 1024)
            print(f"Removed {len(report.removed)} files ({freed_mb:.2f} MB freed).")
            for result in report.failed:
                print(f"Failed to remove {result.path}: {result.error}", file=sys.stderr)
            failures += len(report.failed)

    if options.dry_run:
        if options.prune or options.prune_only:
            print("Dry run: empty directories are not pruned.")
    elif options.prune or options.prune_only:
        print("Phase: Pruning empty directories...")
        prune_report = prune_empty_directories(
            root, show_progress=options.progress_bar, on_unreadable=options.on_unreadable
        )
        print(f"Removed {len(prune_report.removed)} empty directories.")
        for result in prune_report.failed:
            print(f"Failed to remove directory {result.path}: {result.error}", file=sys.stderr)
        failures += len(prune_report.failed)

    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_console()
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    options = build_options(args)

    print(f"DupliClean started at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    exit_code = 0
    try:
        with logging_redirect_tqdm():
            exit_code = run(options)
    except TraversalError as e:
        print(f"Error: cannot scan '{e.path}': {e.reason}", file=sys.stderr)
        exit_code = 1
    except KeyboardInterrupt:
        print("\nInterrupted by user. Files already removed stay removed.")
        exit_code = 130
    finally:
        print(f"DupliClean finished at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
