#!/usr/bin/env python3
"""
photo-cleanup CLI: removes duplicate files and organizes photos by date.

Commands:
  dedupe   : delete byte-identical duplicates, keeping one file per match group
  organize : move photos into a date-structured destination tree
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import os
import signal
import sys
import time
from pathlib import Path
from typing import List, NoReturn, Optional
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import PIL
except ImportError:
    _MISSING_DEPS.append("Pillow")

try:
    import psutil
except ImportError:
    _MISSING_DEPS.append("psutil")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from photocleanup.core.errors import OperationCancelled
from photocleanup.core.models import DedupeParams, OrganizeParams, ScanParams
from photocleanup.commands import DedupeCommand, OrganizeCommand
from photocleanup.utils.console import Console
from photocleanup.utils.convert_utils import ConvertUtils
from photocleanup.aliases import CHUNK_SIZE_HELP_TEXT, DIR_FORMAT_HELP_TEXT, EPILOG_TEXT


def _size(value: str) -> int:
    """argparse type for human readable sizes."""
    try:
        return ConvertUtils.parse_size(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _chunk_size(value: str) -> int:
    """argparse type for --chunk-size; zero is rejected."""
    try:
        return ConvertUtils.parse_size(value, minimum=1)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self, console: Optional[Console] = None):
        self.start_time: float = time.time()
        self.console = console or Console()
        self._stop_requested = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Display more information while processing"
        )
        common.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Display no information while processing"
        )
        common.add_argument(
            "--dry-run", "-n",
            action="store_true",
            help="Do not make any changes to files, only show what would happen"
        )
        common.add_argument(
            "--ignore-permission-denied",
            action="store_true",
            help="Do not abort when encountering permission denied folders or files"
        )
        common.add_argument(
            "--min-size",
            default="0",
            type=_size,
            metavar='',
            help="Minimum file size to consider for processing (e.g., 500KB). Default: 0"
        )
        common.add_argument(
            "--hidden-files",
            action="store_true",
            help="Process hidden files. Default is only normal files"
        )

        parser = argparse.ArgumentParser(
            prog="photo-cleanup",
            description="photo-cleanup: duplicate remover and photo organizer",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        dedupe = subparsers.add_parser(
            "dedupe",
            parents=[common],
            formatter_class=argparse.RawTextHelpFormatter,
            help="Find and delete duplicate files"
        )
        dedupe.add_argument("paths", nargs="+", help="Files or directories to deduplicate")
        dedupe.add_argument(
            "--chunk-size",
            default="64K",
            type=_chunk_size,
            metavar='',
            help=CHUNK_SIZE_HELP_TEXT
        )
        dedupe.add_argument(
            "--empty-files-are-identical",
            action="store_true",
            help="Treat empty files as identical duplicates"
        )
        dedupe.add_argument(
            "--trash",
            action="store_true",
            help="Move duplicates to the system trash instead of deleting them"
        )
        dedupe.add_argument(
            "--images-only",
            action="store_true",
            help="Only consider image files (jpg). Default is all files"
        )

        organize = subparsers.add_parser(
            "organize",
            parents=[common],
            formatter_class=argparse.RawTextHelpFormatter,
            help="Move photos from source into proper destination subdirectory"
        )
        organize.add_argument("src", help="Source directory")
        organize.add_argument("dest", help="Destination directory")
        organize.add_argument(
            "--dir-fmt",
            default="yyyy/mm",
            type=str,
            dest="dir_format",
            help=DIR_FORMAT_HELP_TEXT
        )
        organize.add_argument(
            "--all-files",
            action="store_true",
            help="Process all files. Default is only images (jpg)"
        )
        organize.add_argument(
            "--use-exif-time",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Use time from exif meta data"
        )
        organize.add_argument(
            "--use-file-time",
            action="store_true",
            help="Use file modification time when no meta data"
        )
        organize.add_argument(
            "--use-filename-encoded-time",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Attempt to parse time from filename"
        )
        organize.add_argument(
            "--rename-duplicates",
            action="store_true",
            help="Append -1, -2, ... instead of skipping when the destination exists"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.verbose and args.quiet:
            self.error_exit("--verbose and --quiet cannot be used together")

        if args.command == "dedupe":
            for path in args.paths:
                if not os.path.lexists(path):
                    self.error_exit(f"Path not found: {path}")
        else:
            src = Path(args.src)
            if not src.exists():
                self.error_exit(f"Directory not found: {args.src}")
            if not src.is_dir():
                self.error_exit(f"Path is not a directory: {args.src}")
            if src.resolve() == Path(args.dest).resolve():
                self.error_exit("Source and destination must differ")

    def create_scan_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        if args.command == "dedupe":
            all_files = not args.images_only
        else:
            all_files = args.all_files
        return ScanParams(
            min_size=args.min_size,
            all_files=all_files,
            hidden_files=args.hidden_files,
            ignore_permission_denied=args.ignore_permission_denied,
        )

    def create_dedupe_params(self, args: argparse.Namespace) -> DedupeParams:
        """Create DedupeParams from CLI arguments."""
        try:
            return DedupeParams(
                chunk_size=args.chunk_size,
                empty_files_are_identical=args.empty_files_are_identical,
                dry_run=args.dry_run,
                ignore_permission_denied=args.ignore_permission_denied,
                use_trash=args.trash,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def create_organize_params(self, args: argparse.Namespace) -> OrganizeParams:
        """Create OrganizeParams from CLI arguments."""
        try:
            return OrganizeParams(
                dir_format=args.dir_format,
                use_exif_time=args.use_exif_time,
                use_file_time=args.use_file_time,
                use_filename_encoded_time=args.use_filename_encoded_time,
                dry_run=args.dry_run,
                rename_duplicates=args.rename_duplicates,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows scanning progress in console."""
        if stage != "Scanning" or self.console.quiet:
            return

        if total:
            sys.stderr.write(f"\rFound {current} files.\n")
        else:
            sys.stderr.write(f"\rFound {current} files.")
        sys.stderr.flush()

    def stopped_flag(self) -> bool:
        """True once Ctrl+C was pressed; polled between scan entries and chunks."""
        return self._stop_requested

    def handle_sigint(self, signum, frame) -> None:
        """First Ctrl+C stops at the next check, a second one interrupts immediately."""
        if self._stop_requested:
            raise KeyboardInterrupt
        self._stop_requested = True
        self.console.warning("Stopping after the current chunk (Ctrl+C again to abort)")

    def run_dedupe(self, args: argparse.Namespace) -> None:
        params = self.create_dedupe_params(args)
        scan_params = self.create_scan_params(args)

        if params.dry_run:
            self.console.print("Dry run: no files will be deleted.")

        command = DedupeCommand(console=self.console)
        stats = command.execute(
            args.paths,
            params,
            scan_params=scan_params,
            progress_callback=self.progress_callback,
            stopped_flag=self.stopped_flag
        )

        if self.console.verbose:
            self.console.info(stats.print_summary())

    def run_organize(self, args: argparse.Namespace) -> None:
        params = self.create_organize_params(args)
        scan_params = self.create_scan_params(args)

        command = OrganizeCommand(console=self.console)
        command.execute(
            args.src,
            args.dest,
            params,
            scan_params=scan_params,
            progress_callback=self.progress_callback,
            stopped_flag=self.stopped_flag
        )

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        self.console.warning(message)

    def error_exit(self, message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        self.console.error(message)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.console.verbose = args.verbose
        self.console.quiet = args.quiet
        if args.verbose:
            logging.getLogger("photocleanup").setLevel(logging.INFO)

        self.validate_args(args)

        previous_handler = signal.signal(signal.SIGINT, self.handle_sigint)
        try:
            if args.command == "dedupe":
                self.run_dedupe(args)
            else:
                self.run_organize(args)
        finally:
            signal.signal(signal.SIGINT, previous_handler)

        elapsed = time.time() - self.start_time
        self.console.info(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except OperationCancelled as e:
        print(f"\n⚠️  {e}", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
