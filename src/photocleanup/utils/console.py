"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/console.py
User-facing output honoring --quiet and --verbose.
"""
import sys
from typing import Optional, TextIO


class Console:
    """
    Print wrappers shared by the CLI and the services.

    print()   : shown unless quiet
    info()    : shown only when verbose and not quiet
    warning() : written to stderr unless quiet
    """

    def __init__(self, verbose: bool = False, quiet: bool = False,
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.verbose = verbose
        self.quiet = quiet
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def print(self, message: str = "", end: str = "\n") -> None:
        if not self.quiet:
            self.out.write(message + end)
            self.out.flush()

    def info(self, message: str = "", end: str = "\n") -> None:
        if self.verbose and not self.quiet:
            self.out.write(message + end)
            self.out.flush()

    def progress(self, message: str) -> None:
        """Rewrites the current line, e.g. 'Processed 10 of 20 files.'"""
        self.print(message, end="\r")

    def warning(self, message: str) -> None:
        if not self.quiet:
            print(f"⚠️  {message}", file=self.err)

    def error(self, message: str) -> None:
        print(f"❌ Error: {message}", file=self.err)
