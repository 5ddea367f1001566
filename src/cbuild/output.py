"""
Centralized logging and output module for cbuild.

All user-facing output goes through this module. Every line is prefixed with
the elapsed time since program launch in MM:SS.cc format, followed by the
severity marker for warnings and errors.

Severity levels, lowest first:
    VERBOSE  - printed only when verbose mode is enabled
    INFO     - normal progress messages
    WARNING  - something looks off but the build continues
    ERROR    - a step failed; the build continues or stops gracefully
    FATAL    - the build cannot start; terminates the process

Example output:
    00:00.01 Searching for source files in src
    00:00.01 Found 2 source files
    00:00.02 Compiling src/a.c to obj/a.o
    00:00.31 ERROR: Error compiling src/bad.c
    00:00.44 ERROR: Only 1 out of 2 files compiled

Usage:
    from cbuild.output import log_info, log_error, log_fatal

    log_info("Linking files into bin/program")
    log_error("Error linking program")
    log_fatal("Source code directory src does not exist")  # raises FatalError
"""

import sys
import time
from typing import NoReturn, Optional, TextIO

# Global state for the timer
_start_time: Optional[float] = None
_output_stream: TextIO = sys.stdout
_verbose: bool = False
_output_file: Optional[TextIO] = None


class FatalError(SystemExit):
    """Raised by log_fatal() to terminate the process.

    Subclasses SystemExit so an uncaught FATAL ends the program with exit
    status 1 and no traceback. Tests can catch it like any other exception.
    """

    def __init__(self, message: str):
        super().__init__(1)
        self.message = message

    def __str__(self) -> str:
        return self.message


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Initialize the program timer.

    Call this at program startup to set the reference time for all timestamps.
    If not called explicitly, it will be called automatically on first log.

    Args:
        output_stream: Optional output stream (defaults to sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    if output_stream is not None:
        _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """
    Set verbose mode for logging.

    Args:
        verbose: If True, VERBOSE messages are printed as well.
    """
    global _verbose
    _verbose = verbose


def is_verbose() -> bool:
    return _verbose


def set_output_file(output_file: Optional[TextIO]) -> None:
    """
    Set a file to receive all log output (in addition to the output stream).

    Args:
        output_file: File object to receive output, or None to disable file output
    """
    global _output_file
    _output_file = output_file


def get_output_stream() -> TextIO:
    """Return the stream log lines are written to."""
    return _output_stream


def get_elapsed() -> float:
    """
    Get elapsed time since timer initialization.

    Returns:
        Elapsed time in seconds
    """
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    """
    Format the current elapsed time as MM:SS.cc.

    Returns:
        Formatted timestamp string
    """
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str) -> None:
    """Write a timestamped line to the output stream and the mirror file."""
    line = f"{format_timestamp()} {message}\n"
    _output_stream.write(line)
    _output_stream.flush()

    if _output_file is not None:
        _output_file.write(line)
        _output_file.flush()


def log_verbose(message: str) -> None:
    """
    Log a message that is only shown in verbose mode.

    Args:
        message: Message to log
    """
    if not _verbose:
        return
    _print(message)


def log_info(message: str) -> None:
    """
    Log an informational message.

    Args:
        message: Message to log
    """
    _print(message)


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """
    Log a detail message (indented).

    Args:
        message: Detail message
        indent: Number of spaces to indent (default 6)
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_warning(message: str) -> None:
    """
    Log a warning message.

    Args:
        message: Warning message
    """
    _print(f"WARNING: {message}")


def log_error(message: str) -> None:
    """
    Log an error message.

    Args:
        message: Error message
    """
    _print(f"ERROR: {message}")


def log_fatal(message: str) -> NoReturn:
    """
    Log a fatal message and terminate.

    Args:
        message: Fatal error message

    Raises:
        FatalError: Always. Ends the process with exit status 1 unless caught.
    """
    _print(f"FATAL: {message}")
    raise FatalError(message)
