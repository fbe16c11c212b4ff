"""
Unified logging for the registry builder.

Provides dual output to console and build.log file.
Tracks warnings and errors for end-of-build summary.

Usage:
    from registry_builder.utils import log, logWarning, logError, logDebug, init_logging, print_summary

    # At start of the build:
    init_logging(Path("build.log"))

    # Throughout code:
    log("Compiling registries...")            # Info - section headers, major points
    logWarning("tag root not found")          # May cause issues with output
    logError("generator exited with 1")       # Fundamentally breaks output
    logDebug("skipped tags/foo.json")         # Written to build.log only

    # At end:
    print_summary({"Registries": 42})  # Shows stats plus warning/error counts
"""

import sys
import atexit
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Optional, Tuple

DEFAULT_LOG_PATH = Path("build.log")


# ANSI color codes
class Colors:
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


# Module state
_log_file = None
_log_path: Optional[Path] = None
_initialized = False
_verbose = False
_atexit_registered = False
_warnings: List[str] = []
_errors: List[str] = []


def init_logging(log_path: Optional[Path] = None, verbose: bool = False):
    """
    Initialize logging to both console and file.

    Args:
        log_path: Path to log file. Defaults to ./build.log
        verbose: Echo debug messages to the console as well
    """
    global _log_file, _log_path, _initialized, _verbose, _atexit_registered, _warnings, _errors

    if _initialized:
        return

    _warnings = []
    _errors = []
    _verbose = verbose

    _log_path = Path(log_path) if log_path is not None else DEFAULT_LOG_PATH
    _log_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        _log_file = open(_log_path, 'w', encoding='utf-8')
    except OSError as e:
        print(f"Warning: Could not open log file {_log_path}: {e}", file=sys.stderr)
        _log_file = None

    _initialized = True

    if _log_file is not None:
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        _log_file.write(f"Registry build started: {timestamp}\n")
        _log_file.write("=" * 70 + "\n\n")
        _log_file.flush()

    if not _atexit_registered:
        atexit.register(close_logging)
        _atexit_registered = True


def close_logging():
    """Close the log file and reset module state."""
    global _log_file, _initialized

    if _log_file is not None:
        try:
            timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
            _log_file.write(f"\n{'=' * 70}\n")
            _log_file.write(f"Registry build finished: {timestamp}\n")
            _log_file.close()
        except OSError:
            pass
        _log_file = None

    _initialized = False


def get_log_path() -> Optional[Path]:
    """Path of the active build log, if any."""
    return _log_path


def print_summary(stats: Optional[Dict[str, int]] = None):
    """
    Print a summary of the build: optional statistics, then warnings and errors.
    Uses colors for terminal output.

    Args:
        stats: Ordered label -> count pairs to show before the diagnostics
    """
    log("\n" + "=" * 70)
    log("BUILD SUMMARY")
    log("=" * 70)

    for label, value in (stats or {}).items():
        log(f"  {label}: {value:,}")

    if _errors:
        print(f"\n{Colors.RED}{Colors.BOLD}Errors ({len(_errors)}):{Colors.RESET}")
        for err in _errors:
            print(f"  {Colors.RED}- {err}{Colors.RESET}")
        _write_to_file(f"\nErrors ({len(_errors)}):")
        for err in _errors:
            _write_to_file(f"  - {err}")

    if _warnings:
        print(f"\n{Colors.YELLOW}{Colors.BOLD}Warnings ({len(_warnings)}):{Colors.RESET}")
        for warn in _warnings:
            print(f"  {Colors.YELLOW}- {warn}{Colors.RESET}")
        _write_to_file(f"\nWarnings ({len(_warnings)}):")
        for warn in _warnings:
            _write_to_file(f"  - {warn}")

    print()
    if _errors:
        print(f"{Colors.RED}{Colors.BOLD}{len(_errors)} Error(s){Colors.RESET}", end="")
    else:
        print(f"{Colors.GREEN}0 Errors{Colors.RESET}", end="")

    print(" | ", end="")

    if _warnings:
        print(f"{Colors.YELLOW}{Colors.BOLD}{len(_warnings)} Warning(s){Colors.RESET}")
    else:
        print(f"{Colors.GREEN}0 Warnings{Colors.RESET}")

    _write_to_file(f"\n{len(_errors)} Error(s) | {len(_warnings)} Warning(s)")


def get_counts() -> Tuple[int, int]:
    """Return (error_count, warning_count)."""
    return len(_errors), len(_warnings)


def _write_to_file(msg: str, end: str = "\n"):
    if _log_file is not None:
        try:
            _log_file.write(msg + end)
            _log_file.flush()
        except OSError:
            pass


def log(msg: str = "", end: str = "\n"):
    """
    Log an info message to both console and file.
    Use for section headers and major points in the build process.
    """
    if not _initialized:
        init_logging()

    print(msg, end=end)
    _write_to_file(msg, end)


def logWarning(msg: str, end: str = "\n"):
    """
    Log a warning message. Warnings indicate something may cause issues with output.
    Displayed in yellow. Tracked for end-of-build summary.
    """
    if not _initialized:
        init_logging()

    formatted = f"Warning: {msg}"
    print(f"{Colors.YELLOW}{formatted}{Colors.RESET}", end=end)
    _write_to_file(formatted, end)
    _warnings.append(msg)


def logError(msg: str, end: str = "\n"):
    """
    Log an error message. Errors abort the build.
    Displayed in red on stderr. Tracked for end-of-build summary.
    """
    if not _initialized:
        init_logging()

    formatted = f"ERROR: {msg}"
    print(f"{Colors.RED}{formatted}{Colors.RESET}", end=end, file=sys.stderr)
    _write_to_file(formatted, end)
    _errors.append(msg)


def logDebug(msg: str, end: str = "\n"):
    """
    Log a debug message. Written to the log file; shown on the console
    only in verbose mode.
    """
    if not _initialized:
        init_logging()

    formatted = f"[DEBUG] {msg}"
    if _verbose:
        print(formatted, end=end)
    _write_to_file(formatted, end)
