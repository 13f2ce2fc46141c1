"""Crash reporting: write unhandled exceptions to stderr and a crash log."""

from __future__ import annotations

import faulthandler
import sys
import threading
import traceback
from datetime import datetime
from pathlib import Path
from types import TracebackType

import platformdirs

_SEPARATOR = "\n\n========================================\n\n"
_RULE = "=" * 80


def crash_report_path() -> Path | None:
    """Location of the crash log in the user's data directory."""
    try:
        data_dir = platformdirs.user_data_path("openhush", appauthor=False)
    except Exception:
        return None
    return Path(data_dir) / "crash.log"


def _location(tb: TracebackType | None) -> str:
    frames = traceback.extract_tb(tb) if tb is not None else []
    if not frames:
        return "unknown"
    frame = frames[-1]
    colno = getattr(frame, "colno", None)
    if colno is None:
        return f"{frame.filename}:{frame.lineno}"
    return f"{frame.filename}:{frame.lineno}:{colno + 1}"


def format_crash_report(
    exc_type: type[BaseException],
    exc: BaseException | None,
    tb: TracebackType | None,
    thread: threading.Thread | None = None,
) -> str:
    """Build the crash report text for an unhandled exception."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    thread = thread if thread is not None else threading.current_thread()
    thread_name = thread.name or "<unnamed>"
    text = str(exc) if exc is not None else ""
    message = f"{exc_type.__name__}: {text}" if text else exc_type.__name__
    backtrace = "".join(traceback.format_exception(exc_type, exc, tb)).rstrip("\n")

    return (
        f"\n{_RULE}\n"
        "OPENHUSH CRASH REPORT\n"
        f"{_RULE}\n"
        f"Time:     {timestamp}\n"
        f"Thread:   {thread_name} ({thread.ident})\n"
        f"Location: {_location(tb)}\n"
        f"Message:  {message}\n"
        "\n"
        "Backtrace:\n"
        f"{backtrace}\n"
        f"{_RULE}\n"
        "\n"
        "If you're seeing this, OpenHush has crashed unexpectedly.\n"
        "Please report this issue to the project's issue tracker.\n"
        "\n"
        "Include this crash report and any steps to reproduce the issue.\n"
    )


def _report(
    exc_type: type[BaseException],
    exc: BaseException | None,
    tb: TracebackType | None,
    thread: threading.Thread | None,
) -> None:
    report = format_crash_report(exc_type, exc, tb, thread)
    print(report, file=sys.stderr)

    path = crash_report_path()
    if path is None:
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as log_file:
            log_file.write(_SEPARATOR)
            log_file.write(report)
    except OSError:
        return
    print(f"\nCrash report appended to: {path}", file=sys.stderr)


def handle_exception(
    exc_type: type[BaseException],
    exc: BaseException | None,
    tb: TracebackType | None,
) -> None:
    """Report an unhandled exception on the current thread."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    _report(exc_type, exc, tb, threading.current_thread())


def _thread_hook(args: threading.ExceptHookArgs) -> None:
    if issubclass(args.exc_type, SystemExit):
        return
    _report(args.exc_type, args.exc_value, args.exc_traceback, args.thread)


def install() -> None:
    """Route unhandled exceptions, in any thread, through the crash reporter."""
    try:
        faulthandler.enable()
    except (AttributeError, OSError, ValueError):
        pass
    sys.excepthook = handle_exception
    threading.excepthook = _thread_hook