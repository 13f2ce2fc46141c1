"""Typing text at the cursor position."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from enum import Enum

log = logging.getLogger(__name__)


class PasteError(Exception):
    """Base class for paste failures."""

    prefix = "Paste failed"

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self.prefix}: {detail}")
        self.detail = detail


class PasteInitError(PasteError):
    """The input simulator could not be initialised."""

    prefix = "Failed to initialize input simulator"


class PasteTypeError(PasteError):
    """Typing the text failed."""

    prefix = "Failed to type text"


class PasteMethodNotAvailable(PasteError):
    """The requested paste method cannot be used here."""

    prefix = "Paste method not available"


class PasteMethod(Enum):
    """Ways of getting text to the cursor."""

    TYPE = "Type"
    CTRL_V = "CtrlV"
    XDOTOOL = "Xdotool"


def detect_paste_method() -> PasteMethod:
    """Pick the paste method for the current environment."""
    return PasteMethod.TYPE


def paste_with_xdotool(text: str) -> None:
    """Type ``text`` at the cursor using the xdotool command (Linux only)."""
    if not sys.platform.startswith("linux"):
        raise PasteMethodNotAvailable("xdotool is only available on Linux")

    if shutil.which("xdotool") is None:
        raise PasteMethodNotAvailable(
            "xdotool not installed. Install with: sudo apt install xdotool"
        )

    try:
        completed = subprocess.run(
            ["xdotool", "type", "--clearmodifiers", "--", text], check=False
        )
    except OSError as exc:
        raise PasteTypeError(str(exc)) from exc

    if completed.returncode != 0:
        raise PasteTypeError("xdotool returned non-zero")

    log.info("Text typed using xdotool (%d chars)", len(text.encode("utf-8")))