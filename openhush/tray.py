"""System tray status, events and icon names."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from enum import Enum

ICON_IDLE = "audio-input-microphone"
ICON_RECORDING = "media-record"
ICON_PROCESSING = "view-refresh"
ICON_ERROR = "dialog-error"


class TrayError(Exception):
    """Raised when the system tray cannot be created or used."""


class TrayEvent(Enum):
    """Events from the system tray menu."""

    SHOW_PREFERENCES = "ShowPreferences"
    QUIT = "Quit"
    STATUS_CLICKED = "StatusClicked"


_STATUS_TEXT = {
    "Idle": "Status: Idle",
    "Recording": "Status: Recording...",
    "Processing": "Status: Processing...",
    "Error": "Status: Error",
}

_STATUS_ICON = {
    "Idle": ICON_IDLE,
    "Recording": ICON_RECORDING,
    "Processing": ICON_PROCESSING,
    "Error": ICON_ERROR,
}


class TrayStatus(Enum):
    """Status shown by the tray icon."""

    IDLE = "Idle"
    RECORDING = "Recording"
    PROCESSING = "Processing"
    ERROR = "Error"

    def as_str(self) -> str:
        """Human-readable status line for the tray menu."""
        return _STATUS_TEXT[self.value]

    def icon_name(self) -> str:
        """Freedesktop icon name for this status."""
        return _STATUS_ICON[self.value]


def is_tray_supported(environ: Mapping[str, str] | None = None) -> bool:
    """Whether a system tray is likely to be available."""
    if sys.platform.startswith("linux"):
        env = os.environ if environ is None else environ
        return "DBUS_SESSION_BUS_ADDRESS" in env
    return True


def create_icon() -> str:
    """Icon name for the idle tray icon."""
    return ICON_IDLE


def create_recording_icon() -> str:
    """Icon name for the recording indicator."""
    return ICON_RECORDING