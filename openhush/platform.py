"""Platform abstraction: shared error type, event enums and display detection."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from enum import Enum


class PlatformErrorKind(Enum):
    """Category of a platform failure; the value is the message prefix."""

    HOTKEY = "Hotkey error"
    PASTE = "Paste error"
    CLIPBOARD = "Clipboard error"
    NOTIFICATION = "Notification error"
    AUDIO = "Audio error"
    TRAY = "Tray error"
    NOT_SUPPORTED = "Platform not supported"


class PlatformError(Exception):
    """Raised when a platform-specific operation fails."""

    def __init__(self, kind: PlatformErrorKind, message: str) -> None:
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"PlatformError({self.kind.name}, {self.message!r})"


class HotkeyEvent(Enum):
    """Hotkey state transitions."""

    PRESSED = "Pressed"
    RELEASED = "Released"


class TrayStatus(Enum):
    """State shown by a system tray icon."""

    IDLE = "Idle"
    RECORDING = "Recording"
    PROCESSING = "Processing"
    ERROR = "Error"


class TrayMenuEvent(Enum):
    """Events coming from the tray menu."""

    SHOW_PREFERENCES = "ShowPreferences"
    QUIT = "Quit"


class DisplayServer(Enum):
    """The display environment the program runs in."""

    X11 = "X11"
    WAYLAND = "Wayland"
    WINDOWS = "Windows"
    MACOS = "MacOS"
    TTY = "Tty"
    UNKNOWN = "Unknown"

    @classmethod
    def detect(cls, environ: Mapping[str, str] | None = None) -> DisplayServer:
        """Detect the current display server from the OS and environment."""
        env = os.environ if environ is None else environ
        platform = sys.platform
        if platform.startswith("linux"):
            if "WAYLAND_DISPLAY" in env:
                return cls.WAYLAND
            if "DISPLAY" in env:
                return cls.X11
            if "TERM" in env:
                return cls.TTY
            return cls.UNKNOWN
        if platform == "darwin":
            return cls.MACOS
        if platform in ("win32", "cygwin"):
            return cls.WINDOWS
        return cls.UNKNOWN