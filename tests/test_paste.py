import subprocess
import sys

import pytest

from openhush import paste
from openhush.paste import (
    PasteError,
    PasteInitError,
    PasteMethod,
    PasteMethodNotAvailable,
    PasteTypeError,
    detect_paste_method,
    paste_with_xdotool,
)


def test_detect_paste_method():
    assert detect_paste_method() is PasteMethod.TYPE


def test_paste_method_names():
    assert PasteMethod("CtrlV") is PasteMethod.CTRL_V
    assert PasteMethod("Xdotool") is PasteMethod.XDOTOOL
    assert PasteMethod.TYPE != PasteMethod.CTRL_V


def test_paste_error_display():
    err = PasteInitError("init error")
    assert "initialize" in str(err)
    assert "init error" in str(err)

    err = PasteTypeError("type error")
    assert "type text" in str(err)

    err = PasteMethodNotAvailable("xdotool")
    assert "not available" in str(err)


def test_paste_error_hierarchy_and_repr():
    err = PasteInitError("test")
    assert isinstance(err, PasteError)
    assert "PasteInitError" in repr(err)
    assert err.detail == "test"


def test_xdotool_not_available_non_linux(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    with pytest.raises(PasteMethodNotAvailable) as info:
        paste_with_xdotool("test")
    assert "Linux" in str(info.value)


def test_xdotool_missing(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr(paste.shutil, "which", lambda name: None)
    with pytest.raises(PasteMethodNotAvailable, match="not installed"):
        paste_with_xdotool("test")


def test_xdotool_success(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr(paste.shutil, "which", lambda name: "/usr/bin/xdotool")
    calls = []

    def fake_run(args, check):
        calls.append(args)
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.setattr(paste.subprocess, "run", fake_run)
    assert paste_with_xdotool("hello") is None
    assert calls == [["xdotool", "type", "--clearmodifiers", "--", "hello"]]


def test_xdotool_nonzero_exit(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr(paste.shutil, "which", lambda name: "/usr/bin/xdotool")
    monkeypatch.setattr(
        paste.subprocess,
        "run",
        lambda args, check: subprocess.CompletedProcess(args, 1),
    )
    with pytest.raises(PasteTypeError, match="non-zero"):
        paste_with_xdotool("hello")


def test_xdotool_launch_failure(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr(paste.shutil, "which", lambda name: "/usr/bin/xdotool")

    def failing_run(args, check):
        raise OSError("exec failed")

    monkeypatch.setattr(paste.subprocess, "run", failing_run)
    with pytest.raises(PasteTypeError, match="exec failed"):
        paste_with_xdotool("hello")