#!/usr/bin/env python3

import subprocess

import pytest

from sepa_viewer import clipboard


class FakeRun:
    def __init__(self, returncode=0, stderr=b"", exc=None):
        self.returncode = returncode
        self.stderr = stderr
        self.exc = exc
        self.calls = []

    def __call__(self, command, **kwargs):
        self.calls.append((command, kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(
            command, self.returncode, stdout=b"", stderr=self.stderr
        )


@pytest.mark.parametrize(
    "platform, available, expected",
    [
        ("darwin", {"pbcopy"}, ("pbcopy",)),
        ("win32", {"clip"}, ("clip",)),
        ("linux", {"wl-copy", "xclip"}, ("wl-copy",)),
        ("linux", {"xclip", "xsel"}, ("xclip", "-selection", "clipboard")),
        ("linux", {"xsel"}, ("xsel", "--clipboard", "--input")),
        ("freebsd", {"xsel"}, ("xsel", "--clipboard", "--input")),
    ],
)
def test_detect_command(monkeypatch, platform, available, expected):
    monkeypatch.setattr(
        clipboard.shutil, "which", lambda name: f"/usr/bin/{name}" if name in available else None
    )
    assert clipboard.detect_command(platform) == expected


def test_detect_command_without_backend(monkeypatch):
    monkeypatch.setattr(clipboard.shutil, "which", lambda name: None)
    with pytest.raises(clipboard.ClipboardError, match="no clipboard utility found"):
        clipboard.detect_command("linux")


def test_write_pipes_value(monkeypatch):
    run = FakeRun()
    monkeypatch.setattr(clipboard.subprocess, "run", run)

    clipboard.write("DE89 3704 0044 0532 0130 00 – ü", command=["xclip", "-i"])

    command, kwargs = run.calls[0]
    assert command == ("xclip", "-i")
    assert kwargs["input"] == "DE89 3704 0044 0532 0130 00 – ü".encode("utf-8")


def test_write_uses_detected_command(monkeypatch):
    run = FakeRun()
    monkeypatch.setattr(clipboard.subprocess, "run", run)
    monkeypatch.setattr(clipboard, "detect_command", lambda: ("pbcopy",))

    clipboard.write("EUR")
    assert run.calls[0][0] == ("pbcopy",)


def test_write_nonzero_exit(monkeypatch):
    monkeypatch.setattr(
        clipboard.subprocess, "run", FakeRun(returncode=1, stderr=b"Error: Can't open display\n")
    )
    with pytest.raises(clipboard.ClipboardError) as excinfo:
        clipboard.write("EUR", command=["xclip"])
    assert str(excinfo.value) == "xclip exited with status 1: Error: Can't open display"


@pytest.mark.parametrize(
    "exc",
    [
        FileNotFoundError(2, "No such file or directory", "wl-copy"),
        subprocess.TimeoutExpired("wl-copy", 10),
    ],
)
def test_write_failure_is_chained(monkeypatch, exc):
    monkeypatch.setattr(clipboard.subprocess, "run", FakeRun(exc=exc))
    with pytest.raises(clipboard.ClipboardError) as excinfo:
        clipboard.write("EUR", command=["wl-copy"])
    assert excinfo.value.__cause__ is exc
