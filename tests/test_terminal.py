"""Tests for non-blocking keyboard input."""

import os

import pytest

from org_stopwatch.cli import terminal
from org_stopwatch.cli.terminal import KeyboardInput


class PipeStream:
    """Read end of an OS pipe, optionally pretending to be a TTY."""

    def __init__(self, fd: int, tty: bool = False):
        self.fd = fd
        self.tty = tty

    def fileno(self) -> int:
        return self.fd

    def isatty(self) -> bool:
        return self.tty


@pytest.fixture
def pipe():
    """Create a pipe and close whatever ends the test leaves open."""
    read_fd, write_fd = os.pipe()
    fds = {"read": read_fd, "write": write_fd}
    yield fds
    for fd in fds.values():
        if fd is not None:
            os.close(fd)


@pytest.fixture
def fake_termios(monkeypatch):
    """Record terminal mode changes instead of touching a real TTY."""
    calls = []
    monkeypatch.setattr(
        terminal.termios, "tcgetattr", lambda fd: calls.append(("get", fd)) or ["saved"]
    )
    monkeypatch.setattr(
        terminal.termios,
        "tcsetattr",
        lambda fd, when, attrs: calls.append(("set", fd, attrs)),
    )
    monkeypatch.setattr(
        terminal.tty, "setcbreak", lambda fd: calls.append(("cbreak", fd))
    )
    return calls


def test_poll_returns_none_when_idle(pipe):
    keys = KeyboardInput(PipeStream(pipe["read"]))
    assert keys.poll() is None


def test_poll_returns_one_key_at_a_time(pipe):
    keys = KeyboardInput(PipeStream(pipe["read"]))
    os.write(pipe["write"], b"sg")

    assert keys.poll() == "s"
    assert keys.poll() == "g"
    assert keys.poll() is None


def test_poll_returns_none_at_eof(pipe):
    keys = KeyboardInput(PipeStream(pipe["read"]))
    os.close(pipe["write"])
    pipe["write"] = None

    assert keys.poll() is None


def test_non_tty_stream_is_left_alone(pipe, fake_termios):
    with KeyboardInput(PipeStream(pipe["read"])) as keys:
        assert not keys.enabled
    assert fake_termios == []


def test_tty_mode_is_restored_on_exit(pipe, fake_termios):
    fd = pipe["read"]
    with KeyboardInput(PipeStream(fd, tty=True)) as keys:
        assert keys.enabled
    assert not keys.enabled
    assert fake_termios == [("get", fd), ("cbreak", fd), ("set", fd, ["saved"])]


def test_tty_mode_is_restored_after_error(pipe, fake_termios):
    fd = pipe["read"]
    with pytest.raises(RuntimeError):
        with KeyboardInput(PipeStream(fd, tty=True)):
            raise RuntimeError("loop died")
    assert fake_termios[-1] == ("set", fd, ["saved"])


def test_prompt_strips_answer(pipe, monkeypatch):
    labels = []

    def fake_prompt(label, **kwargs):
        labels.append(label)
        return "  Draft intro  "

    monkeypatch.setattr(terminal.click, "prompt", fake_prompt)
    keys = KeyboardInput(PipeStream(pipe["read"]))

    assert keys.prompt("Enter subgoal name") == "Draft intro"
    assert labels == ["Enter subgoal name"]


def test_prompt_reads_in_cooked_mode(pipe, fake_termios, monkeypatch):
    fd = pipe["read"]
    modes = []
    keys = KeyboardInput(PipeStream(fd, tty=True))

    def fake_prompt(label, **kwargs):
        modes.append(keys.enabled)
        return "Goal"

    monkeypatch.setattr(terminal.click, "prompt", fake_prompt)
    with keys:
        assert keys.prompt("Enter main goal") == "Goal"
        assert keys.enabled

    assert modes == [False]
    assert fake_termios.count(("cbreak", fd)) == 2
