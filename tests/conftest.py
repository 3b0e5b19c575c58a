"""Shared fixtures for Org Stopwatch tests."""

from datetime import datetime, timedelta

import pytest

from org_stopwatch.core.split_tree import SplitTree


class FakeClock:
    """Clock that only moves when a test advances it."""

    def __init__(self, wall_start: datetime = datetime(2024, 3, 1, 9, 30, 0)):
        self.t = 0.0
        self.wall_start = wall_start

    def now(self) -> float:
        return self.t

    def wall_now(self) -> datetime:
        return self.wall_start + timedelta(seconds=self.t)

    def advance(self, seconds: float) -> None:
        self.t += seconds


class RecordingSurface:
    """RenderSurface that keeps a character grid and a call log."""

    def __init__(self):
        self.rows = {}
        self.x = 0
        self.y = 0
        self.calls = []

    def move_to(self, x: int, y: int) -> None:
        self.x, self.y = x, y
        self.calls.append(("move_to", x, y))

    def write(self, text: str) -> None:
        row = self.rows.get(self.y, "")
        row = row.ljust(self.x)
        self.rows[self.y] = row[: self.x] + text + row[self.x + len(text) :]
        self.x += len(text)
        self.calls.append(("write", text))

    def clear(self) -> None:
        self.rows = {}
        self.x = self.y = 0
        self.calls.append(("clear",))

    def line(self, y: int) -> str:
        return self.rows.get(y, "").rstrip()


class ScriptedKeys:
    """Key source that replays keys and canned prompt answers."""

    def __init__(self, keys=(), answers=()):
        self.keys = list(keys)
        self.answers = list(answers)
        self.prompts = []

    def poll(self):
        if self.keys:
            return self.keys.pop(0)
        return None

    def prompt(self, label: str) -> str:
        self.prompts.append(label)
        return self.answers.pop(0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tree(clock):
    return SplitTree(clock, max_splits=5)


@pytest.fixture
def surface():
    return RecordingSurface()
