"""Interactive stopwatch loop."""

import logging
import time
from enum import Enum
from typing import Callable, Optional, Protocol

from org_stopwatch.core.log_exporter import LogExporter, LogSinkError
from org_stopwatch.core.renderer import Renderer
from org_stopwatch.core.split_tree import SplitTree

logger = logging.getLogger(__name__)


class Command(str, Enum):
    """Key bound to each stopwatch command."""

    START_STOP = "s"
    RESET = "r"
    OPEN_SUBGOAL = "g"
    OPEN_NESTED = "n"
    CLOSE_SUBGOAL = "h"
    ASCEND = "u"
    REDRAW = "d"
    SAVE_LOG = "t"
    QUIT = "q"


class KeySource(Protocol):
    def poll(self) -> Optional[str]: ...

    def prompt(self, label: str) -> str: ...


class StopwatchApp:
    """Binds keys to SplitTree operations and drives the render loop."""

    def __init__(
        self,
        tree: SplitTree,
        renderer: Renderer,
        keys: KeySource,
        exporter: LogExporter,
        tick_interval: float = 0.05,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.tree = tree
        self.renderer = renderer
        self.keys = keys
        self.exporter = exporter
        self.tick_interval = tick_interval
        self._sleep = sleep

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the user quits."""
        try:
            command = Command(key)
        except ValueError:
            return True

        logger.debug("Command %s", command.name)
        tree = self.tree

        if command is Command.QUIT:
            return False
        if command is Command.START_STOP:
            if tree.running:
                tree.stop_session()
            else:
                tree.start_session(self.keys.prompt("Enter main goal"))
                self.renderer.clear_message()
        elif command is Command.RESET:
            tree.reset_session()
            self.renderer.clear_message()
        elif command is Command.OPEN_SUBGOAL:
            if tree.can_open():
                tree.open_split(self.keys.prompt("Enter subgoal name"))
        elif command is Command.OPEN_NESTED:
            if tree.can_open(nested=True):
                name = self.keys.prompt("Enter nested subgoal name")
                tree.open_split(name, nested=True)
        elif command is Command.CLOSE_SUBGOAL:
            tree.close_active()
        elif command is Command.ASCEND:
            tree.ascend()
        elif command is Command.REDRAW:
            self.renderer.request_redraw()
        elif command is Command.SAVE_LOG:
            self.save_log()
        return True

    def save_log(self) -> None:
        """Export the stopped session, reporting sink failures on screen."""
        if self.tree.running or not self.tree.session.has_goal:
            return
        try:
            entries = self.exporter.export(self.tree)
        except LogSinkError as e:
            self.renderer.show_message(str(e))
            return
        noun = "entry" if len(entries) == 1 else "entries"
        self.renderer.show_message(
            f"Saved {len(entries)} {noun} to {self.exporter.sink.path}"
        )

    def tick(self) -> bool:
        """Run one loop iteration. Returns False when the user quits."""
        key = self.keys.poll()
        if key is not None and not self.handle_key(key):
            return False
        self.renderer.render()
        self._sleep(self.tick_interval)
        return True

    def run(self) -> None:
        self.renderer.request_redraw()
        self.renderer.render()
        while self.tick():
            pass
