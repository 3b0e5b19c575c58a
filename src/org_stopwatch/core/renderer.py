"""Terminal rendering with partial redraws."""

from typing import List, Optional, Protocol

from rich.console import Console
from rich.control import Control

from org_stopwatch.core.split_tree import SplitTree
from org_stopwatch.core.timefmt import PLACEHOLDER, format_duration
from org_stopwatch.models.split import ClosedSpan, SplitNode

HEADER = "=== Org Stopwatch ==="
CONTROLS = (
    "Controls: s/start-stop r/reset g/start-subgoal n/nested-subgoal "
    "h/stop u/up d/redraw t/save-log q/quit"
)

TIME_ROW = 2
FIRST_SPLIT_ROW = 4

# Trailing blanks wipe leftovers from a longer previous value.
PAD = "   "


class RenderSurface(Protocol):
    """A character grid that can be cleared and painted at a position."""

    def move_to(self, x: int, y: int) -> None: ...

    def write(self, text: str) -> None: ...

    def clear(self) -> None: ...


class ConsoleSurface:
    """RenderSurface over a rich Console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def move_to(self, x: int, y: int) -> None:
        self.console.control(Control.move_to(x, y))

    def write(self, text: str) -> None:
        self.console.out(text, end="", highlight=False)
        self.console.file.flush()

    def clear(self) -> None:
        self.console.clear()


def time_line(elapsed: float) -> str:
    return f"Time  : {format_duration(elapsed)}{PAD}"


def split_row(index: int, node: SplitNode, live: Optional[float] = None) -> str:
    """Format one subgoal row.

    Closed rows show their final times. Open rows show placeholders, with
    ``live`` as the duration when the node is the active one.
    """
    if isinstance(node.span, ClosedSpan):
        start = format_duration(node.span.start)
        end = format_duration(node.span.end)
        duration = format_duration(node.span.duration)
    else:
        start = end = PLACEHOLDER
        duration = format_duration(live) if live is not None else PLACEHOLDER
    return (
        f" {index + 1:2d}) {start:<12} -> {end:<12} = {duration:<12}"
        f"  {node.name}{PAD}"
    )


class Renderer:
    """Draws a SplitTree, repainting only the live fields between structural changes.

    A full frame is drawn whenever the tree's revision moves or a redraw is
    requested. Otherwise each call repaints the time line and, when a
    subgoal is active, that subgoal's row.
    """

    def __init__(self, surface: RenderSurface, tree: SplitTree):
        self.surface = surface
        self.tree = tree
        self.message = ""
        self._drawn_revision: Optional[int] = None

    @property
    def dirty(self) -> bool:
        return self._drawn_revision != self.tree.revision

    def request_redraw(self) -> None:
        self._drawn_revision = None

    def show_message(self, message: str) -> None:
        """Set the status line and schedule a full frame."""
        self.message = message
        self.request_redraw()

    def clear_message(self) -> None:
        if self.message:
            self.show_message("")

    def render(self) -> None:
        if self.dirty:
            self.draw_frame()
        if self.tree.running:
            self.draw_live()

    def frame_lines(self) -> List[str]:
        """Build every line of a full frame, row by row."""
        tree = self.tree
        session = tree.session
        nodes = tree.nodes
        active = tree.active
        elapsed = tree.current_elapsed()

        lines = [
            HEADER,
            f"Goal  : {session.goal if session.has_goal else '(none)'}",
            time_line(elapsed),
            f"Subgoals ({len(nodes)}):",
        ]
        for index, node in enumerate(nodes):
            live = None
            if active is not None and node.handle == active.handle:
                live = tree.live_duration(node)
            lines.append("  " * node.level + split_row(index, node, live))
        lines.append("")
        lines.append(CONTROLS)
        if self.message:
            lines.append(self.message)
        return lines

    def draw_frame(self) -> None:
        self.surface.clear()
        for y, line in enumerate(self.frame_lines()):
            self.surface.move_to(0, y)
            self.surface.write(line)
        self._drawn_revision = self.tree.revision

    def draw_live(self) -> None:
        """Repaint the elapsed time and the active row only."""
        tree = self.tree
        self.surface.move_to(0, TIME_ROW)
        self.surface.write(time_line(tree.current_elapsed()))

        active = tree.active
        if active is not None:
            self.surface.move_to(active.level * 2, FIRST_SPLIT_ROW + active.handle)
            live = tree.live_duration(active)
            self.surface.write(split_row(active.handle, active, live))
