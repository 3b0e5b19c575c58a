"""Export a finished session to an Org-mode log."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from org_stopwatch.core.split_tree import SplitTree
from org_stopwatch.core.timefmt import format_calendar, format_duration
from org_stopwatch.models.entry import OrgEntry
from org_stopwatch.models.session import Session
from org_stopwatch.models.split import ClosedSpan, SplitNode

logger = logging.getLogger(__name__)


class LogSinkError(Exception):
    """Raised when the log file cannot be opened or written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to open log file {path}: {reason}")
        self.path = path
        self.reason = reason


def build_entries(
    session: Session, nodes: Iterable[SplitNode], exported_at: datetime
) -> List[OrgEntry]:
    """Build Org entries for a stopped session and its closed subgoals.

    Returns an empty list while the session is running or has no goal.
    Subgoals are emitted in creation order; open ones are skipped.
    """
    if session.running or not session.has_goal:
        return []

    started_at = session.log_started_at or exported_at
    total_secs = int((exported_at - started_at).total_seconds())
    entries = [
        OrgEntry(
            depth=1,
            title=session.goal,
            clock_start=format_calendar(started_at),
            clock_end=format_calendar(exported_at),
            duration=format_duration(total_secs),
        )
    ]

    for node in nodes:
        if not isinstance(node.span, ClosedSpan):
            continue
        entries.append(
            OrgEntry(
                depth=node.level + 2,
                title=node.name,
                clock_start=format_duration(node.span.start),
                clock_end=format_duration(node.span.end),
                duration=format_duration(node.span.duration),
            )
        )
    return entries


class OrgLogSink:
    """Append-only Org file."""

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def append(self, text: str) -> None:
        """Append text in a single open-write-close cycle."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise LogSinkError(self.path, e.strerror or str(e)) from e


class LogExporter:
    """Writes a stopped session from a SplitTree into an Org log sink."""

    def __init__(self, sink: OrgLogSink):
        self.sink = sink

    def export(self, tree: SplitTree) -> List[OrgEntry]:
        """Append the tree's session to the sink and return what was written."""
        entries = build_entries(tree.session, tree.nodes, tree.clock.wall_now())
        if not entries:
            logger.debug(
                "Skipping export: running=%s goal=%r",
                tree.session.running,
                tree.session.goal,
            )
            return []

        try:
            self.sink.append("".join(entry.render() for entry in entries))
        except LogSinkError as e:
            logger.error("Export of %r failed: %s", tree.session.goal, e)
            raise

        logger.info(
            "Exported %r with %d entries to %s",
            tree.session.goal,
            len(entries),
            self.sink.path,
        )
        return entries
