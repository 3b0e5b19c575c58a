"""Hierarchical subgoal timer state."""

import logging
from typing import List, Optional, Tuple

from org_stopwatch.core.clock import Clock
from org_stopwatch.models.session import Session
from org_stopwatch.models.split import OpenSpan, SplitNode

logger = logging.getLogger(__name__)

DEFAULT_MAX_SPLITS = 100


class SplitTree:
    """Owns the session, the subgoal arena and the active-node cursor.

    Nodes are stored in creation order and addressed by their index
    (``SplitNode.handle``). At most one node is active. Invalid transitions
    are ignored and reported by returning ``False``; nothing here raises
    for a user action.
    """

    def __init__(self, clock: Clock, max_splits: int = DEFAULT_MAX_SPLITS):
        if max_splits < 1:
            raise ValueError("max_splits must be at least 1")
        self.clock = clock
        self.max_splits = max_splits
        self.session = Session()
        self._nodes: List[SplitNode] = []
        self._active: Optional[int] = None
        self._revision = 0

    @property
    def nodes(self) -> Tuple[SplitNode, ...]:
        """All subgoals in creation order."""
        return tuple(self._nodes)

    @property
    def active(self) -> Optional[SplitNode]:
        """The subgoal currently accruing time, if any."""
        if self._active is None:
            return None
        return self._nodes[self._active]

    @property
    def revision(self) -> int:
        """Counter bumped on every structural change."""
        return self._revision

    @property
    def running(self) -> bool:
        return self.session.running

    def node(self, handle: int) -> SplitNode:
        return self._nodes[handle]

    def parent_of(self, node: SplitNode) -> Optional[SplitNode]:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def current_elapsed(self) -> float:
        """Get session elapsed seconds, frozen while stopped."""
        return self.session.elapsed_at(self.clock.now())

    def live_duration(self, node: SplitNode) -> float:
        """Get a node's duration, measured up to now if still open."""
        if node.is_open:
            return max(0.0, self.current_elapsed() - node.start)
        return node.span.duration

    def start_session(self, goal: str) -> bool:
        """Start a fresh session, discarding any previous tree and time."""
        self.session = Session(
            goal=goal,
            running=True,
            elapsed_before_run=0.0,
            run_started_at=self.clock.now(),
            log_started_at=self.clock.wall_now(),
        )
        self._nodes.clear()
        self._active = None
        self._touch()
        logger.debug("Started session %r", goal)
        return True

    def stop_session(self) -> bool:
        """Stop the running session, banking its elapsed time."""
        if not self.session.running:
            logger.debug("Ignoring stop: session not running")
            return False
        elapsed = self.current_elapsed()
        self.session.elapsed_before_run = elapsed
        self.session.running = False
        self.session.run_started_at = None
        self._touch()
        logger.debug("Stopped session at %.3fs", elapsed)
        return True

    def reset_session(self) -> bool:
        """Discard the session, its time and all subgoals."""
        self.session = Session()
        self._nodes.clear()
        self._active = None
        self._touch()
        logger.debug("Reset session")
        return True

    def can_open(self, nested: bool = False) -> bool:
        """Check whether ``open_split`` would create a node."""
        if not self.session.running:
            return False
        if nested and self._active is None:
            return False
        return len(self._nodes) < self.max_splits

    def open_split(self, name: str, nested: bool = False) -> Optional[SplitNode]:
        """Open a subgoal under the active node, or at top level if none.

        With ``nested=True`` the node must go under an active node; without
        one the call does nothing. Returns the new node, or None.
        """
        if not self.can_open(nested):
            logger.debug(
                "Ignoring open of %r: running=%s nested=%s active=%s count=%d/%d",
                name,
                self.session.running,
                nested,
                self._active,
                len(self._nodes),
                self.max_splits,
            )
            return None

        parent = self.active
        node = SplitNode(
            handle=len(self._nodes),
            name=name,
            span=OpenSpan(start=self.current_elapsed()),
            parent=parent.handle if parent else None,
            level=parent.level + 1 if parent else 0,
        )
        self._nodes.append(node)
        self._active = node.handle
        self._touch()
        logger.debug(
            "Opened subgoal %r (handle=%d level=%d parent=%s) at %.3fs",
            name,
            node.handle,
            node.level,
            node.parent,
            node.start,
        )
        return node

    def close_active(self) -> Optional[SplitNode]:
        """Close the active node and move the cursor to its parent."""
        if self._active is None:
            logger.debug("Ignoring close: no active subgoal")
            return None
        node = self._nodes[self._active].closed(self.current_elapsed())
        self._nodes[node.handle] = node
        self._active = node.parent
        self._touch()
        logger.debug(
            "Closed subgoal %r after %.3fs, active is now %s",
            node.name,
            node.span.duration,
            self._active,
        )
        return node

    def ascend(self) -> bool:
        """Move the cursor to the parent, leaving the current node open."""
        if self._active is None:
            logger.debug("Ignoring ascend: no active subgoal")
            return False
        left = self._nodes[self._active]
        self._active = left.parent
        self._touch()
        logger.debug("Ascended from %r, active is now %s", left.name, self._active)
        return True

    def _touch(self) -> None:
        self._revision += 1
