"""Split models for timed subgoals."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class OpenSpan(BaseModel):
    """An interval that has started but not been stopped."""

    state: Literal["open"] = "open"
    start: float

    model_config = {"frozen": True}


class ClosedSpan(BaseModel):
    """An interval with a finalized end."""

    state: Literal["closed"] = "closed"
    start: float
    end: float

    @property
    def duration(self) -> float:
        """Get interval length in seconds."""
        return self.end - self.start

    model_config = {"frozen": True}


Span = Annotated[Union[OpenSpan, ClosedSpan], Field(discriminator="state")]


class SplitNode(BaseModel):
    """Represents one subgoal in the split tree.

    Times are session-relative seconds. ``handle`` is the node's index in
    the owning tree and never changes; ``parent`` is the parent's handle.
    """

    handle: int = Field(ge=0)
    name: str
    span: Span
    parent: Optional[int] = None
    level: int = Field(default=0, ge=0)

    @property
    def is_open(self) -> bool:
        """Check if the subgoal is still running."""
        return isinstance(self.span, OpenSpan)

    @property
    def start(self) -> float:
        return self.span.start

    @property
    def end(self) -> Optional[float]:
        """Get the end time, or None while open."""
        if isinstance(self.span, ClosedSpan):
            return self.span.end
        return None

    def closed(self, at: float) -> "SplitNode":
        """Return a copy of this node closed at the given time."""
        end = max(at, self.span.start)
        span = ClosedSpan(start=self.span.start, end=end)
        return self.model_copy(update={"span": span})
