"""Session model for the top-level timed goal."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Session(BaseModel):
    """Represents the outer timed activity bound to a single goal."""

    goal: str = ""
    running: bool = False
    elapsed_before_run: float = Field(default=0.0, ge=0.0)
    run_started_at: Optional[float] = None  # Clock reading, valid only while running
    log_started_at: Optional[datetime] = None  # Calendar time, used for export only

    @property
    def has_goal(self) -> bool:
        """Check if a goal has been named."""
        return bool(self.goal)

    def elapsed_at(self, now: float) -> float:
        """Get total elapsed seconds as of the given clock reading."""
        if self.running and self.run_started_at is not None:
            return self.elapsed_before_run + (now - self.run_started_at)
        return self.elapsed_before_run

    model_config = {"validate_assignment": True}
