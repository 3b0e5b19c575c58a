"""Org-mode log entry model."""

from pydantic import BaseModel, Field


class OrgEntry(BaseModel):
    """A single heading with a CLOCK line in the exported log."""

    depth: int = Field(ge=1)
    title: str
    clock_start: str
    clock_end: str
    duration: str

    def render(self) -> str:
        """Render the entry as Org text, drawer included."""
        stars = "*" * self.depth
        return (
            f"{stars} {self.title}\n"
            "  :LOGBOOK:\n"
            f"  CLOCK: [{self.clock_start}]--[{self.clock_end}] => {self.duration}\n"
            "  :END:\n"
            "\n"
        )
