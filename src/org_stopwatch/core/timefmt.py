"""Time formatting helpers shared by the renderer and the log exporter."""

from datetime import datetime

PLACEHOLDER = "--:--:--.---"
CALENDAR_FORMAT = "%Y-%m-%d %H:%M"


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS.mmm.

    The hour field grows past two digits instead of wrapping.
    """
    total_ms = max(0, int(round(seconds * 1000)))
    total_secs, ms = divmod(total_ms, 1000)
    mins, secs = divmod(total_secs, 60)
    hrs, mins = divmod(mins, 60)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}.{ms:03d}"


def format_calendar(moment: datetime) -> str:
    """Format a calendar timestamp the way Org CLOCK lines expect it."""
    return moment.strftime(CALENDAR_FORMAT)
