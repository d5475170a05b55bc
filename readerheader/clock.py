"""Clock text shown in the header."""

from datetime import datetime
from typing import Callable, Optional


def format_clock(now: datetime, twelve_hour: bool = False) -> str:
    """Format the time of day.

    24-hour clocks use ``HH:MM``; 12-hour clocks use ``H:MM AM`` without a
    leading zero on the hour.
    """
    if not twelve_hour:
        return f"{now.hour:02d}:{now.minute:02d}"
    hour = now.hour % 12 or 12
    suffix = "AM" if now.hour < 12 else "PM"
    return f"{hour}:{now.minute:02d} {suffix}"


class Clock:
    """Supplies the current time as header text."""

    def __init__(self, twelve_hour: Callable[[], bool],
                 now: Optional[Callable[[], datetime]] = None):
        self._twelve_hour = twelve_hour
        self._now = now or datetime.now

    def text(self, now: Optional[datetime] = None) -> str:
        return format_clock(now or self._now(), self._twelve_hour())
