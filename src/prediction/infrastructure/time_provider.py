from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..domain.entities import TimeContext

def day_of_week(moment: datetime) -> int:
    """Day of week with 0 = Sunday, 6 = Saturday."""
    return moment.isoweekday() % 7


class SystemTimeProvider:
    """
    Wall-clock hour and day, optionally in a fixed timezone.
    """
    def __init__(self, timezone: Optional[str] = None):
        self.tz = ZoneInfo(timezone) if timezone else None

    def now(self) -> TimeContext:
        moment = datetime.now(self.tz)
        return TimeContext(hour=moment.hour, day=day_of_week(moment))
