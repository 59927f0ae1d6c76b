"""
Clock providers

The engine never reads the system date itself; it is handed "today" by
one of these.
"""

from datetime import date, timedelta
from typing import Optional, Protocol


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    """Local calendar date of the host"""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Settable clock for tests and simulations; never moves backwards"""

    def __init__(self, current: Optional[date] = None):
        self._current = current or date.today()

    def today(self) -> date:
        return self._current

    def set(self, new_date: date) -> None:
        if new_date < self._current:
            raise ValueError(
                f"Clock cannot move backwards: {new_date.isoformat()} < {self._current.isoformat()}"
            )
        self._current = new_date

    def advance(self, days: int = 1) -> date:
        self.set(self._current + timedelta(days=days))
        return self._current
