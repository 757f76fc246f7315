"""Clock port - source of the current UTC instant."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Returns timezone-aware UTC datetimes."""

    def now(self) -> datetime: ...
