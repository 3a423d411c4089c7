"""
Timestamp resolution for a report.

The HTTP server stamps points with the time it processes the request.
The function entry point takes the time from ``Summary.Timestamp`` instead,
and also adds calendar fields to ``test_counter``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from durability.influx_point import ZERO_TIME
from reportparser.fields import get_string
from util.errors import TimestampError

TIMESTAMP_PATH = "Summary.Timestamp"
TIMESTAMP_LAYOUT = "%Y%m%d%H%M%S"
TIMESTAMP_DIGITS = 14


def parse_timestamp(text: str) -> datetime:
    prefix = text[:TIMESTAMP_DIGITS]
    if len(prefix) < TIMESTAMP_DIGITS or not prefix.isdigit():
        raise TimestampError(f"InfluxDB error: cannot parse timestamp {text!r} as YYYYMMDDhhmmss")
    try:
        parsed = datetime.strptime(prefix, TIMESTAMP_LAYOUT)
    except ValueError as e:
        raise TimestampError(f"InfluxDB error: {e}") from e
    return parsed.replace(tzinfo=timezone.utc)


def calendar_fields(timestamp: datetime) -> Dict[str, str]:
    year = f"{timestamp.year:04d}"
    month = f"{timestamp.month:02d}"
    return {"month": month, "year": year, "year-month": f"{year}-{month}"}


class TimestampPolicy(ABC):
    """Resolves the timestamp shared by every point of one report."""

    adds_calendar_fields = False

    @abstractmethod
    def resolve(self, document: Any) -> datetime:
        """
        Args:
            document: The parsed report

        Returns:
            The timestamp for all points built from the report
        """
        pass


class ReportTimestampPolicy(TimestampPolicy):
    adds_calendar_fields = True

    def resolve(self, document: Any) -> datetime:
        text = get_string(document, TIMESTAMP_PATH)
        if text is None:
            return ZERO_TIME
        return parse_timestamp(text)


class WallClockPolicy(TimestampPolicy):
    def __init__(self, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self.clock = clock

    def resolve(self, document: Any) -> datetime:
        return self.clock()
