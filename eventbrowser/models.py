"""
Data models for the application.
"""
import datetime
from dataclasses import dataclass
from typing import Optional


@dataclass
class Event:
    """
    Represents a single event in the database.

    Fields that were not part of the query projection keep their zero value.
    """
    id: int = 0
    name: str = ""
    description: str = ""
    timestamp: Optional[datetime.datetime] = None
    source: str = ""
    severity: str = ""


def format_timestamp(value: datetime.datetime) -> str:
    """
    Format an instant the way it is stored and rendered.

    Naive values are taken as UTC. The result is UTC at second resolution,
    e.g. ``2024-01-02T03:04:05+00:00``, so text order matches time order.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    if value.utcoffset() == datetime.timedelta(0):
        return value.replace(tzinfo=datetime.timezone.utc).isoformat(timespec="seconds")
    return value.astimezone(datetime.timezone.utc).isoformat(timespec="seconds")


def parse_timestamp(value: str) -> datetime.datetime:
    """
    Parse an ISO 8601 instant, accepting a trailing ``Z``.

    Raises:
        ValueError: if the text is not a valid ISO 8601 timestamp
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed
