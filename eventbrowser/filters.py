"""
Structured filter criteria for the event listing.

The timestamp filter is one of three variants (or absent); every other
criterion is an independent optional field.
"""
import datetime
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .models import format_timestamp

# Request parameter names
TIMESTAMP_MODE_PARAM = "timestamp-filter"
TIMESTAMP_VALUE_PARAM = "timestamp-value"
TIMESTAMP_END_PARAM = "timestamp-value-end"
SOURCE_PARAM = "source-filter"
SEVERITY_PARAM = "severity-filter"
NAME_PARAM = "name-filter"

LIST_DELIMITER = ","


@dataclass(frozen=True)
class Before:
    """Events at or before an instant."""
    at: datetime.datetime

    mode = "before"


@dataclass(frozen=True)
class After:
    """Events at or after an instant."""
    at: datetime.datetime

    mode = "after"


@dataclass(frozen=True)
class Between:
    """Events within an inclusive range."""
    start: datetime.datetime
    end: datetime.datetime

    mode = "between"


TimestampFilter = Union[Before, After, Between]


@dataclass(frozen=True)
class FilterSet:
    """Validated filter criteria. Empty tuples and None mean "no filter"."""
    timestamp: Optional[TimestampFilter] = None
    sources: Tuple[str, ...] = ()
    severity: Optional[str] = None
    names: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return (self.timestamp is None and not self.sources
                and self.severity is None and not self.names)

    def to_params(self) -> Dict[str, str]:
        """Request parameters that reproduce this filter set."""
        params: Dict[str, str] = {}
        ts = self.timestamp
        if isinstance(ts, Between):
            params[TIMESTAMP_MODE_PARAM] = ts.mode
            params[TIMESTAMP_VALUE_PARAM] = format_timestamp(ts.start)
            params[TIMESTAMP_END_PARAM] = format_timestamp(ts.end)
        elif isinstance(ts, (Before, After)):
            params[TIMESTAMP_MODE_PARAM] = ts.mode
            params[TIMESTAMP_VALUE_PARAM] = format_timestamp(ts.at)
        if self.sources:
            params[SOURCE_PARAM] = LIST_DELIMITER.join(self.sources)
        if self.severity is not None:
            params[SEVERITY_PARAM] = self.severity
        if self.names:
            params[NAME_PARAM] = LIST_DELIMITER.join(self.names)
        return params
