"""
Turns raw request parameters into a column selection, filters and a page.

Nothing here raises: malformed input is treated as absent and logged at
debug level, so a bad filter never fails the request.
"""
import datetime
import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from ..columns import ColumnSelection, all_columns
from ..filters import (
    After, Before, Between, FilterSet, TimestampFilter,
    LIST_DELIMITER, NAME_PARAM, SEVERITY_PARAM, SOURCE_PARAM,
    TIMESTAMP_END_PARAM, TIMESTAMP_MODE_PARAM, TIMESTAMP_VALUE_PARAM,
)
from ..models import parse_timestamp

logger = logging.getLogger(__name__)

PAGE_PARAM = "page"
FLAG_ON = "on"


@dataclass(frozen=True)
class BrowseRequest:
    """Validated view of one listing request."""
    columns: ColumnSelection = field(default_factory=ColumnSelection)
    filters: FilterSet = field(default_factory=FilterSet)
    page: int = 1


def parse_columns(params: Mapping[str, str]) -> ColumnSelection:
    """Default columns plus every optional column whose flag is "on"."""
    extra = tuple(col for col in all_columns() if params.get(col.flag) == FLAG_ON)
    return ColumnSelection(extra)


def parse_page(params: Mapping[str, str]) -> int:
    """1-based page number; anything unparseable or below 1 becomes 1."""
    raw = params.get(PAGE_PARAM)
    if raw is None:
        return 1
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        logger.debug("Ignoring invalid page %r", raw)
        return 1
    try:
        page = int(text)
    except ValueError:
        # Exceeds the interpreter's integer string length limit
        logger.debug("Ignoring oversized page %r", raw)
        return 1
    return page if page >= 1 else 1


def _parse_instant(raw: Optional[str]) -> Optional[datetime.datetime]:
    if raw is None or not raw.strip():
        return None
    try:
        return parse_timestamp(raw).astimezone(datetime.timezone.utc)
    except (ValueError, OverflowError):
        logger.debug("Ignoring unparseable or out-of-range timestamp %r", raw)
        return None


def parse_timestamp_filter(params: Mapping[str, str]) -> Optional[TimestampFilter]:
    """Build the timestamp filter variant, or None when absent or malformed."""
    mode = (params.get(TIMESTAMP_MODE_PARAM) or "").strip().lower()
    if not mode:
        return None

    start = _parse_instant(params.get(TIMESTAMP_VALUE_PARAM))
    if mode == Before.mode:
        return Before(start) if start is not None else None
    if mode == After.mode:
        return After(start) if start is not None else None
    if mode == Between.mode:
        end = _parse_instant(params.get(TIMESTAMP_END_PARAM))
        if start is not None and end is not None:
            return Between(start, end)
        logger.debug("Ignoring between filter without both bounds")
        return None

    logger.debug("Ignoring unknown timestamp filter mode %r", mode)
    return None


def parse_list(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated value, dropping blanks and repeats."""
    if not raw:
        return ()
    items: List[str] = []
    for part in raw.split(LIST_DELIMITER):
        item = part.strip()
        if item and item not in items:
            items.append(item)
    return tuple(items)


def parse_filters(params: Mapping[str, str]) -> FilterSet:
    """Parse every filter field independently."""
    severity = (params.get(SEVERITY_PARAM) or "").strip()
    return FilterSet(
        timestamp=parse_timestamp_filter(params),
        sources=parse_list(params.get(SOURCE_PARAM)),
        severity=severity or None,
        names=parse_list(params.get(NAME_PARAM)),
    )


def parse_request(params: Mapping[str, str]) -> BrowseRequest:
    """Interpret the flat parameter mapping of a listing request."""
    return BrowseRequest(
        columns=parse_columns(params),
        filters=parse_filters(params),
        page=parse_page(params),
    )
