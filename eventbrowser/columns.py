"""
Registry of the displayable event columns.

The registry is fixed at import time. Its order is the rendering order and
the order used for query projections; storage field names are only ever
taken from here, never from request input.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from .models import Event


class ColumnKey(Enum):
    """Identifies a column; the value is the Event attribute it displays."""
    TIMESTAMP = "timestamp"
    ID = "id"
    NAME = "name"
    DESCRIPTION = "description"
    SOURCE = "source"
    SEVERITY = "severity"


@dataclass(frozen=True)
class Column:
    """A displayable event attribute."""
    key: ColumnKey
    name: str
    storage_field: str
    show_by_default: bool

    @property
    def flag(self) -> str:
        """Request parameter that switches this column on."""
        return "show-" + self.name.lower()

    def value_of(self, event: Event) -> Any:
        """Return this column's value from an event."""
        return getattr(event, self.key.value)


AVAILABLE_COLUMNS: Tuple[Column, ...] = (
    Column(ColumnKey.TIMESTAMP, "Timestamp", "timestamp", True),
    Column(ColumnKey.ID, "ID", "id", True),
    Column(ColumnKey.NAME, "Name", "name", True),
    Column(ColumnKey.DESCRIPTION, "Description", "description", False),
    Column(ColumnKey.SOURCE, "Source", "source", False),
    Column(ColumnKey.SEVERITY, "Severity", "severity", False),
)

_BY_NAME: Dict[str, Column] = {col.name: col for col in AVAILABLE_COLUMNS}
if len(_BY_NAME) != len(AVAILABLE_COLUMNS):
    raise ValueError("column names must be unique")


def all_columns() -> Tuple[Column, ...]:
    """Return every column in registry order."""
    return AVAILABLE_COLUMNS


def default_columns() -> Tuple[Column, ...]:
    """Return the columns shown by default, in registry order."""
    return tuple(col for col in AVAILABLE_COLUMNS if col.show_by_default)


def lookup(name: str) -> Optional[Column]:
    """Find a column by its display name."""
    return _BY_NAME.get(name)


class ColumnSelection:
    """
    Ordered set of columns to project and display.

    Always contains the default columns and is always in registry order,
    whatever order the columns were requested in.
    """

    def __init__(self, extra: Tuple[Column, ...] = ()) -> None:
        wanted = set(default_columns()) | set(extra)
        self.columns: Tuple[Column, ...] = tuple(
            col for col in AVAILABLE_COLUMNS if col in wanted
        )

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def __contains__(self, column: object) -> bool:
        return column in self.columns

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnSelection):
            return NotImplemented
        return self.columns == other.columns

    def __repr__(self) -> str:
        return f"ColumnSelection({[col.name for col in self.columns]!r})"

    @property
    def storage_fields(self) -> Tuple[str, ...]:
        return tuple(col.storage_field for col in self.columns)

    def to_params(self) -> Dict[str, str]:
        """Request parameters that reproduce this selection."""
        return {col.flag: "on" for col in self.columns if not col.show_by_default}
