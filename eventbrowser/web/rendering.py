"""
Renders the event table fragment and the page that hosts it.

Rendering depends only on its arguments: the Jinja2 environment is built
once and never touched per request.
"""
import datetime
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from ..columns import ColumnSelection, all_columns
from ..errors import RenderingError
from ..filters import FilterSet
from ..models import Event, format_timestamp
from ..services.pagination import Paging
from ..services.request_parser import PAGE_PARAM

FRAGMENT_TEMPLATE = "events_fragment.html"
INDEX_TEMPLATE = "index.html"
EVENTS_PATH = "/events"
TABLE_TARGET = "#events-table"


def create_environment() -> Environment:
    """Jinja2 environment loading the bundled templates."""
    return Environment(
        loader=PackageLoader("eventbrowser", "web/templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def format_cell(value: Any) -> str:
    """Text for one table cell."""
    if value is None:
        return ""
    if isinstance(value, datetime.datetime):
        return format_timestamp(value)
    return str(value)


def page_url(page: int, columns: ColumnSelection, filters: FilterSet,
             path: str = EVENTS_PATH) -> str:
    """URL requesting a page with the same columns and filters."""
    params: Dict[str, str] = {PAGE_PARAM: str(page)}
    params.update(columns.to_params())
    params.update(filters.to_params())
    return f"{path}?{urlencode(params)}"


class FragmentRenderer:
    """Produces the HTML swapped into the events table container."""

    def __init__(self, environment: Optional[Environment] = None,
                 events_path: str = EVENTS_PATH) -> None:
        self.environment = environment or create_environment()
        self.events_path = events_path

    def render(self, columns: ColumnSelection, events: Sequence[Event],
               paging: Paging, filters: Optional[FilterSet] = None) -> str:
        """
        Render headers, rows and pagination controls.

        Args:
            columns: Selected columns, in the order they are displayed
            events: Events on the current page
            paging: Paging result for the current page
            filters: Active filters, carried into the pagination controls
        """
        filters = filters or FilterSet()
        rows: List[List[str]] = [
            [format_cell(col.value_of(event)) for col in columns]
            for event in events
        ]

        previous_url = None
        next_url = None
        if paging.has_previous:
            previous_url = page_url(paging.previous_page, columns, filters, self.events_path)
        if paging.has_next:
            next_url = page_url(paging.next_page, columns, filters, self.events_path)

        return self._render(
            FRAGMENT_TEMPLATE,
            columns=list(columns),
            rows=rows,
            paging=paging,
            previous_url=previous_url,
            next_url=next_url,
            target=TABLE_TARGET,
        )

    def render_index(self) -> str:
        """Render the full page with the column toggles and filter form."""
        return self._render(
            INDEX_TEMPLATE,
            columns=list(all_columns()),
            events_path=self.events_path,
            target=TABLE_TARGET,
        )

    def _render(self, template_name: str, **context: Any) -> str:
        try:
            template = self.environment.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise RenderingError(f"failed to render {template_name}") from e
