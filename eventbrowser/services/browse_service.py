"""Service tying request parsing, data access and paging together."""
from dataclasses import dataclass
from typing import List, Mapping

from ..db.event_repository import EventRepository
from ..models import Event
from .pagination import Paging, compute_paging
from .request_parser import BrowseRequest, parse_request


@dataclass(frozen=True)
class BrowseResult:
    """Everything the fragment renderer needs for one response."""
    request: BrowseRequest
    events: List[Event]
    paging: Paging


class BrowseService:
    """Handles one listing request from raw parameters to a result page."""

    def __init__(self, repository: EventRepository, page_size: int) -> None:
        self.repository = repository
        self.page_size = page_size

    def browse(self, params: Mapping[str, str]) -> BrowseResult:
        """
        Parse parameters, then count and fetch the requested page.

        Raises:
            DataAccessError: propagated unchanged from the repository
        """
        request = parse_request(params)
        events, total = self.repository.fetch_page_with_count(
            request.columns, request.filters, request.page, self.page_size
        )
        paging = compute_paging(total, self.page_size, request.page)
        return BrowseResult(request=request, events=events, paging=paging)
