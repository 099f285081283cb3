"""Business logic services."""
from .browse_service import BrowseResult, BrowseService
from .pagination import Paging, compute_paging
from .request_parser import BrowseRequest, parse_request

__all__ = [
    'BrowseResult', 'BrowseService', 'BrowseRequest', 'Paging',
    'compute_paging', 'parse_request',
]
