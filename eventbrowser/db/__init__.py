"""Database layer."""
from .connection import Database
from .event_repository import EventRepository
from .query_builder import Query, build_count_query, build_select_query, offset_for_page

__all__ = [
    'Database', 'EventRepository', 'Query',
    'build_count_query', 'build_select_query', 'offset_for_page',
]
