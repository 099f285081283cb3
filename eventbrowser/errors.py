"""Exceptions raised by the event browser."""


class DataAccessError(Exception):
    """The event store is unreachable, a query failed, or a row could not be mapped."""


class RenderingError(Exception):
    """The fragment template failed to render. Indicates a programming defect."""
