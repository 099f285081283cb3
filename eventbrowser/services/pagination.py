"""Page bounds for the event listing."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Paging:
    """Where a page sits within the full result set."""
    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous: bool
    has_next: bool

    @property
    def previous_page(self) -> int:
        return self.page_number - 1

    @property
    def next_page(self) -> int:
        return self.page_number + 1


def compute_paging(total_count: int, page_size: int, page_number: int) -> Paging:
    """
    Compute total pages and neighbour availability.

    page_number is not clamped to total_pages: a page past the end is
    reported as such, with has_next False and has_previous True.
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")
    total_pages = -(-total_count // page_size) if total_count > 0 else 0
    return Paging(
        page_number=page_number,
        page_size=page_size,
        total_count=total_count,
        total_pages=total_pages,
        has_previous=page_number > 1,
        has_next=page_number < total_pages,
    )
