"""Unit tests for page bound calculations."""
import unittest
from eventbrowser.services.pagination import compute_paging


class TestComputePaging(unittest.TestCase):
    """Test total pages and neighbour flags."""

    def test_no_rows(self) -> None:
        paging = compute_paging(0, 50, 1)
        self.assertEqual(paging.total_pages, 0)
        self.assertFalse(paging.has_previous)
        self.assertFalse(paging.has_next)

    def test_total_pages_rounds_up(self) -> None:
        cases = [(1, 50, 1), (50, 50, 1), (51, 50, 2), (3, 2, 2), (100, 10, 10), (101, 10, 11)]
        for total, size, expected in cases:
            with self.subTest(total=total, size=size):
                self.assertEqual(compute_paging(total, size, 1).total_pages, expected)

    def test_flags_follow_page_position(self) -> None:
        for page in range(1, 6):
            with self.subTest(page=page):
                paging = compute_paging(9, 2, page)
                self.assertEqual(paging.total_pages, 5)
                self.assertEqual(paging.has_previous, page > 1)
                self.assertEqual(paging.has_next, page < 5)

    def test_page_past_the_end_is_not_clamped(self) -> None:
        paging = compute_paging(3, 2, 3)
        self.assertEqual(paging.page_number, 3)
        self.assertEqual(paging.total_pages, 2)
        self.assertTrue(paging.has_previous)
        self.assertFalse(paging.has_next)

    def test_neighbour_pages(self) -> None:
        paging = compute_paging(30, 10, 2)
        self.assertEqual(paging.previous_page, 1)
        self.assertEqual(paging.next_page, 3)

    def test_invalid_page_size(self) -> None:
        with self.assertRaises(ValueError):
            compute_paging(10, 0, 1)


if __name__ == "__main__":
    unittest.main()
