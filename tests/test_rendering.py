"""Unit tests for the table fragment renderer."""
import datetime
import html
import re
import unittest
from typing import Dict, List, Optional
from unittest.mock import Mock
from urllib.parse import parse_qs, urlsplit
from jinja2 import TemplateError
from eventbrowser.columns import ColumnSelection, all_columns, lookup
from eventbrowser.errors import RenderingError
from eventbrowser.filters import Between, FilterSet
from eventbrowser.models import Event
from eventbrowser.services.pagination import compute_paging
from eventbrowser.services.request_parser import parse_request
from eventbrowser.web.rendering import FragmentRenderer, format_cell

UTC = datetime.timezone.utc


def header_cells(fragment: str) -> List[str]:
    return [c.strip() for c in re.findall(r"<th[^>]*>(.*?)</th>", fragment, re.S)]


def body_rows(fragment: str) -> List[List[str]]:
    rows = re.findall(r'<tr class="border-b[^"]*">(.*?)</tr>', fragment, re.S)
    return [[c.strip() for c in re.findall(r"<td[^>]*>(.*?)</td>", row, re.S)] for row in rows]


def control_url(fragment: str, css_class: str) -> Optional[str]:
    match = re.search(r'<button class="%s[^"]*"\s+hx-get="([^"]*)"' % css_class, fragment)
    return html.unescape(match.group(1)) if match else None


def url_params(url: str) -> Dict[str, str]:
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query).items()}


class TestFormatCell(unittest.TestCase):
    def test_values(self) -> None:
        self.assertEqual(format_cell(42), "42")
        self.assertEqual(format_cell("text"), "text")
        self.assertEqual(format_cell(None), "")
        self.assertEqual(
            format_cell(datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)),
            "2024-01-02T03:04:05+00:00",
        )


class TestFragmentRenderer(unittest.TestCase):
    """Test headers, rows and pagination controls."""

    def setUp(self) -> None:
        self.renderer = FragmentRenderer()
        self.events = [
            Event(id=3, name="third", description="d3", source="s", severity="High",
                  timestamp=datetime.datetime(2024, 1, 3, tzinfo=UTC)),
            Event(id=2, name="second", description="d2", source="s", severity="Low",
                  timestamp=datetime.datetime(2024, 1, 2, tzinfo=UTC)),
        ]

    def test_header_matches_selection(self) -> None:
        selections = [
            ColumnSelection(),
            ColumnSelection((lookup("Severity"),)),  # type: ignore[arg-type]
            ColumnSelection(all_columns()),
        ]
        for selection in selections:
            with self.subTest(selection=selection):
                fragment = self.renderer.render(selection, self.events, compute_paging(2, 50, 1))
                self.assertEqual(header_cells(fragment), [c.name for c in selection])

    def test_rows_follow_column_order(self) -> None:
        selection = ColumnSelection((lookup("Severity"), lookup("Source")))  # type: ignore[arg-type]
        fragment = self.renderer.render(selection, self.events, compute_paging(2, 50, 1))

        self.assertEqual(body_rows(fragment), [
            ["2024-01-03T00:00:00+00:00", "3", "third", "s", "High"],
            ["2024-01-02T00:00:00+00:00", "2", "second", "s", "Low"],
        ])

    def test_values_are_escaped(self) -> None:
        events = [Event(id=1, name="<script>alert(1)</script>",
                        timestamp=datetime.datetime(2024, 1, 1, tzinfo=UTC))]
        fragment = self.renderer.render(ColumnSelection(), events, compute_paging(1, 50, 1))
        self.assertNotIn("<script>", fragment)
        self.assertIn("&lt;script&gt;", fragment)

    def test_first_page_has_only_next(self) -> None:
        fragment = self.renderer.render(ColumnSelection(), self.events, compute_paging(3, 2, 1))
        self.assertIsNone(control_url(fragment, "previous"))
        self.assertEqual(url_params(control_url(fragment, "next") or ""), {"page": "2"})
        self.assertIn('<span class="page-number">1</span>', fragment)
        self.assertIn('<span class="total-pages">2</span>', fragment)

    def test_last_page_has_only_previous(self) -> None:
        fragment = self.renderer.render(ColumnSelection(), self.events[:1], compute_paging(3, 2, 2))
        self.assertIsNone(control_url(fragment, "next"))
        self.assertEqual(url_params(control_url(fragment, "previous") or ""), {"page": "1"})

    def test_page_past_the_end(self) -> None:
        fragment = self.renderer.render(ColumnSelection(), [], compute_paging(3, 2, 3))
        self.assertEqual(body_rows(fragment), [])
        self.assertIsNone(control_url(fragment, "next"))
        self.assertIsNotNone(control_url(fragment, "previous"))
        self.assertIn('<span class="page-number">3</span>', fragment)

    def test_no_results_renders_no_pagination(self) -> None:
        fragment = self.renderer.render(ColumnSelection(), [], compute_paging(0, 50, 1),
                                        FilterSet(severity="High"))
        self.assertEqual(body_rows(fragment), [])
        self.assertIn("No events found", fragment)
        self.assertNotIn('class="pagination', fragment)
        self.assertNotIn("hx-get", fragment)

    def test_controls_carry_columns_and_filters(self) -> None:
        """Following a control reproduces the same selection and filters."""
        request = parse_request({
            "show-source": "on",
            "show-severity": "on",
            "timestamp-filter": "between",
            "timestamp-value": "2024-01-01T00:00:00Z",
            "timestamp-value-end": "2024-01-05T00:00:00Z",
            "source-filter": "s,t&u",
            "name-filter": "a b",
            "page": "2",
        })
        fragment = self.renderer.render(request.columns, self.events,
                                        compute_paging(10, 2, 2), request.filters)

        for css_class, page in (("previous", 1), ("next", 3)):
            with self.subTest(control=css_class):
                url = control_url(fragment, css_class)
                assert url is not None
                self.assertTrue(url.startswith("/events?"))
                followed = parse_request(url_params(url))
                self.assertEqual(followed.page, page)
                self.assertEqual(followed.columns, request.columns)
                self.assertEqual(followed.filters, request.filters)
                self.assertIsInstance(followed.filters.timestamp, Between)

    def test_render_is_pure(self) -> None:
        paging = compute_paging(2, 50, 1)
        first = self.renderer.render(ColumnSelection(), self.events, paging)
        second = self.renderer.render(ColumnSelection(), self.events, paging)
        self.assertEqual(first, second)

    def test_template_errors_become_rendering_error(self) -> None:
        environment = Mock()
        environment.get_template.side_effect = TemplateError("broken")
        renderer = FragmentRenderer(environment)
        with self.assertRaises(RenderingError):
            renderer.render(ColumnSelection(), [], compute_paging(0, 50, 1))

    def test_index_lists_optional_column_flags(self) -> None:
        page = self.renderer.render_index()
        for col in all_columns():
            if not col.show_by_default:
                self.assertIn(f'name="{col.flag}"', page)
        self.assertIn('id="events-table"', page)


if __name__ == "__main__":
    unittest.main()
