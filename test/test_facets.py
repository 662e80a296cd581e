"""Tests for field, date and query facets."""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.facets import DateFieldFacet, FieldFacet, QueryFacet, build_field_facet
from QueryComposer.core.setup import FLOAT, INTEGER, STRING, TIME, Field, Setup

CATEGORY = Field("category", STRING)
PUBLISHED = Field("published_at", TIME)


def _make_setup() -> Setup:
    return Setup.from_fields(["Product"], [CATEGORY, Field("price", FLOAT), Field("stock", INTEGER)])


class TestFieldFacet(unittest.TestCase):
    def test_default_params(self) -> None:
        self.assertEqual(
            FieldFacet(CATEGORY).to_params(),
            {"facet": "true", "facet.field": ["category_s"], "f.category_s.facet.mincount": 1},
        )

    def test_options(self) -> None:
        facet = FieldFacet(CATEGORY, {"sort": "index", "limit": 10, "offset": 5, "prefix": "el", "minimum_count": 3})
        params = facet.to_params()
        self.assertEqual(params["f.category_s.facet.sort"], "index")
        self.assertEqual(params["f.category_s.facet.limit"], 10)
        self.assertEqual(params["f.category_s.facet.offset"], 5)
        self.assertEqual(params["f.category_s.facet.prefix"], "el")
        self.assertEqual(params["f.category_s.facet.mincount"], 3)

    def test_zeros(self) -> None:
        self.assertEqual(FieldFacet(CATEGORY, {"zeros": True}).to_params()["f.category_s.facet.mincount"], 0)

    def test_invalid_options(self) -> None:
        with self.assertRaises(ConfigurationError):
            FieldFacet(CATEGORY, {"sort": "alpha"})
        with self.assertRaises(ConfigurationError):
            FieldFacet(CATEGORY, {"time_range": (1, 2)})


class TestDateFieldFacet(unittest.TestCase):
    def test_params(self) -> None:
        facet = DateFieldFacet(
            PUBLISHED,
            {
                "time_range": (
                    datetime(2024, 1, 1, tzinfo=timezone.utc),
                    datetime(2024, 2, 1, tzinfo=timezone.utc),
                ),
                "time_interval": 604800,
                "other": "before",
            },
        )
        self.assertEqual(
            facet.to_params(),
            {
                "facet": "true",
                "facet.date": ["published_at_d"],
                "f.published_at_d.facet.date.start": "2024-01-01T00:00:00Z",
                "f.published_at_d.facet.date.end": "2024-02-01T00:00:00Z",
                "f.published_at_d.facet.date.gap": "+604800SECONDS",
                "f.published_at_d.facet.date.other": ["before"],
                "f.published_at_d.facet.mincount": 1,
            },
        )

    def test_default_interval_is_one_day(self) -> None:
        facet = DateFieldFacet(PUBLISHED, {"time_range": ("2024-01-01", "2024-01-31")})
        self.assertEqual(facet.to_params()["f.published_at_d.facet.date.gap"], "+86400SECONDS")

    def test_invalid_range_and_interval(self) -> None:
        with self.assertRaises(ConfigurationError):
            DateFieldFacet(PUBLISHED, {"time_range": "2024"})
        with self.assertRaises(ConfigurationError):
            DateFieldFacet(PUBLISHED, {"time_range": ("2024-01-01", "2024-01-31"), "time_interval": 0})
        with self.assertRaises(ConfigurationError):
            DateFieldFacet(PUBLISHED, {"time_range": ("2024-01-01", "2024-01-31"), "other": "later"})

    def test_build_picks_variant(self) -> None:
        self.assertIsInstance(build_field_facet(PUBLISHED, {"time_range": ("2024-01-01", "2024-02-01")}), DateFieldFacet)
        self.assertIs(type(build_field_facet(PUBLISHED)), FieldFacet)
        with self.assertRaises(ConfigurationError):
            build_field_facet(CATEGORY, {"time_range": ("2024-01-01", "2024-02-01")})


class TestQueryFacet(unittest.TestCase):
    def test_rows_render_as_facet_queries(self) -> None:
        facet = QueryFacet("price_range", _make_setup())
        cheap = facet.add_row("cheap")
        cheap.add_restriction("price", "less_than", 10)
        mid = facet.add_row("mid")
        mid.add_restriction("price", "between", (10, 50))
        mid.add_restriction("stock", "greater_than", 0)
        self.assertEqual(
            facet.to_params(),
            {
                "facet": "true",
                "facet.query": ["price_f:[* TO 10.0]", "(price_f:[10.0 TO 50.0] AND stock_i:[0 TO *])"],
            },
        )
        self.assertEqual([row.label for row in facet.rows], ["cheap", "mid"])

    def test_row_for_phrase(self) -> None:
        facet = QueryFacet("price_range", _make_setup())
        cheap = facet.add_row("cheap")
        cheap.add_restriction("price", "less_than", 10)
        self.assertIs(facet.row_for_phrase("price_f:[* TO 10.0]"), cheap)
        self.assertIsNone(facet.row_for_phrase("price_f:[* TO 20.0]"))

    def test_facet_without_rows(self) -> None:
        facet = QueryFacet("empty", _make_setup())
        facet.add_row("nothing")
        self.assertEqual(facet.to_params(), {})


if __name__ == "__main__":
    unittest.main()
