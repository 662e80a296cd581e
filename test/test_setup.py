"""Tests for the default field setup."""

import sys
import unittest
from datetime import date, datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from QueryComposer.core.errors import ConfigurationError, UnrecognizedFieldError
from QueryComposer.core.setup import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    STRING,
    TEXT,
    TIME,
    Field,
    Setup,
    TextFieldSetup,
    field_type,
)


def _make_setup() -> Setup:
    return Setup.from_fields(
        ["Product"],
        [
            Field("title", TEXT, boost=2.0),
            Field("category", STRING),
            Field("tags", STRING, multiple=True),
            Field("price", FLOAT),
        ],
        [Field("attribute", STRING, multiple=True)],
    )


class TestField(unittest.TestCase):
    def test_indexed_names_use_type_suffix(self) -> None:
        self.assertEqual(Field("title", TEXT).indexed_name, "title_text")
        self.assertEqual(Field("category", STRING).indexed_name, "category_s")
        self.assertEqual(Field("tags", STRING, multiple=True).indexed_name, "tags_sm")
        self.assertEqual(Field("stock", INTEGER).indexed_name, "stock_i")
        self.assertEqual(Field("published_at", TIME).indexed_name, "published_at_d")

    def test_text_fields_cannot_be_multi_valued(self) -> None:
        with self.assertRaises(ConfigurationError):
            Field("body", TEXT, multiple=True)

    def test_value_conversion(self) -> None:
        self.assertEqual(FLOAT.to_indexed(10), "10.0")
        self.assertEqual(INTEGER.to_indexed(3), "3")
        self.assertEqual(BOOLEAN.to_indexed(False), "false")
        self.assertEqual(STRING.to_indexed("red"), "red")

    def test_time_conversion(self) -> None:
        self.assertEqual(TIME.to_indexed(datetime(2024, 3, 5, 10, 30)), "2024-03-05T10:30:00Z")
        self.assertEqual(TIME.to_indexed(date(2024, 3, 5)), "2024-03-05T00:00:00Z")
        self.assertEqual(
            TIME.to_indexed(datetime(2024, 3, 5, 10, 30, tzinfo=timezone.utc)),
            "2024-03-05T10:30:00Z",
        )

    def test_time_strings_are_parsed(self) -> None:
        self.assertEqual(TIME.to_indexed("2024-03-05 10:30"), "2024-03-05T10:30:00Z")
        self.assertEqual(TIME.to_indexed("2024-03-05T10:30:00+02:00"), "2024-03-05T08:30:00Z")

    def test_unknown_type_name(self) -> None:
        self.assertIs(field_type(" Text "), TEXT)
        with self.assertRaises(ConfigurationError):
            field_type("geometry")


class TestSetup(unittest.TestCase):
    def test_field_lookup(self) -> None:
        setup = _make_setup()
        self.assertEqual(setup.field("price").indexed_name, "price_f")
        with self.assertRaises(UnrecognizedFieldError):
            setup.field("missing")

    def test_text_fields(self) -> None:
        self.assertEqual([f.name for f in _make_setup().text_fields()], ["title"])

    def test_dynamic_field(self) -> None:
        field = _make_setup().dynamic_field("attribute", "color")
        self.assertEqual((field.name, field.dynamic_name), ("attribute", "color"))
        self.assertEqual(field.indexed_name, "attribute_sm:color")
        with self.assertRaises(UnrecognizedFieldError):
            _make_setup().dynamic_field("missing", "color")


class TestTextFieldSetup(unittest.TestCase):
    def test_only_text_fields_resolve(self) -> None:
        text_setup = TextFieldSetup(_make_setup())
        self.assertEqual(text_setup.field("title").indexed_name, "title_text")
        self.assertEqual(tuple(text_setup.type_names), ("Product",))
        with self.assertRaises(UnrecognizedFieldError):
            text_setup.field("category")

    def test_unrecognized_field_is_lookup_error(self) -> None:
        with self.assertRaises(LookupError):
            TextFieldSetup(_make_setup()).field("price")


if __name__ == "__main__":
    unittest.main()
