"""Tests for scopes, boolean connectives and dynamic fields."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from QueryComposer.core.errors import ConfigurationError, UnrecognizedFieldError
from QueryComposer.core.restriction import EqualTo
from QueryComposer.core.scope import Scope
from QueryComposer.core.setup import FLOAT, STRING, Field, Setup


def _make_setup() -> Setup:
    return Setup.from_fields(
        ["Product"],
        [Field("category", STRING), Field("price", FLOAT)],
        [Field("attribute", STRING, multiple=True)],
    )


class TestScope(unittest.TestCase):
    def test_each_restriction_is_its_own_filter(self) -> None:
        scope = Scope(_make_setup())
        scope.add_restriction("category", "equal_to", "audio")
        scope.add_negated_restriction("price", "less_than", 10)
        self.assertEqual(scope.to_params(), {"fq": ["category_s:audio", "-price_f:[* TO 10.0]"]})

    def test_restriction_class_is_accepted(self) -> None:
        scope = Scope(_make_setup())
        restriction = scope.add_restriction("category", EqualTo, "audio")
        self.assertIsInstance(restriction, EqualTo)
        self.assertEqual(scope.components, (restriction,))

    def test_unknown_field(self) -> None:
        with self.assertRaises(UnrecognizedFieldError):
            Scope(_make_setup()).add_restriction("color", "equal_to", "red")

    def test_empty_scope(self) -> None:
        self.assertEqual(Scope(_make_setup()).to_params(), {})


class TestConnectives(unittest.TestCase):
    def test_disjunction(self) -> None:
        scope = Scope(_make_setup())
        any_of = scope.add_disjunction()
        any_of.add_restriction("category", "equal_to", "audio")
        any_of.add_restriction("price", "less_than", 10)
        self.assertEqual(scope.to_params(), {"fq": ["(category_s:audio OR price_f:[* TO 10.0])"]})

    def test_negated_member_in_disjunction(self) -> None:
        any_of = Scope(_make_setup()).add_disjunction()
        any_of.add_restriction("category", "equal_to", "audio")
        any_of.add_negated_restriction("category", "equal_to", "video")
        self.assertEqual(any_of.to_boolean_phrase(), "(category_s:audio OR (*:* -category_s:video))")

    def test_conjunction_nested_in_disjunction(self) -> None:
        any_of = Scope(_make_setup()).add_disjunction()
        any_of.add_restriction("category", "equal_to", "audio")
        all_of = any_of.add_conjunction()
        all_of.add_restriction("category", "equal_to", "video")
        all_of.add_restriction("price", "greater_than", 100)
        self.assertEqual(
            any_of.to_boolean_phrase(),
            "(category_s:audio OR (category_s:video AND price_f:[100.0 TO *]))",
        )

    def test_single_member_renders_alone(self) -> None:
        all_of = Scope(_make_setup()).add_conjunction()
        all_of.add_restriction("category", "equal_to", "audio")
        self.assertEqual(all_of.to_params(), {"fq": ["category_s:audio"]})

    def test_empty_connective_contributes_nothing(self) -> None:
        scope = Scope(_make_setup())
        scope.add_disjunction().add_conjunction()
        self.assertEqual(scope.to_params(), {})

    def test_negation(self) -> None:
        not_all = Scope(_make_setup()).add_negation()
        not_all.add_restriction("category", "equal_to", "audio")
        not_all.add_restriction("price", "less_than", 10)
        self.assertTrue(not_all.negated)
        self.assertEqual(not_all.to_boolean_phrase(), "-(category_s:audio AND price_f:[* TO 10.0])")

    def test_negation_of_single_restriction(self) -> None:
        negation = Scope(_make_setup()).add_negation()
        negation.add_restriction("category", "equal_to", "audio")
        self.assertEqual(negation.to_boolean_phrase(), "-category_s:audio")

    def test_double_negation_cancels(self) -> None:
        negation = Scope(_make_setup()).add_negation()
        negation.add_negated_restriction("category", "equal_to", "audio")
        self.assertFalse(negation.negated)
        self.assertEqual(negation.to_boolean_phrase(), "category_s:audio")

    def test_negation_inside_disjunction(self) -> None:
        any_of = Scope(_make_setup()).add_disjunction()
        any_of.add_restriction("price", "less_than", 10)
        negation = any_of.add_negation()
        negation.add_restriction("category", "equal_to", "audio")
        self.assertEqual(any_of.to_boolean_phrase(), "(price_f:[* TO 10.0] OR (*:* -category_s:audio))")

    def test_single_negated_member_carries_its_sign(self) -> None:
        all_of = Scope(_make_setup()).add_conjunction()
        all_of.add_negated_restriction("category", "equal_to", "video")
        self.assertTrue(all_of.negated)
        self.assertEqual(all_of.to_boolean_phrase(), "-category_s:video")
        self.assertEqual(all_of.to_positive_boolean_phrase(), "category_s:video")

    def test_one_member_negated_conjunction_inside_disjunction(self) -> None:
        any_of = Scope(_make_setup()).add_disjunction()
        any_of.add_restriction("price", "less_than", 10)
        any_of.add_conjunction().add_negated_restriction("category", "equal_to", "video")
        self.assertEqual(any_of.to_boolean_phrase(), "(price_f:[* TO 10.0] OR (*:* -category_s:video))")

    def test_single_negated_disjunction_is_not_wrapped_twice(self) -> None:
        outer = Scope(_make_setup()).add_disjunction()
        outer.add_restriction("price", "less_than", 10)
        inner = outer.add_disjunction()
        inner.add_negated_restriction("category", "equal_to", "video")
        self.assertEqual(inner.to_boolean_phrase(), "-category_s:video")
        self.assertEqual(outer.to_boolean_phrase(), "(price_f:[* TO 10.0] OR (*:* -category_s:video))")

    def test_negation_of_one_member_negated_conjunction_cancels(self) -> None:
        negation = Scope(_make_setup()).add_negation()
        negation.add_conjunction().add_negated_restriction("category", "equal_to", "video")
        self.assertFalse(negation.negated)
        self.assertEqual(negation.to_boolean_phrase(), "category_s:video")


class TestDynamicQuery(unittest.TestCase):
    def test_dynamic_restriction(self) -> None:
        scope = Scope(_make_setup())
        scope.dynamic_query("attribute").add_restriction("color", "equal_to", "red")
        self.assertEqual(scope.to_params(), {"fq": [r"attribute_sm\:color:red"]})

    def test_dynamic_negated_restriction(self) -> None:
        scope = Scope(_make_setup())
        scope.dynamic_query("attribute").add_negated_restriction("color", "any_of", ["red", "blue"])
        self.assertEqual(scope.to_params(), {"fq": [r"-attribute_sm\:color:(red OR blue)"]})

    def test_sort_and_facet_need_a_query(self) -> None:
        dynamic = Scope(_make_setup()).dynamic_query("attribute")
        with self.assertRaises(ConfigurationError):
            dynamic.add_sort("color")
        with self.assertRaises(ConfigurationError):
            dynamic.add_field_facet("color")


if __name__ == "__main__":
    unittest.main()
