"""Leaf restrictions: single-field filter conditions.

A restriction renders as a boolean phrase such as ``category_s:electronics``
or ``price_f:[10.0 TO 50.0]``. At the top level of a scope each restriction
contributes its own ``fq`` clause, so filters never affect relevance.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.params import Params
from QueryComposer.core.setup import Field

_RE_SPECIAL = re.compile(r'([+\-&|!(){}\[\]^"~*?:\\/])')
_RE_WHITESPACE = re.compile(r"\s")


def escape(text: str) -> str:
    """Escape a term for the backend boolean syntax.

    Terms containing whitespace are quoted as a phrase instead of escaped.
    """
    if _RE_WHITESPACE.search(text):
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return _RE_SPECIAL.sub(r"\\\1", text)


class Restriction:
    """Base restriction on one field.

    Subclasses implement ``_value_phrase`` to render the right-hand side.
    """

    def __init__(self, field: Field, value: Any, negated: bool = False) -> None:
        self.field = field
        self.value = value
        self._negated = negated

    @property
    def negated(self) -> bool:
        return self._negated

    def to_params(self) -> Params:
        return {"fq": [self.to_boolean_phrase()]}

    def to_boolean_phrase(self) -> str:
        phrase = self.to_positive_boolean_phrase()
        return f"-{phrase}" if self.negated else phrase

    def to_positive_boolean_phrase(self) -> str:
        return f"{escape(self.field.indexed_name)}:{self._value_phrase()}"

    def _value_phrase(self) -> str:
        raise NotImplementedError

    def _solr_value(self, value: Any) -> str:
        return escape(self.field.to_indexed(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field.name!r}, {self.value!r}, negated={self._negated})"


class EqualTo(Restriction):
    """Field equals value. A ``None`` value means the field is absent."""

    @property
    def negated(self) -> bool:
        # field:[* TO *] matches "has a value", so None flips the sign
        return self._negated != (self.value is None)

    def _value_phrase(self) -> str:
        if self.value is None:
            return "[* TO *]"
        return self._solr_value(self.value)


class LessThan(Restriction):
    def _value_phrase(self) -> str:
        return f"[* TO {self._solr_value(self.value)}]"


class GreaterThan(Restriction):
    def _value_phrase(self) -> str:
        return f"[{self._solr_value(self.value)} TO *]"


class Between(Restriction):
    """Inclusive range; value is a ``(low, high)`` pair."""

    def __init__(self, field: Field, value: Any, negated: bool = False) -> None:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 2:
            raise ConfigurationError(f"between restriction on {field.name} needs a (low, high) pair, got {value!r}")
        super().__init__(field, tuple(value), negated)

    def _value_phrase(self) -> str:
        low, high = self.value
        return f"[{self._solr_value(low)} TO {self._solr_value(high)}]"


class _MultiValue(Restriction):
    _joiner = ""

    def __init__(self, field: Field, value: Any, negated: bool = False) -> None:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or not value:
            raise ConfigurationError(f"{type(self).__name__} restriction on {field.name} needs a non-empty list")
        super().__init__(field, tuple(value), negated)

    def _value_phrase(self) -> str:
        joined = f" {self._joiner} ".join(self._solr_value(v) for v in self.value)
        return f"({joined})"


class AnyOf(_MultiValue):
    _joiner = "OR"


class AllOf(_MultiValue):
    _joiner = "AND"


RESTRICTION_TYPES: dict[str, type[Restriction]] = {
    "equal_to": EqualTo,
    "less_than": LessThan,
    "greater_than": GreaterThan,
    "between": Between,
    "any_of": AnyOf,
    "all_of": AllOf,
}


def restriction_type(name: str) -> type[Restriction]:
    """Resolve a restriction kind by name.

    Raises:
        ConfigurationError: If the name is not a known restriction kind.
    """
    try:
        return RESTRICTION_TYPES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown restriction type: {name}") from None
