"""Sort directives and the ordered sort composite."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.params import Params
from QueryComposer.core.setup import Field

_DIRECTIONS = {
    "asc": "asc",
    "ascending": "asc",
    "desc": "desc",
    "descending": "desc",
}


@dataclass(frozen=True, slots=True)
class RandomField:
    """Pseudo-field ordering results randomly."""

    indexed_name: str = "random"


@dataclass(frozen=True, slots=True)
class ScoreField:
    """Pseudo-field ordering results by relevance."""

    indexed_name: str = "score"


SortField = Union[Field, RandomField, ScoreField]


class Sort:
    """One sort directive: a field and a direction."""

    def __init__(self, field: SortField, direction: str = "asc") -> None:
        normalized = _DIRECTIONS.get(str(direction).strip().lower())
        if normalized is None:
            raise ConfigurationError(f"Unknown sort direction: {direction}")
        if isinstance(field, Field) and field.multiple:
            raise ConfigurationError(f"Cannot sort on multi-valued field: {field.name}")
        self.field = field
        self.direction = normalized

    def to_param(self) -> str:
        return f"{self.field.indexed_name} {self.direction}"

    def __repr__(self) -> str:
        return f"Sort({self.to_param()!r})"


class SortComposite:
    """Ordered sort directives rendered as one ``sort`` value.

    The backend reads tie-break precedence from the order inside the value,
    so directives are joined in insertion order.
    """

    def __init__(self) -> None:
        self._sorts: list[Sort] = []

    def add(self, sort: Sort) -> Sort:
        self._sorts.append(sort)
        return sort

    @property
    def sorts(self) -> tuple[Sort, ...]:
        return tuple(self._sorts)

    def __len__(self) -> int:
        return len(self._sorts)

    def to_params(self) -> Params:
        if not self._sorts:
            return {}
        return {"sort": ", ".join(s.to_param() for s in self._sorts)}
