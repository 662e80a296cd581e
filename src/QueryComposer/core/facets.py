"""Facet directives.

Field facets count documents per distinct value of a field. Query facets
count documents per arbitrary boolean row; each query facet carries a name so
that the counts returned by the backend (keyed by the row phrase) can be
matched back to the facet and row that requested them.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.params import Params
from QueryComposer.core.scope import Conjunction
from QueryComposer.core.setup import TIME, Field, FieldSetup

_FIELD_FACET_OPTIONS = frozenset({"sort", "limit", "minimum_count", "zeros", "offset", "prefix"})
_DATE_FACET_OPTIONS = _FIELD_FACET_OPTIONS | {"time_range", "time_interval", "other"}
_FACET_SORTS = frozenset({"count", "index"})
_DATE_OTHERS = frozenset({"before", "after", "between", "none", "all"})

DEFAULT_TIME_INTERVAL = 86400


class FieldFacet:
    """Facet over the distinct values of one field."""

    allowed_options = _FIELD_FACET_OPTIONS

    def __init__(self, field: Field, options: Mapping[str, Any] | None = None) -> None:
        opts = dict(options or {})
        unknown = set(opts) - self.allowed_options
        if unknown:
            raise ConfigurationError(f"Unknown facet options for {field.name}: {sorted(unknown)}")
        sort = opts.get("sort")
        if sort is not None and sort not in _FACET_SORTS:
            raise ConfigurationError(f"Facet sort must be one of {sorted(_FACET_SORTS)}, got {sort!r}")
        self.field = field
        self.options = opts

    def to_params(self) -> Params:
        params: Params = {"facet": "true", "facet.field": [self.field.indexed_name]}
        params.update(self._common_params())
        return params

    def _common_params(self) -> Params:
        params: Params = {}
        if "sort" in self.options:
            params[self._param_key("sort")] = self.options["sort"]
        if "limit" in self.options:
            params[self._param_key("limit")] = self.options["limit"]
        if "offset" in self.options:
            params[self._param_key("offset")] = self.options["offset"]
        if "prefix" in self.options:
            params[self._param_key("prefix")] = self.options["prefix"]
        if "minimum_count" in self.options:
            params[self._param_key("mincount")] = self.options["minimum_count"]
        elif self.options.get("zeros"):
            params[self._param_key("mincount")] = 0
        else:
            params[self._param_key("mincount")] = 1
        return params

    def _param_key(self, name: str) -> str:
        return f"f.{self.field.indexed_name}.facet.{name}"


class DateFieldFacet(FieldFacet):
    """Facet over fixed-width time buckets of a time field."""

    allowed_options = _DATE_FACET_OPTIONS

    def __init__(self, field: Field, options: Mapping[str, Any] | None = None) -> None:
        super().__init__(field, options)
        time_range = self.options.get("time_range")
        if (
            isinstance(time_range, (str, bytes))
            or not isinstance(time_range, Sequence)
            or len(time_range) != 2
        ):
            raise ConfigurationError(f"time_range for {field.name} must be a (start, end) pair")
        interval = self.options.get("time_interval", DEFAULT_TIME_INTERVAL)
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise ConfigurationError(f"time_interval for {field.name} must be a positive number of seconds")
        others = self.options.get("other", ())
        if isinstance(others, str):
            others = (others,)
        unknown = set(others) - _DATE_OTHERS
        if unknown:
            raise ConfigurationError(f"Unknown date facet 'other' values: {sorted(unknown)}")
        self.time_range = tuple(time_range)
        self.time_interval = interval
        self.others = tuple(others)

    def to_params(self) -> Params:
        start, end = self.time_range
        params: Params = {
            "facet": "true",
            "facet.date": [self.field.indexed_name],
            self._param_key("date.start"): self.field.to_indexed(start),
            self._param_key("date.end"): self.field.to_indexed(end),
            self._param_key("date.gap"): f"+{self.time_interval}SECONDS",
        }
        if self.others:
            params[self._param_key("date.other")] = list(self.others)
        params.update(self._common_params())
        return params


def build_field_facet(field: Field, options: Mapping[str, Any] | None = None) -> FieldFacet:
    """Pick the facet variant for a field and its options.

    Raises:
        ConfigurationError: If ``time_range`` is used on a non-time field.
    """
    if options and "time_range" in options:
        if field.type is not TIME:
            raise ConfigurationError(f"time_range facets need a time field: {field.name}")
        return DateFieldFacet(field, options)
    return FieldFacet(field, options)


class QueryFacetRow(Conjunction):
    """One labelled row of a query facet; its members are AND-ed."""

    def __init__(self, label: Any, setup: FieldSetup) -> None:
        super().__init__(setup)
        self.label = label

    def __repr__(self) -> str:
        return f"QueryFacetRow({self.label!r})"


class QueryFacet:
    """Named facet made of boolean rows.

    The name is the key under which the owning query registers the facet.
    """

    def __init__(self, name: str, setup: FieldSetup) -> None:
        self.name = name
        self.setup = setup
        self._rows: list[QueryFacetRow] = []

    @property
    def rows(self) -> tuple[QueryFacetRow, ...]:
        return tuple(self._rows)

    def add_row(self, label: Any) -> QueryFacetRow:
        row = QueryFacetRow(label, self.setup)
        self._rows.append(row)
        return row

    def row_for_phrase(self, phrase: str) -> QueryFacetRow | None:
        """Return the row whose boolean phrase equals a response key."""
        for row in self._rows:
            if row.to_boolean_phrase() == phrase:
                return row
        return None

    def to_params(self) -> Params:
        phrases = [p for p in (row.to_boolean_phrase() for row in self._rows) if p]
        if not phrases:
            return {}
        return {"facet": "true", "facet.query": phrases}

    def __repr__(self) -> str:
        return f"QueryFacet({self.name!r}, rows={len(self._rows)})"
