"""Restrictions, sorts and facets on dynamic fields (``attribute_s:color``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.facets import FieldFacet, build_field_facet
from QueryComposer.core.restriction import Restriction, restriction_type
from QueryComposer.core.sort import Sort

if TYPE_CHECKING:
    from QueryComposer.core.scope import RestrictionKind, Scope


class DynamicQuery:
    """Resolves field names against one dynamic field template.

    Components are registered into the scope that created this helper.
    Sorts and facets are only available when that scope is a query.
    """

    def __init__(self, base_name: str, scope: Scope) -> None:
        self.base_name = base_name
        self._scope = scope

    def add_restriction(self, name: str, kind: RestrictionKind, value: Any, negated: bool = False) -> Restriction:
        restriction_class = restriction_type(kind) if isinstance(kind, str) else kind
        field = self._scope.setup.dynamic_field(self.base_name, name)
        return self._scope.add_component(restriction_class(field, value, negated))

    def add_negated_restriction(self, name: str, kind: RestrictionKind, value: Any) -> Restriction:
        return self.add_restriction(name, kind, value, negated=True)

    def add_sort(self, name: str, direction: str = "asc") -> Sort:
        add_sort = self._query_method("add_sort")
        return add_sort(Sort(self._scope.setup.dynamic_field(self.base_name, name), direction))

    def add_field_facet(self, name: str, options: Mapping[str, Any] | None = None) -> FieldFacet:
        self._query_method("add_field_facet")
        facet = build_field_facet(self._scope.setup.dynamic_field(self.base_name, name), options)
        return self._scope.add_component(facet)

    def _query_method(self, name: str) -> Any:
        method = getattr(self._scope, name, None)
        if not callable(method):
            raise ConfigurationError(f"{name} on dynamic field {self.base_name} needs a query, not a nested scope")
        return method
