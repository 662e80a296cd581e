"""Composite query root.

A ``Query`` owns the ordered list of every active component. Mutation
operations either update state held by one of the three components every
query has (base query, pagination, sort composite) or register a new
component. ``to_params`` merges the contributions of all components in
registration order (see ``QueryComposer.core.params.merge_params``).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from QueryComposer.core.base_query import BaseQuery
from QueryComposer.core.errors import ConfigurationError, FacetNotFoundError
from QueryComposer.core.facets import FieldFacet, QueryFacet, build_field_facet
from QueryComposer.core.highlighting import Highlighting
from QueryComposer.core.local import Local
from QueryComposer.core.pagination import Pagination
from QueryComposer.core.params import Params
from QueryComposer.core.scope import Scope
from QueryComposer.core.setup import FieldSetup, TextFieldSetup
from QueryComposer.core.sort import RandomField, ScoreField, Sort, SortComposite
from QueryComposer.utils.log import trace_log

if TYPE_CHECKING:
    from QueryComposer.config.query import QueryConfig


class FieldQuery(Scope):
    """Scope that can also declare facets.

    Query facets are registered by name so that facet counts in a response
    can be matched back to the facet that asked for them.
    """

    def __init__(self, setup: FieldSetup) -> None:
        super().__init__(setup)
        self._query_facets: dict[str, QueryFacet] = {}

    @property
    def query_facets(self) -> Mapping[str, QueryFacet]:
        return MappingProxyType(self._query_facets)

    def add_field_facet(self, field_name: str, options: Mapping[str, Any] | None = None) -> FieldFacet:
        """Facet on the values of a field; see ``FieldFacet`` for options."""
        return self.add_component(build_field_facet(self.setup.field(field_name), options))

    def add_query_facet(self, name: str) -> QueryFacet:
        """Register a named query facet and return it for adding rows.

        Raises:
            ConfigurationError: If a query facet with this name exists.
        """
        if name in self._query_facets:
            raise ConfigurationError(f"Query facet already registered: {name}")
        facet = self.add_component(QueryFacet(name, self.setup))
        self._query_facets[name] = facet
        return facet

    def query_facet(self, name: str) -> QueryFacet:
        """Return the query facet registered under exactly this name.

        Raises:
            FacetNotFoundError: If no facet was registered under ``name``.
        """
        try:
            return self._query_facets[name]
        except KeyError:
            raise FacetNotFoundError(f"No query facet registered with name: {name}") from None


class Query(FieldQuery):
    """Root of a search request.

    Every query holds exactly one ``BaseQuery``, one ``Pagination`` and one
    ``SortComposite``, registered first and in that order.

    Args:
        setup: Field setup resolving domain field names.
        configuration: Query defaults (``default_per_page``, highlight tags).
    """

    def __init__(self, setup: FieldSetup, configuration: QueryConfig) -> None:
        super().__init__(setup)
        self.configuration = configuration
        self._base_query: BaseQuery = self.add_component(BaseQuery(setup))
        self._pagination: Pagination = self.add_component(Pagination(configuration.default_per_page))
        self._sort: SortComposite = self.add_component(SortComposite())
        self._highlighting: Highlighting | None = None

    @property
    def keywords(self) -> str | None:
        return self._base_query.keywords

    @property
    def keyword_options(self) -> dict[str, Any]:
        return self._base_query.keyword_options

    @property
    def highlighting(self) -> Highlighting | None:
        return self._highlighting

    @property
    def page(self) -> int:
        """Page this query returns, used to correlate the response window."""
        return self._pagination.page

    @property
    def per_page(self) -> int:
        """Rows per page this query returns."""
        return self._pagination.per_page

    def paginate(self, page: int, per_page: int | None = None) -> None:
        """Set the result window.

        Args:
            page: 1-based page number.
            per_page: Rows per page; ``None`` uses the configured default.

        Raises:
            ConfigurationError: If either value is not a positive integer.
        """
        self._pagination.update(page, per_page)

    def add_sort(self, sort: Sort) -> Sort:
        """Append a sort; earlier sorts take precedence."""
        return self._sort.add(sort)

    def order_by(self, field_name: str, direction: str = "asc") -> Sort:
        """Append a sort on a field, or on relevance when ``field_name`` is ``score``."""
        if field_name == "score":
            return self.add_sort(Sort(ScoreField(), direction))
        return self.add_sort(Sort(self.setup.field(field_name), direction))

    def order_by_random(self) -> Sort:
        """Append random ordering; combines with sorts added before it."""
        return self.add_sort(Sort(RandomField()))

    def add_location_restriction(self, coordinates: Sequence[float], miles: float) -> Local:
        """Restrict results to ``miles`` around ``(latitude, longitude)``.

        The backend takes one point and radius, so when this is called more
        than once the last call's ``lat``/``long``/``radius`` win.
        """
        return self.add_component(Local(coordinates, miles))

    def add_text_fields_scope(self) -> Scope:
        """Register and return a scope where only text fields resolve."""
        return self.add_component(Scope(TextFieldSetup(self.setup)))

    def set_keywords(self, keywords: str | None, options: Mapping[str, Any] | None = None) -> None:
        """Set keywords and keyword options.

        A ``highlight`` entry in ``options`` (a mapping of highlight options,
        or ``True`` for defaults) is taken out of the keyword options and
        registers a ``Highlighting`` component on this query. A later call
        with ``highlight`` replaces that component in place. The caller's
        mapping is not modified.

        Raises:
            ConfigurationError: If the highlight or keyword options are invalid.
        """
        opts = dict(options or {})
        highlighting = self._build_highlighting(opts.pop("highlight", None))
        self._base_query.keyword_options = opts
        self._base_query.keywords = keywords
        if highlighting is not None:
            self._register_highlighting(highlighting)

    def to_params(self) -> Params:
        params = super().to_params()
        trace_log.debug("Serialized query: components=%d keys=%d", len(self._components), len(params))
        return params

    def _build_highlighting(self, highlight: Any) -> Highlighting | None:
        if highlight is None or highlight is False:
            return None
        if highlight is True:
            highlight = {}
        if not isinstance(highlight, Mapping):
            raise ConfigurationError(f"highlight must be a mapping of options or true, got {highlight!r}")
        options = dict(highlight)
        field_names = options.pop("fields", None) or ()
        if isinstance(field_names, str):
            field_names = (field_names,)
        return Highlighting(
            [self.setup.field(name) for name in field_names],
            options,
            pre_tag=self.configuration.highlight_pre_tag,
            post_tag=self.configuration.highlight_post_tag,
        )

    def _register_highlighting(self, highlighting: Highlighting) -> None:
        if self._highlighting is None:
            self.add_component(highlighting)
        else:
            index = self._components.index(self._highlighting)
            self._components[index] = highlighting
            trace_log.debug("Replaced highlighting component at position %d", index)
        self._highlighting = highlighting
