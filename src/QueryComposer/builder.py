"""Build a ``Query`` from a plain request mapping (as loaded from YAML).

Request layout::

    keywords: wireless headphones
    keyword_options: {minimum_match: 1, field_weights: {title: 3.0}}
    highlight: {fields: [description]}
    with:
      category: electronics           # equal_to
      price: {between: [10, 50]}
    without:
      brand: Acme
    any_of:                           # each block is one OR group
      - {brand: Sony, category: audio}
    all_of:
      - {in_stock: true, stock: {greater_than: 0}}
    text_fields:
      with: {description: bluetooth}
    dynamic:
      attribute:
        with: {color: red}
        facets: {color: {}}
        order_by: [{color: asc}]
    order_by: [{price: desc}, score]
    random: true
    paginate: {page: 2, per_page: 20}
    near: {coordinates: [40.7, -73.9], miles: 5}
    facets:
      category: {limit: 10}
    query_facets:
      price_range:
        cheap: {price: {less_than: 10}}
        mid: {price: {between: [10, 50]}}

Keys are applied in the order above, which is also the order components are
registered in.
"""

from __future__ import annotations

from typing import Any, Mapping

from QueryComposer.config.common import expect_list, expect_mapping
from QueryComposer.config.query import QueryConfig
from QueryComposer.core.dynamic_query import DynamicQuery
from QueryComposer.core.query import Query
from QueryComposer.core.scope import Scope
from QueryComposer.core.setup import FieldSetup

_REQUEST_KEYS = (
    "keywords",
    "keyword_options",
    "highlight",
    "with",
    "without",
    "any_of",
    "all_of",
    "text_fields",
    "dynamic",
    "order_by",
    "random",
    "paginate",
    "near",
    "facets",
    "query_facets",
)
_SCOPE_KEYS = {"with", "without", "any_of", "all_of"}
_DYNAMIC_KEYS = {"with", "without", "facets", "order_by"}


def build_query(request: Mapping[str, Any], setup: FieldSetup, configuration: QueryConfig) -> Query:
    """Populate a new ``Query`` from a request mapping.

    Args:
        request: Request mapping, see module docstring.
        setup: Field setup resolving field names.
        configuration: Query defaults.

    Returns:
        The populated query.

    Raises:
        TypeError: If the request shape is invalid.
        ValueError: If keys are unknown; ``ConfigurationError`` (a
            ``ValueError``) for invalid values.
    """
    expect_mapping(request, "request")
    unknown = set(request) - set(_REQUEST_KEYS)
    if unknown:
        raise ValueError(f"request has unknown keys: {sorted(unknown)}")

    query = Query(setup, configuration)

    if "keywords" in request or "keyword_options" in request or "highlight" in request:
        options = dict(expect_mapping(request.get("keyword_options") or {}, "request.keyword_options"))
        if "highlight" in request:
            options["highlight"] = request["highlight"]
        query.set_keywords(request.get("keywords"), options)

    _apply_scope(query, request, "request")

    if "text_fields" in request:
        block = expect_mapping(request["text_fields"], "request.text_fields")
        _check_keys(block, _SCOPE_KEYS, "request.text_fields")
        _apply_scope(query.add_text_fields_scope(), block, "request.text_fields")

    for base_name, block in expect_mapping(request.get("dynamic") or {}, "request.dynamic").items():
        _apply_dynamic(query.dynamic_query(base_name), block, f"request.dynamic.{base_name}")

    for field_name, direction in _iter_sorts(request.get("order_by") or [], "request.order_by"):
        query.order_by(field_name, direction)
    if request.get("random"):
        query.order_by_random()

    if "paginate" in request:
        window = expect_mapping(request["paginate"], "request.paginate")
        query.paginate(window.get("page", 1), window.get("per_page"))

    if "near" in request:
        near = expect_mapping(request["near"], "request.near")
        query.add_location_restriction(near.get("coordinates"), near.get("miles"))

    for field_name, options in expect_mapping(request.get("facets") or {}, "request.facets").items():
        query.add_field_facet(field_name, expect_mapping(options or {}, f"request.facets.{field_name}"))

    for name, rows in expect_mapping(request.get("query_facets") or {}, "request.query_facets").items():
        facet = query.add_query_facet(name)
        for label, block in expect_mapping(rows, f"request.query_facets.{name}").items():
            _add_restrictions(facet.add_row(label), block, f"request.query_facets.{name}.{label}")

    return query


def _apply_scope(scope: Scope, block: Mapping[str, Any], config_key: str) -> None:
    if "with" in block:
        _add_restrictions(scope, block["with"], f"{config_key}.with")
    if "without" in block:
        _add_restrictions(scope, block["without"], f"{config_key}.without", negated=True)
    for idx, group in enumerate(expect_list(block.get("any_of") or [], f"{config_key}.any_of")):
        _add_restrictions(scope.add_disjunction(), group, f"{config_key}.any_of[{idx}]")
    for idx, group in enumerate(expect_list(block.get("all_of") or [], f"{config_key}.all_of")):
        _add_restrictions(scope.add_conjunction(), group, f"{config_key}.all_of[{idx}]")


def _apply_dynamic(dynamic: DynamicQuery, block: Any, config_key: str) -> None:
    block = expect_mapping(block, config_key)
    _check_keys(block, _DYNAMIC_KEYS, config_key)
    for negated, key in ((False, "with"), (True, "without")):
        for name, kind, value in _iter_restrictions(block.get(key) or {}, f"{config_key}.{key}"):
            dynamic.add_restriction(name, kind, value, negated=negated)
    for name, options in expect_mapping(block.get("facets") or {}, f"{config_key}.facets").items():
        dynamic.add_field_facet(name, expect_mapping(options or {}, f"{config_key}.facets.{name}"))
    for name, direction in _iter_sorts(block.get("order_by") or [], f"{config_key}.order_by"):
        dynamic.add_sort(name, direction)


def _add_restrictions(scope: Scope, block: Any, config_key: str, negated: bool = False) -> None:
    for field_name, kind, value in _iter_restrictions(block, config_key):
        scope.add_restriction(field_name, kind, value, negated=negated)


def _iter_restrictions(block: Any, config_key: str) -> list[tuple[str, str, Any]]:
    """Expand ``{field: value}`` and ``{field: {kind: value}}`` entries."""
    out: list[tuple[str, str, Any]] = []
    for field_name, condition in expect_mapping(block, config_key).items():
        if isinstance(condition, Mapping):
            for kind, value in condition.items():
                out.append((field_name, str(kind), value))
        else:
            out.append((field_name, "equal_to", condition))
    return out


def _iter_sorts(value: Any, config_key: str) -> list[tuple[str, str]]:
    """Expand ``[field, {field: direction}]`` sort lists."""
    out: list[tuple[str, str]] = []
    for idx, item in enumerate(expect_list(value, config_key)):
        if isinstance(item, str):
            out.append((item, "asc"))
            continue
        for field_name, direction in expect_mapping(item, f"{config_key}[{idx}]").items():
            out.append((field_name, str(direction)))
    return out


def _check_keys(block: Mapping[str, Any], allowed: set[str], config_key: str) -> None:
    unknown = set(block) - allowed
    if unknown:
        raise ValueError(f"{config_key} has unknown keys: {sorted(unknown)}")
