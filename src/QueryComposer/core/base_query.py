"""Primary keyword clause of a query."""

from __future__ import annotations

from typing import Any, Mapping

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.params import Params
from QueryComposer.core.restriction import escape
from QueryComposer.core.setup import Field, FieldSetup
from QueryComposer.utils.log import log

KEYWORD_OPTIONS = frozenset({"fields", "field_weights", "query_phrase_slop", "minimum_match", "phrase_fields"})


class BaseQuery:
    """Keywords plus keyword-level options.

    Without keywords the query matches all documents of the setup's types.
    With keywords it runs a dismax query over the setup's text fields.

    Recognized keyword options:

    - ``fields``: restrict the keyword search to these text fields
    - ``field_weights``: mapping of field name to boost
    - ``query_phrase_slop``: proximity tolerance for phrases (``ps``)
    - ``minimum_match``: required term fraction (``mm``)
    - ``phrase_fields``: mapping of field name to phrase boost (``pf``)
    """

    def __init__(self, setup: FieldSetup) -> None:
        self.setup = setup
        self.keywords: str | None = None
        self._keyword_options: dict[str, Any] = {}

    @property
    def keyword_options(self) -> dict[str, Any]:
        return dict(self._keyword_options)

    @keyword_options.setter
    def keyword_options(self, options: Mapping[str, Any] | None) -> None:
        opts: dict[str, Any] = {}
        for key, value in (options or {}).items():
            if key not in KEYWORD_OPTIONS:
                log.warning("Ignoring unknown keyword option: %s", key)
                continue
            opts[key] = value
        for name in self._named_fields(opts):
            self.setup.field(name)
        self._keyword_options = opts

    def to_params(self) -> Params:
        params: Params = {"fl": "* score"}
        types_phrase = self._types_phrase()
        if types_phrase:
            params["fq"] = [types_phrase]
        if not self.keywords:
            params["q"] = "*:*"
            return params

        params["q"] = self.keywords
        params["defType"] = "dismax"
        query_fields = self._query_fields()
        if query_fields:
            params["qf"] = query_fields
        opts = self._keyword_options
        if "query_phrase_slop" in opts:
            params["ps"] = opts["query_phrase_slop"]
        if "minimum_match" in opts:
            params["mm"] = opts["minimum_match"]
        if opts.get("phrase_fields"):
            params["pf"] = " ".join(
                _boosted(self.setup.field(name), boost) for name, boost in opts["phrase_fields"].items()
            )
        return params

    def _query_fields(self) -> str:
        opts = self._keyword_options
        if opts.get("fields"):
            fields = [self.setup.field(name) for name in opts["fields"]]
        else:
            fields = self.setup.text_fields()
        weights = opts.get("field_weights") or {}
        return " ".join(_boosted(f, weights.get(f.name, f.boost)) for f in fields)

    def _types_phrase(self) -> str:
        type_names = list(self.setup.type_names)
        if not type_names:
            return ""
        if len(type_names) == 1:
            return f"type:{escape(type_names[0])}"
        return "type:(" + " OR ".join(escape(name) for name in type_names) + ")"

    @staticmethod
    def _named_fields(opts: Mapping[str, Any]) -> list[str]:
        names: list[str] = []
        fields = opts.get("fields") or ()
        if isinstance(fields, str):
            raise ConfigurationError("keyword option 'fields' must be a list of field names")
        names.extend(fields)
        for key in ("field_weights", "phrase_fields"):
            value = opts.get(key) or {}
            if not isinstance(value, Mapping):
                raise ConfigurationError(f"keyword option '{key}' must map field names to boosts")
            names.extend(value)
        return names


def _boosted(field: Field, boost: Any) -> str:
    if boost is None:
        return field.indexed_name
    return f"{field.indexed_name}^{float(boost)}"
