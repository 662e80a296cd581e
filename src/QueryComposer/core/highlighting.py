"""Result-snippet highlighting directives."""

from __future__ import annotations

from typing import Any, Mapping

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.params import Params
from QueryComposer.core.setup import Field

DEFAULT_PRE_TAG = "@@@hl@@@"
DEFAULT_POST_TAG = "@@@endhl@@@"

_OPTION_PARAMS = {
    "max_snippets": "hl.snippets",
    "fragment_size": "hl.fragsize",
    "merge_contiguous_fragments": "hl.mergeContiguous",
    "phrase_highlighter": "hl.usePhraseHighlighter",
    "require_field_match": "hl.requireFieldMatch",
}
_BOOLEAN_OPTIONS = frozenset({"merge_contiguous_fragments", "phrase_highlighter", "require_field_match"})


class Highlighting:
    """Highlighting component, registered only when highlighting is requested.

    Args:
        fields: Resolved fields to highlight; empty means backend defaults.
        options: Remaining highlight options (``max_snippets``...).
        pre_tag: Marker inserted before a highlighted term.
        post_tag: Marker inserted after a highlighted term.
    """

    def __init__(
        self,
        fields: list[Field] | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        pre_tag: str = DEFAULT_PRE_TAG,
        post_tag: str = DEFAULT_POST_TAG,
    ) -> None:
        opts = dict(options or {})
        unknown = set(opts) - set(_OPTION_PARAMS)
        if unknown:
            raise ConfigurationError(f"Unknown highlight options: {sorted(unknown)}")
        self.fields = list(fields or [])
        self.options = opts
        self.pre_tag = pre_tag
        self.post_tag = post_tag

    def to_params(self) -> Params:
        params: Params = {
            "hl": "on",
            "hl.simple.pre": self.pre_tag,
            "hl.simple.post": self.post_tag,
        }
        if self.fields:
            params["hl.fl"] = [f.indexed_name for f in self.fields]
        for option, key in _OPTION_PARAMS.items():
            if option not in self.options:
                continue
            value = self.options[option]
            if option in _BOOLEAN_OPTIONS:
                value = "true" if value else "false"
            params[key] = value
        return params
