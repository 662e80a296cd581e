"""Query domain configuration: defaults consumed by ``Query``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from QueryComposer.config.common import expect_int, expect_str, get_section

DEFAULT_PER_PAGE = 30
DEFAULT_HIGHLIGHT_PRE_TAG = "@@@hl@@@"
DEFAULT_HIGHLIGHT_POST_TAG = "@@@endhl@@@"


@dataclass(frozen=True, slots=True)
class QueryConfig:
    """Defaults applied when a query does not set a value itself.

    Attributes:
        default_per_page: Rows per page when pagination passes ``None``.
        highlight_pre_tag: Marker inserted before highlighted terms.
        highlight_post_tag: Marker inserted after highlighted terms.
    """

    default_per_page: int = DEFAULT_PER_PAGE
    highlight_pre_tag: str = DEFAULT_HIGHLIGHT_PRE_TAG
    highlight_post_tag: str = DEFAULT_HIGHLIGHT_POST_TAG


def load_query(raw: Mapping[str, Any]) -> QueryConfig:
    """Load query defaults from raw mapping; the section is optional.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "query", required=False)
    return QueryConfig(
        default_per_page=expect_int(
            section.get("default_per_page", DEFAULT_PER_PAGE),
            "query.default_per_page",
        ),
        highlight_pre_tag=expect_str(
            section.get("highlight_pre_tag", DEFAULT_HIGHLIGHT_PRE_TAG),
            "query.highlight_pre_tag",
        ),
        highlight_post_tag=expect_str(
            section.get("highlight_post_tag", DEFAULT_HIGHLIGHT_POST_TAG),
            "query.highlight_post_tag",
        ),
    )


def check_query(config: QueryConfig) -> None:
    """Validate query domain constraints.

    Raises:
        ValueError: If values violate query constraints.
    """
    if config.default_per_page <= 0:
        raise ValueError("query.default_per_page must be positive")
    if not config.highlight_pre_tag or not config.highlight_post_tag:
        raise ValueError("query.highlight_pre_tag and query.highlight_post_tag must not be empty")
