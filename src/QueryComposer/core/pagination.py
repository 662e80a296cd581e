"""Page/per-page window translated to start/rows at serialization."""

from __future__ import annotations

from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.params import Params


class Pagination:
    """Result window of a query.

    Attributes:
        default_per_page: Per-page value used when ``None`` is assigned.
    """

    def __init__(self, default_per_page: int, page: int = 1, per_page: int | None = None) -> None:
        self.default_per_page = _positive_int(default_per_page, "default_per_page")
        self._page = 1
        self._per_page = self.default_per_page
        self.page = page
        self.per_page = per_page

    @property
    def page(self) -> int:
        return self._page

    @page.setter
    def page(self, value: int | None) -> None:
        self._page = 1 if value is None else _positive_int(value, "page")

    @property
    def per_page(self) -> int:
        return self._per_page

    @per_page.setter
    def per_page(self, value: int | None) -> None:
        self._per_page = self.default_per_page if value is None else _positive_int(value, "per_page")

    def update(self, page: int | None, per_page: int | None) -> None:
        """Replace both values, validating them before either is assigned."""
        new_page = 1 if page is None else _positive_int(page, "page")
        new_per_page = self.default_per_page if per_page is None else _positive_int(per_page, "per_page")
        self._page, self._per_page = new_page, new_per_page

    @property
    def offset(self) -> int:
        return (self._page - 1) * self._per_page

    @property
    def limit(self) -> int:
        return self._per_page

    def to_params(self) -> Params:
        return {"start": self.offset, "rows": self.limit}


def _positive_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {value}")
    return value
