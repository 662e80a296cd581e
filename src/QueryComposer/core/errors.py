"""Exception types raised by the query composition core."""

from __future__ import annotations


class QueryComposerError(Exception):
    """Base class for all QueryComposer errors."""


class ConfigurationError(QueryComposerError, ValueError):
    """Invalid argument passed to a query mutation operation.

    Raised at call time so the caller can correct the argument; never
    deferred to serialization.
    """


class UnrecognizedFieldError(QueryComposerError, LookupError):
    """Field name cannot be resolved by the field setup."""


class FacetNotFoundError(QueryComposerError, LookupError):
    """No query facet was registered under the requested name."""
