"""Parameter contributors and the merge fold.

Every query component exposes ``to_params()`` returning its own slice of the
final parameter mapping. Serialization runs in two phases:

1. ``collect_params`` asks each component for its mapping, in registration
   order.
2. ``merge_params`` folds those patches into one mapping.

Precedence rule of the fold:

- scalar values: the later patch wins
- list values: concatenated in patch order, never overwritten
- list against scalar: the scalar is promoted to a one-element list first
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol, Union

ParamValue = Union[str, int, float, list[Any]]
Params = dict[str, ParamValue]


class ParameterContributor(Protocol):
    """Anything that contributes a subset of the output parameters."""

    def to_params(self) -> Params:
        """Return this component's contribution.

        Must depend only on the component's own state and may be empty.
        """
        raise NotImplementedError


def collect_params(components: Iterable[ParameterContributor]) -> list[Params]:
    """Collect each component's parameters, preserving registration order."""
    return [component.to_params() for component in components]


def merge_params(patches: Iterable[Mapping[str, Any]]) -> Params:
    """Fold parameter patches into one mapping.

    Args:
        patches: Parameter mappings in registration order.

    Returns:
        Merged mapping. Lists in the result are fresh copies.
    """
    merged: Params = {}
    for patch in patches:
        for key, value in patch.items():
            if key not in merged:
                merged[key] = list(value) if _is_list(value) else value
                continue
            current = merged[key]
            if _is_list(current) or _is_list(value):
                merged[key] = _as_list(current) + _as_list(value)
            else:
                merged[key] = value
    return merged


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _as_list(value: Any) -> list[Any]:
    if _is_list(value):
        return list(value)
    return [value]
