"""Shape checks shared by config loading and request building.

Every helper takes the dotted key of the value it checks (``log.level``,
``request.facets.category``) so errors point at the offending entry.
Wrong types raise ``TypeError``; missing or out-of-range values raise
``ValueError``.
"""

from __future__ import annotations

from typing import Any, Collection, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return the ``key`` section of a root mapping.

    A missing optional section reads as an empty mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    return expect_mapping(section, key)


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Integers only; ``True``/``False`` are rejected even though they are ints."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_float(value: Any, config_key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{config_key} must be a number")
    return float(value)


def expect_choice(value: Any, choices: Collection[str], config_key: str) -> str:
    """Return ``value`` upper-cased if it names one of ``choices``."""
    name = expect_str(value, config_key).strip().upper()
    if name not in choices:
        raise ValueError(f"{config_key} must be one of {sorted(choices)}, got {value!r}")
    return name


def expect_mapping(value: Any, config_key: str) -> Mapping[str, Any]:
    """Mapping with string keys, as YAML objects load."""
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    for key in value:
        if not isinstance(key, str):
            raise TypeError(f"{config_key} keys must be strings, got {key!r}")
    return value


def expect_list(value: Any, config_key: str) -> list[Any]:
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    return value


def expect_str_list(value: Any, config_key: str) -> list[str]:
    return [expect_str(item, f"{config_key}[{idx}]") for idx, item in enumerate(expect_list(value, config_key))]
