"""Field setup configuration: document types and field declarations.

Example::

    setup:
      type_names: [Product]
      fields:
        title: {type: text, boost: 2.0}
        description: text
        category: string
        tags: {type: string, multiple: true}
      dynamic_fields:
        attribute: string
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from QueryComposer.config.common import (
    expect_bool,
    expect_float,
    expect_mapping,
    expect_str,
    expect_str_list,
    get_section,
)
from QueryComposer.core.errors import ConfigurationError
from QueryComposer.core.setup import Field, Setup, field_type

_FIELD_KEYS = {"type", "multiple", "boost"}


@dataclass(frozen=True, slots=True)
class SetupConfig:
    """Validated field setup declarations."""

    type_names: tuple[str, ...]
    fields: tuple[Field, ...]
    dynamic_fields: tuple[Field, ...]

    def build_setup(self) -> Setup:
        return Setup.from_fields(self.type_names, self.fields, self.dynamic_fields)


def load_setup(raw: Mapping[str, Any]) -> SetupConfig:
    """Load field setup from raw mapping; the section is optional.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If a field declaration is invalid.
    """
    section = get_section(raw, "setup", required=False)
    type_names = tuple(
        name.strip()
        for name in expect_str_list(section.get("type_names", []), "setup.type_names")
        if name.strip()
    )
    fields = _parse_fields(section.get("fields", {}), "setup.fields")
    dynamic_fields = _parse_fields(section.get("dynamic_fields", {}), "setup.dynamic_fields")
    return SetupConfig(type_names=type_names, fields=fields, dynamic_fields=dynamic_fields)


def check_setup(config: SetupConfig) -> None:
    """Validate setup domain constraints.

    Raises:
        ValueError: If values violate setup constraints.
    """
    if len(set(config.type_names)) != len(config.type_names):
        raise ValueError("setup.type_names must not contain duplicates")
    for field in config.fields + config.dynamic_fields:
        if field.boost is not None and not field.is_text:
            raise ValueError(f"boost is only supported on text fields: {field.name}")


def _parse_fields(value: Any, config_key: str) -> tuple[Field, ...]:
    declarations = expect_mapping(value, config_key)
    return tuple(_parse_field(name, decl, f"{config_key}.{name}") for name, decl in declarations.items())


def _parse_field(name: str, value: Any, config_key: str) -> Field:
    """Parse ``name: type`` or ``name: {type, multiple, boost}``."""
    if isinstance(value, str):
        value = {"type": value}
    decl = expect_mapping(value, config_key)
    unknown = set(decl) - _FIELD_KEYS
    if unknown:
        raise ValueError(f"{config_key} has unknown keys: {sorted(unknown)}")
    if "type" not in decl:
        raise ValueError(f"Missing required config: {config_key}.type")
    boost = decl.get("boost")
    try:
        return Field(
            name=name,
            type=field_type(expect_str(decl["type"], f"{config_key}.type")),
            multiple=expect_bool(decl.get("multiple", False), f"{config_key}.multiple"),
            boost=None if boost is None else expect_float(boost, f"{config_key}.boost"),
        )
    except ConfigurationError as e:
        raise ValueError(f"{config_key}: {e}") from e
