"""Field setup: maps domain field names to backend-native fields.

The core treats the setup as a pre-validated collaborator. This module
provides the default implementation used by the configuration layer and the
builder; any object exposing ``field``, ``text_fields``, ``dynamic_field``
and ``type_names`` can stand in for it.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping, Protocol, Sequence

from dateutil import parser as dt_parser

from QueryComposer.core.errors import ConfigurationError, UnrecognizedFieldError


@dataclass(frozen=True, slots=True)
class FieldType:
    """Backend field type.

    Attributes:
        name: Type name used in configuration (``string``, ``text``...).
        suffix: Dynamic-field suffix appended to the indexed name.
        multi_suffix: Suffix for multi-valued fields, empty if unsupported.
    """

    name: str
    suffix: str
    multi_suffix: str = ""

    def to_indexed(self, value: Any) -> str:
        """Convert a domain value into its indexed string form."""
        if self.name == "time":
            return _format_time(value)
        if self.name == "boolean":
            return "true" if value else "false"
        if self.name == "integer":
            return str(int(value))
        if self.name == "float":
            return repr(float(value))
        return str(value)


STRING = FieldType("string", "_s", "_sm")
TEXT = FieldType("text", "_text")
INTEGER = FieldType("integer", "_i", "_im")
FLOAT = FieldType("float", "_f", "_fm")
TIME = FieldType("time", "_d", "_dm")
BOOLEAN = FieldType("boolean", "_b", "_bm")

FIELD_TYPES: dict[str, FieldType] = {t.name: t for t in (STRING, TEXT, INTEGER, FLOAT, TIME, BOOLEAN)}


def field_type(name: str) -> FieldType:
    """Look up a field type by configured name.

    Raises:
        ConfigurationError: If the type name is unknown.
    """
    try:
        return FIELD_TYPES[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown field type: {name}") from None


@dataclass(frozen=True, slots=True)
class Field:
    """A resolved backend field.

    Attributes:
        name: Domain field name.
        type: Backend field type.
        multiple: Whether the field holds several values.
        boost: Optional keyword boost for text fields.
        dynamic_name: Name under a dynamic field template, if any.
    """

    name: str
    type: FieldType
    multiple: bool = False
    boost: float | None = None
    dynamic_name: str | None = None

    def __post_init__(self) -> None:
        if self.multiple and not self.type.multi_suffix:
            raise ConfigurationError(f"Field type {self.type.name} cannot be multi-valued: {self.name}")

    @property
    def indexed_name(self) -> str:
        suffix = self.type.multi_suffix if self.multiple else self.type.suffix
        if self.dynamic_name is not None:
            return f"{self.name}{suffix}:{self.dynamic_name}"
        return f"{self.name}{suffix}"

    @property
    def is_text(self) -> bool:
        return self.type is TEXT

    def to_indexed(self, value: Any) -> str:
        return self.type.to_indexed(value)


class FieldSetup(Protocol):
    """Capability consumed by the core to resolve field references."""

    type_names: Sequence[str]

    def field(self, name: str) -> Field:
        raise NotImplementedError

    def text_fields(self) -> list[Field]:
        raise NotImplementedError

    def dynamic_field(self, base_name: str, name: str) -> Field:
        raise NotImplementedError


@dataclass(slots=True)
class Setup:
    """Default field setup for one or more document types.

    Attributes:
        type_names: Document type names restricted by every query.
        fields: Declared fields keyed by domain name.
        dynamic_fields: Field templates keyed by dynamic base name.
    """

    type_names: tuple[str, ...] = ()
    fields: Mapping[str, Field] = dataclass_field(default_factory=dict)
    dynamic_fields: Mapping[str, Field] = dataclass_field(default_factory=dict)

    @classmethod
    def from_fields(
        cls,
        type_names: Iterable[str],
        fields: Iterable[Field],
        dynamic_fields: Iterable[Field] = (),
    ) -> Setup:
        """Build a setup from field sequences."""
        return cls(
            type_names=tuple(type_names),
            fields={f.name: f for f in fields},
            dynamic_fields={f.name: f for f in dynamic_fields},
        )

    def field(self, name: str) -> Field:
        """Resolve a declared field.

        Raises:
            UnrecognizedFieldError: If no field has this name.
        """
        try:
            return self.fields[name]
        except KeyError:
            raise UnrecognizedFieldError(f"No field configured with name: {name}") from None

    def text_fields(self) -> list[Field]:
        """Return all text fields in declaration order."""
        return [f for f in self.fields.values() if f.is_text]

    def dynamic_field(self, base_name: str, name: str) -> Field:
        """Resolve ``name`` under a dynamic field template.

        The indexed name is the suffixed template name followed by the
        dynamic name, e.g. ``attribute_s:color``.
        """
        try:
            template = self.dynamic_fields[base_name]
        except KeyError:
            raise UnrecognizedFieldError(f"No dynamic field configured with name: {base_name}") from None
        return Field(
            name=base_name,
            type=template.type,
            multiple=template.multiple,
            boost=template.boost,
            dynamic_name=name,
        )


@dataclass(slots=True)
class TextFieldSetup:
    """Restricted view of a setup where only text fields are visible."""

    setup: FieldSetup

    @property
    def type_names(self) -> Sequence[str]:
        return self.setup.type_names

    def field(self, name: str) -> Field:
        resolved = self.setup.field(name)
        if not resolved.is_text:
            raise UnrecognizedFieldError(f"No text field configured with name: {name}")
        return resolved

    def text_fields(self) -> list[Field]:
        return self.setup.text_fields()

    def dynamic_field(self, base_name: str, name: str) -> Field:
        resolved = self.setup.dynamic_field(base_name, name)
        if not resolved.is_text:
            raise UnrecognizedFieldError(f"No dynamic text field configured with name: {base_name}")
        return resolved


def _format_time(value: Any) -> str:
    """Render a time value as UTC ``YYYY-MM-DDTHH:MM:SSZ``."""
    if isinstance(value, str):
        value = dt_parser.parse(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%dT00:00:00Z")
    raise ConfigurationError(f"Cannot convert {value!r} to a time value")
