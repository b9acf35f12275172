"""Settings snapshots: building, checking and coercing field values."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .models import FieldKind, FieldSpec, SchemaDefinition

logger = logging.getLogger(__name__)

Settings = dict[str, Any]

_TRUE_TOKENS = {"true", "1", "yes", "on"}
_FALSE_TOKENS = {"false", "0", "no", "off"}


class SettingsError(ValueError):
    """Raised when a settings snapshot does not match its schema."""


def _kind_matches(spec: FieldSpec, value: Any) -> bool:
    if spec.kind is FieldKind.BOOL:
        return isinstance(value, bool)
    if spec.kind is FieldKind.STRING:
        return isinstance(value, str)
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


def check_settings(schema: SchemaDefinition, settings: Mapping[str, Any]) -> None:
    """Ensure every declared field is present with a value of its kind.

    Raises:
        SettingsError: On a missing field, a mis-typed value or an undeclared key
    """
    declared = set(schema.keys)
    unknown = sorted(set(settings) - declared)
    if unknown:
        raise SettingsError(
            f"{schema.tool} {schema.version}: unknown field(s): {', '.join(unknown)}"
        )

    for spec in schema.fields:
        if spec.key not in settings:
            raise SettingsError(f"{schema.tool} {schema.version}: missing field {spec.key!r}")
        value = settings[spec.key]
        if not _kind_matches(spec, value):
            raise SettingsError(
                f"{schema.tool} {schema.version}: field {spec.key!r} expects "
                f"{spec.kind.value}, got {type(value).__name__} {value!r}"
            )


def build_settings(
    schema: SchemaDefinition, overrides: Mapping[str, Any] | None = None
) -> Settings:
    """Overlay ``overrides`` on the schema defaults and validate the result."""
    settings = schema.defaults()
    for key, value in (overrides or {}).items():
        settings[key] = list(value) if isinstance(value, tuple) else value
    check_settings(schema, settings)
    return settings


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(";") if item.strip()]


def coerce_value(spec: FieldSpec, raw: str) -> Any:
    """Convert a command-line string into a value of the field's kind.

    Booleans take true/1/yes/on or false/0/no/off in any case. Lists and
    mappings use the ``;`` separated list convention.
    """
    if spec.kind is FieldKind.BOOL:
        lowered = raw.strip().lower()
        if lowered in _TRUE_TOKENS:
            return True
        if lowered in _FALSE_TOKENS:
            return False
        raise SettingsError(f"field {spec.key!r} expects a boolean, got {raw!r}")
    if spec.kind is FieldKind.STRING:
        return raw
    return _split_list(raw)


def load_settings_file(schema: SchemaDefinition, path: Path) -> dict[str, Any]:
    """Read field overrides from a YAML mapping.

    Numeric scalars given for string fields are converted with ``str()`` so a
    threshold written as ``85`` reads the same as ``"85"``.
    """
    logger.debug(f"Loading settings overrides from {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    overrides: dict[str, Any] = {}
    for key, value in data.items():
        key = str(key)
        if key in schema.keys:
            spec = schema.field(key)
            if (
                spec.kind is FieldKind.STRING
                and isinstance(value, (int, float))
                and not isinstance(value, bool)
            ):
                value = str(value)
        overrides[key] = value
    return overrides
