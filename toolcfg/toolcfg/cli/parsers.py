"""CLI argument parsers and validators."""

from __future__ import annotations

from typing import Any

import typer

from ..core.models import SchemaDefinition
from ..core.settings import SettingsError, coerce_value


def parse_override(value: str) -> tuple[str, str]:
    """Parse a settings override in format KEY=VALUE."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, raw = value.split("=", 1)
    key = key.strip()
    if not key:
        raise typer.BadParameter(f"Missing key in override: {value!r}")
    return key, raw


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_overrides(schema: SchemaDefinition, values: list[str]) -> dict[str, Any]:
    """Parse repeated KEY=VALUE overrides into values of each field's kind."""
    overrides: dict[str, Any] = {}
    for key, raw in map(parse_override, values):
        if key not in schema.keys:
            raise typer.BadParameter(
                f"Unknown {schema.tool} {schema.version} field: {key!r}"
            )
        try:
            overrides[key] = coerce_value(schema.field(key), raw)
        except SettingsError as e:
            raise typer.BadParameter(str(e)) from e
    return overrides
