"""Field-kind agnostic serialization helpers shared by every schema generator."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.models import (
    FieldKind,
    FieldSpec,
    RenderWarning,
    RuleKind,
    SchemaDefinition,
    SerializationRule,
)
from ..core.settings import SettingsError

logger = logging.getLogger(__name__)

PathExists = Callable[[str], bool]

_LINE_SEPARATORS = "\x85\u2028\u2029"


@dataclass(frozen=True)
class SelectedField:
    """A field that passed its suppression rule, with the value to render."""

    spec: FieldSpec
    value: Any


def path_exists(path: str) -> bool:
    """Default filesystem probe for ``only_if_path_exists`` fields."""
    return Path(path).exists()


def render_sequence(values: Iterable[str], indent: int = 2, bullet: str = "- ") -> str:
    """Join values into an indented block, one ``bullet`` line per value.

    Args:
        values: Items to render, in order
        indent: Number of spaces before each bullet
        bullet: Marker placed before each item

    Returns:
        Block text without a trailing newline; empty for no values
    """
    pad = " " * indent
    return "\n".join(f"{pad}{bullet}{value}" for value in values)


def parse_mapping_list(
    entries: Iterable[str],
) -> tuple[list[tuple[str, str]], list[RenderWarning]]:
    """Parse ``TYPE:TREATMENT`` entries into pairs.

    Entries that do not hold exactly one ``:`` between two non-empty tokens
    are skipped and reported; the remaining entries are still parsed.

    Args:
        entries: Raw mapping entries

    Returns:
        Tuple of (pairs in input order, warnings for rejected entries)
    """
    pairs: list[tuple[str, str]] = []
    warnings: list[RenderWarning] = []

    for entry in entries:
        parts = entry.split(":")
        if len(parts) == 2:
            name, treatment = (part.strip() for part in parts)
            if name and treatment:
                pairs.append((name, treatment))
                continue
        logger.debug(f"Invalid mapping entry {entry!r} (expected TYPE:TREATMENT)")
        warnings.append(RenderWarning(scope="mapping", message=f"invalid entry: {entry}"))

    return pairs, warnings


def require_single_line(key: str, value: str) -> str:
    """Return ``value`` if it can be written on a single output line.

    Raises:
        SettingsError: If ``value`` holds a control character or line separator
    """
    for ch in value:
        if ord(ch) < 0x20 or ord(ch) == 0x7F or ch in _LINE_SEPARATORS:
            raise SettingsError(f"field {key!r} contains control character {ch!r}")
    return value


def render_bool_token(value: bool, true_token: str, false_token: str) -> str:
    """Render a boolean as one of exactly two tokens."""
    return true_token if value else false_token


def should_emit(
    rule: SerializationRule, value: Any, exists: PathExists = path_exists
) -> bool:
    """Evaluate a suppression rule against a field value.

    Args:
        rule: Rule declared by the field
        value: Current value (parsed pairs for mapping fields)
        exists: Filesystem probe used by ``only_if_path_exists``

    Returns:
        True when the field contributes output
    """
    kind = rule.kind
    if kind is RuleKind.ALWAYS:
        return True
    if kind is RuleKind.ONLY_IF_NON_EMPTY:
        return len(value) > 0
    if kind is RuleKind.ONLY_IF_DIFFERENT_FROM_DEFAULT:
        # string comparison: "0.0" differs from "0"
        return value != "" and value != rule.reference
    if kind is RuleKind.ONLY_IF_TRUE:
        return value is True
    if kind is RuleKind.ONLY_IF_FALSE:
        return value is False
    if kind is RuleKind.ONLY_IF_PATH_EXISTS:
        return bool(value) and exists(value)
    raise ValueError(f"Unsupported serialization rule: {rule}")


def select_fields(
    schema: SchemaDefinition,
    settings: Mapping[str, Any],
    exists: PathExists = path_exists,
) -> tuple[list[SelectedField], list[RenderWarning]]:
    """Apply every field's rule in schema order.

    Mapping fields are parsed first; their rule sees the surviving pairs.

    Returns:
        Tuple of (fields to render in schema order, parse warnings)
    """
    selected: list[SelectedField] = []
    warnings: list[RenderWarning] = []

    for spec in schema.fields:
        value = settings[spec.key]
        if spec.kind is FieldKind.MAPPING:
            value, entry_warnings = parse_mapping_list(value)
            warnings.extend(entry_warnings)

        if should_emit(spec.rule, value, exists):
            selected.append(SelectedField(spec=spec, value=value))
        else:
            logger.debug(f"{schema.tool}: suppressed {spec.key} under {spec.rule}")

    return selected, warnings
