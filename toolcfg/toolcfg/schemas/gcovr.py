"""gcovr 7.0 schema and ``key = value`` configuration generator."""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..core.models import (
    ALWAYS,
    ONLY_IF_FALSE,
    ONLY_IF_NON_EMPTY,
    ONLY_IF_PATH_EXISTS,
    ONLY_IF_TRUE,
    FieldKind,
    FieldSpec,
    RenderWarning,
    SchemaDefinition,
    only_if_different_from,
)
from ..rendering.generator import SchemaGenerator
from ..rendering.serialization import SelectedField, render_bool_token, require_single_line

DEFAULT_FILENAME = "gcovr_generated.cfg"

DEFAULT_TITLE = "Coverage Report"
DEFAULT_SORT = "uncovered-number"

THRESHOLD_KEYS = (
    "fail-under-line",
    "fail-under-branch",
    "fail-under-function",
    "fail-under-decision",
    "html-high-threshold",
    "html-medium-threshold",
)

_PERCENT_PATTERN = re.compile(r"[0-9]+")


def _filter_list(key: str, description: str) -> FieldSpec:
    return FieldSpec(
        key=key, kind=FieldKind.LIST, default=(), rule=ONLY_IF_NON_EMPTY, description=description
    )


def _flag(key: str, default: bool, description: str) -> FieldSpec:
    return FieldSpec(
        key=key, kind=FieldKind.BOOL, default=default, rule=ONLY_IF_TRUE, description=description
    )


def _fail_under(key: str, what: str) -> FieldSpec:
    return FieldSpec(
        key=key,
        kind=FieldKind.STRING,
        default="0",
        rule=only_if_different_from("0"),
        description=f"Fail if {what} coverage is below this percentage (0-100)",
    )


GCOVR_7_0 = SchemaDefinition(
    tool="gcovr",
    version="7.0",
    bool_tokens=("yes", "no"),
    fields=(
        _filter_list("search-path", "Search paths for .gcda files"),
        _filter_list("filter", "Regex patterns of files to include"),
        _filter_list("exclude", "Regex patterns of files to exclude"),
        _filter_list("exclude-directories", "Regex patterns of directories to exclude"),
        _flag("exclude-unreachable-branches", True, "Exclude unreachable branches"),
        _flag("exclude-throw-branches", True, "Exclude throw branches"),
        _flag("exclude-function-lines", False, "Exclude function definition lines"),
        _fail_under("fail-under-line", "line"),
        _fail_under("fail-under-branch", "branch"),
        _fail_under("fail-under-function", "function"),
        _fail_under("fail-under-decision", "decision"),
        FieldSpec(
            key="html-high-threshold",
            kind=FieldKind.STRING,
            default="95",
            rule=ALWAYS,
            description="High coverage threshold for HTML reports (0-100)",
        ),
        FieldSpec(
            key="html-medium-threshold",
            kind=FieldKind.STRING,
            default="85",
            rule=ALWAYS,
            description="Medium coverage threshold for HTML reports (0-100)",
        ),
        FieldSpec(
            key="html-title",
            kind=FieldKind.STRING,
            default=DEFAULT_TITLE,
            rule=only_if_different_from(DEFAULT_TITLE),
            description="Title for the HTML report",
        ),
        FieldSpec(
            key="html-self-contained",
            kind=FieldKind.BOOL,
            default=True,
            rule=ONLY_IF_FALSE,
            description="Generate self-contained HTML (inline CSS/JS)",
        ),
        FieldSpec(
            key="sort",
            kind=FieldKind.STRING,
            default=DEFAULT_SORT,
            rule=only_if_different_from(DEFAULT_SORT),
            description="Sort order: filename, uncovered-number or uncovered-percent",
        ),
        FieldSpec(
            key="gcov-executable",
            kind=FieldKind.STRING,
            default="",
            rule=ONLY_IF_PATH_EXISTS,
            description="Path to gcov (empty or missing = auto-detect)",
        ),
        _flag("decisions", False, "Enable decision coverage (MC/DC)"),
        _flag("calls", False, "Enable call coverage"),
    ),
)


class GcovrSchemaGenerator(SchemaGenerator):
    """Renders a flat gcovr configuration, one directive per line.

    List fields repeat their key once per element instead of nesting. Values
    holding line breaks or other control characters are rejected.
    """

    tool = "gcovr"
    template_name = "gcovr.cfg.j2"

    def __init__(
        self,
        output_path: Path | str = DEFAULT_FILENAME,
        schema: SchemaDefinition = GCOVR_7_0,
        **kwargs: Any,
    ) -> None:
        super().__init__(output_path, schema, **kwargs)

    def _lines(self, field: SelectedField) -> list[tuple[str, str]]:
        spec, value = field.spec, field.value
        if spec.kind is FieldKind.LIST:
            return [(spec.key, require_single_line(spec.key, item)) for item in value]
        if spec.kind is FieldKind.BOOL:
            return [(spec.key, render_bool_token(value, *self.schema.bool_tokens))]
        return [(spec.key, require_single_line(spec.key, value))]

    def context(self, selected: list[SelectedField]) -> dict[str, Any]:
        return {"lines": [line for field in selected for line in self._lines(field)]}

    def validate(self, settings: Mapping[str, Any]) -> list[RenderWarning]:
        warnings: list[RenderWarning] = []
        for key in THRESHOLD_KEYS:
            value = settings[key]
            if not _PERCENT_PATTERN.fullmatch(value):
                message = f"{key} must be a number (got: {value})"
            elif int(value) > 100:
                message = f"{key} must be <= 100 (got: {value})"
            else:
                continue
            warnings.append(RenderWarning(scope="validation", message=message))
        return warnings
