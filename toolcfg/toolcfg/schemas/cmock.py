"""CMock 2.6 schema and YAML configuration generator."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from ..core.models import (
    ONLY_IF_NON_EMPTY,
    FieldKind,
    FieldSpec,
    RenderWarning,
    SchemaDefinition,
)
from ..rendering.generator import SchemaGenerator
from ..rendering.serialization import (
    SelectedField,
    render_bool_token,
    render_sequence,
    require_single_line,
)

DEFAULT_FILENAME = "cmock.yml"

NO_PROTOTYPE_POLICIES = ("ignore", "warn", "error")

CMOCK_2_6 = SchemaDefinition(
    tool="cmock",
    version="2.6",
    bool_tokens=("1", "0"),
    fields=(
        FieldSpec(
            key="mock_path",
            kind=FieldKind.STRING,
            default="mocks",
            quote="'",
            description="Subdirectory for generated mocks, relative to the config file",
        ),
        FieldSpec(
            key="mock_prefix",
            kind=FieldKind.STRING,
            default="mock_",
            quote="'",
            description="Prefix for generated mock file names",
        ),
        FieldSpec(
            key="mock_suffix",
            kind=FieldKind.STRING,
            default="",
            quote="'",
            description="Suffix for generated mock file names",
        ),
        FieldSpec(
            key="includes",
            kind=FieldKind.LIST,
            default=("unity.h",),
            description="Header files to include in mocks",
        ),
        FieldSpec(
            key="plugins",
            kind=FieldKind.LIST,
            default=("ignore", "callback"),
            description="CMock plugins to enable",
        ),
        FieldSpec(
            key="treat_as",
            kind=FieldKind.MAPPING,
            default=(),
            rule=ONLY_IF_NON_EMPTY,
            description="Type treatment mappings as TYPE:TREATMENT entries",
        ),
        FieldSpec(
            key="when_no_prototypes",
            kind=FieldKind.STRING,
            default="warn",
            description="Action when no prototypes are found: ignore, warn or error",
        ),
        FieldSpec(
            key="enforce_strict_ordering",
            kind=FieldKind.BOOL,
            default=False,
            description="Enforce strict call ordering in mocks",
        ),
        FieldSpec(
            key="callback_include_count",
            kind=FieldKind.BOOL,
            default=True,
            description="Include call count in callback functions",
        ),
        FieldSpec(
            key="callback_after_arg_check",
            kind=FieldKind.BOOL,
            default=False,
            description="Call callbacks after argument validation",
        ),
        FieldSpec(
            key="includes_h_pre_orig_header",
            kind=FieldKind.STRING,
            default="",
            rule=ONLY_IF_NON_EMPTY,
            quote='"',
            description="Header content inserted before the original header inclusion",
        ),
        FieldSpec(
            key="includes_h_post_orig_header",
            kind=FieldKind.STRING,
            default="",
            rule=ONLY_IF_NON_EMPTY,
            quote='"',
            description="Header content inserted after the original header inclusion",
        ),
        FieldSpec(
            key="includes_c_pre_header",
            kind=FieldKind.STRING,
            default="",
            rule=ONLY_IF_NON_EMPTY,
            quote='"',
            description="Source content inserted before the header inclusion",
        ),
        FieldSpec(
            key="includes_c_post_header",
            kind=FieldKind.STRING,
            default="",
            rule=ONLY_IF_NON_EMPTY,
            quote='"',
            description="Source content inserted after the header inclusion",
        ),
    ),
)


def _yaml_scalar(value: str, style: str) -> str:
    return yaml.safe_dump(
        value, default_style=style, width=float("inf"), allow_unicode=True
    ).rstrip("\n")


def single_quoted(key: str, value: str) -> str:
    """YAML single-quoted scalar; embedded quotes are doubled."""
    return _yaml_scalar(require_single_line(key, value), "'")


def double_quoted(key: str, value: str) -> str:
    """YAML double-quoted scalar.

    Line breaks, tabs and other control characters are written as backslash
    escapes, so the scalar always stays on one line.
    """
    return _yaml_scalar(value, '"')


class CMockSchemaGenerator(SchemaGenerator):
    """Renders the ``:cmock:`` YAML document."""

    tool = "cmock"
    template_name = "cmock.yml.j2"

    def __init__(
        self,
        output_path: Path | str = DEFAULT_FILENAME,
        schema: SchemaDefinition = CMOCK_2_6,
        **kwargs: Any,
    ) -> None:
        super().__init__(output_path, schema, **kwargs)

    def _mock_path(self, value: str) -> str:
        # mocks live next to the generated config unless the path is absolute
        return (self.output_path.parent / value).as_posix()

    def _block(self, field: SelectedField) -> str:
        spec, value = field.spec, field.value
        head = f":{spec.key}:"

        if spec.kind is FieldKind.BOOL:
            return f"{head} {render_bool_token(value, *self.schema.bool_tokens)}"

        if spec.kind is FieldKind.LIST:
            items = render_sequence(
                (require_single_line(spec.key, item) for item in value), indent=2, bullet="- "
            )
            return f"{head}\n{items}" if items else head

        if spec.kind is FieldKind.MAPPING:
            pairs = render_sequence(
                (
                    f"{require_single_line(spec.key, name)}: "
                    f"{require_single_line(spec.key, treatment)}"
                    for name, treatment in value
                ),
                indent=2,
                bullet="",
            )
            return f"{head}\n{pairs}"

        if spec.key == "mock_path":
            value = self._mock_path(value)
        if spec.quote == "'":
            return f"{head} {single_quoted(spec.key, value)}"
        if spec.quote == '"':
            return f"{head} {double_quoted(spec.key, value)}"
        return f"{head} {require_single_line(spec.key, value)}"

    def context(self, selected: list[SelectedField]) -> dict[str, Any]:
        return {
            "root": self.schema.tool,
            "blocks": [self._block(field) for field in selected],
        }

    def validate(self, settings: Mapping[str, Any]) -> list[RenderWarning]:
        policy = settings["when_no_prototypes"]
        if policy not in NO_PROTOTYPE_POLICIES:
            return [
                RenderWarning(
                    scope="validation",
                    message=(
                        f"when_no_prototypes must be one of "
                        f"{', '.join(NO_PROTOTYPE_POLICIES)} (got: {policy})"
                    ),
                )
            ]
        return []
