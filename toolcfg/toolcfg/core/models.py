"""Domain models for schema definitions, render tasks and rendered output."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

FieldValue = Union[bool, str, list[str], tuple[str, ...]]


class FieldKind(str, Enum):
    """Declared value kind of a schema field."""

    STRING = "string"
    BOOL = "bool"
    LIST = "list"
    MAPPING = "mapping"


class RuleKind(str, Enum):
    """Suppression policies a field can be rendered under."""

    ALWAYS = "always"
    ONLY_IF_NON_EMPTY = "only_if_non_empty"
    ONLY_IF_DIFFERENT_FROM_DEFAULT = "only_if_different_from_default"
    ONLY_IF_TRUE = "only_if_true"
    ONLY_IF_FALSE = "only_if_false"
    ONLY_IF_PATH_EXISTS = "only_if_path_exists"


class SerializationRule(BaseModel):
    """Decides whether a field contributes output for its current value."""

    model_config = ConfigDict(frozen=True)

    kind: RuleKind
    reference: str | None = Field(
        default=None,
        description="Literal compared against for ONLY_IF_DIFFERENT_FROM_DEFAULT",
    )

    @model_validator(mode="after")
    def _check_reference(self) -> SerializationRule:
        if self.kind is RuleKind.ONLY_IF_DIFFERENT_FROM_DEFAULT and self.reference is None:
            raise ValueError("only_if_different_from_default needs a reference value")
        return self

    def __str__(self) -> str:
        if self.reference is not None:
            return f"{self.kind.value}({self.reference!r})"
        return self.kind.value


ALWAYS = SerializationRule(kind=RuleKind.ALWAYS)
ONLY_IF_NON_EMPTY = SerializationRule(kind=RuleKind.ONLY_IF_NON_EMPTY)
ONLY_IF_TRUE = SerializationRule(kind=RuleKind.ONLY_IF_TRUE)
ONLY_IF_FALSE = SerializationRule(kind=RuleKind.ONLY_IF_FALSE)
ONLY_IF_PATH_EXISTS = SerializationRule(kind=RuleKind.ONLY_IF_PATH_EXISTS)


def only_if_different_from(reference: str) -> SerializationRule:
    """Rule emitting a value only when it is non-empty and differs from ``reference``."""
    return SerializationRule(
        kind=RuleKind.ONLY_IF_DIFFERENT_FROM_DEFAULT, reference=reference
    )


class FieldSpec(BaseModel):
    """A single named, typed configuration field of a tool schema."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Output key")
    kind: FieldKind
    default: FieldValue
    rule: SerializationRule = ALWAYS
    description: str = ""
    quote: Literal["", "'", '"'] = Field(default="", description="Scalar quoting")

    @model_validator(mode="after")
    def _check_default(self) -> FieldSpec:
        if self.kind is FieldKind.BOOL and not isinstance(self.default, bool):
            raise ValueError(f"{self.key}: bool field needs a bool default")
        if self.kind is FieldKind.STRING and not isinstance(self.default, str):
            raise ValueError(f"{self.key}: string field needs a str default")
        if self.kind in (FieldKind.LIST, FieldKind.MAPPING) and not isinstance(
            self.default, (list, tuple)
        ):
            raise ValueError(f"{self.key}: {self.kind.value} field needs a list default")
        return self

    def default_value(self) -> Any:
        """Return a fresh copy of the default suitable for a settings snapshot."""
        if isinstance(self.default, (list, tuple)):
            return list(self.default)
        return self.default


class SchemaDefinition(BaseModel):
    """Fixed, versioned set of fields recognized by one tool."""

    model_config = ConfigDict(frozen=True)

    tool: str
    version: str
    fields: tuple[FieldSpec, ...] = Field(..., min_length=1)
    bool_tokens: tuple[str, str] = ("1", "0")

    @model_validator(mode="after")
    def _check_unique_keys(self) -> SchemaDefinition:
        seen: set[str] = set()
        for spec in self.fields:
            if spec.key in seen:
                raise ValueError(f"{self.tool} {self.version}: duplicate field {spec.key!r}")
            seen.add(spec.key)
        return self

    @property
    def keys(self) -> list[str]:
        return [spec.key for spec in self.fields]

    def field(self, key: str) -> FieldSpec:
        for spec in self.fields:
            if spec.key == key:
                return spec
        raise KeyError(key)

    def defaults(self) -> dict[str, Any]:
        return {spec.key: spec.default_value() for spec in self.fields}


class RenderWarning(BaseModel):
    """Non-fatal problem recorded while rendering."""

    model_config = ConfigDict(frozen=True)

    scope: str
    message: str

    def __str__(self) -> str:
        return f"{self.scope}: {self.message}"


class RenderedConfig(BaseModel):
    """Serialized configuration text and where it belongs."""

    model_config = ConfigDict(frozen=True)

    path: Path
    text: str


class RenderTask(BaseModel):
    """A single configuration rendering task."""

    tool: str = Field(..., description="Tool identity (cmock, gcovr)")
    output_path: Path = Field(..., description="Output file path")
    version: str | None = Field(default=None, description="Schema version")
    overrides: dict[str, Any] = Field(
        default_factory=dict, description="Values overriding schema defaults"
    )


class RenderConfig(BaseModel):
    """Configuration for the rendering process."""

    tasks: list[RenderTask] = Field(..., min_length=1, description="Render tasks")
    dest_root: Path = Field(
        default_factory=Path.cwd, description="Base output directory"
    )
    file_mode: int = Field(default=0o644, description="File permissions (octal)")


class RenderOutcome(BaseModel):
    """Result of a rendered and written task."""

    path: Path
    warnings: list[RenderWarning] = Field(default_factory=list)
