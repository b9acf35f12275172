"""Versioned tool schemas and their generators."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..core.models import SchemaDefinition
from ..rendering.generator import SchemaGenerator
from . import cmock, gcovr, versions
from .cmock import CMOCK_2_6, CMockSchemaGenerator
from .gcovr import GCOVR_7_0, GcovrSchemaGenerator

SCHEMAS: dict[str, dict[str, SchemaDefinition]] = {
    "cmock": {CMOCK_2_6.version: CMOCK_2_6},
    "gcovr": {GCOVR_7_0.version: GCOVR_7_0},
}

GENERATORS: dict[str, type[SchemaGenerator]] = {
    "cmock": CMockSchemaGenerator,
    "gcovr": GcovrSchemaGenerator,
}

DEFAULT_FILENAMES: dict[str, str] = {
    "cmock": cmock.DEFAULT_FILENAME,
    "gcovr": gcovr.DEFAULT_FILENAME,
}


class UnknownSchemaError(LookupError):
    """Raised when no schema exists for a tool or tool version."""


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.split(".") if part.isdigit())


def supported_tools() -> list[str]:
    return sorted(SCHEMAS)


def supported_versions(tool: str) -> list[str]:
    """Return the schema versions known for ``tool``, oldest first."""
    if tool not in SCHEMAS:
        raise UnknownSchemaError(
            f"Unknown tool {tool!r} (known: {', '.join(supported_tools())})"
        )
    return sorted(SCHEMAS[tool], key=_version_key)


def get_schema(tool: str, version: str | None = None) -> SchemaDefinition:
    """Look up a schema; the newest version is used when ``version`` is omitted."""
    known = supported_versions(tool)
    version = version or known[-1]
    if version not in SCHEMAS[tool]:
        raise UnknownSchemaError(
            f"Unsupported {tool} schema version {version!r} (supported: {', '.join(known)})"
        )
    return SCHEMAS[tool][version]


def create_generator(
    tool: str, output_path: Path | str | None = None, version: str | None = None, **kwargs: Any
) -> SchemaGenerator:
    """Build the generator for ``tool`` bound to a schema version and output path."""
    schema = get_schema(tool, version)
    generator_cls = GENERATORS[tool]
    if output_path is None:
        return generator_cls(schema=schema, **kwargs)
    return generator_cls(output_path, schema=schema, **kwargs)


def detect_version(
    tool: str, version_output: str | None = None, tag: str | None = None
) -> str | None:
    """Select a supported schema version from tool output or a release tag."""
    return versions.detect_version(tool, supported_versions(tool), version_output, tag)


__all__ = [
    "CMOCK_2_6",
    "GCOVR_7_0",
    "DEFAULT_FILENAMES",
    "CMockSchemaGenerator",
    "GcovrSchemaGenerator",
    "UnknownSchemaError",
    "create_generator",
    "detect_version",
    "get_schema",
    "supported_tools",
    "supported_versions",
]
