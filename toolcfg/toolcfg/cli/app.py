"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from ..config import AppConfig
from ..core.models import RenderTask
from ..core.settings import SettingsError, load_settings_file
from ..rendering import engine
from ..schemas import DEFAULT_FILENAMES, UnknownSchemaError, detect_version, get_schema
from .parsers import parse_file_mode, parse_overrides

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="toolcfg",
    help="Render CMock and gcovr configuration files from typed, versioned settings.",
)


def _configure_logging(verbose: bool, level: str) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="[%(levelname)s] %(message)s",
    )


@app.command()
def render(
    tool: Annotated[str, typer.Argument(help="Tool to configure (cmock, gcovr).")],
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Output file (default: cmock.yml / gcovr_generated.cfg).",
            metavar="PATH",
        ),
    ] = "",
    schema_version: Annotated[
        str,
        typer.Option(
            "--schema-version",
            help="Schema version (default: newest supported).",
            metavar="VERSION",
        ),
    ] = "",
    settings_file: Annotated[
        str,
        typer.Option(
            "--settings",
            help="YAML mapping of field overrides.",
            metavar="FILE",
        ),
    ] = "",
    overrides: Annotated[
        list[str],
        typer.Option(
            "--set",
            help="Override one field (format: KEY=VALUE, lists use ';'). Repeatable.",
            metavar="KEY=VALUE",
        ),
    ] = [],
    dest_root: Annotated[
        str,
        typer.Option(
            "--dest-root",
            help="Base directory for relative output paths (default: cwd).",
            metavar="DIR",
        ),
    ] = "",
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render one tool configuration file from schema defaults and overrides."""
    config = AppConfig()
    _configure_logging(verbose, config.log_level)

    logger.debug("Starting toolcfg render")

    try:
        schema = get_schema(tool, schema_version or None)
        values = load_settings_file(schema, Path(settings_file)) if settings_file else {}
    except (UnknownSchemaError, SettingsError) as e:
        raise typer.BadParameter(str(e)) from e

    # Command-line overrides win over the settings file
    values.update(parse_overrides(schema, overrides))

    task = RenderTask(
        tool=schema.tool,
        version=schema.version,
        output_path=Path(output or DEFAULT_FILENAMES[schema.tool]),
        overrides=values,
    )
    root = Path(dest_root) if dest_root else (config.dest_root or Path.cwd())
    mode = parse_file_mode(file_mode or config.file_mode)

    try:
        outcome = engine.render_task(task, root, mode)
    except SettingsError as e:
        raise typer.BadParameter(str(e)) from e

    typer.echo(str(outcome.path))
    if outcome.warnings:
        typer.echo(f"{len(outcome.warnings)} warning(s)", err=True)


@app.command()
def fields(
    tool: Annotated[str, typer.Argument(help="Tool whose schema to list.")],
    schema_version: Annotated[
        str,
        typer.Option("--schema-version", help="Schema version.", metavar="VERSION"),
    ] = "",
) -> None:
    """List the fields of a tool schema with kinds, defaults and rules."""
    try:
        schema = get_schema(tool, schema_version or None)
    except UnknownSchemaError as e:
        raise typer.BadParameter(str(e)) from e

    typer.echo(f"{schema.tool} {schema.version}")
    for spec in schema.fields:
        typer.echo(
            f"  {spec.key:<30} {spec.kind.value:<8} default={spec.default_value()!r:<22} {spec.rule}"
        )
        if spec.description:
            typer.echo(f"      {spec.description}")


@app.command("detect-version")
def detect_version_command(
    tool: Annotated[str, typer.Argument(help="Tool to detect (cmock, gcovr).")],
    version_output: Annotated[
        str,
        typer.Option(
            "--version-output",
            help="Text printed by the tool's --version.",
            metavar="TEXT",
        ),
    ] = "",
    tag: Annotated[
        str,
        typer.Option("--tag", help="Release tag (cmock only).", metavar="TAG"),
    ] = "",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Print the schema version matching a tool release, exit 1 if none applies."""
    _configure_logging(verbose, AppConfig().log_level)

    try:
        version = detect_version(tool, version_output or None, tag or None)
    except UnknownSchemaError as e:
        raise typer.BadParameter(str(e)) from e

    if version is None:
        typer.echo(f"No supported {tool} schema", err=True)
        raise typer.Exit(code=1)
    typer.echo(version)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
