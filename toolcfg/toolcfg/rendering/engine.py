"""Render-task engine: settings in, configuration files out."""

from __future__ import annotations

import logging
from pathlib import Path

from ..core.models import RenderConfig, RenderOutcome, RenderTask
from ..core.settings import build_settings
from ..schemas import create_generator, get_schema
from .io import write_config

logger = logging.getLogger(__name__)


def render_task(task: RenderTask, dest_root: Path, file_mode: int) -> RenderOutcome:
    """Render and write a single configuration task.

    Args:
        task: Render task to execute
        dest_root: Base directory for relative output paths
        file_mode: File permissions

    Returns:
        Written path and the warnings collected while rendering
    """
    output_path = task.output_path
    if not output_path.is_absolute():
        output_path = dest_root / output_path

    schema = get_schema(task.tool, task.version)
    logger.debug(f"Rendering {schema.tool} {schema.version} schema → {output_path}")

    settings = build_settings(schema, task.overrides)
    generator = create_generator(schema.tool, output_path, schema.version)
    rendered, warnings = generator.render(settings)

    for warning in warnings:
        logger.warning(f"{schema.tool}: {warning}")

    write_config(rendered, mode=file_mode)
    logger.info(f"Rendered {schema.tool} {schema.version} configuration → {output_path}")

    return RenderOutcome(path=output_path, warnings=warnings)


def render_all(config: RenderConfig) -> list[RenderOutcome]:
    """Render all configured tasks.

    Args:
        config: Render configuration

    Returns:
        One outcome per task, in task order
    """
    logger.info(f"Rendering {len(config.tasks)} configuration(s)")

    outcomes = [
        render_task(task, config.dest_root, config.file_mode) for task in config.tasks
    ]

    logger.info(f"Successfully rendered {len(outcomes)} file(s)")
    return outcomes
