"""Template-backed base class for schema generators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from ..core.models import RenderedConfig, RenderWarning, SchemaDefinition
from ..core.settings import check_settings
from .serialization import PathExists, SelectedField, path_exists, select_fields

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def load_template(name: str, search_path: Path = TEMPLATES_DIR) -> Template:
    """Load a document skeleton template.

    Args:
        name: Template file name inside ``search_path``
        search_path: Directory holding the templates

    Returns:
        Compiled Jinja2 template
    """
    if not (search_path / name).exists():
        raise FileNotFoundError(f"Template not found: {search_path / name}")

    env = Environment(
        loader=FileSystemLoader(str(search_path)),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    return env.get_template(name)


class SchemaGenerator(ABC):
    """Renders one tool's configuration from a settings snapshot.

    Subclasses provide the template name and turn selected fields into the
    template context. Instances keep no state between ``render`` calls.
    """

    tool: str = ""
    template_name: str = ""

    def __init__(
        self,
        output_path: Path | str,
        schema: SchemaDefinition,
        exists: PathExists = path_exists,
    ) -> None:
        if schema.tool != self.tool:
            raise ValueError(f"{type(self).__name__} cannot render a {schema.tool} schema")
        self.output_path = Path(output_path)
        self.schema = schema
        self.exists = exists

    def render(self, settings: Mapping[str, Any]) -> tuple[RenderedConfig, list[RenderWarning]]:
        """Render ``settings`` into configuration text.

        Raises:
            SettingsError: If ``settings`` does not match the schema
        """
        check_settings(self.schema, settings)

        selected, warnings = select_fields(self.schema, settings, self.exists)
        warnings.extend(self.validate(settings))

        template = load_template(self.template_name)
        text = template.render(**self.context(selected))

        logger.debug(
            f"Rendered {self.schema.tool} {self.schema.version}: "
            f"{len(selected)}/{len(self.schema.fields)} field(s), {len(warnings)} warning(s)"
        )
        return RenderedConfig(path=self.output_path, text=text), warnings

    @abstractmethod
    def context(self, selected: list[SelectedField]) -> dict[str, Any]:
        """Build the template context from the fields that passed their rules."""

    def validate(self, settings: Mapping[str, Any]) -> list[RenderWarning]:
        """Return advisory warnings for values the tool is likely to reject."""
        return []
