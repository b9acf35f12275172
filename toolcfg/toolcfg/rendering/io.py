"""Writer for rendered configuration files."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..core.models import RenderedConfig

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Create the parent directories of ``path`` if they are missing."""
    path.parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Replace ``path`` with ``text`` through a temporary file in the same directory.

    Args:
        path: Destination file path
        text: Full file content
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def write_config(rendered: RenderedConfig, mode: int = 0o644) -> Path:
    """Persist a rendered configuration, overwriting any previous content.

    Filesystem errors propagate to the caller unchanged.

    Returns:
        The written path
    """
    atomic_write_text(rendered.path, rendered.text, mode=mode)
    logger.debug(f"Wrote {len(rendered.text)} chars to {rendered.path}")
    return rendered.path
