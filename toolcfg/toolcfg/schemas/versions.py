"""Schema version detection from tool version output or release tags.

Only text supplied by the caller is parsed; no tool is executed here.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_CMOCK_OUTPUT = re.compile(r"([0-9]+)\.([0-9]+)")
_CMOCK_TAG = re.compile(r"^v?([0-9]+)\.([0-9]+)")
_GCOVR_OUTPUT = re.compile(r"gcovr ([0-9]+)\.([0-9]+)")


def _match_version(
    pattern: re.Pattern[str], text: str | None, *, anchored: bool = False
) -> str | None:
    if not text:
        return None
    match = pattern.match(text) if anchored else pattern.search(text)
    if not match:
        return None
    return f"{match.group(1)}.{match.group(2)}"


def _major(version: str) -> str:
    return version.split(".", 1)[0]


def detect_version(
    tool: str,
    supported: list[str],
    version_output: str | None = None,
    tag: str | None = None,
) -> str | None:
    """Pick the schema version to use for a tool.

    cmock reads the first ``X.Y`` in its ``--version`` output and falls back
    to a ``vX.Y`` git tag. gcovr reads ``gcovr X.Y`` and, for an unknown minor
    release, settles on a supported schema with the same major version.

    Args:
        tool: Tool identity
        supported: Schema versions available for the tool
        version_output: Text printed by the tool's ``--version``
        tag: Release tag the tool was fetched at (cmock only)

    Returns:
        A supported schema version, or None when no schema applies
    """
    if tool == "cmock":
        detected = _match_version(_CMOCK_OUTPUT, version_output)
        if detected:
            logger.info(f"cmock version detected from executable: {detected}")
        else:
            detected = _match_version(_CMOCK_TAG, tag, anchored=True)
            if detected:
                logger.info(f"cmock version detected from git tag: {detected}")
            elif tag:
                logger.warning(f"Could not parse cmock version from tag: {tag}")
    elif tool == "gcovr":
        detected = _match_version(_GCOVR_OUTPUT, version_output)
        if detected:
            logger.info(f"gcovr version detected from executable: {detected}")
    else:
        raise ValueError(f"No version detection for tool: {tool}")

    if not detected:
        logger.info(f"Could not detect {tool} version")
        return None

    if detected in supported:
        return detected

    if tool == "gcovr":
        for candidate in supported:
            if _major(candidate) == _major(detected):
                logger.info(f"Using compatible schema {candidate} for gcovr {detected}")
                return candidate

    logger.info(
        f"Unsupported {tool} version {detected} (supported: {', '.join(supported)})"
    )
    return None
