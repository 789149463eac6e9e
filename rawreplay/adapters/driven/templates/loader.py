"""Template loader reading raw HTTP request files from disk."""

import dataclasses
import glob
import logging
from pathlib import Path

from rawreplay.core.errors import LoadError, LoadErrorKind, ParseError
from rawreplay.core.parser import parse_raw_request
from rawreplay.ports.template import RequestTemplate

__all__ = ["DEFAULT_TEMPLATE_GLOB", "load_templates", "template_name"]

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_GLOB = "Post/post*.txt"
TEMPLATE_SUFFIX = ".txt"


def template_name(path: str | Path) -> str:
    """Derive a template name from its file path (base name without .txt)."""
    name = Path(path).name
    return name.removesuffix(TEMPLATE_SUFFIX)


def load_templates(pattern: str = DEFAULT_TEMPLATE_GLOB) -> list[RequestTemplate]:
    """Load and parse every template file matching a glob pattern.

    Files are processed in sorted path order so each round replays them in
    a stable sequence. Any failure aborts the whole load.

    Args:
        pattern: Glob pattern locating raw request files.

    Returns:
        Named templates, in load order.

    Raises:
        LoadError: If nothing matches, or a file cannot be read or parsed.
    """
    files = sorted(glob.glob(pattern))
    if not files:
        raise LoadError(LoadErrorKind.NO_TEMPLATES_FOUND, f"no files match {pattern!r}")

    templates: list[RequestTemplate] = []
    for file in files:
        try:
            data = Path(file).read_bytes()
        except OSError as e:
            raise LoadError(
                LoadErrorKind.FILE_READ_FAILURE, f"cannot read template {file}: {e}"
            ) from e

        try:
            template = parse_raw_request(data)
        except ParseError as e:
            raise LoadError(
                LoadErrorKind.TEMPLATE_PARSE_FAILURE, f"cannot parse template {file}: {e}"
            ) from e

        template = dataclasses.replace(template, name=template_name(file))
        logger.info(f"[{template.name}] Loaded {template.method} {template.url}")
        templates.append(template)

    return templates
