"""Healthcheck validator for container orchestration."""

import logging
from collections.abc import Sequence

from rawreplay.adapters.driven.config.settings import load_settings
from rawreplay.adapters.driven.logging.logging_config import configure_logs
from rawreplay.adapters.driven.templates.loader import load_templates

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Run health check for container orchestration.

    Validates:
    - Flags and environment variables are valid.
    - Template files exist and every one of them parses.

    No request is sent.

    Args:
        argv: Arguments to parse; defaults to sys.argv[1:].

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings(argv)
        templates = load_templates(settings.template_glob)
    except Exception as exc:
        logger.error(f"Replayer healthcheck FAILED: {exc}")
        return 1

    logger.info(f"Replayer healthcheck OK ({len(templates)} templates)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
