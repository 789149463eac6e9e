"""Application entrypoint."""

import asyncio
import logging
from collections.abc import Sequence

from rawreplay.adapters.driven.config.settings import load_settings
from rawreplay.adapters.driven.http.client import HttpClient
from rawreplay.adapters.driven.logging.logging_config import configure_logs
from rawreplay.adapters.driven.templates.loader import load_templates
from rawreplay.adapters.driving.signals import make_stop_on_signal
from rawreplay.core.dispatch_loop import run_dispatch_loop
from rawreplay.core.errors import LoadError
from rawreplay.ports.settings import SettingsPort

__all__ = ["main", "run"]

logger = logging.getLogger(__name__)


async def main(argv: Sequence[str] | None = None) -> int:
    """Start the request replayer.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Load and parse every request template (fatal on failure).
    4. Replay templates in rounds until SIGINT/SIGTERM.
    5. Drain in-flight sends and report totals.

    Args:
        argv: Command-line arguments; defaults to sys.argv[1:].

    Returns:
        Process exit code: 0 after a graceful stop, 1 on startup failure.
    """
    configure_logs()
    logger.info("Starting request replayer...")

    try:
        config = load_settings(argv)
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: -t/THREADS and -i/INTERVAL_IN_SECONDS must be positive integers.",
            exc,
        )
        return 1

    try:
        templates = load_templates(config.template_glob)
    except LoadError as exc:
        logger.error(f"Failed to load request templates: {exc}")
        return 1

    # Wrap config into port so core depends on interface (hexagonal)
    settings_port = SettingsPort(
        threads=config.threads,
        interval_in_sec=config.interval_in_sec,
    )
    logger.info(
        f"Loaded {len(templates)} request templates, "
        f"using {settings_port.threads} concurrent senders..."
    )

    async with HttpClient() as http:
        try:
            summary = await run_dispatch_loop(
                templates=templates,
                settings=settings_port,
                stop_fn=make_stop_on_signal(),
                send_fn=http.send,
            )
        except Exception as e:
            logger.error(f"Unhandled exception in dispatch loop: {e}", exc_info=True)
            return 1

    logger.info(
        f"All requests completed ({summary.rounds} rounds, "
        f"{summary.sends_issued} sends), exiting."
    )
    return 0


def run() -> None:
    """Console script entrypoint."""
    try:
        raise SystemExit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C) before the loop started.")


if __name__ == "__main__":
    run()
