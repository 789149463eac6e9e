"""Signal handling for graceful shutdown."""

import asyncio
import logging
import signal
from collections.abc import Callable

__all__ = ["make_stop_on_signal", "STOP_SIGNALS"]

logger = logging.getLogger(__name__)

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def make_stop_on_signal() -> Callable[[], bool]:
    """Create an interrupt/termination stop flag for the dispatch loop.

    Registers SIGINT and SIGTERM handlers that set an asyncio.Event,
    returning an is_set-style callable for the loop to poll between rounds.

    Must be called from inside a running event loop.

    Returns:
        Callable that returns True once a stop signal has been received.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal(sig: signal.Signals) -> None:
        """Set the stop event; only the first signal is logged."""
        if not stop.is_set():
            logger.info(f"{sig.name} received, finishing current round and draining...")
        stop.set()

    for sig in STOP_SIGNALS:
        loop.add_signal_handler(sig, handle_signal, sig)

    return stop.is_set
