"""Dispatch loop replaying every template each round under a concurrency budget."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from rawreplay.ports.settings import SettingsPort
from rawreplay.ports.template import RequestTemplate

__all__ = ["DispatchSummary", "run_dispatch_loop"]

logger = logging.getLogger(__name__)

SendFn = Callable[[RequestTemplate], Awaitable[object]]


@dataclass(slots=True, frozen=True)
class DispatchSummary:
    """Totals reported once the loop has drained.

    Attributes:
        rounds: Number of rounds started.
        sends_issued: Number of sends handed to the budget across all rounds.
    """

    rounds: int
    sends_issued: int


async def run_dispatch_loop(
    templates: Sequence[RequestTemplate],
    settings: SettingsPort,
    stop_fn: Callable[[], bool],
    send_fn: SendFn,
) -> DispatchSummary:
    """Replay all templates in rounds until stop_fn() returns True.

    Each round:
    1. For each template in load order, acquire one unit of the budget
       (``settings.threads``), waiting while the budget is exhausted.
    2. Start the send as a background task that returns its unit on
       completion, whatever the outcome.
    3. Sleep ``settings.interval_in_sec`` and start over.

    Args:
        templates: Templates to replay, in load order.
        settings: Concurrency budget and inter-round interval.
        stop_fn: Callable returning True once shutdown was requested.
        send_fn: Async function performing one send for a template.

    Returns:
        Round and send totals.

    Notes:
        - stop_fn() is polled only at the top of a round. A round that has
          started always issues all of its sends.
        - Rounds do not wait for each other: sends of one round may still be
          in flight when the next one starts, the budget is the only limit.
        - On shutdown, in-flight sends are drained, never cancelled.
    """
    budget = asyncio.Semaphore(settings.threads)
    pending: set[asyncio.Task[None]] = set()
    loop = asyncio.get_running_loop()
    rounds = 0
    sends_issued = 0

    async def _run_once(template: RequestTemplate) -> None:
        """Run one send, contain its errors and give back the budget unit."""
        try:
            await send_fn(template)
        except Exception as e:  # noqa: BLE001
            logger.error(f"[{template.name}] Unexpected error in send task: {e}", exc_info=True)
        finally:
            budget.release()
            task = asyncio.current_task()
            if task is not None:
                pending.discard(task)

    while not stop_fn():
        rounds += 1
        for template in templates:
            await budget.acquire()
            task: asyncio.Task[None] = loop.create_task(_run_once(template))
            pending.add(task)
            sends_issued += 1

        await asyncio.sleep(settings.interval_in_sec)

    logger.info(f"Stop requested, draining {len(pending)} in-flight send(s)...")
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)

    return DispatchSummary(rounds=rounds, sends_issued=sends_issued)
