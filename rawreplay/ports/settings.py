"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort"]


@dataclass(frozen=True)
class SettingsPort:
    """Runtime settings for the dispatch loop.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        threads: Maximum number of sends in flight at once.
        interval_in_sec: Seconds to sleep between rounds.
    """

    threads: int
    interval_in_sec: float
