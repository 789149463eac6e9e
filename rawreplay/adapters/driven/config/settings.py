"""Configuration loading from command-line flags and environment variables."""

import argparse
import logging
import os
from collections.abc import Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from rawreplay.adapters.driven.templates.loader import DEFAULT_TEMPLATE_GLOB

__all__ = ["Settings", "load_settings", "build_arg_parser"]

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_THREADS = 1
DEFAULT_INTERVAL_IN_SECONDS = 1


class Settings(BaseModel):
    """Runtime configuration for the replayer.

    Attributes:
        threads: Maximum number of concurrent sends (must be positive).
        interval_in_sec: Seconds between rounds (must be positive).
        template_glob: Glob pattern locating raw request template files.
    """

    threads: int = Field(DEFAULT_THREADS, gt=0, description="Concurrent sends budget.")
    interval_in_sec: int = Field(
        DEFAULT_INTERVAL_IN_SECONDS, gt=0, description="Seconds between rounds."
    )
    template_glob: str = Field(
        DEFAULT_TEMPLATE_GLOB, description="Glob pattern of raw request template files."
    )

    @field_validator("template_glob")
    @classmethod
    def validate_template_glob(cls, v: str) -> str:
        """Validate that the template pattern is not blank.

        Args:
            v: Glob pattern to validate.

        Returns:
            The validated pattern.

        Raises:
            ValueError: If the pattern is empty or whitespace only.
        """
        if not v.strip():
            raise ValueError("Template glob must not be empty")
        return v


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to a default.

    Raises:
        RuntimeError: If the variable is set but not an integer.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer (got: {raw})") from e


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command-line parser; environment variables provide defaults.

    Raises:
        RuntimeError: If THREADS or INTERVAL_IN_SECONDS is not an integer.
    """
    parser = argparse.ArgumentParser(
        prog="rawreplay",
        description="Replay raw HTTP request templates in rounds until interrupted.",
    )
    parser.add_argument(
        "-t",
        "--threads",
        type=int,
        default=_env_int("THREADS", DEFAULT_THREADS),
        help="Maximum concurrent requests (env: THREADS, default: %(default)s)",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=int,
        default=_env_int("INTERVAL_IN_SECONDS", DEFAULT_INTERVAL_IN_SECONDS),
        help="Seconds between rounds (env: INTERVAL_IN_SECONDS, default: %(default)s)",
    )
    parser.add_argument(
        "-g",
        "--templates",
        default=os.getenv("TEMPLATE_GLOB", DEFAULT_TEMPLATE_GLOB),
        help="Glob pattern of template files (env: TEMPLATE_GLOB, default: %(default)s)",
    )
    return parser


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    """Load and validate settings from flags, environment and .env file.

    Flags override environment variables, which override defaults:
    - -t/--threads, THREADS: Positive integer concurrency budget.
    - -i/--interval, INTERVAL_IN_SECONDS: Positive integer seconds between rounds.
    - -g/--templates, TEMPLATE_GLOB: Glob pattern of template files.

    Args:
        argv: Arguments to parse; defaults to sys.argv[1:].

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If an environment variable is not an integer.
        ValueError: If a value is out of range (pydantic ValidationError).
    """
    args = build_arg_parser().parse_args(argv)

    settings = Settings(
        threads=args.threads,
        interval_in_sec=args.interval,
        template_glob=args.templates,
    )

    logger.info(
        f"Replayer configured: threads={settings.threads}, "
        f"interval={settings.interval_in_sec}s, "
        f"templates={settings.template_glob}"
    )

    return settings
