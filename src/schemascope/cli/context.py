"""CLI context management for logging and output preferences."""

import logging
import os
import sys
from dataclasses import dataclass

DEFAULT_LOG_LEVEL = "WARNING"


def get_log_level(level: str | None) -> str:
    """Resolve log level from CLI arg, environment variable, or default.

    Priority:
    1. Explicit level argument
    2. SCHEMASCOPE_LOG_LEVEL environment variable
    3. Default: WARNING
    """
    if level:
        return level.upper()
    if env_level := os.getenv("SCHEMASCOPE_LOG_LEVEL"):
        return env_level.upper()
    return DEFAULT_LOG_LEVEL


@dataclass
class CLIContext:
    """Shared context for CLI commands."""

    json_output: bool
    log_level: str = DEFAULT_LOG_LEVEL

    def configure_logging(self) -> None:
        """Send library logs to stderr so stdout stays machine-readable."""
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.WARNING),
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
            force=True,
        )
