"""Runtime settings, filled in from the CLI."""
from __future__ import annotations

import logging
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8080
    default_limit: int = DEFAULT_LIMIT
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be in 0..65535, got {self.port}")
        if self.default_limit <= 0:
            raise ValueError(f"default_limit must be positive, got {self.default_limit}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
