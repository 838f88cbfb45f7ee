"""Configuration and logging setup for the bank ledger."""

import logging
from dataclasses import dataclass
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class LedgerConfig:
    """Settings used to build a Ledger."""

    seed: Optional[int] = None
    max_attempts: int = 1000


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging for command-line use."""
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
