"""Configuration management for the bill splitter."""
import logging
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Validation
PERCENTAGE_TOLERANCE: Final[float] = float(os.getenv('SPLITBILL_PERCENTAGE_TOLERANCE', '0.01'))

# Application Settings
DEFAULT_CURRENCY: Final[str] = os.getenv('SPLITBILL_DEFAULT_CURRENCY', 'INR')
DEBUG: Final[bool] = os.getenv('SPLITBILL_DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('SPLITBILL_LOG_LEVEL', 'DEBUG' if DEBUG else 'WARNING').upper()


def configure_logging(level: str | None = None) -> None:
    """Attach a basic handler for applications embedding the engine."""
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
