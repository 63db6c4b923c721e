"""
Settings read from the environment (and a .env file, if present).

    BF_TAPE_SIZE   cells on a new tape            (30000)
    BF_STEP_LIMIT  max steps per invocation, 0=off (0)
    BF_PROMPT      REPL prompt                     ("bf> ")
    BF_LOG_LEVEL   logging level                   (WARNING)
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .tape import DEFAULT_TAPE_SIZE

DEFAULT_PROMPT = "bf> "
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    tape_size: int = DEFAULT_TAPE_SIZE
    step_limit: int = 0
    prompt: str = DEFAULT_PROMPT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def max_steps(self) -> Optional[int]:
        return self.step_limit if self.step_limit > 0 else None


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Build Settings from the environment after loading .env (existing variables win)."""
    load_dotenv(dotenv_path)
    settings = Settings(
        tape_size=_int_env("BF_TAPE_SIZE", DEFAULT_TAPE_SIZE),
        step_limit=_int_env("BF_STEP_LIMIT", 0),
        prompt=os.environ.get("BF_PROMPT", DEFAULT_PROMPT),
        log_level=os.environ.get("BF_LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )
    if settings.tape_size <= 0:
        raise ValueError(f"BF_TAPE_SIZE must be positive, got {settings.tape_size}")
    return settings


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging once for the CLI."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.WARNING))
