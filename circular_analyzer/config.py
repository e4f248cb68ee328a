"""
Configuration for circular dependency analysis, read from the environment
"""

import os
import logging

from dotenv import load_dotenv

from .cycle_detector import MAX_DEPTH

load_dotenv()

logger = logging.getLogger(__name__)


def _int_from_env(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring {key}={raw!r}, expected an integer; using {default}")
        return default


class Config:
    """Search depth, ranking size and logging level"""
    MAX_DEPTH = _int_from_env("CIRCULAR_MAX_DEPTH", MAX_DEPTH)
    TOP_N = _int_from_env("CIRCULAR_TOP_N", 25)
    LOG_LEVEL = os.environ.get("CIRCULAR_LOG_LEVEL", "INFO").upper()

    @classmethod
    def from_env(cls) -> "Config":
        """Re-read the environment, e.g. after it changed at runtime"""
        config = cls()
        config.MAX_DEPTH = _int_from_env("CIRCULAR_MAX_DEPTH", MAX_DEPTH)
        config.TOP_N = _int_from_env("CIRCULAR_TOP_N", 25)
        config.LOG_LEVEL = os.environ.get("CIRCULAR_LOG_LEVEL", "INFO").upper()
        return config
