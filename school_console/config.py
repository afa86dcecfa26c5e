# /school_console/config.py

"""
Central configuration for the console core.

Values are read once at import time from the environment (a local `.env` file
is honoured through python-dotenv), so deployments can tune page sizes and
dashboard limits without touching code.
"""

import os
import logging
from typing import Tuple
from dotenv import load_dotenv

# --- CONFIGURATION ---
load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring non-integer value %r for %s; using %s.", raw, name, default
        )
        return default
    return value if value >= 1 else default


DEFAULT_PAGE_SIZE: int = _int_from_env("CONSOLE_DEFAULT_PAGE_SIZE", 10)
PAGE_SIZES: Tuple[int, ...] = (5, 10, 20, 50, 100)
PAGE_WINDOW_SIZE: int = _int_from_env("CONSOLE_PAGE_WINDOW_SIZE", 5)
DASHBOARD_RECENT_LIMIT: int = _int_from_env("CONSOLE_DASHBOARD_RECENT_LIMIT", 5)
LOG_LEVEL: str = os.getenv("CONSOLE_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Installs a basic root handler for hosts that have not configured logging."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
