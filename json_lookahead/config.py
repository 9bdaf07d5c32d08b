"""Environment driven settings."""
import logging
import os
from typing import Optional

DEFAULT_BUF_SIZE = 64 * 1024
DEFAULT_PORT = 8000

logger = logging.getLogger(__name__)


def backend_name() -> Optional[str]:
    """ijson backend to use; None selects ijson's default."""
    return os.environ.get("LOOKAHEAD_BACKEND") or None


def buf_size() -> int:
    raw = os.environ.get("JSON_CHUNK_SIZE")
    if not raw:
        return DEFAULT_BUF_SIZE
    try:
        size = int(raw)
    except ValueError:
        logger.warning(f"ignoring non-numeric JSON_CHUNK_SIZE={raw!r}")
        return DEFAULT_BUF_SIZE
    return size if size > 0 else DEFAULT_BUF_SIZE


def log_level() -> str:
    return os.environ.get("LOOKAHEAD_LOG_LEVEL", "INFO").upper()


def port() -> int:
    return int(os.environ.get("PORT", str(DEFAULT_PORT)))
