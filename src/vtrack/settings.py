"""Application-wide settings and environment loading."""

import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()
logger.debug("Environment variables loaded from .env if present")


@lru_cache(maxsize=1)
def get_repository_root() -> str:
    """Return the repository root from VTRACK_ROOT, defaulting to the working directory."""
    root = os.getenv("VTRACK_ROOT")
    if root:
        logger.debug("Repository root configured", extra={"root": root})
        return root

    logger.debug("Repository root not configured, using working directory")
    return os.getcwd()


@lru_cache(maxsize=1)
def get_storage_dir() -> Optional[str]:
    """Return the storage directory override from VTRACK_STORAGE_DIR."""
    storage_dir = os.getenv("VTRACK_STORAGE_DIR")
    if storage_dir:
        logger.debug("Storage directory configured", extra={"storage_dir": storage_dir})
    return storage_dir or None
