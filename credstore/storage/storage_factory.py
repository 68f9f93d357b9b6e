"""
Storage factory – select the storage backend from config
=======================================================

Centralizes selection of the storage backend so CredentialStore stays
ignorant of where records live.

- Reads environment **at call time** to avoid stale values in tests.
- "memory" is the only backend; durable persistence is left to callers.

Environment variables
---------------------
- CREDSTORE_STORAGE_BACKEND: "memory" (default)
"""

import logging
from typing import Optional

from credstore.config import load_settings
from credstore.storage.base import BaseStorage
from credstore.storage.storage import Storage

logger = logging.getLogger(__name__)


def get_storage(backend: Optional[str] = None) -> BaseStorage:
    """
    Return a storage backend based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default). If omitted, reads CREDSTORE_STORAGE_BACKEND.

    Raises
    ------
    ValueError
        For an unknown backend name.
    """
    be = (backend or load_settings().STORAGE_BACKEND or "memory").strip().lower()
    logger.debug("Selected storage backend: %r", be)

    if be == "memory":
        return Storage()

    raise ValueError(f"Unknown storage backend: {be!r}")
