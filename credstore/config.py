"""
Runtime configuration for credstore
===================================

Simple settings module that reads from environment variables (only here),
and exposes a `settings` object for the rest of the codebase.
Avoid reading env vars anywhere else; import from this module instead.
Factories call `load_settings()` so tests that monkeypatch the environment
see fresh values without reloading modules.

Password hashing
----------------
- CREDSTORE_HASH_ALGORITHM : one of "pbkdf2-sha256" (default), "pbkdf2-sha512",
                             "scrypt", "bcrypt"
- CREDSTORE_HASH_COST      : iterations (pbkdf2) or log2 cost (scrypt, bcrypt);
                             unset means the algorithm's own default
- CREDSTORE_SALT_LENGTH    : salt size in bytes; default 16; clamped to [8, 64]

Storage
-------
- CREDSTORE_STORAGE_BACKEND : "memory" (default)

Logging
-------
- CREDSTORE_LOG_LEVEL : root level applied by the app factory (default "INFO")
"""

import os
from typing import Optional

MIN_SALT_LENGTH = 8
MAX_SALT_LENGTH = 64


def _get_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class _Settings:
    def __init__(self) -> None:
        # -------- Password hashing --------
        self.HASH_ALGORITHM: str = os.getenv("CREDSTORE_HASH_ALGORITHM", "pbkdf2-sha256").strip().lower()
        self.HASH_COST: Optional[int] = _get_int("CREDSTORE_HASH_COST", None)

        _salt_raw = _get_int("CREDSTORE_SALT_LENGTH", 16)
        self.SALT_LENGTH: int = max(MIN_SALT_LENGTH, min(MAX_SALT_LENGTH, _salt_raw))

        # -------- Storage --------
        self.STORAGE_BACKEND: str = os.getenv("CREDSTORE_STORAGE_BACKEND", "memory").strip().lower()

        # -------- Logging --------
        self.LOG_LEVEL: str = os.getenv("CREDSTORE_LOG_LEVEL", "INFO").strip().upper()


def load_settings() -> _Settings:
    """Build a settings object from the current environment."""
    return _Settings()


settings = load_settings()
