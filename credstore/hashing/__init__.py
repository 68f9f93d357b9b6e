"""Password hashing strategies and their config-driven factory."""

from .hashers import BaseHasher, BcryptHasher, PBKDF2Hasher, ScryptHasher, get_hasher

__all__ = ["BaseHasher", "BcryptHasher", "PBKDF2Hasher", "ScryptHasher", "get_hasher"]
