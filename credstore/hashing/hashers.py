"""
Password hashers for credstore.

Provided hashers:
- PBKDF2Hasher: PBKDF2-HMAC (sha256 or sha512) via passlib's pbkdf2 handlers
- ScryptHasher: scrypt (memory-hard) via passlib; cost given as log2(N)
- BcryptHasher: bcrypt via the `bcrypt` package; bcrypt's own "$2b$" format

Encoded forms are owned by the libraries:
    $pbkdf2-sha256$<rounds>$<salt>$<checksum>
    $scrypt$ln=<log2 N>,r=<block size>,p=<parallelism>$<salt>$<checksum>
    $2b$<rounds>$<salt+checksum>

Configuration (via credstore.config, read at call time by `get_hasher`):
- HASH_ALGORITHM: registry key, default "pbkdf2-sha256"
- HASH_COST: iterations / log2 cost; None means the algorithm default
- SALT_LENGTH: bytes of random salt for PBKDF2 / scrypt (bcrypt fixes its own)

Contract:
- `hash()` draws a fresh salt on every call and raises HashingFailure when the
  library rejects the input, salt size or cost.
- `verify()` compares in constant time and returns False on mismatch *or* on a
  stored value it cannot parse; it never raises for bad input.
- Neither method keeps or logs the plaintext.

bcrypt is called directly rather than through passlib: passlib 1.7's bcrypt
backend self-check feeds bcrypt a >72-byte secret, which bcrypt 5 refuses.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

import bcrypt
from passlib.hash import pbkdf2_sha256, pbkdf2_sha512
from passlib.hash import scrypt as passlib_scrypt

from credstore.config import MIN_SALT_LENGTH, load_settings
from credstore.errors import HashingFailure

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "pbkdf2-sha256"
DEFAULT_PBKDF2_ITERATIONS = {"sha256": 600_000, "sha512": 210_000}
DEFAULT_SCRYPT_LOG_N = 15
DEFAULT_BCRYPT_ROUNDS = 12

BCRYPT_MAX_PASSWORD_BYTES = 72

_PBKDF2_HANDLERS = {"sha256": pbkdf2_sha256, "sha512": pbkdf2_sha512}


class BaseHasher(ABC):
    """Abstract base for password hashers."""

    @property
    @abstractmethod
    def name(self) -> str:  # pragma: no cover
        """Algorithm identifier, as used in the registry."""
        raise NotImplementedError

    @abstractmethod
    def hash(self, password: str) -> str:  # pragma: no cover
        """Return the encoded salted hash of `password`."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, password: str, encoded: str) -> bool:  # pragma: no cover
        """Return True only if `password` matches `encoded`."""
        raise NotImplementedError


def _check_salt_length(salt_length: int) -> None:
    if salt_length < MIN_SALT_LENGTH:
        raise HashingFailure(f"Salt must be at least {MIN_SALT_LENGTH} bytes, got {salt_length}")


@dataclass(frozen=True)
class PBKDF2Hasher(BaseHasher):
    """PBKDF2-HMAC with a configurable digest and iteration count."""
    digest: str = "sha256"
    iterations: int = DEFAULT_PBKDF2_ITERATIONS["sha256"]
    salt_length: int = 16

    @property
    def name(self) -> str:
        return f"pbkdf2-{self.digest}"

    def hash(self, password: str) -> str:
        _check_salt_length(self.salt_length)
        handler = _PBKDF2_HANDLERS.get(self.digest)
        if handler is None:
            raise HashingFailure(f"Unsupported pbkdf2 digest: {self.digest!r}")
        try:
            return handler.using(rounds=self.iterations, salt_size=self.salt_length).hash(password)
        except (ValueError, TypeError) as exc:
            raise HashingFailure(f"{self.name} rejected its parameters: {exc}") from exc

    def verify(self, password: str, encoded: str) -> bool:
        handler = _PBKDF2_HANDLERS.get(self.digest)
        if handler is None:
            return False
        # Rounds come from the stored hash, so hashes survive a cost change.
        try:
            return handler.verify(password, encoded)
        except (ValueError, TypeError):
            return False


@dataclass(frozen=True)
class ScryptHasher(BaseHasher):
    """scrypt with N = 2**log_n and passlib's block size (r=8) and parallelism (p=1)."""
    log_n: int = DEFAULT_SCRYPT_LOG_N
    salt_length: int = 16

    @property
    def name(self) -> str:
        return "scrypt"

    def hash(self, password: str) -> str:
        _check_salt_length(self.salt_length)
        try:
            return passlib_scrypt.using(rounds=self.log_n, salt_size=self.salt_length).hash(password)
        except (ValueError, TypeError, MemoryError) as exc:
            raise HashingFailure(f"scrypt rejected its parameters: {exc}") from exc

    def verify(self, password: str, encoded: str) -> bool:
        try:
            return passlib_scrypt.verify(password, encoded)
        except (ValueError, TypeError, MemoryError):
            return False


@dataclass(frozen=True)
class BcryptHasher(BaseHasher):
    """
    bcrypt via the `bcrypt` package.

    bcrypt generates and embeds its own 16-byte salt, so `salt_length` does not
    apply. Passwords longer than 72 bytes raise HashingFailure instead of being
    truncated.
    """
    rounds: int = DEFAULT_BCRYPT_ROUNDS

    @property
    def name(self) -> str:
        return "bcrypt"

    def hash(self, password: str) -> str:
        secret = password.encode("utf-8")
        if len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
            raise HashingFailure(f"bcrypt cannot hash passwords longer than {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        try:
            hashed = bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds))
        except ValueError as exc:
            raise HashingFailure(f"bcrypt rejected its input: {exc}") from exc
        return hashed.decode("utf-8")

    def verify(self, password: str, encoded: str) -> bool:
        secret = password.encode("utf-8")
        if len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(secret, encoded.encode("utf-8"))
        except ValueError:
            return False


# Registry: canonical key -> aliases accepted from config
HASHER_ALIASES: Dict[str, str] = {
    "pbkdf2": "pbkdf2-sha256",
    "pbkdf2-sha256": "pbkdf2-sha256",
    "pbkdf2_sha256": "pbkdf2-sha256",
    "pbkdf2-sha512": "pbkdf2-sha512",
    "pbkdf2_sha512": "pbkdf2-sha512",
    "scrypt": "scrypt",
    "bcrypt": "bcrypt",
}


def get_hasher(
    name: Optional[str] = None,
    *,
    cost: Optional[int] = None,
    salt_length: Optional[int] = None,
) -> BaseHasher:
    """
    Resolve a hasher from arguments, falling back to settings read at call time.

    Args:
        name: registry key (see HASHER_ALIASES); defaults to HASH_ALGORITHM.
        cost: iterations (pbkdf2) or log2 cost (scrypt, bcrypt); defaults to HASH_COST.
        salt_length: salt bytes for pbkdf2/scrypt; defaults to SALT_LENGTH.

    Raises:
        ValueError: for an unknown algorithm name.
    """
    cfg = load_settings()
    raw = (name or cfg.HASH_ALGORITHM or DEFAULT_ALGORITHM).strip().lower()
    key = HASHER_ALIASES.get(raw)
    if key is None:
        raise ValueError(f"Unknown hash algorithm: {raw!r}")

    cost = cost if cost is not None else cfg.HASH_COST
    salt_length = salt_length if salt_length is not None else cfg.SALT_LENGTH

    hasher: BaseHasher
    if key.startswith("pbkdf2-"):
        digest = key.split("-", 1)[1]
        iterations = cost if cost is not None else DEFAULT_PBKDF2_ITERATIONS[digest]
        hasher = PBKDF2Hasher(digest=digest, iterations=iterations, salt_length=salt_length)
    elif key == "scrypt":
        log_n = cost if cost is not None else DEFAULT_SCRYPT_LOG_N
        hasher = ScryptHasher(log_n=log_n, salt_length=salt_length)
    else:
        rounds = cost if cost is not None else DEFAULT_BCRYPT_ROUNDS
        hasher = BcryptHasher(rounds=rounds)

    logger.debug("Using password hasher: %s -> %r", raw, hasher)
    return hasher
