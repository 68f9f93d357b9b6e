"""Data model for credstore."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UserRecord:
    """
    One registered account.

    Attributes:
        identifier (str): Opaque, caller-facing handle (UUID4 string). Never reused.
        username (str): Unique login name.
        password_hash (str): Encoded salted hash; kept out of repr() so it
            never shows up in logs or tracebacks.
        created_at (datetime): UTC creation time.
    """

    identifier: str
    username: str
    password_hash: str = field(repr=False)
    created_at: datetime = field(default_factory=_utcnow)
