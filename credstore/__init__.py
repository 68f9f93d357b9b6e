"""
credstore package initializer.

In-memory user-credential store: register users with a salted password hash,
verify logins in constant time, delete users by opaque identifier.
"""

from . import hashing
from . import manager
from . import storage
from .errors import (
    CredentialStoreError,
    DuplicateUsername,
    HashingFailure,
    IdentifierExhausted,
    IndexConsistencyError,
    UnknownIdentifier,
)
from .manager.credential_store import CredentialStore
from .models import UserRecord

__all__ = [
    "hashing",
    "manager",
    "storage",
    "CredentialStore",
    "CredentialStoreError",
    "DuplicateUsername",
    "HashingFailure",
    "IdentifierExhausted",
    "IndexConsistencyError",
    "UnknownIdentifier",
    "UserRecord",
]
