"""
CredentialStore module for credstore.

Responsibilities:
    - Register users: salted hash at creation, fresh never-reused identifier
    - Verify logins in constant time, returning the identifier or None
    - Delete users from both indexes by identifier

Design notes:
    - Storage and hasher are injected; when omitted they are resolved from
      configuration (CREDSTORE_STORAGE_BACKEND, CREDSTORE_HASH_*).
    - Hashing happens before any mutation, so a HashingFailure leaves no trace.
    - Identifiers come from uuid4 (OS entropy). Every identifier handed out is
      remembered for the lifetime of the store so none is issued twice, even
      after its record is deleted. Candidates already present in the backend
      (which other stores may share) are skipped as well.
    - An unknown username still costs one hash verification (against a dummy
      hash), so "no such user" and "wrong password" look the same from outside,
      both in result and in latency.
    - Not thread-safe: one owner, or an external lock around every call.
"""

import logging
import secrets
import uuid
from typing import Callable, Optional, Set

from credstore.errors import (
    DuplicateUsername,
    HashingFailure,
    IdentifierExhausted,
    UnknownIdentifier,
)
from credstore.hashing.hashers import BaseHasher, get_hasher
from credstore.models import UserRecord
from credstore.storage.base import BaseStorage
from credstore.storage.storage_factory import get_storage

logger = logging.getLogger(__name__)

IdentifierFactory = Callable[[], str]


def _uuid4_identifier() -> str:
    return str(uuid.uuid4())


class CredentialStore:
    """
    Registers, verifies and removes users over a dual-index storage backend.

    Example:
        >>> store = CredentialStore()
        >>> user_id = store.create("alice", "secret1")
        >>> store.verify("alice", "secret1") == user_id
        True
        >>> store.delete(user_id)
        >>> store.verify("alice", "secret1") is None
        True
    """

    def __init__(
        self,
        storage: Optional[BaseStorage] = None,
        hasher: Optional[BaseHasher] = None,
        identifier_factory: Optional[IdentifierFactory] = None,
        max_identifier_attempts: int = 8,
    ):
        """
        Args:
            storage (Optional[BaseStorage]): Backend; defaults to get_storage().
            hasher (Optional[BaseHasher]): Password hasher; defaults to get_hasher().
            identifier_factory (Optional[Callable[[], str]]): Identifier source.
                Defaults to uuid4; inject only for deterministic tests.
            max_identifier_attempts (int): Draws allowed before giving up on a
                factory that keeps returning issued or stored identifiers.
        """
        self.storage = storage if storage is not None else get_storage()
        self.hasher = hasher if hasher is not None else get_hasher()
        self.identifier_factory = identifier_factory or _uuid4_identifier
        self.max_identifier_attempts = max_identifier_attempts
        self._issued: Set[str] = set()
        self._dummy_hash: Optional[str] = None

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------
    def _new_identifier(self) -> str:
        for _ in range(self.max_identifier_attempts):
            candidate = self.identifier_factory()
            if not candidate or candidate in self._issued:
                continue
            # The backend may be shared with other stores.
            if self.storage.get_by_identifier(candidate) is None:
                return candidate
        raise IdentifierExhausted(
            f"No fresh identifier after {self.max_identifier_attempts} attempts"
        )

    def _burn_verification(self, password: str) -> None:
        """Spend one verification on a throwaway hash."""
        if self._dummy_hash is None:
            try:
                self._dummy_hash = self.hasher.hash(secrets.token_urlsafe(16))
            except HashingFailure:
                logger.warning("Hasher %s cannot build a dummy hash", self.hasher.name)
                return
        self.hasher.verify(password, self._dummy_hash)

    # ---------------------------------------------------------------------
    # Operations
    # ---------------------------------------------------------------------
    def create(self, username: str, password: str) -> str:
        """
        Register a new user.

        Returns:
            str: The identifier assigned to the new record.

        Raises:
            DuplicateUsername: `username` is already registered.
            HashingFailure: the hash primitive rejected the input or parameters.
            IdentifierExhausted: the identifier factory produced no fresh value.
        """
        if self.storage.get_by_username(username) is not None:
            logger.info("Rejected duplicate username %r", username)
            raise DuplicateUsername(username)

        password_hash = self.hasher.hash(password)
        identifier = self._new_identifier()
        record = UserRecord(identifier=identifier, username=username, password_hash=password_hash)

        if not self.storage.add_user(record):
            # Only reachable if the backend changed between lookup and insert.
            raise DuplicateUsername(username)

        self._issued.add(identifier)
        logger.info("Created user %r with identifier %s", username, identifier)
        return identifier

    def verify(self, username: str, password: str) -> Optional[str]:
        """
        Check a login attempt.

        Returns:
            Optional[str]: The user's identifier on a match; None for an unknown
            username, a wrong password or an unparseable stored hash.
        """
        record = self.storage.get_by_username(username)
        if record is None:
            self._burn_verification(password)
            logger.debug("Verification failed for %r", username)
            return None

        if self.hasher.verify(password, record.password_hash):
            logger.debug("Verification succeeded for %r", username)
            return record.identifier

        logger.debug("Verification failed for %r", username)
        return None

    def delete(self, identifier: str) -> None:
        """
        Remove a user from both indexes.

        Raises:
            UnknownIdentifier: no live record has `identifier`.
            IndexConsistencyError: the backend's indexes disagree (not recoverable).
        """
        record = self.storage.remove_user(identifier)
        if record is None:
            raise UnknownIdentifier(identifier)
        logger.info("Deleted user %r with identifier %s", record.username, identifier)

    # ---------------------------------------------------------------------
    # Read helpers
    # ---------------------------------------------------------------------
    def username_exists(self, username: str) -> bool:
        return self.storage.get_by_username(username) is not None

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.storage.get_by_identifier(identifier) is not None

    def __len__(self) -> int:
        return self.storage.count()
