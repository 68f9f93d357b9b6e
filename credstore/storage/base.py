"""
Base storage interface for credstore.

Purpose:
    Define a small, stable contract for the two indexes a credential store
    needs (identifier -> record, username -> record). The in-memory backend is
    the only implementation shipped; the contract keeps CredentialStore free of
    any knowledge about how records are held.

Contract:
    Every mutating method updates both indexes or neither. A backend that
    finds the indexes disagreeing raises IndexConsistencyError instead of
    repairing them silently.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from credstore.models import UserRecord


class BaseStorage(ABC):
    """Abstract base class for credential storage backends."""

    @abstractmethod  # pragma: no cover
    def add_user(self, record: UserRecord) -> bool:
        """
        Insert a record into both indexes.

        Returns:
            bool: True on success, False if the username or identifier is
            already present (nothing is inserted in that case).
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_by_username(self, username: str) -> Optional[UserRecord]:
        """Return the live record for `username`, or None."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_by_identifier(self, identifier: str) -> Optional[UserRecord]:
        """Return the live record for `identifier`, or None."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def remove_user(self, identifier: str) -> Optional[UserRecord]:
        """
        Remove a record from both indexes.

        Returns:
            Optional[UserRecord]: The removed record, or None if `identifier`
            is unknown (nothing is removed in that case).

        Raises:
            IndexConsistencyError: if the username index does not hold the
            record found in the identifier index.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def count(self) -> int:
        """Number of live records."""
        raise NotImplementedError
