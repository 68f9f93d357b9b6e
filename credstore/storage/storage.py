"""
Storage module for credstore (in-memory implementation).

Responsibilities:
    - Hold user records under two indexes: identifier (primary) and username (secondary)
    - Insert and remove records from both indexes as one step
    - Detect, and refuse to paper over, a desynchronised username index

Design:
    - Both dicts hold the *same* UserRecord objects; records are frozen, so the
      indexes cannot drift through mutation of a shared record.
    - Not thread-safe. Callers sharing a Storage across threads serialise access.
"""

from typing import Dict, Optional

from credstore.errors import IndexConsistencyError
from credstore.models import UserRecord

from .base import BaseStorage


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize empty indexes.

        Internal schema:
            self.users_by_id   = {identifier: UserRecord}
            self.users_by_name = {username: UserRecord}
        """
        self.users_by_id: Dict[str, UserRecord] = {}
        self.users_by_name: Dict[str, UserRecord] = {}

    def add_user(self, record: UserRecord) -> bool:
        """
        Insert `record` under its identifier and its username.

        Rules:
            - Username already taken -> reject.
            - Identifier already taken -> reject.
            - Both checks happen before either dict is written.
        """
        if record.username in self.users_by_name or record.identifier in self.users_by_id:
            return False
        self.users_by_id[record.identifier] = record
        self.users_by_name[record.username] = record
        return True

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        return self.users_by_name.get(username)

    def get_by_identifier(self, identifier: str) -> Optional[UserRecord]:
        return self.users_by_id.get(identifier)

    def remove_user(self, identifier: str) -> Optional[UserRecord]:
        """
        Remove the record for `identifier` from both indexes.

        Returns:
            Optional[UserRecord]: The removed record, or None if unknown.

        Raises:
            IndexConsistencyError: the username index is missing the record
            or maps its username to a different identifier.
        """
        record = self.users_by_id.get(identifier)
        if record is None:
            return None

        indexed = self.users_by_name.get(record.username)
        if indexed is None or indexed.identifier != identifier:
            raise IndexConsistencyError(
                f"Username index out of sync for identifier {identifier!r}"
            )

        del self.users_by_id[identifier]
        del self.users_by_name[record.username]
        return record

    def count(self) -> int:
        return len(self.users_by_id)
