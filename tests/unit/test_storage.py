"""
Unit tests for the in-memory Storage module.

Covers:
    - add_user (insert into both indexes, reject username/identifier collisions)
    - get_by_username / get_by_identifier (found & not found)
    - remove_user (both indexes cleared, unknown identifier, desync detection)
    - count
"""

import pytest

from credstore.errors import IndexConsistencyError
from credstore.models import UserRecord
from credstore.storage.storage import Storage


def _record(identifier="id-1", username="alice", password_hash="$pbkdf2-sha256$i=1,l=32$c2FsdA$aGFzaA"):
    return UserRecord(identifier=identifier, username=username, password_hash=password_hash)


def test_add_user_populates_both_indexes(storage):
    record = _record()
    assert storage.add_user(record) is True
    assert storage.get_by_username("alice") is record
    assert storage.get_by_identifier("id-1") is record
    assert len(storage.users_by_id) == 1
    assert len(storage.users_by_name) == 1
    assert storage.count() == 1


def test_add_user_rejects_duplicate_username(storage):
    storage.add_user(_record(identifier="id-1"))
    assert storage.add_user(_record(identifier="id-2")) is False
    # No partial insert under the new identifier
    assert storage.get_by_identifier("id-2") is None
    assert storage.count() == 1


def test_add_user_rejects_duplicate_identifier(storage):
    storage.add_user(_record(username="alice"))
    assert storage.add_user(_record(username="bob")) is False
    assert storage.get_by_username("bob") is None
    assert storage.get_by_username("alice").identifier == "id-1"


def test_lookups_not_found(storage):
    assert storage.get_by_username("nobody") is None
    assert storage.get_by_identifier("nothing") is None


def test_remove_user_clears_both_indexes(storage):
    record = _record()
    storage.add_user(record)
    assert storage.remove_user("id-1") is record
    assert storage.users_by_id == {}
    assert storage.users_by_name == {}
    assert storage.count() == 0


def test_remove_user_unknown_identifier(storage):
    storage.add_user(_record())
    assert storage.remove_user("missing") is None
    assert storage.count() == 1


def test_remove_user_detects_missing_username_entry(storage):
    storage.add_user(_record())
    del storage.users_by_name["alice"]  # simulate corruption
    with pytest.raises(IndexConsistencyError):
        storage.remove_user("id-1")
    # Primary index untouched when the fault is detected
    assert "id-1" in storage.users_by_id


def test_remove_user_detects_username_pointing_elsewhere(storage):
    storage.add_user(_record())
    storage.users_by_name["alice"] = _record(identifier="id-other")
    with pytest.raises(IndexConsistencyError, match="out of sync"):
        storage.remove_user("id-1")


def test_multiple_users_independent(storage):
    storage.add_user(_record(identifier="a1", username="a"))
    storage.add_user(_record(identifier="b2", username="b"))
    storage.remove_user("a1")
    assert storage.get_by_username("a") is None
    assert storage.get_by_username("b").identifier == "b2"
    assert storage.count() == 1


def test_record_repr_hides_password_hash():
    record = _record(password_hash="$secret-hash$")
    assert "$secret-hash$" not in repr(record)
    assert "alice" in repr(record)


def test_fresh_storage_is_empty():
    fresh = Storage()
    assert fresh.count() == 0
