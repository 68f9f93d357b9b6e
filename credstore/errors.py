"""
Error taxonomy for credstore.

Recoverable failures derive from `CredentialStoreError`, a `ValueError` like
the rest of the code base raises for bad input, so callers can
catch them in one place. `IndexConsistencyError` sits outside that
family: it signals corrupted state, not a usage mistake.
"""


class CredentialStoreError(ValueError):
    """Base class for recoverable credential-store errors."""


class DuplicateUsername(CredentialStoreError):
    """Raised by create when the username is already registered."""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username!r}")
        self.username = username


class HashingFailure(CredentialStoreError):
    """Raised when the password hash primitive rejects its salt, parameters or input."""


class UnknownIdentifier(CredentialStoreError):
    """Raised by delete when no live record has the given identifier."""

    def __init__(self, identifier: str):
        super().__init__(f"Unknown identifier: {identifier!r}")
        self.identifier = identifier


class IdentifierExhausted(CredentialStoreError):
    """Raised when the identifier factory keeps returning already-issued values."""


class IndexConsistencyError(RuntimeError):
    """The username index and the identifier index disagree."""
