"""
Core authentication logic.

Turns a CredentialStore verification result into the HTTP outcome. Unknown
users and wrong passwords produce the same 401 so the response does not reveal
whether an account exists.
"""

from contextlib import nullcontext
from typing import ContextManager, Optional

from fastapi import HTTPException, status

from credstore.manager.credential_store import CredentialStore


def authenticate_user(
    store: CredentialStore,
    username: str,
    password: str,
    lock: Optional[ContextManager] = None,
) -> str:
    """
    Authenticate a user by validating their username and password.

    Args:
        store (CredentialStore): Store to verify against.
        username (str): The username provided by the client.
        password (str): The password provided by the client.
        lock (Optional[ContextManager]): Held around the store call when given.

    Returns:
        str: The authenticated user's identifier.

    Raises:
        HTTPException: If authentication fails (401 Unauthorized).
    """
    with lock if lock is not None else nullcontext():
        identifier = store.verify(username, password)

    if identifier is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return identifier
