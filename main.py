"""
Main API module for credstore.

Responsibilities:
    - Expose REST endpoints to register, log in and delete users
    - Map credential-store errors onto HTTP status codes
    - Serialise store access, since the store itself is single-owner

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - CredentialStore is built from config (hasher, storage backend) unless injected.
    - Passwords only ever travel from the request body into the store call.

Concurrency:
    One `threading.Lock` per app guards every store call, and it is held for
    the whole password hash or verification. Registrations, logins and
    deletions are therefore fully serialised: throughput is roughly
    1 / (hash time at CREDSTORE_HASH_COST) requests per second, whatever the
    number of worker threads. Scale out with more processes, each owning its
    own store, or lower the cost.
"""

import logging
import threading
from typing import Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Response, status

from auth.dependencies import get_current_identifier
from auth.schemas import LoginResult, UserCreated, UserCredentials
from auth.service import authenticate_user
from credstore.config import load_settings
from credstore.errors import DuplicateUsername, HashingFailure, UnknownIdentifier
from credstore.manager.credential_store import CredentialStore


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    # basic console logging unless the host already configured handlers
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level)


def create_app(store: Optional[CredentialStore] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        store (Optional[CredentialStore]): Store to serve; a fresh one built
            from configuration when omitted.

    Returns:
        FastAPI: A configured application with its own isolated store.
    """
    settings = load_settings()
    _configure_logging(settings.LOG_LEVEL)
    log = logging.getLogger("credstore")

    app = FastAPI(
        title="credstore",
        description="In-memory credential store with salted password hashing",
        docs_url="/docs",
    )

    # ----------------------------------------------------------------
    # Per-app instances (isolated for tests)
    # ----------------------------------------------------------------
    store = store if store is not None else CredentialStore()
    store_lock = threading.Lock()
    app.state.store = store
    app.state.store_lock = store_lock

    log.info(
        "credstore ready: hasher=%s storage=%s",
        store.hasher.name,
        type(store.storage).__name__,
    )

    # Health check
    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.post("/users", status_code=status.HTTP_201_CREATED, response_model=UserCreated)
    def create_user(req: UserCredentials) -> UserCreated:
        """
        Register a user.

        Raises:
            HTTPException: 409 if the username is taken, 500 if hashing failed.
        """
        try:
            with store_lock:
                identifier = store.create(req.username, req.password)
        except DuplicateUsername:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")
        except HashingFailure as exc:
            log.error("Password hashing failed: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to hash password",
            )
        return UserCreated(message="User created", identifier=identifier)

    @app.post("/users/login", response_model=LoginResult)
    def login(req: UserCredentials) -> LoginResult:
        """
        Verify credentials and return the user's identifier.

        Raises:
            HTTPException: 401 for an unknown user or a wrong password alike.
        """
        identifier = authenticate_user(store, req.username, req.password, lock=store_lock)
        return LoginResult(identifier=identifier)

    @app.delete("/users/me", status_code=status.HTTP_204_NO_CONTENT)
    def delete_me(identifier: str = Depends(get_current_identifier)) -> Response:
        """
        Delete the account behind the supplied Basic credentials.

        Raises:
            HTTPException: 404 if the account vanished between auth and delete.
        """
        try:
            with store_lock:
                store.delete(identifier)
        except UnknownIdentifier:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


# `uvicorn main:app` and `from main import app` keep working.
app = create_app()
