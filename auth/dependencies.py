"""
FastAPI dependency functions for authentication.

These can be used in routes with Depends() to protect endpoints.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .service import authenticate_user

# HTTP Basic authentication scheme
security = HTTPBasic()


def get_current_identifier(
    request: Request,
    credentials: HTTPBasicCredentials = Depends(security),
) -> str:
    """
    Dependency that validates Basic credentials against the app's store.

    Returns:
        str: The authenticated user's identifier.
    """
    return authenticate_user(
        request.app.state.store,
        credentials.username,
        credentials.password,
        lock=request.app.state.store_lock,
    )
