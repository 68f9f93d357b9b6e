"""
Pydantic schemas for request/response models in the auth module.
"""

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    """Schema for registration and login payloads."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserCreated(BaseModel):
    """Schema for the registration response."""
    message: str
    identifier: str


class LoginResult(BaseModel):
    """Schema for a successful login."""
    identifier: str
