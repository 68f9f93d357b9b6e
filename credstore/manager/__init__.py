"""Credential store orchestration."""

from .credential_store import CredentialStore

__all__ = ["CredentialStore"]
