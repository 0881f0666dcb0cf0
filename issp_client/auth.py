"""
Credential providers.

Fetchers receive an object with a ``get_token()`` method instead of
reading session storage themselves.
"""

import os
from typing import Optional, Protocol

from issp_client.storage.session import SessionStore


class CredentialProvider(Protocol):
    def get_token(self) -> Optional[str]:
        ...


class StaticCredentialProvider:
    """Fixed token, mostly for scripts and tests."""

    def __init__(self, token: Optional[str] = None):
        self.token = token

    def get_token(self) -> Optional[str]:
        return self.token or None


class EnvCredentialProvider:
    """Token read from an environment variable on every call."""

    def __init__(self, var: str = "ISSP_TOKEN"):
        self.var = var

    def get_token(self) -> Optional[str]:
        return os.environ.get(self.var) or None


class ChainedCredentialProvider:
    """First provider that yields a token wins."""

    def __init__(self, *providers: CredentialProvider):
        self.providers = providers

    def get_token(self) -> Optional[str]:
        for provider in self.providers:
            token = provider.get_token()
            if token:
                return token
        return None


def default_provider(store: SessionStore) -> ChainedCredentialProvider:
    """Environment token first, then the stored session."""
    return ChainedCredentialProvider(EnvCredentialProvider(), store)
