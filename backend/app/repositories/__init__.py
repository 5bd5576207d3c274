"""
Credential store implementations
"""
from .base import CredentialStore
from .sql import SqlCredentialStore
from .memory import InMemoryCredentialStore

__all__ = [
    "CredentialStore",
    "SqlCredentialStore",
    "InMemoryCredentialStore",
]
