"""
Credential store dependency
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..repositories import CredentialStore, SqlCredentialStore


def get_store(db: Session = Depends(get_db)) -> CredentialStore:
    """SQL-backed store bound to the request's session"""
    return SqlCredentialStore(db)
