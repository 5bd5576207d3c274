"""
Passkey binding: the single active credential id for a phone.
"""
from sqlalchemy import Column, String, DateTime
from ..db import Base
from ..utils.time import utcnow


class PasskeyBinding(Base):
    __tablename__ = "passkeys"

    # One binding per phone; re-registering replaces the credential
    phone = Column(String, primary_key=True)
    credential_id = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
