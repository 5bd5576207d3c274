"""
Issued bearer token pairs. Rows are never deleted, only flagged as revoked.
"""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Index
from ..db import Base


class OAuthToken(Base):
    __tablename__ = "oauth_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    phone = Column(String, nullable=False)
    credential_id = Column(String, nullable=False)
    access_token = Column(String(64), nullable=False, unique=True)
    refresh_token = Column(String(64), nullable=False, unique=True)
    issued_at = Column(DateTime, nullable=False)
    expires_in = Column(Integer, nullable=False)
    revoked = Column(Boolean, nullable=False, default=False)
    revoked_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_oauth_tokens_phone_issued", "phone", "issued_at"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "phone": self.phone,
            "credential_id": self.credential_id,
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "issued_at": self.issued_at,
            "expires_in": self.expires_in,
            "revoked": bool(self.revoked),
            "revoked_at": self.revoked_at,
        }
