from sqlalchemy import Column, String, Integer, Boolean, DateTime, Index
from ..db import Base


class OTPChallenge(Base):
    __tablename__ = "otp_codes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    phone = Column(String, nullable=False, index=True)
    code = Column(String(6), nullable=False)
    flow_token = Column(String(36), nullable=False, unique=True)
    expires_at = Column(DateTime, nullable=False)
    used = Column(Boolean, nullable=False, default=False)  # false -> true only

    __table_args__ = (
        Index("idx_otp_codes_phone_used", "phone", "used"),
    )
