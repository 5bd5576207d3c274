"""
Structured audit logging service for credential events
"""
import logging
import json
from typing import Optional

from ..core.config import settings
from ..utils.phone import get_phone_last4
from ..utils.time import utcnow, to_iso_z

logger = logging.getLogger(__name__)


class AuditService:
    """
    Structured audit logging for the onboarding flow.

    Never logs codes, flow tokens, bearer tokens or full phone numbers.
    """

    @staticmethod
    def _log_audit_event(
        event_type: str,
        phone: Optional[str] = None,
        outcome: Optional[str] = None,
        error: Optional[str] = None,
        **kwargs
    ):
        audit_data = {
            "event_type": event_type,
            "timestamp": to_iso_z(utcnow()),
            "outcome": outcome,
            "env": settings.ENV,
        }
        if phone:
            audit_data["phone_last4"] = get_phone_last4(phone)
        if error:
            audit_data["error"] = error
        audit_data.update(kwargs)

        logger.info(f"[Audit] {json.dumps(audit_data, default=str)}")

    @staticmethod
    def log_challenge_issued(phone: str, expires_at):
        AuditService._log_audit_event("otp_challenge_issued", phone=phone, outcome="success", expires_at=to_iso_z(expires_at))

    @staticmethod
    def log_challenge_verified(phone: str):
        AuditService._log_audit_event("otp_challenge_verified", phone=phone, outcome="success")

    @staticmethod
    def log_challenge_rejected(phone: str, error: str):
        AuditService._log_audit_event("otp_challenge_rejected", phone=phone, outcome="fail", error=error)

    @staticmethod
    def log_passkey_bound(phone: str, replaced: bool):
        AuditService._log_audit_event("passkey_bound", phone=phone, outcome="success", replaced=replaced)

    @staticmethod
    def log_passkey_rejected(phone: str, error: str):
        AuditService._log_audit_event("passkey_rejected", phone=phone, outcome="fail", error=error)

    @staticmethod
    def log_tokens_issued(phone: str, token_id: int):
        AuditService._log_audit_event("oauth_tokens_issued", phone=phone, outcome="success", token_id=token_id)

    @staticmethod
    def log_token_revoked(phone: str, token_id: int):
        AuditService._log_audit_event("oauth_token_revoked", phone=phone, outcome="success", token_id=token_id)
