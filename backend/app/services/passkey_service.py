"""
Passkey binding service

A phone holds exactly one credential id. Binding requires a verified OTP
challenge whose expires_at is at most PASSKEY_GRACE_SECONDS in the past.
The window is anchored on expires_at, not on the verification time.
"""
import logging

from ..core.config import settings
from ..core.errors import InvalidInput, Unauthorized
from ..models import PasskeyBinding
from ..repositories import CredentialStore
from ..utils.phone import normalize_phone, get_phone_last4
from ..utils.time import utcnow
from .audit import AuditService

logger = logging.getLogger(__name__)


class PasskeyService:

    @staticmethod
    def register_binding(store: CredentialStore, phone: str, credential_id: str) -> PasskeyBinding:
        normalized_phone = normalize_phone(phone)
        if not normalized_phone or not (credential_id or "").strip():
            raise InvalidInput("Phone and credentialId are required.")

        phone_last4 = get_phone_last4(normalized_phone)
        now = utcnow()
        verified = store.latest_used_challenge(normalized_phone)
        if not verified or now - verified.expires_at > settings.passkey_grace:
            logger.warning(f"[Passkey] No recent verified challenge for {phone_last4}")
            AuditService.log_passkey_rejected(normalized_phone, "otp_not_verified")
            raise Unauthorized("Verify the code before registering a passkey.")

        replaced = store.get_binding(normalized_phone) is not None
        binding = store.upsert_binding(normalized_phone, credential_id, now)

        logger.info(f"[Passkey] Credential bound for {phone_last4} (replaced={replaced})")
        AuditService.log_passkey_bound(normalized_phone, replaced)
        return binding
