"""
Phone OTP (One-Time Password) service

One live challenge per phone, scoped by a flow token. Expiry is checked
lazily when a code is verified; nothing sweeps old rows.
"""
import logging
import secrets
import uuid
from datetime import datetime

from ..core.config import settings
from ..core.errors import InvalidInput, ChallengeNotFound, Expired
from ..models import OTPChallenge
from ..repositories import CredentialStore
from ..utils.phone import normalize_phone, get_phone_last4
from ..utils.time import utcnow
from .audit import AuditService

logger = logging.getLogger(__name__)


class OTPService:
    """Service for issuing and verifying OTP challenges"""

    OTP_LENGTH = 6

    @staticmethod
    def generate_otp_code() -> str:
        """Generate a random 6-digit OTP code, zero-padded"""
        length = OTPService.OTP_LENGTH
        return str(secrets.randbelow(10**length)).zfill(length)

    @staticmethod
    def generate_flow_token() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def issue_challenge(store: CredentialStore, phone: str) -> OTPChallenge:
        """
        Create a new challenge for phone, superseding any previous one.

        Returns:
            The stored challenge (code, flow_token, expires_at)

        Raises:
            InvalidInput: If phone is empty
        """
        normalized_phone = normalize_phone(phone)
        if not normalized_phone:
            raise InvalidInput("Phone number is required.")

        challenge = OTPChallenge(
            phone=normalized_phone,
            code=OTPService.generate_otp_code(),
            flow_token=OTPService.generate_flow_token(),
            expires_at=utcnow() + settings.otp_ttl,
            used=False,
        )
        challenge = store.replace_challenge(challenge)

        phone_last4 = get_phone_last4(normalized_phone)
        logger.info(f"[OTP] Challenge issued for {phone_last4}, expires at {challenge.expires_at.isoformat()}")
        if not settings.OTP_CODE_PREVIEW_ENABLED:
            # Stand-in for out-of-band delivery
            logger.info(f"[OTP][Delivery] Code for {phone_last4}: {challenge.code}")
        AuditService.log_challenge_issued(normalized_phone, challenge.expires_at)
        return challenge

    @staticmethod
    def verify_challenge(store: CredentialStore, phone: str, code: str, flow_token: str) -> str:
        """
        Verify a code against the challenge it was issued with.

        Returns:
            Normalized phone number

        Raises:
            ChallengeNotFound: No unused challenge matches phone, code and flow token
            Expired: The challenge matched but its window has passed
        """
        normalized_phone = normalize_phone(phone)
        phone_last4 = get_phone_last4(normalized_phone)

        challenge = None
        if normalized_phone and code and flow_token:
            challenge = store.find_open_challenge(normalized_phone, code, flow_token)

        if not challenge:
            logger.warning(f"[OTP] No open challenge matched for {phone_last4}")
            AuditService.log_challenge_rejected(normalized_phone, "not_found")
            raise ChallengeNotFound("Invalid or already used code.")

        if OTPService.is_expired(challenge, utcnow()):
            # Left unused: it stays rejectable but can never be approved
            logger.info(f"[OTP] Expired challenge presented for {phone_last4}")
            AuditService.log_challenge_rejected(normalized_phone, "expired")
            raise Expired("Code expired.")

        if not store.mark_challenge_used(challenge):
            AuditService.log_challenge_rejected(normalized_phone, "not_found")
            raise ChallengeNotFound("Invalid or already used code.")

        logger.info(f"[OTP] Verification successful for {phone_last4}")
        AuditService.log_challenge_verified(normalized_phone)
        return normalized_phone

    @staticmethod
    def is_expired(challenge: OTPChallenge, now: datetime) -> bool:
        return now > challenge.expires_at
