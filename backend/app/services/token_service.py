"""
OAuth-like token issuance and revocation

Tokens are opaque records. Nothing in this service checks them after
issuance; revocation only flips a flag and stamps revoked_at.
"""
import logging
import uuid
from typing import List

from ..core.config import settings
from ..core.errors import InvalidInput, NotFound, Unauthorized
from ..models import OAuthToken
from ..repositories import CredentialStore
from ..utils.phone import normalize_phone, get_phone_last4
from ..utils.time import utcnow
from .audit import AuditService

logger = logging.getLogger(__name__)

ACCESS_TOKEN_PREFIX = "atk_"
REFRESH_TOKEN_PREFIX = "rtk_"


class TokenService:

    @staticmethod
    def generate_token_pair():
        access_token = f"{ACCESS_TOKEN_PREFIX}{uuid.uuid4()}"
        refresh_token = f"{REFRESH_TOKEN_PREFIX}{uuid.uuid4()}"
        return access_token, refresh_token

    @staticmethod
    def issue_tokens(store: CredentialStore, phone: str, credential_id: str) -> OAuthToken:
        """
        Issue an access/refresh pair for a bound passkey.

        Raises:
            Unauthorized: If no binding matches phone and credential_id exactly
        """
        normalized_phone = normalize_phone(phone)
        binding = store.get_binding(normalized_phone) if normalized_phone else None
        if not binding or not credential_id or binding.credential_id != credential_id:
            logger.warning(f"[Token] No passkey binding for {get_phone_last4(normalized_phone)}")
            raise Unauthorized("Passkey not found for this phone number.")

        access_token, refresh_token = TokenService.generate_token_pair()
        token = store.add_token(OAuthToken(
            phone=normalized_phone,
            credential_id=credential_id,
            access_token=access_token,
            refresh_token=refresh_token,
            issued_at=utcnow(),
            expires_in=settings.TOKEN_EXPIRES_IN_SECONDS,
            revoked=False,
            revoked_at=None,
        ))

        logger.info(f"[Token] Issued token pair {token.id} for {get_phone_last4(normalized_phone)}")
        AuditService.log_tokens_issued(normalized_phone, token.id)
        return token

    @staticmethod
    def list_tokens(store: CredentialStore, phone: str) -> List[OAuthToken]:
        normalized_phone = normalize_phone(phone)
        if not normalized_phone:
            raise InvalidInput("Phone number is required.")
        return store.list_tokens(normalized_phone)

    @staticmethod
    def revoke_token(store: CredentialStore, access_token: str) -> OAuthToken:
        """
        Revoke an active access token. Single use: a second call fails.

        Raises:
            InvalidInput: If access_token is empty
            NotFound: If no active token has this value
        """
        access_token = (access_token or "").strip()
        if not access_token:
            raise InvalidInput("accessToken is required.")

        token = store.find_active_token(access_token)
        if not token or not store.revoke_token(token, utcnow()):
            raise NotFound("Token not found or already revoked.")

        logger.info(f"[Token] Revoked token {token.id} for {get_phone_last4(token.phone)}")
        AuditService.log_token_revoked(token.phone, token.id)
        return token
