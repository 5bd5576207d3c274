"""
Token endpoints: issuance, listing and revocation
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from app.dependencies.store import get_store
from app.models import OAuthToken
from app.repositories import CredentialStore
from app.schemas import (
    RevokeTokenRequest,
    SuccessResponse,
    TokenIngestionRequest,
    TokenIngestionResponse,
    TokenRecord,
)
from app.services.token_service import TokenService
from app.utils.time import to_iso_z

router = APIRouter(prefix="/oauth", tags=["oauth"])


def _token_record(token: OAuthToken) -> TokenRecord:
    data = token.to_dict()
    data["issued_at"] = to_iso_z(token.issued_at)
    data["revoked_at"] = to_iso_z(token.revoked_at) if token.revoked_at else None
    return TokenRecord(**data)


@router.post("/token-ingestion", response_model=TokenIngestionResponse)
def token_ingestion(payload: TokenIngestionRequest, store: CredentialStore = Depends(get_store)):
    """Issue an access/refresh pair for a bound (phone, credentialId)"""
    token = TokenService.issue_tokens(store, payload.phone, payload.credential_id)
    return TokenIngestionResponse(
        access_token=token.access_token,
        refresh_token=token.refresh_token,
        issued_at=to_iso_z(token.issued_at),
        expires_in=token.expires_in,
    )


@router.get("/tokens", response_model=List[TokenRecord])
def list_tokens(phone: Optional[str] = None, store: CredentialStore = Depends(get_store)):
    """All tokens for a phone, newest first, revoked ones included"""
    return [_token_record(t) for t in TokenService.list_tokens(store, phone)]


@router.post("/tokens/revoke", response_model=SuccessResponse)
def revoke_token(payload: RevokeTokenRequest, store: CredentialStore = Depends(get_store)):
    TokenService.revoke_token(store, payload.access_token)
    return SuccessResponse(success=True)
