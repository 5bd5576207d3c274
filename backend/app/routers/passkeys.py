"""
Passkey registration endpoint
"""
from fastapi import APIRouter, Depends

from app.dependencies.store import get_store
from app.repositories import CredentialStore
from app.schemas import RegisterPasskeyRequest, SuccessResponse
from app.services.passkey_service import PasskeyService

router = APIRouter(prefix="/api", tags=["passkeys"])


@router.post("/register-passkey", response_model=SuccessResponse)
def register_passkey(payload: RegisterPasskeyRequest, store: CredentialStore = Depends(get_store)):
    """Bind a credential id to the phone once its OTP has been verified"""
    PasskeyService.register_binding(store, payload.phone, payload.credential_id)
    return SuccessResponse(success=True)
