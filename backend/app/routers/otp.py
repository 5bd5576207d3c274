"""
OTP endpoints: send-code and verify-code
"""
from fastapi import APIRouter, Depends

from app.core.config import settings
from app.dependencies.store import get_store
from app.repositories import CredentialStore
from app.schemas import SendCodeRequest, SendCodeResponse, VerifyCodeRequest, SuccessResponse
from app.services.otp_service import OTPService
from app.utils.time import to_epoch_ms

router = APIRouter(prefix="/api", tags=["otp"])


@router.post("/send-code", response_model=SendCodeResponse)
def send_code(payload: SendCodeRequest, store: CredentialStore = Depends(get_store)):
    """Issue a fresh challenge for the phone, superseding any previous one"""
    challenge = OTPService.issue_challenge(store, payload.phone)
    return SendCodeResponse(
        code_preview=challenge.code if settings.OTP_CODE_PREVIEW_ENABLED else None,
        flow_token=challenge.flow_token,
        expires_at=to_epoch_ms(challenge.expires_at),
    )


@router.post("/verify-code", response_model=SuccessResponse)
def verify_code(payload: VerifyCodeRequest, store: CredentialStore = Depends(get_store)):
    OTPService.verify_challenge(store, payload.phone, payload.otp, payload.flow_token)
    return SuccessResponse(success=True)
