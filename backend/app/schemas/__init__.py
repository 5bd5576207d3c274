# Schemas package
from .onboarding import (
    SendCodeRequest,
    SendCodeResponse,
    VerifyCodeRequest,
    RegisterPasskeyRequest,
    SuccessResponse,
    TokenIngestionRequest,
    TokenIngestionResponse,
    TokenRecord,
    RevokeTokenRequest,
)
from .registry import ApplicationCreate, ApplicationOut, MtpServerCreate, MtpServerOut

__all__ = [
    "SendCodeRequest", "SendCodeResponse", "VerifyCodeRequest", "RegisterPasskeyRequest",
    "SuccessResponse", "TokenIngestionRequest", "TokenIngestionResponse", "TokenRecord", "RevokeTokenRequest",
    "ApplicationCreate", "ApplicationOut", "MtpServerCreate", "MtpServerOut",
]
