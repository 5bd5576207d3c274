"""
Schemas for the onboarding API (OTP, passkey, tokens)
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SendCodeRequest(BaseModel):
    phone: Optional[str] = None


class SendCodeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code_preview: Optional[str] = Field(None, alias="codePreview")  # null when preview is disabled
    flow_token: str = Field(..., alias="flowToken")
    expires_at: int = Field(..., alias="expiresAt")  # epoch milliseconds


class VerifyCodeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phone: Optional[str] = None
    otp: Optional[str] = None
    flow_token: Optional[str] = Field(None, alias="flowToken")


class RegisterPasskeyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phone: Optional[str] = None
    credential_id: Optional[str] = Field(None, alias="credentialId")


class TokenIngestionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phone: Optional[str] = None
    credential_id: Optional[str] = Field(None, alias="credentialId")


class SuccessResponse(BaseModel):
    success: bool = True


class TokenIngestionResponse(BaseModel):
    access_token: str
    refresh_token: str
    issued_at: str  # ISO string
    expires_in: int


class TokenRecord(BaseModel):
    id: int
    phone: str
    credential_id: str
    access_token: str
    refresh_token: str
    issued_at: str
    expires_in: int
    revoked: bool
    revoked_at: Optional[str] = None


class RevokeTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: Optional[str] = Field(None, alias="accessToken")
