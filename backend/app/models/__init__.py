"""
Models package - one module per table group
"""
from .otp_challenge import OTPChallenge
from .passkey import PasskeyBinding
from .oauth_token import OAuthToken
from .registry import Application, MtpServer

__all__ = [
    "OTPChallenge",
    "PasskeyBinding",
    "OAuthToken",
    "Application",
    "MtpServer",
]
