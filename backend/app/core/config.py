from pydantic import BaseModel
import os
from datetime import timedelta


class Settings(BaseModel):
    # Environment: local, dev, staging, prod
    ENV: str = os.getenv("ENV", "dev")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./onboarding.db")

    # Credential lifetimes
    OTP_TTL_SECONDS: int = int(os.getenv("OTP_TTL_SECONDS", "60"))
    PASSKEY_GRACE_SECONDS: int = int(os.getenv("PASSKEY_GRACE_SECONDS", "300"))  # Counted from the challenge's expires_at
    TOKEN_EXPIRES_IN_SECONDS: int = int(os.getenv("TOKEN_EXPIRES_IN_SECONDS", "900"))

    # Demo shortcut: echo the OTP back in the send-code response.
    # When disabled, codePreview is null and the code only reaches the logs.
    OTP_CODE_PREVIEW_ENABLED: bool = os.getenv("OTP_CODE_PREVIEW_ENABLED", "true").lower() == "true"

    # Schema initialization (Alembic upgrade to head) before serving requests
    RUN_MIGRATIONS_ON_STARTUP: bool = os.getenv("RUN_MIGRATIONS_ON_STARTUP", "true").lower() == "true"

    # CORS (comma-separated, "*" for the dev defaults)
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "*")

    PORT: int = int(os.getenv("PORT", "4173"))

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL

    @property
    def otp_ttl(self) -> timedelta:
        return timedelta(seconds=self.OTP_TTL_SECONDS)

    @property
    def passkey_grace(self) -> timedelta:
        return timedelta(seconds=self.PASSKEY_GRACE_SECONDS)


settings = Settings()
