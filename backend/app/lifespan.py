"""
Application lifespan management for startup and shutdown events
"""
import logging
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.env import get_env_name, is_production_env
from app.run_migrations import run_migrations

logger = logging.getLogger("onboarding")


def validate_startup_config() -> None:
    """Refuse configurations that are only acceptable for local demos."""
    env = get_env_name()
    if is_production_env() and settings.database_url.lower().startswith("sqlite"):
        error_msg = (
            "CRITICAL: SQLite database is not supported in production. "
            f"ENV={env}. Please use PostgreSQL."
        )
        logger.error(f"[Startup] {error_msg}")
        raise RuntimeError(error_msg)

    if is_production_env() and settings.OTP_CODE_PREVIEW_ENABLED:
        logger.warning(
            "[Startup] OTP_CODE_PREVIEW_ENABLED is on in production: "
            "send-code responses will contain the code."
        )


@asynccontextmanager
async def lifespan(app):
    """Validate config and initialize the schema before serving requests"""
    logger.info(f"[Startup] Starting onboarding API (ENV={get_env_name()})")
    validate_startup_config()

    if settings.RUN_MIGRATIONS_ON_STARTUP:
        run_migrations()
    else:
        logger.info("[Startup] RUN_MIGRATIONS_ON_STARTUP disabled, skipping schema initialization")

    logger.info("[Startup] Ready")
    yield
    logger.info("[Shutdown] Onboarding API stopped")
