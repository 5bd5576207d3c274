"""
CORS configuration.

Call `configure_cors(app, settings, is_local)` to set up CORS middleware.
"""
import logging
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger("onboarding")

# Default dev origins (when ALLOWED_ORIGINS is not set or is "*")
DEFAULT_DEV_ORIGINS = [
    "http://localhost:4173",   # Vite preview / API port
    "http://127.0.0.1:4173",
    "http://localhost:5173",   # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:3000",
]

CORS_METHODS = ["GET", "POST", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]


def build_origins(settings, is_local: bool) -> List[str]:
    """Build the final list of allowed CORS origins."""
    allowed_origins_str = (settings.ALLOWED_ORIGINS or "*").strip()
    if allowed_origins_str == "*":
        if not is_local:
            logger.error(
                "CORS wildcard (*) is not allowed outside local/dev. "
                "Set ALLOWED_ORIGINS to explicit origins."
            )
            return []
        return list(DEFAULT_DEV_ORIGINS)
    return [origin.strip() for origin in allowed_origins_str.split(",") if origin.strip()]


def configure_cors(app: FastAPI, settings, is_local: bool) -> List[str]:
    """Build the origins list, log it, and attach CORSMiddleware to the app."""
    final_origins = build_origins(settings, is_local)
    logger.info("CORS allowed origins: %s", final_origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=final_origins,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    return final_origins
