"""
Exception handlers for the onboarding API.

Register these on a FastAPI app instance via `register_exception_handlers(app)`.
"""
import logging

from fastapi import Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.env import is_local_env
from app.core.errors import CredentialError, InvalidInput

logger = logging.getLogger("onboarding")

API_PREFIXES = ("/api/", "/oauth/")


def error_body(kind: str, detail: str) -> dict:
    return {"detail": detail, "error": kind}


async def credential_error_handler(request: Request, exc: CredentialError):
    """Render service errors with the status their kind maps to."""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.kind, exc.detail),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies on API routes are reported as InvalidInput (400), not 422."""
    if request.url.path.startswith(API_PREFIXES):
        fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
        detail = f"Invalid request data: {', '.join(f for f in fields if f) or 'body'}"
        return JSONResponse(
            status_code=InvalidInput.status_code,
            content=error_body(InvalidInput.kind, detail),
        )
    return await request_validation_exception_handler(request, exc)


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors"""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)

    # In production, don't leak internal error details to clients
    if is_local_env():
        detail = f"Internal server error: {exc}"
    else:
        detail = "Internal server error"
    return JSONResponse(status_code=500, content=error_body("Internal", detail))


def register_exception_handlers(app):
    """Register all exception handlers on the given FastAPI app."""
    app.add_exception_handler(CredentialError, credential_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
