import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

from fastapi import FastAPI  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.core.env import is_local_env  # noqa: E402
from app.cors_config import configure_cors  # noqa: E402
from app.exception_handlers import register_exception_handlers  # noqa: E402
from app.lifespan import lifespan  # noqa: E402
from app.routers import health, oauth, otp, passkeys, registry  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger("onboarding")

app = FastAPI(
    title="Two-Factor Onboarding API",
    description="Phone OTP verification, passkey binding and token issuance",
    version="0.1.0",
    lifespan=lifespan,
)

configure_cors(app, settings, is_local_env())
register_exception_handlers(app)

app.include_router(health.router)
app.include_router(otp.router)
app.include_router(passkeys.router)
app.include_router(oauth.router)
app.include_router(registry.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
