"""
Run Alembic migrations programmatically.

Called from the application lifespan before the API serves requests, so the
schema is always initialized by the versioned migrations and never patched
on the fly. Safe to call multiple times - Alembic is a no-op if already at head.
"""
from pathlib import Path
from typing import Optional
import logging
import sys

from alembic import command
from alembic.config import Config

from app.core.config import settings

logger = logging.getLogger(__name__)

# This file is at: backend/app/run_migrations.py, alembic.ini at backend/alembic.ini
PROJECT_ROOT = Path(__file__).resolve().parents[1]


def get_alembic_config(database_url: Optional[str] = None) -> Config:
    alembic_ini = PROJECT_ROOT / "alembic.ini"
    if not alembic_ini.exists():
        logger.error(f"Alembic config not found at {alembic_ini}")
        raise FileNotFoundError(f"Alembic config not found at {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.attributes["configure_logger"] = False
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    # Runtime URL overrides the alembic.ini default
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url)
    return cfg


def run_migrations(database_url: Optional[str] = None) -> None:
    """Upgrade the database at database_url (default: settings.DATABASE_URL) to head."""
    cfg = get_alembic_config(database_url)
    url = cfg.get_main_option("sqlalchemy.url")
    logger.info(f"Running Alembic migrations to head on {url.split('@')[-1] if '@' in url else url}")
    try:
        command.upgrade(cfg, "head")
        logger.info("Alembic migrations complete.")
    except Exception as e:
        logger.error(f"Migration failed: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s"
    )
    try:
        run_migrations()
        sys.exit(0)
    except Exception as e:
        logger.error(f"Failed to run migrations: {e}", exc_info=True)
        sys.exit(1)
