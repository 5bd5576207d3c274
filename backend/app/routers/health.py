from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.env import get_env_name
from app.db import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Liveness plus a trivial database round trip"""
    db.execute(text("SELECT 1"))
    return {"ok": True, "env": get_env_name(), "database": "ok"}
