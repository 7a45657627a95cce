"""Liveness and readiness checks."""

import logging
import os

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.config import get_settings
from grove.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health():
    """Process is up. built_at comes from GROVE_BUILT_AT when the image sets it."""
    settings = get_settings()
    payload: dict = {"status": "ok", "app": settings.app_name, "environment": settings.environment}
    if built_at := os.environ.get("GROVE_BUILT_AT"):
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Ready to serve: the database answers a trivial query."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": "unreachable"},
        )
    return {"status": "ok", "database": "connected"}
