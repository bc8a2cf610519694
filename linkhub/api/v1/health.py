from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from linkhub.core.config import settings
from linkhub.db import SessionDep
from linkhub.services.channels import manager

router = APIRouter()


@router.get("/", summary="Health check", tags=["health"])
def read_health() -> dict[str, str]:
    """Return basic service health information."""
    return {"status": "ok"}


@router.get("/ready", summary="Readiness check", tags=["health"])
def read_ready(session: SessionDep):
    """Check if service is ready to accept traffic (readiness probe)."""
    try:
        session.connection().execute(text("SELECT 1"))
    except Exception as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "database": "disconnected",
                "error": str(e) if settings.ENVIRONMENT != "production" else "Database connection failed",
            },
        )
    return {
        "status": "ready",
        "database": "connected",
        "push_channels": len(manager.channels()),
    }
