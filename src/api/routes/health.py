"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_repository
from api.models.responses import HealthResponse
from core.config import API_VERSION
from core.repository import ProjectRepository
from services.export import TEMPLATES_DIR

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(repository: ProjectRepository = Depends(get_repository)):
    """
    Health check endpoint for monitoring.

    Returns 200 if healthy, 503 if unhealthy.
    """
    templates_available = (TEMPLATES_DIR / "base.html").exists()
    database_available = repository.db_path.exists()
    timestamp = datetime.now(timezone.utc).isoformat()

    if templates_available and database_available:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            templates_available=True,
            database_available=True,
            timestamp=timestamp,
        )
    else:
        error = "Export templates not found" if not templates_available else "Database not found"
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                templates_available=templates_available,
                database_available=database_available,
                timestamp=timestamp,
                error=error,
            ).model_dump(),
        )
