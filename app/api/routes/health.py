"""Health check endpoint."""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_database_status
from app.schemas.common import HealthCheck

router = APIRouter()


@router.get("", response_model=HealthCheck)
async def health_check(database: str = Depends(get_database_status)):
    """Liveness check. Always 200; the database state is reported, not enforced."""
    return HealthCheck(
        message="Server is running",
        services={"database": database},
    )
