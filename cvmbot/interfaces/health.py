"""
Liveness endpoint of the dashboard API.

Answers without touching the database so load balancers can tell a
running process from a stuck one. Reports the deployed version.
"""

from fastapi import APIRouter

from cvmbot.core.config import settings
from cvmbot.interfaces.dashboard.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Dashboard liveness",
    description="Process is up; includes the running dashboard version.",
)
def dashboard_liveness() -> HealthResponse:
    return HealthResponse(status="ok", version=settings.version)
