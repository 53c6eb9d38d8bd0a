"""Dashboard metrics endpoint."""

from fastapi import APIRouter, Depends

from monitoring_stack.api.dependencies import get_user_service
from monitoring_stack.api.models import MetricsResponse
from monitoring_stack.services.users import UserService

router = APIRouter(tags=["Metrics"])


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    response_model_by_alias=True,
    summary="Dashboard metrics",
    description="Active user count with synthetic response time and cache hit rate.",
)
async def get_metrics(
    service: UserService = Depends(get_user_service),
) -> dict:
    return await service.get_metrics()
