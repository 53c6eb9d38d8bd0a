"""User endpoints for the demo API."""

import structlog
from fastapi import APIRouter, Depends

from monitoring_stack.api.dependencies import get_user_service
from monitoring_stack.api.models import UserCreate, UserResponse
from monitoring_stack.services.users import UserService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
    description="Return every user. Served from the cache when it is warm.",
)
async def list_users(
    service: UserService = Depends(get_user_service),
) -> list[dict]:
    return await service.get_all_users()


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
    description="Return one user by id. 404 when it does not exist.",
)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> dict:
    return await service.get_user(user_id)


@router.post(
    "",
    response_model=UserResponse,
    summary="Create a user",
    description="Store a user and invalidate the cached users list.",
)
async def create_user(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
) -> dict:
    """
    Create a new user.

    **Parameters:**
    - **name**: Display name
    - **email**: Contact email
    """
    logger.info("creating_user", name=user.name)
    return await service.create_user(name=user.name, email=user.email)
