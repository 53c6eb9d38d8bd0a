"""Health check endpoint for the demo API."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Health Check",
    description="Liveness probe for Kubernetes. Returns the plain text OK.",
)
async def health() -> str:
    return "OK"
