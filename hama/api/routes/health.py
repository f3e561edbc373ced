"""GET /api/health -- liveness probe."""

from fastapi import APIRouter

from hama.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
