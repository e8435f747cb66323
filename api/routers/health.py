# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-09
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from fastapi import APIRouter, Depends, Query

from api.schemas.health import HealthResponse, DeepHealthResponse
from api.dependencies import get_health_service
from services.HealthService import HealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", message="corpus-qa API running")


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
    svc: HealthService = Depends(get_health_service),
    include_generation: bool = Query(True, description="Also run the chat completion probe"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (include_generation=%s)", include_generation)
    result = svc.deep_health(include_generation=include_generation)
    logger.info("GET /health/deep completed (status=%s)", result.status)
    return result
