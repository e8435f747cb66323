# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: corpus_stats.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_stats_service
from api.schemas.corpus_stats import CorpusStatsResponse
from services.CorpusStatsService import CorpusStatsService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/corpus",
    tags=["corpus"]
)

@router.get("/stats", response_model=CorpusStatsResponse)
def get_corpus_stats(
    svc: CorpusStatsService = Depends(get_stats_service),
) -> CorpusStatsResponse:
    logger.info("Getting corpus stats")
    return CorpusStatsResponse(**svc.get_stats())
