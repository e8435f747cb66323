# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-09
# Description: dependencies.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from api.AppContainer import AppContainer
from services.CorpusStatsService import CorpusStatsService
from services.HealthService import HealthService
from services.RetrievalPipeline import RetrievalPipeline


@lru_cache
def get_app_container() -> AppContainer:
    # built on first request, then shared by every request
    return AppContainer()


def get_pipeline() -> RetrievalPipeline:
    return get_app_container().pipeline


def get_stats_service() -> CorpusStatsService:
    return get_app_container().stats_service


def get_health_service() -> HealthService:
    return get_app_container().health_service
