# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: CorpusHealth
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from services.CorpusStatsService import CorpusStatsService
from utility.logging_utils import get_logger


class CorpusHealth:
    """Passes when the loaded corpus has at least one decodable record."""

    def __init__(self, stats_service: CorpusStatsService, logger: Optional[logging.Logger] = None):
        self.stats_service = stats_service
        self.logger = logger or get_logger(__name__)

    def run(self) -> bool:
        stats = self.stats_service.get_stats()
        self.logger.info(
            "Corpus: %d record(s), %d decodable, %d malformed, dimensions=%s",
            stats["total_records"],
            stats["decodable_records"],
            stats["malformed_records"],
            stats["dimensions"],
        )

        if stats["decodable_records"] == 0:
            self.logger.error("Corpus healthcheck FAILED: no decodable records.")
            return False

        if len(stats["dimensions"]) > 1:
            self.logger.warning("Corpus mixes vector dimensions: %s", stats["dimensions"])

        self.logger.info("Corpus healthcheck PASSED.")
        return True
