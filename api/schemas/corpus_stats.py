# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: corpus_stats.py
# -----------------------------------------------------------------------------
from typing import Dict, List, Optional

from pydantic import BaseModel


class CorpusStatsResponse(BaseModel):
    corpus_path: str
    total_records: int
    decodable_records: int
    malformed_records: int
    dimensions: Dict[int, int]
    dominant_dimension: Optional[int] = None
    metadata_columns: List[str]
