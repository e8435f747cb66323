# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-09
# Description: query.py
# -----------------------------------------------------------------------------
from typing import Optional, Any, Dict, List

from pydantic import Field, BaseModel

import settings

class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1)
    n_results: int = Field(settings.ASK_DEFAULTS["top_k"], ge=1, le=100)
    include_text: bool = True
    include_scores: bool = True
    include_metadata: bool = True

class QueryHit(BaseModel):
    rank: int
    row_index: int
    text: Optional[str] = None
    score: Optional[float] = None
    metadata: Optional[Dict[str, Any]] = None

class QueryResponse(BaseModel):
    query: str
    n_results: int
    results: List[QueryHit]
