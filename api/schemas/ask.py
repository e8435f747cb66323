# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-28
# Updated: 2026-02-09
# Description: api/schemas/ask.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

import settings

from api.schemas.query import QueryHit


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1)

    # Retrieval controls (mirror /query)
    n_results: int = Field(settings.ASK_DEFAULTS["top_k"], ge=1, le=100)

    # Sampling overrides; None keeps the configured defaults
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, ge=1, le=4096)
    top_p: Optional[float] = Field(None, gt=0.0, le=1.0)


class AskResponse(BaseModel):
    question: str
    answer: str
    n_results: int
    sources: List[QueryHit] = Field(default_factory=list)

    # helpful for debugging / telemetry
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None
