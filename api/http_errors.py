# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: http_errors.py
# -----------------------------------------------------------------------------
from fastapi import HTTPException

from core.errors import (
    CorpusQAError,
    DegenerateVectorError,
    DimensionMismatchError,
    EmbeddingServiceError,
    GenerationServiceError,
    PipelineCancelledError,
)


def to_http_exception(e: Exception) -> HTTPException:
    """Map a pipeline failure onto the status code the API reports."""
    if isinstance(e, ValueError) and not isinstance(e, CorpusQAError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, (EmbeddingServiceError, GenerationServiceError)):
        return HTTPException(status_code=502, detail=f"Upstream service failed: {e}")
    if isinstance(e, (DimensionMismatchError, DegenerateVectorError)):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, PipelineCancelledError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=500, detail=f"Query failed: {e}")
