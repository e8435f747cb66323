# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-09
# Description: query router
# -----------------------------------------------------------------------------
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_pipeline
from api.http_errors import to_http_exception
from api.schemas.query import QueryRequest, QueryResponse, QueryHit
from core.errors import CorpusQAError
from core.types import RankedResult
from services.RetrievalPipeline import RetrievalPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/query", tags=["query"])


def to_hits(
    results: List[RankedResult],
    include_text: bool = True,
    include_scores: bool = True,
    include_metadata: bool = True,
) -> List[QueryHit]:
    hits: List[QueryHit] = []
    for i, r in enumerate(results, start=1):
        hits.append(
            QueryHit(
                rank=i,
                row_index=r.record.row_index,
                text=r.text if include_text else None,
                score=r.similarity_score if include_scores else None,
                metadata=dict(r.record.metadata) if include_metadata else None,
            )
        )
    return hits


@router.post("", response_model=QueryResponse)
def post_query(
    req: QueryRequest,
    pipeline: RetrievalPipeline = Depends(get_pipeline),
) -> QueryResponse:
    query_text = (req.query or "").strip()
    if not query_text:
        raise HTTPException(status_code=400, detail="query must not be empty")

    try:
        results = pipeline.retrieve(query_text, k=req.n_results)
    except (CorpusQAError, ValueError) as e:
        logger.exception("Query failed: %s", e)
        raise to_http_exception(e)

    return QueryResponse(
        query=query_text,
        n_results=req.n_results,
        results=to_hits(
            results,
            include_text=req.include_text,
            include_scores=req.include_scores,
            include_metadata=req.include_metadata,
        ),
    )
