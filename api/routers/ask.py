# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-28
# Updated: 2026-02-09
# Description: ask.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_pipeline
from api.http_errors import to_http_exception
from api.routers.query import to_hits
from api.schemas.ask import AskRequest, AskResponse
from core.errors import CorpusQAError
from core.types import SamplingParams
from services.RetrievalPipeline import RetrievalPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ask", tags=["ask"])

@router.post("", response_model=AskResponse)
def post_ask(
        req: AskRequest,
        pipeline: RetrievalPipeline = Depends(get_pipeline),
) -> AskResponse:
    question = (req.question or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="question must not be empty")

    logger.info("POST /ask (start) question_len=%d n_results=%d", len(question), req.n_results)

    sampling = SamplingParams.from_settings(
        {"temperature": req.temperature, "max_tokens": req.max_tokens, "top_p": req.top_p}
    )

    try:
        out = pipeline.ask(question, k=req.n_results, sampling=sampling)
    except (CorpusQAError, ValueError) as e:
        logger.exception("post_ask failed: %s", e)
        raise to_http_exception(e)

    logger.info("POST /ask (done) answer_len=%d sources=%d", len(out.answer), len(out.results))

    return AskResponse(
        question=out.query,
        answer=out.answer,
        n_results=req.n_results,
        sources=to_hits(out.results),
        model=out.model,
        usage=out.usage,
    )
