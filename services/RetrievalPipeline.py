# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: RetrievalPipeline.py
# -----------------------------------------------------------------------------
import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import settings
from chat.GenerationProvider import GenerationProvider, Message
from core.errors import PipelineCancelledError
from core.types import Answer, Corpus, Query, RankedResult, SamplingParams
from embedding.EmbeddingProvider import EmbeddingProvider
from ranking.SimilarityRanker import SimilarityRanker
from services.CorpusDecodeService import CorpusDecodeService
from utility.logging_utils import get_class_logger


@dataclass
class RetrievalPipeline:
    """
    Retrieval-augmented answering over an in-memory corpus:
        1. embed the query (embedding collaborator)
        2. decode corpus vectors (cached, malformed rows dropped)
        3. rank by cosine similarity, keep top-k
        4. build the grounded prompt and call the generation collaborator

    Stages run strictly in order. Fatal errors from any stage propagate to
    the caller unchanged.
    """
    embedder: EmbeddingProvider
    chat_client: GenerationProvider
    corpus: Corpus
    decoder: CorpusDecodeService = field(default_factory=CorpusDecodeService)
    ranker: SimilarityRanker = field(default_factory=SimilarityRanker)
    top_k: int = settings.ASK_DEFAULTS["top_k"]
    sampling: SamplingParams = field(default_factory=SamplingParams.from_settings)
    system_message: str = settings.SYSTEM_MESSAGE
    framing: str = settings.PROMPT_FRAMING
    timeout: Optional[float] = settings.REQUEST_TIMEOUT_SECONDS
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        if self.top_k < 1:
            raise ValueError("top_k must be a positive integer")
        self.corpus = tuple(self.corpus)
        self.logger.info(
            "RetrievalPipeline initialised (records=%d top_k=%d embedder=%s chat_client=%s)",
            len(self.corpus),
            self.top_k,
            type(self.embedder).__name__,
            type(self.chat_client).__name__,
        )

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event], stage: str) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise PipelineCancelledError(f"Query cancelled before stage '{stage}'")

    def retrieve(
            self,
            query_text: str,
            *,
            k: Optional[int] = None,
            timeout: Optional[float] = None,
            cancel_event: Optional[threading.Event] = None,
    ) -> List[RankedResult]:
        """Stages 1-3: embed, decode, rank."""
        q = (query_text or "").strip()
        if not q:
            raise ValueError("query_text must not be empty")

        k = self.top_k if k is None else k
        timeout = self.timeout if timeout is None else timeout
        query = Query(text=q)

        self._check_cancelled(cancel_event, "embed")
        query.attach_embedding(
            self.embedder.embed_query(query.text, timeout=timeout, cancel_event=cancel_event)
        )
        self.logger.info("retrieve: query='%s' dim=%d", q[:120], query.embedding.shape[0])

        self._check_cancelled(cancel_event, "decode")
        pairs = self.decoder.decode(self.corpus)

        self._check_cancelled(cancel_event, "rank")
        results = self.ranker.top_k(query.embedding, pairs, k)

        for i, r in enumerate(results, start=1):
            self.logger.debug("retrieve: #%d row=%d score=%.4f", i, r.record.row_index, r.similarity_score)
        return results

    def build_messages(self, query_text: str, results: Sequence[RankedResult]) -> List[Message]:
        """System message plus one user message: framing, question, numbered context."""
        prompt = (
            f"{self.framing} \n"
            f" A user asks you about: {query_text}\n"
            f" provide an analytical response based on the following article content: \n"
        )
        for i, r in enumerate(results, start=1):
            prompt += f"{i}. {r.text} \n"

        return [
            {"role": "system", "content": self.system_message},
            {"role": "user", "content": prompt},
        ]

    def ask(
            self,
            query_text: str,
            *,
            k: Optional[int] = None,
            sampling: Optional[SamplingParams] = None,
            timeout: Optional[float] = None,
            cancel_event: Optional[threading.Event] = None,
    ) -> Answer:
        q = (query_text or "").strip()
        results = self.retrieve(q, k=k, timeout=timeout, cancel_event=cancel_event)

        self._check_cancelled(cancel_event, "generate")
        messages = self.build_messages(q, results)
        self.logger.debug("ask: prompt_chars=%d", len(messages[-1]["content"]))

        out = self.chat_client.generate(
            messages,
            sampling=sampling or self.sampling,
            timeout=self.timeout if timeout is None else timeout,
            cancel_event=cancel_event,
        )
        answer = out.get("answer") or ""

        self.logger.info("ask: answer_chars=%d sources=%d (done)", len(answer), len(results))

        return Answer(
            query=q,
            answer=answer,
            results=results,
            model=out.get("model"),
            usage=out.get("usage"),
        )
