# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Updated: 2026-02-05
# Description: OpenAIEmbedder
# -----------------------------------------------------------------------------
import threading
import time
from typing import Any, Optional

import numpy as np
from openai import (
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    OpenAI,
    OpenAIError,
    RateLimitError,
)

import settings
from config.Config import Config
from core.errors import EmbeddingServiceError, PipelineCancelledError
from utility.logging_utils import get_class_logger

# Transient failures worth another attempt; anything else fails immediately
RETRYABLE_ERRORS = (APIConnectionError, APITimeoutError, RateLimitError, InternalServerError)


class OpenAIEmbedder:
    """
    Embedding collaborator backed by the OpenAI embeddings API.

    Retry with backoff is owned here, at the client boundary, so the pipeline
    itself never retries. Every failure surfaces as EmbeddingServiceError
    carrying the text that was being embedded.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            client: Any = None,
            max_retries: int = settings.EMBED_MAX_RETRIES,
            retry_delay: float = settings.EMBED_RETRY_DELAY,
            default_timeout: Optional[float] = settings.REQUEST_TIMEOUT_SECONDS,
            logger=None,
    ):
        self.cfg = cfg
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.default_timeout = default_timeout
        self.logger = logger or get_class_logger(self.__class__)

        self.model = cfg.openai_embed_model or "text-embedding-ada-002"

        # SDK-level retries disabled; the loop in embed_query owns retry policy
        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url or None,
            organization=cfg.openai_org or None,
            max_retries=0,
        )
        self.logger.info("OpenAI Embedder initialized (model=%s, max_retries=%d)", self.model, self.max_retries)

    def embed_query(
            self,
            text: str,
            *,
            timeout: Optional[float] = None,
            cancel_event: Optional[threading.Event] = None,
    ) -> np.ndarray:
        if not text or not text.strip():
            raise EmbeddingServiceError("Cannot embed empty text", query_text=text or "")

        timeout = self.default_timeout if timeout is None else timeout
        delay = self.retry_delay

        for attempt in range(1, self.max_retries + 1):
            if cancel_event is not None and cancel_event.is_set():
                raise PipelineCancelledError("Embedding request cancelled")

            try:
                start = time.time()
                resp = self.client.embeddings.create(model=self.model, input=text, timeout=timeout)
                elapsed_ms = (time.time() - start) * 1000.0
            except RETRYABLE_ERRORS as e:
                self.logger.warning("Embedding request failed (attempt %d/%d): %s", attempt, self.max_retries, e)
                if attempt == self.max_retries:
                    raise EmbeddingServiceError(
                        f"Embedding request failed after {attempt} attempt(s): {e}", query_text=text
                    ) from e
                time.sleep(delay)
                delay *= 1.7  # backoff
                continue
            except OpenAIError as e:
                self.logger.error("Embedding request rejected: %s", e)
                raise EmbeddingServiceError(f"Embedding request rejected: {e}", query_text=text) from e

            data = getattr(resp, "data", None)
            if not data or not getattr(data[0], "embedding", None):
                raise EmbeddingServiceError("Embedding response contained no vector", query_text=text)

            vec = np.asarray(data[0].embedding, dtype=np.float64)
            self.logger.info("Query embedded in %.1f ms (dim=%d)", elapsed_ms, vec.shape[0])
            self.logger.debug("Embedding usage: %r", getattr(resp, "usage", None))
            return vec

        # Unreachable and include for type checkers
        raise EmbeddingServiceError("Embedding request was not attempted", query_text=text)
