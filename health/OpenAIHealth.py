# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-06
# Updated: 2026-02-08
# Description: OpenAIHealth
# -----------------------------------------------------------------------------

import time
import logging
from typing import Optional

from chat.GenerationProvider import GenerationProvider
from core.errors import CorpusQAError
from core.types import SamplingParams
from utility.logging_utils import get_logger


class OpenAIHealth:
    """
    Smoke test for the generation collaborator (basic chat completion).
    """

    def __init__(self, chat_client: GenerationProvider, logger: Optional[logging.Logger] = None):
        self.chat_client = chat_client
        self.logger = logger or get_logger(__name__)
        self.model = getattr(chat_client, "model", None)

    def run(self) -> bool:
        self.logger.info("Starting chat healthcheck with model: %s", self.model)
        start = time.time()

        try:
            out = self.chat_client.generate(
                [
                    {"role": "system", "content": "You are a model probe. Reply briefly to confirm connectivity."},
                    {"role": "user", "content": "Say OK if you can read this."},
                ],
                sampling=SamplingParams(max_tokens=10, temperature=0.0),
                timeout=30.0,
            )
        except CorpusQAError as e:
            self.logger.error("Chat healthcheck FAILED: %s", e)
            return False

        elapsed_ms = (time.time() - start) * 1000.0
        self.logger.info("Chat call succeeded in %.1f ms.", elapsed_ms)

        content = (out.get("answer") or "").strip()
        if not content:
            self.logger.error("Chat response content is empty.")
            return False

        self.logger.info("Response content: %r", content)

        usage = out.get("usage")
        if usage:
            self.logger.info("Usage summary: %s", usage)
        else:
            self.logger.debug("No usage field present in response.")

        self.logger.info("Chat healthcheck PASSED.")
        return True
