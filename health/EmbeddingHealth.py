# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-06
# Updated: 2026-02-08
# Description: EmbeddingHealth
# -----------------------------------------------------------------------------
import time
import logging
from typing import Optional

from core.errors import CorpusQAError
from embedding.EmbeddingProvider import EmbeddingProvider
from utility.logging_utils import get_logger


class EmbeddingHealth:
    """
    Smoke test for the embedding collaborator.

    Verifies:
      - The embedding call completes successfully
      - The response contains a non-empty vector
      - The vector dimension matches the corpus dimension (if provided)
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        expected_dim: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.embedder = embedder
        self.expected_dim = expected_dim
        self.logger = logger or get_logger(__name__)

    def run(self) -> bool:
        """
        Run the embedding smoke test.

        Returns:
            True if the embedding call succeeds and (optionally) the dimension matches.
        """
        test_text = "Embedding healthcheck"
        self.logger.info("Running embedding healthcheck using model: %s", getattr(self.embedder, "model", None))

        try:
            start = time.time()
            vec = self.embedder.embed_query(test_text, timeout=30.0)
            elapsed_ms = (time.time() - start) * 1000.0
        except CorpusQAError as e:
            self.logger.error("Embedding healthcheck FAILED: %s", e)
            return False

        dim = int(len(vec))
        if dim == 0:
            self.logger.error("No embedding data returned in response.")
            return False

        self.logger.info("Embedding call succeeded in %.1f ms. Returned dimension: %d", elapsed_ms, dim)

        if self.expected_dim is not None and dim != self.expected_dim:
            self.logger.warning(
                "Dimension mismatch: corpus has %d, embedding model returns %d.",
                self.expected_dim,
                dim,
            )
            return False

        self.logger.info("Embedding healthcheck PASSED.")
        return True
