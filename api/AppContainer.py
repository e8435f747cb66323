# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-09
# Description: AppContainer.py
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from chat.GenerationProvider import GenerationProvider
from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.EmbeddingProvider import EmbeddingProvider
from embedding.OpenAIEmbedder import OpenAIEmbedder
from health.CorpusHealth import CorpusHealth
from health.EmbeddingHealth import EmbeddingHealth
from health.OpenAIHealth import OpenAIHealth
from health.TestRunner import TestRunner
from loader.CorpusLoader import CorpusLoader
from ranking.SimilarityRanker import SimilarityRanker
from services.CorpusDecodeService import CorpusDecodeService
from services.CorpusStatsService import CorpusStatsService
from services.HealthService import HealthService
from services.RetrievalPipeline import RetrievalPipeline
from utility.logging_utils import get_class_logger


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.

    The corpus is loaded once here (CorpusLoadError is fatal) and shared,
    read-only, by every query issued through this container. Collaborators
    can be passed in so tests and scripts can swap the OpenAI clients.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        *,
        embedder: Optional[EmbeddingProvider] = None,
        chat_client: Optional[GenerationProvider] = None,
        corpus_loader: Optional[CorpusLoader] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("AppContainer config: %s", self.cfg.summary())

        # Corpus (read-only for the lifetime of the container)
        self.corpus_loader = corpus_loader or CorpusLoader()
        self.corpus = self.corpus_loader.load(self.cfg.corpus_path)

        # Collaborators
        self.embedder = embedder or OpenAIEmbedder(cfg=self.cfg)
        self.chat_client = chat_client or OpenAIChat(cfg=self.cfg)

        # Retrieval core
        self.decoder = CorpusDecodeService()
        self.ranker = SimilarityRanker()

        self.pipeline = RetrievalPipeline(
            embedder=self.embedder,
            chat_client=self.chat_client,
            corpus=self.corpus,
            decoder=self.decoder,
            ranker=self.ranker,
        )

        self.stats_service = CorpusStatsService(
            corpus=self.corpus,
            decoder=self.decoder,
            corpus_path=self.cfg.corpus_path,
        )

        # Smoke tests / health
        self.test_runner = TestRunner(
            corpus_health=CorpusHealth(self.stats_service),
            embedding_health=EmbeddingHealth(
                self.embedder,
                expected_dim=self.stats_service.dominant_dimension(),
            ),
            openai_health=OpenAIHealth(self.chat_client),
        )
        self.health_service = HealthService(test_runner=self.test_runner)
