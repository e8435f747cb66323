# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: CorpusStatsService.py
# -----------------------------------------------------------------------------

import logging
from collections import Counter
from typing import Any, Dict, List, TypedDict

from core.types import Corpus
from services.CorpusDecodeService import CorpusDecodeService
from utility.logging_utils import get_class_logger


class CorpusStatsDict(TypedDict):
    corpus_path: str
    total_records: int
    decodable_records: int
    malformed_records: int
    dimensions: Dict[int, int]
    dominant_dimension: int | None
    metadata_columns: List[str]


class CorpusStatsService:
    """
    Stats service for the /corpus/stats endpoint and the `stats` CLI command.

    Shares the pipeline's decoder, so computing stats warms the vector cache.
    """

    def __init__(
        self,
        *,
        corpus: Corpus,
        decoder: CorpusDecodeService,
        corpus_path: str = "",
        logger: logging.Logger | None = None,
    ) -> None:
        self.corpus = corpus
        self.decoder = decoder
        self.corpus_path = corpus_path
        self.logger = logger or get_class_logger(self.__class__)

    def get_stats(self) -> CorpusStatsDict:
        self.logger.info("Stats for corpus='%s' (%d records)", self.corpus_path, len(self.corpus))

        pairs = self.decoder.decode(self.corpus)
        dims: Counter = Counter(int(vec.shape[0]) for _, vec in pairs)

        columns: List[str] = []
        for record in self.corpus:
            for c in record.metadata:
                if c not in columns:
                    columns.append(c)

        dominant = dims.most_common(1)[0][0] if dims else None

        return CorpusStatsDict(
            corpus_path=self.corpus_path,
            total_records=len(self.corpus),
            decodable_records=len(pairs),
            malformed_records=len(self.corpus) - len(pairs),
            dimensions=dict(sorted(dims.items())),
            dominant_dimension=dominant,
            metadata_columns=columns,
        )

    def dominant_dimension(self) -> Any:
        return self.get_stats()["dominant_dimension"]
