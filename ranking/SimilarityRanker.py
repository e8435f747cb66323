# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: SimilarityRanker
# -----------------------------------------------------------------------------
import logging
from typing import Any, List, Sequence, Tuple

import numpy as np

from core.errors import DegenerateVectorError, DimensionMismatchError
from core.types import CorpusRecord, RankedResult
from utility.logging_utils import get_class_logger


class SimilarityRanker:
    """
    Exhaustive cosine-similarity ranking of corpus vectors against a query.

    Policies:
      - a corpus vector whose length differs from the query is excluded
      - a zero-magnitude corpus vector is excluded
      - a zero-magnitude or non-finite query vector is fatal
        (DegenerateVectorError)
      - if every candidate was excluded for a length mismatch, the query and
        corpus come from different embedding models and top_k raises
        DimensionMismatchError even though each exclusion on its own is not
        fatal (the API reports it as 409)

    Vectors are rescaled by their largest component before the dot product,
    so scores hold for very large or very small magnitudes.

    Ties keep original corpus order.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or get_class_logger(self.__class__)

    @staticmethod
    def _unit_scaled(v: np.ndarray) -> np.ndarray:
        """Scale so the largest component is 1.0; norms then stay finite and nonzero."""
        if not np.all(np.isfinite(v)):
            raise DegenerateVectorError("Cosine similarity is undefined for a non-finite vector")
        peak = float(np.max(np.abs(v))) if v.size else 0.0
        if peak == 0.0:
            raise DegenerateVectorError("Cosine similarity is undefined for a zero-magnitude vector")
        return v / peak

    @staticmethod
    def score(a: Any, b: Any) -> float:
        """Cosine similarity in [-1, 1]."""
        va = np.asarray(a, dtype=np.float64).ravel()
        vb = np.asarray(b, dtype=np.float64).ravel()

        if va.shape[0] != vb.shape[0]:
            raise DimensionMismatchError(expected=va.shape[0], actual=vb.shape[0])

        va = SimilarityRanker._unit_scaled(va)
        vb = SimilarityRanker._unit_scaled(vb)

        sim = float(np.dot(va, vb)) / (float(np.linalg.norm(va)) * float(np.linalg.norm(vb)))
        return float(np.clip(sim, -1.0, 1.0))

    def top_k(
            self,
            query: Any,
            corpus: Sequence[Tuple[CorpusRecord, Any]],
            k: int,
    ) -> List[RankedResult]:
        if isinstance(k, bool) or not isinstance(k, int) or k < 1:
            raise ValueError(f"k must be a positive integer, got {k!r}")

        q = np.asarray(query, dtype=np.float64).ravel()
        if not np.all(np.isfinite(q)):
            raise DegenerateVectorError("Query embedding contains NaN or infinite values")
        if q.size == 0 or not np.any(q):
            raise DegenerateVectorError("Query embedding has zero magnitude")

        scored: List[RankedResult] = []
        mismatched = 0
        degenerate = 0

        for record, vector in corpus:
            try:
                s = self.score(q, vector)
            except DimensionMismatchError as e:
                mismatched += 1
                self.logger.debug("top_k: row %d excluded (%s)", record.row_index, e)
                continue
            except DegenerateVectorError:
                degenerate += 1
                self.logger.debug("top_k: row %d excluded (zero-magnitude vector)", record.row_index)
                continue

            scored.append(RankedResult(record=record, vector=vector, similarity_score=s))

        if mismatched or degenerate:
            self.logger.warning(
                "top_k: excluded %d record(s) with dimension != %d and %d zero-magnitude record(s)",
                mismatched,
                q.shape[0],
                degenerate,
            )

        if not scored and mismatched:
            raise DimensionMismatchError(
                expected=q.shape[0],
                actual=-1,
                message=(
                    f"No corpus vector has the query dimension {q.shape[0]}; "
                    f"query and corpus embeddings come from different models"
                ),
            )

        # sorted() is stable, so equal scores keep corpus order
        ranked = sorted(scored, key=lambda r: r.similarity_score, reverse=True)
        top = ranked[:k]

        self.logger.info(
            "top_k: scored=%d returned=%d best=%s",
            len(scored),
            len(top),
            f"{top[0].similarity_score:.4f}" if top else None,
        )
        return top
