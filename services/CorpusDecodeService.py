# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: CorpusDecodeService.py
# -----------------------------------------------------------------------------
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

import settings
from codec.VectorCodec import VectorCodec
from core.errors import MalformedVectorError
from core.types import CorpusRecord
from utility.logging_utils import get_class_logger


class CorpusDecodeService:
    """
    Decode stage of the pipeline:
        - runs VectorCodec.decode over every corpus record
        - drops (and logs) records whose embedding is malformed
        - keeps decoded vectors in a read-only side table keyed by record
          identity, so later queries in the same run do not decode again

    Output order always matches corpus order, whatever the worker count.

    The side table holds strong references to every record it has seen and
    is only emptied by clear(). One long-lived corpus per process is the
    expected use; passing many distinct corpora grows it with each one.
    """

    def __init__(
            self,
            codec: Optional[VectorCodec] = None,
            *,
            max_workers: int = settings.DECODE_WORKERS,
            logger: logging.Logger | None = None,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.codec = codec or VectorCodec()
        self.max_workers = max_workers
        self.logger = logger or get_class_logger(self.__class__)

        # id(record) -> (record, vector or None for malformed rows)
        self._cache: Dict[int, Tuple[CorpusRecord, Optional[np.ndarray]]] = {}
        self._lock = threading.Lock()

    def _decode_one(self, record: CorpusRecord) -> Optional[np.ndarray]:
        try:
            vec = self.codec.decode(record.embedding)
        except MalformedVectorError as e:
            self.logger.warning("Dropping row %d: malformed embedding (%s)", record.row_index, e)
            return None
        vec.setflags(write=False)
        return vec

    def _lookup(self, record: CorpusRecord) -> Tuple[bool, Optional[np.ndarray]]:
        hit = self._cache.get(id(record))
        # Guard against id() reuse by a different object
        if hit is not None and hit[0] is record:
            return True, hit[1]
        return False, None

    def decode(self, corpus: Sequence[CorpusRecord]) -> List[Tuple[CorpusRecord, np.ndarray]]:
        with self._lock:
            pending = [r for r in corpus if not self._lookup(r)[0]]

        if pending:
            self.logger.info("Decoding %d corpus embedding(s) (workers=%d)", len(pending), self.max_workers)
            if self.max_workers > 1 and len(pending) > 1:
                with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                    decoded = list(pool.map(self._decode_one, pending))
            else:
                decoded = [self._decode_one(r) for r in pending]

            with self._lock:
                for record, vec in zip(pending, decoded):
                    self._cache[id(record)] = (record, vec)

        pairs: List[Tuple[CorpusRecord, np.ndarray]] = []
        dropped = 0
        with self._lock:
            for record in corpus:
                _, vec = self._lookup(record)
                if vec is None:
                    dropped += 1
                    continue
                pairs.append((record, vec))

        if dropped:
            self.logger.info("Decode stage: %d usable, %d dropped", len(pairs), dropped)
        return pairs

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
