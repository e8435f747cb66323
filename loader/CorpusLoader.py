# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: CorpusLoader.py
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List

import pandas as pd

import settings
from core.errors import CorpusLoadError
from core.types import Corpus, CorpusRecord
from utility.logging_utils import get_class_logger


class CorpusLoader:
    """
    Reads the corpus from a delimited file (header row, one record per row).

    The text and embedding columns are required. Every other column is kept
    verbatim (as strings) in CorpusRecord.metadata. Embeddings stay serialized;
    decoding happens later in the pipeline.
    """

    def __init__(
        self,
        *,
        text_column: str = settings.CORPUS_TEXT_COLUMN,
        embedding_column: str = settings.CORPUS_EMBEDDING_COLUMN,
        delimiter: str = settings.CORPUS_DELIMITER,
        logger: logging.Logger | None = None,
    ) -> None:
        self.text_column = text_column
        self.embedding_column = embedding_column
        self.delimiter = delimiter
        self.logger = logger or get_class_logger(self.__class__)

    def load(self, path: str | Path) -> Corpus:
        path_obj = Path(path)
        start_time = time.time()

        if not path_obj.is_file():
            self.logger.error("Corpus file not found: %s", path_obj)
            raise CorpusLoadError(f"Corpus file not found: {path_obj}", path=str(path_obj))

        self.logger.info("Loading corpus from '%s'...", path_obj)

        try:
            df = pd.read_csv(
                path_obj,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                encoding="utf-8",
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
            elapsed = (time.time() - start_time) * 1000.0
            self.logger.exception("Failed to parse corpus '%s' after %.1f ms: %s", path_obj, elapsed, e)
            raise CorpusLoadError(f"Failed to parse corpus {path_obj}: {e}", path=str(path_obj)) from e

        missing = [c for c in (self.text_column, self.embedding_column) if c not in df.columns]
        if missing:
            raise CorpusLoadError(
                f"Corpus {path_obj} is missing required column(s) {missing}; found {list(df.columns)}",
                path=str(path_obj),
            )

        records: List[CorpusRecord] = []
        meta_columns = [c for c in df.columns if c not in (self.text_column, self.embedding_column)]

        for row_index, row in enumerate(df.to_dict(orient="records")):
            records.append(
                CorpusRecord(
                    text=row[self.text_column],
                    embedding=row[self.embedding_column],
                    metadata={c: row[c] for c in meta_columns},
                    row_index=row_index,
                )
            )

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info(
            "Corpus loaded: %d record(s), %d metadata column(s) (%.1f ms)",
            len(records),
            len(meta_columns),
            elapsed,
        )
        return tuple(records)
