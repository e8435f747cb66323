# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Updated: 2026-02-11
# Description: conftest.py
# -----------------------------------------------------------------------------

import os
import sys
from pathlib import Path

import pandas as pd
import pytest

# keep unit test runs from writing ./logs
os.environ.setdefault("CQA_LOG_TO_FILE", "0")

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from codec.VectorCodec import VectorCodec  # noqa: E402


@pytest.fixture
def write_corpus(tmp_path):
    """Write a corpus CSV from (text, vector-or-raw-string, extra columns) rows."""
    codec = VectorCodec()

    def _write(rows, name="corpus.csv", extra_columns=("source",)):
        data = []
        for i, row in enumerate(rows):
            text, vec = row[0], row[1]
            raw = vec if isinstance(vec, str) else codec.encode(vec)
            entry = {"text": text, "embedding": raw}
            for c in extra_columns:
                entry[c] = f"{c}-{i}"
            data.append(entry)
        path = tmp_path / name
        pd.DataFrame(data).to_csv(path, index=False)
        return path

    return _write
