# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: types.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from settings import ASK_DEFAULTS


@dataclass
class Query:
    """User question plus its embedding, attached once by the embed stage."""
    text: str
    embedding: Optional[np.ndarray] = None

    def attach_embedding(self, vector: Any) -> None:
        if self.embedding is not None:
            raise ValueError("Query embedding has already been attached")
        arr = np.asarray(vector, dtype=np.float64)
        arr.setflags(write=False)
        self.embedding = arr


@dataclass(frozen=True)
class CorpusRecord:
    """One corpus row. `embedding` keeps the serialized form exactly as loaded."""
    text: str
    embedding: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    row_index: int = 0


# Loaded once per run, never mutated
Corpus = Tuple[CorpusRecord, ...]


@dataclass(frozen=True)
class RankedResult:
    record: CorpusRecord
    vector: np.ndarray
    similarity_score: float

    @property
    def text(self) -> str:
        return self.record.text

    def to_dict(self, include_embedding: bool = False) -> Dict[str, Any]:
        """Flatten record fields, metadata columns and the score into one dict."""
        out: Dict[str, Any] = dict(self.record.metadata)
        out["text"] = self.record.text
        if include_embedding:
            out["embedding"] = [float(x) for x in self.vector]
        out["row_index"] = self.record.row_index
        out["similarity_score"] = self.similarity_score
        return out


@dataclass(frozen=True)
class SamplingParams:
    """Generation settings sent with every completion request."""
    max_tokens: int = 100
    temperature: float = 0.0
    top_p: float = 1.0
    n: int = 1
    stream: bool = False

    @staticmethod
    def from_settings(overrides: Optional[Dict[str, Any]] = None) -> "SamplingParams":
        values = {
            "max_tokens": ASK_DEFAULTS["max_tokens"],
            "temperature": ASK_DEFAULTS["temperature"],
            "top_p": ASK_DEFAULTS["top_p"],
            "n": ASK_DEFAULTS["n"],
            "stream": ASK_DEFAULTS["stream"],
        }
        if overrides:
            values.update({k: v for k, v in overrides.items() if v is not None})
        return SamplingParams(**values)


@dataclass
class Answer:
    query: str
    answer: str
    results: List[RankedResult] = field(default_factory=list)
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None
