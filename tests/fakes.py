# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: fakes.py
# -----------------------------------------------------------------------------
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import numpy as np

from core.types import CorpusRecord


class FakeEmbedder:
    """Returns a fixed vector (or raises) and records every call."""

    def __init__(self, vector=None, error: Optional[Exception] = None):
        self.model = "fake-embed"
        self.vector = [1.0, 0.0] if vector is None else vector
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def embed_query(self, text, *, timeout=None, cancel_event=None):
        self.calls.append({"text": text, "timeout": timeout, "cancel_event": cancel_event})
        if self.error is not None:
            raise self.error
        return np.asarray(self.vector, dtype=np.float64)


class FakeChat:
    """Echoes a canned answer and keeps the messages it was sent."""

    def __init__(self, answer: str = "Canned answer.", error: Optional[Exception] = None):
        self.model = "fake-chat"
        self.answer = answer
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def generate(self, messages, *, sampling, timeout=None, cancel_event=None):
        self.calls.append(
            {"messages": messages, "sampling": sampling, "timeout": timeout, "cancel_event": cancel_event}
        )
        if self.error is not None:
            raise self.error
        return {"answer": self.answer, "model": self.model, "usage": {"total_tokens": 42}}


def make_records(raw_vectors: List[str], texts: Optional[List[str]] = None):
    texts = texts or [f"record {i + 1}" for i in range(len(raw_vectors))]
    return tuple(
        CorpusRecord(text=t, embedding=raw, metadata={"source": f"s{i}"}, row_index=i)
        for i, (t, raw) in enumerate(zip(texts, raw_vectors))
    )


def embedding_response(vector):
    return SimpleNamespace(data=[SimpleNamespace(embedding=list(vector))], usage=None)


def chat_response(content: str, model: str = "gpt-4"):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        model=model,
        usage=None,
    )
