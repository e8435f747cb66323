# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-22
# Updated: 2026-02-12
# Description: test_openai_integration.py
# -----------------------------------------------------------------------------
import os

import pytest

from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.OpenAIEmbedder import OpenAIEmbedder
from services.RetrievalPipeline import RetrievalPipeline
from codec.VectorCodec import VectorCodec
from core.types import CorpusRecord


def _skip_if_missing_prereqs():
    missing = [name for name in ("OPENAI_API_KEY",) if not os.getenv(name)]
    if missing:
        pytest.skip(f"Missing env vars for OpenAI: {', '.join(missing)}")


def _cfg() -> Config:
    return Config.from_env(corpus_path="unused.csv")


@pytest.mark.integration
def test_openai_chat_simple_roundtrip():
    """
    Integration test:
      - instantiate OpenAIChat
      - send a tiny prompt
      - verify response is returned
    """
    _skip_if_missing_prereqs()

    chat = OpenAIChat(cfg=_cfg())
    resp = chat.simple_chat(
        user_text="Reply with a single word: OK",
        system_text="You are a test assistant.",
    )

    assert isinstance(resp, dict)
    assert resp["answer"].strip().upper().startswith("OK")


@pytest.mark.integration
def test_live_pipeline_ranks_relevant_record_first():
    """
    Embeds three short records live, then runs the full pipeline against them.
    """
    _skip_if_missing_prereqs()

    cfg = _cfg()
    embedder = OpenAIEmbedder(cfg)
    codec = VectorCodec()

    texts = [
        "Sweden won the men's curling gold medal at the 2022 Winter Olympics.",
        "The 2022 Winter Olympics were held in Beijing.",
        "Bananas are a good source of potassium.",
    ]
    corpus = tuple(
        CorpusRecord(text=t, embedding=codec.encode(embedder.embed_query(t)), row_index=i)
        for i, t in enumerate(texts)
    )

    pipeline = RetrievalPipeline(embedder=embedder, chat_client=OpenAIChat(cfg=cfg), corpus=corpus)
    out = pipeline.ask("Which country won curling gold in 2022?", k=2)

    assert out.results[0].record.row_index == 0
    assert len(out.results) == 2
    assert out.answer.strip()
