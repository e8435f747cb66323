# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_retrieval_pipeline.py
# -----------------------------------------------------------------------------
import threading

import pytest

from core.errors import (
    DegenerateVectorError,
    DimensionMismatchError,
    EmbeddingServiceError,
    GenerationServiceError,
    PipelineCancelledError,
)
from core.types import SamplingParams
from services.RetrievalPipeline import RetrievalPipeline

from fakes import FakeChat, FakeEmbedder, make_records


def _pipeline(raw_vectors, query_vector=(1.0, 0.0), texts=None, **kwargs):
    embedder = kwargs.pop("embedder", None) or FakeEmbedder(list(query_vector))
    chat = kwargs.pop("chat_client", None) or FakeChat()
    p = RetrievalPipeline(
        embedder=embedder,
        chat_client=chat,
        corpus=make_records(raw_vectors, texts),
        **kwargs,
    )
    return p, embedder, chat


def test_ask_end_to_end_with_fakes():
    p, embedder, chat = _pipeline(
        ["[1,0]", "[0,1]", "[0.9,0.1]"],
        texts=["Sweden won curling gold", "Figure skating recap", "Curling final report"],
        top_k=2,
    )
    out = p.ask("Who won the curling gold?")

    assert out.answer == "Canned answer."
    assert out.query == "Who won the curling gold?"
    assert [r.text for r in out.results] == ["Sweden won curling gold", "Curling final report"]
    assert out.model == "fake-chat"
    assert out.usage == {"total_tokens": 42}
    assert embedder.calls[0]["text"] == "Who won the curling gold?"


def test_prompt_has_framing_query_and_numbered_context():
    p, _, chat = _pipeline(
        ["[1,0]", "[0.9,0.1]"],
        texts=["first passage", "second passage"],
        framing="You are a test analyst.",
        system_message="System says hi.",
    )
    p.ask("  what happened?  ")

    messages = chat.calls[0]["messages"]
    assert messages[0] == {"role": "system", "content": "System says hi."}
    assert messages[1]["role"] == "user"

    user = messages[1]["content"]
    assert user.startswith("You are a test analyst.")
    assert "A user asks you about: what happened?\n" in user
    assert user.index("1. first passage") < user.index("2. second passage")


def test_default_sampling_parameters_sent():
    p, _, chat = _pipeline(["[1,0]"])
    p.ask("q")

    sampling = chat.calls[0]["sampling"]
    assert sampling == SamplingParams(max_tokens=100, temperature=0.0, top_p=1.0, n=1, stream=False)


def test_default_k_is_ten():
    p, _, _ = _pipeline([f"[1,{i}]" for i in range(15)])
    assert p.top_k == 10
    assert len(p.retrieve("q")) == 10


def test_fewer_scorable_records_than_k():
    p, _, _ = _pipeline(["[1,0]", "[0,1]", "[1,a,3]", "[1,1]", "[2,1]", "[1,2,3]"])
    results = p.retrieve("q", k=10)
    assert len(results) == 4


def test_malformed_row_dropped_in_decode_stage():
    p, _, chat = _pipeline(["[1,a,3]", "[1,0]"], texts=["broken", "fine"])
    out = p.ask("q")

    assert [r.text for r in out.results] == ["fine"]
    assert "broken" not in chat.calls[0]["messages"][1]["content"]


def test_mismatched_dimension_record_excluded():
    p, _, _ = _pipeline(["[1,0,0]", "[1,0]", "[0,1,0]"], query_vector=(1.0, 0.0, 0.0))
    assert [r.record.row_index for r in p.retrieve("q")] == [0, 2]


def test_model_mismatch_is_fatal():
    p, _, chat = _pipeline(["[1,0]", "[0,1]"], query_vector=(1.0, 0.0, 0.0))
    with pytest.raises(DimensionMismatchError):
        p.ask("q")
    assert chat.calls == []


def test_nan_query_embedding_is_fatal():
    p, _, chat = _pipeline(["[1,0]", "[0,1]"], query_vector=(float("nan"), 1.0))
    with pytest.raises(DegenerateVectorError):
        p.ask("q")
    assert chat.calls == []


def test_embedding_failure_propagates_and_skips_generation():
    embedder = FakeEmbedder(error=EmbeddingServiceError("down", query_text="q"))
    p, _, chat = _pipeline(["[1,0]"], embedder=embedder)

    with pytest.raises(EmbeddingServiceError) as exc:
        p.ask("q")
    assert exc.value.query_text == "q"
    assert chat.calls == []


def test_generation_failure_propagates():
    chat = FakeChat(error=GenerationServiceError("down", prompt="p"))
    p, _, _ = _pipeline(["[1,0]"], chat_client=chat)

    with pytest.raises(GenerationServiceError):
        p.ask("q")


def test_timeout_and_cancel_event_reach_collaborators():
    p, embedder, chat = _pipeline(["[1,0]"])
    event = threading.Event()
    p.ask("q", timeout=3.5, cancel_event=event)

    assert embedder.calls[0]["timeout"] == 3.5
    assert embedder.calls[0]["cancel_event"] is event
    assert chat.calls[0]["timeout"] == 3.5
    assert chat.calls[0]["cancel_event"] is event


def test_cancelled_before_start():
    p, embedder, chat = _pipeline(["[1,0]"])
    event = threading.Event()
    event.set()

    with pytest.raises(PipelineCancelledError):
        p.ask("q", cancel_event=event)
    assert embedder.calls == []
    assert chat.calls == []


def test_empty_query_rejected():
    p, embedder, _ = _pipeline(["[1,0]"])
    with pytest.raises(ValueError):
        p.ask("   ")
    assert embedder.calls == []


def test_repeated_queries_are_deterministic():
    p, _, _ = _pipeline(["[0.3,0.7]", "[0.7,0.3]", "[0.5,0.5]", "[0.7,0.3]"])
    first = [(r.record.row_index, r.similarity_score) for r in p.retrieve("q")]
    second = [(r.record.row_index, r.similarity_score) for r in p.retrieve("q")]
    assert first == second
    assert [i for i, _ in first] == [1, 3, 2, 0]


def test_concurrent_queries_share_corpus():
    p, _, _ = _pipeline([f"[{i},1]" for i in range(1, 40)], query_vector=(1.0, 0.0))
    outputs = []

    def run():
        outputs.append([r.record.row_index for r in p.retrieve("q", k=5)])

    threads = [threading.Thread(target=run) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(outputs) == 8
    assert all(o == outputs[0] for o in outputs)
    assert outputs[0] == [38, 37, 36, 35, 34]


def test_ranked_result_to_dict_passes_metadata_through():
    p, _, _ = _pipeline(["[1,0]"])
    d = p.retrieve("q")[0].to_dict()

    assert d["source"] == "s0"
    assert d["text"] == "record 1"
    assert d["similarity_score"] == pytest.approx(1.0)
    assert "embedding" not in d
