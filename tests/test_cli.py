# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_cli.py
# -----------------------------------------------------------------------------
import json

import pytest

import cli
from api.AppContainer import AppContainer
from core.errors import GenerationServiceError

from fakes import FakeChat, FakeEmbedder


@pytest.fixture
def corpus_path(write_corpus):
    return str(write_corpus([
        ("Sweden won curling gold", [1.0, 0.0]),
        ("Figure skating recap", [0.0, 1.0]),
        ("corrupt", "[1,a,3]"),
    ]))


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")


def _factory(chat=None, embedder=None):
    def build(cfg):
        return AppContainer(cfg, embedder=embedder or FakeEmbedder([1.0, 0.0]), chat_client=chat or FakeChat("Sweden."))
    return build


def test_ask_prints_answer(corpus_path, capsys):
    code = cli.main(["--corpus", corpus_path, "ask", "Who won?"], container_factory=_factory())

    assert code == 0
    assert capsys.readouterr().out.strip() == "Sweden."


def test_ask_uses_default_question(corpus_path):
    embedder = FakeEmbedder([1.0, 0.0])
    cli.main(["--corpus", corpus_path, "ask"], container_factory=_factory(embedder=embedder))
    assert "curling" in embedder.calls[0]["text"]


def test_ask_show_sources_json(corpus_path, capsys):
    code = cli.main(
        ["--corpus", corpus_path, "ask", "Who won?", "-k", "1", "--show-sources", "--json"],
        container_factory=_factory(),
    )
    assert code == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["answer"] == "Sweden."
    assert [s["text"] for s in payload["sources"]] == ["Sweden won curling gold"]


def test_generation_failure_exits_non_zero_without_answer(corpus_path, capsys):
    chat = FakeChat(error=GenerationServiceError("upstream 500", prompt="p"))
    code = cli.main(["--corpus", corpus_path, "ask", "Who won?"], container_factory=_factory(chat=chat))

    assert code == 1
    assert capsys.readouterr().out == ""


def test_missing_corpus_exits_non_zero(tmp_path):
    code = cli.main(["--corpus", str(tmp_path / "missing.csv"), "stats"], container_factory=_factory())
    assert code == 1


def test_missing_config_exits_non_zero(monkeypatch, corpus_path):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert cli.main(["--corpus", corpus_path, "stats"], container_factory=_factory()) == 1


def test_stats_prints_json(corpus_path, capsys):
    assert cli.main(["--corpus", corpus_path, "stats"], container_factory=_factory()) == 0

    stats = json.loads(capsys.readouterr().out)
    assert stats["total_records"] == 3
    assert stats["malformed_records"] == 1


def test_health_exit_code_reflects_failures(corpus_path):
    ok = cli.main(["--corpus", corpus_path, "health"], container_factory=_factory())
    bad = cli.main(["--corpus", corpus_path, "health"], container_factory=_factory(chat=FakeChat("")))

    assert ok == 0
    assert bad == 1


def test_invalid_top_k(corpus_path):
    assert cli.main(["--corpus", corpus_path, "ask", "q", "-k", "0"], container_factory=_factory()) == 2
