# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: cli.py
# -----------------------------------------------------------------------------
"""
Command line entry point.

    corpus-qa ask "Who won the curling gold?" --corpus winter_olympics_2022.csv
    corpus-qa stats --corpus winter_olympics_2022.csv
    corpus-qa health

Exit codes: 0 success, 1 pipeline/config failure, 2 usage error,
130 cancelled (Ctrl-C).
"""
import argparse
import json
import sys
import threading
from typing import Callable, List, Optional

import settings
from api.AppContainer import AppContainer
from config.Config import Config
from core.errors import CorpusQAError, PipelineCancelledError
from utility.logging_utils import get_logger, set_namespace_level

logger = get_logger("cli")

ContainerFactory = Callable[[Config], AppContainer]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="corpus-qa",
        description="Retrieval-augmented question answering over an embedded CSV corpus.",
    )
    parser.add_argument("--corpus", help="Corpus file (overrides CQA_CORPUS_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Answer a question grounded in the corpus")
    ask.add_argument("query", nargs="?", default=settings.DEFAULT_QUERY, help="Question text")
    ask.add_argument("-k", "--top-k", type=int, default=settings.ASK_DEFAULTS["top_k"])
    ask.add_argument("--timeout", type=float, default=settings.REQUEST_TIMEOUT_SECONDS,
                     help="Seconds allowed for each outbound request")
    ask.add_argument("--show-sources", action="store_true", help="Print the ranked records")
    ask.add_argument("--json", action="store_true", help="Print a JSON document instead of text")

    sub.add_parser("stats", help="Print corpus statistics as JSON")

    health = sub.add_parser("health", help="Run smoke tests against corpus and OpenAI")
    health.add_argument("--skip-generation", action="store_true", help="Do not call the chat model")

    return parser


def _cmd_ask(container: AppContainer, args: argparse.Namespace) -> int:
    if args.top_k < 1:
        logger.error("--top-k must be a positive integer, got %d", args.top_k)
        return 2

    cancel_event = threading.Event()
    try:
        out = container.pipeline.ask(
            args.query,
            k=args.top_k,
            timeout=args.timeout,
            cancel_event=cancel_event,
        )
    except KeyboardInterrupt:
        cancel_event.set()
        raise PipelineCancelledError("Interrupted by user")

    if args.json:
        print(json.dumps(
            {
                "query": out.query,
                "answer": out.answer,
                "model": out.model,
                "usage": out.usage,
                "sources": [r.to_dict() for r in out.results] if args.show_sources else None,
            },
            indent=2,
            default=str,
        ))
        return 0

    if args.show_sources:
        for i, r in enumerate(out.results, start=1):
            print(f"{i:>2}. [{r.similarity_score:.4f}] {r.text[:160]}")
        print()
    print(out.answer)
    return 0


def _cmd_stats(container: AppContainer, args: argparse.Namespace) -> int:
    print(json.dumps(container.stats_service.get_stats(), indent=2, default=str))
    return 0


def _cmd_health(container: AppContainer, args: argparse.Namespace) -> int:
    results = container.test_runner.run_all(include_generation=not args.skip_generation)

    print("\n=== Smoke Test Results ===")
    for name, ok in results.items():
        print(f"{name}: {'PASS' if ok else 'FAIL'}")
    return 0 if all(results.values()) else 1


COMMANDS = {
    "ask": _cmd_ask,
    "stats": _cmd_stats,
    "health": _cmd_health,
}


def main(argv: Optional[List[str]] = None, container_factory: Optional[ContainerFactory] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        set_namespace_level("DEBUG")

    factory = container_factory or (lambda cfg: AppContainer(cfg))

    try:
        cfg = Config.from_env(corpus_path=args.corpus)
        container = factory(cfg)
        return COMMANDS[args.command](container, args)
    except PipelineCancelledError as e:
        logger.error("%s cancelled: %s", args.command, e)
        return 130
    except CorpusQAError as e:
        context = getattr(e, "query_text", None) or getattr(e, "path", None) or ""
        logger.error("%s failed (%s): %s %s", args.command, type(e).__name__, e, f"[{context}]" if context else "")
        return 1
    except ValueError as e:
        # Config.from_env and argument validation raise ValueError
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
