# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Updated: 2026-02-08
# Description: TestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from health.CorpusHealth import CorpusHealth
from health.EmbeddingHealth import EmbeddingHealth
from health.OpenAIHealth import OpenAIHealth
from utility.logging_utils import get_class_logger


class TestRunner:
    """
    Orchestrates all smoke tests and reports a consolidated result.

    Tests included:
      - CorpusHealth    (corpus loaded with decodable vectors)
      - EmbeddingHealth (embedding call + dimension vs corpus)
      - OpenAIHealth    (chat completion)
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        *,
        corpus_health: CorpusHealth,
        embedding_health: EmbeddingHealth,
        openai_health: OpenAIHealth,
        logger: Optional[logging.Logger] = None,
    ):
        self.corpus_health = corpus_health
        self.embedding_health = embedding_health
        self.openai_health = openai_health
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info("Initialising SmokeTestRunner")

    # -------------------------------------------------------------------------
    def run_all(self, include_generation: bool = True) -> Dict[str, bool]:
        """
        Run all configured smoke tests.

        :param include_generation: If False, skips the chat completion probe.
        :return: Dict mapping test names to True/False.
        """
        self.logger.info("Starting smoke test suite (include_generation=%s)", include_generation)

        checks: Dict[str, Callable[[], bool]] = {
            "corpus_health": self.corpus_health.run,
            "embedding_health": self.embedding_health.run,
        }
        if include_generation:
            checks["openai_health"] = self.openai_health.run

        results: Dict[str, bool] = {}
        for name, check in checks.items():
            try:
                ok = check()
            except Exception as e:
                # A crashing check is a failed check; the suite keeps going
                self.logger.exception("%s raised an exception: %s", name, e)
                ok = False
            results[name] = ok
            self._log_result(name, ok)

        self._log_summary(results)
        return results

    # -------------------------------------------------------------------------
    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    def _log_summary(self, results: Dict[str, bool]) -> None:
        total = len(results)
        passed = sum(1 for v in results.values() if v)
        failed = total - passed

        self.logger.info("Smoke test summary: %d total, %d passed, %d failed", total, passed, failed)

        for name, ok in results.items():
            status = "PASS" if ok else "FAIL"
            self.logger.info("  %s: %s", name, status)
