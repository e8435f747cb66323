# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Updated: 2026-02-14
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Corpus file layout
# -----------------------------------------------------------------------------
CORPUS_TEXT_COLUMN = _env("CQA_CORPUS_TEXT_COLUMN", "text")
CORPUS_EMBEDDING_COLUMN = _env("CQA_CORPUS_EMBEDDING_COLUMN", "embedding")
CORPUS_DELIMITER = _env("CQA_CORPUS_DELIMITER", ",")


# -----------------------------------------------------------------------------
# Ask() defaults (env-controlled)
# -----------------------------------------------------------------------------
ASK_DEFAULTS: Dict[str, Any] = {
    "top_k": _env_int("CQA_DEFAULT_TOP_K", 10),
    "temperature": _env_float("CQA_DEFAULT_TEMPERATURE", 0.0),
    "max_tokens": _env_int("CQA_DEFAULT_MAX_TOKENS", 100),
    "top_p": _env_float("CQA_DEFAULT_TOP_P", 1.0),
    "n": _env_int("CQA_DEFAULT_N", 1),
    "stream": _env_bool("CQA_DEFAULT_STREAM", False),
}

# Seconds; applies to each outbound embedding / generation request
REQUEST_TIMEOUT_SECONDS = _env_float("CQA_REQUEST_TIMEOUT_SECONDS", 60.0)

# Worker threads for the corpus decode stage (1 = decode inline)
DECODE_WORKERS = _env_int("CQA_DECODE_WORKERS", 1)

# Retries live at the embedding client boundary, never in the pipeline
EMBED_MAX_RETRIES = _env_int("CQA_EMBED_MAX_RETRIES", 3)
EMBED_RETRY_DELAY = _env_float("CQA_EMBED_RETRY_DELAY", 0.8)


# -----------------------------------------------------------------------------
# Prompt framing
# -----------------------------------------------------------------------------
SYSTEM_MESSAGE = _env("CQA_SYSTEM_MESSAGE", "You are a helpful assistant.")

PROMPT_FRAMING = _env(
    "CQA_PROMPT_FRAMING",
    "You are a sports analyst handling questions about the Olympics.",
)

DEFAULT_QUERY = _env(
    "CQA_DEFAULT_QUERY",
    "Which athletes won the gold medal in curling at the 2022 Winter Olympics?",
)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if ASK_DEFAULTS["top_k"] < 1:
    raise RuntimeError("CQA_DEFAULT_TOP_K must be a positive integer")

if ASK_DEFAULTS["n"] < 1:
    raise RuntimeError("CQA_DEFAULT_N must be a positive integer")

if DECODE_WORKERS < 1:
    raise RuntimeError("CQA_DECODE_WORKERS must be a positive integer")

if EMBED_MAX_RETRIES < 1:
    raise RuntimeError("CQA_EMBED_MAX_RETRIES must be at least 1 (one attempt)")

if not CORPUS_TEXT_COLUMN or not CORPUS_EMBEDDING_COLUMN:
    raise RuntimeError("Corpus column names resolved to empty values")
