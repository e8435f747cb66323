# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: errors.py
# -----------------------------------------------------------------------------
from typing import Optional


class CorpusQAError(Exception):
    """Base class for every error raised by the retrieval pipeline."""


class MalformedVectorError(CorpusQAError, ValueError):
    """A serialized embedding could not be decoded. Per-record, never fatal to a batch."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class DimensionMismatchError(CorpusQAError, ValueError):
    """Two vectors compared for similarity do not have the same length."""

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        super().__init__(message or f"Vector dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class DegenerateVectorError(CorpusQAError, ValueError):
    """A vector has zero magnitude, so cosine similarity is undefined."""


class EmbeddingServiceError(CorpusQAError):
    """The embedding collaborator failed. Carries the text that was being embedded."""

    def __init__(self, message: str, query_text: str = ""):
        super().__init__(message)
        self.query_text = query_text


class GenerationServiceError(CorpusQAError):
    """The generation collaborator failed. Carries the prompt that was sent."""

    def __init__(self, message: str, prompt: str = ""):
        super().__init__(message)
        self.prompt = prompt


class CorpusLoadError(CorpusQAError):
    """The corpus file could not be read. Fatal to the run."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class PipelineCancelledError(CorpusQAError):
    """The caller cancelled the query before it completed."""
