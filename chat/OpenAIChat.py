# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-22
# Updated: 2026-02-06
# Description: OpenAIChat
# -----------------------------------------------------------------------------
import threading
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

from openai import OpenAI, OpenAIError

import settings
from chat.GenerationProvider import Message
from core.errors import GenerationServiceError, PipelineCancelledError
from core.types import SamplingParams
from utility.logging_utils import get_class_logger


def _usage_dict(usage: Any) -> Optional[Dict[str, Any]]:
    if usage is None:
        return None
    if hasattr(usage, "model_dump"):
        return usage.model_dump()
    if isinstance(usage, dict):
        return usage
    return None


def _prompt_text(messages: List[Message]) -> str:
    return "\n".join(f"{m.get('role')}: {m.get('content')}" for m in messages)


@dataclass
class OpenAIChat:
    """
        OpenAI chat completion wrapper used as the generation collaborator.

        Expected Config fields:
          cfg.openai_api_key: str
          cfg.openai_org: str | None (optional)
          cfg.openai_base_url: str | None (optional)
          cfg.openai_chat_model: str  (e.g. "gpt-4", "gpt-4o-mini")
    """

    cfg: Any
    client: Any = None
    default_timeout: Optional[float] = settings.REQUEST_TIMEOUT_SECONDS
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if not getattr(self.cfg, "openai_api_key", None) and self.client is None:
            raise ValueError("Config is missing openai_api_key for OpenAI mode")

        self.model = getattr(self.cfg, "openai_chat_model", None)
        if not self.model:
            raise ValueError("Config missing openai_chat_model for OpenAI mode.")

        if self.client is None:
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=getattr(self.cfg, "openai_base_url", None) or None,
                organization=getattr(self.cfg, "openai_org", None) or None,
            )

        self.logger.info("OpenAIChat initialised (OpenAI direct, model=%s)", self.model)

    # Standard chat call
    def chat(
            self,
            messages: List[Message],
            sampling: SamplingParams,
            timeout: Optional[float] = None,
    ) -> Any:
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": sampling.max_tokens,
            "temperature": sampling.temperature,
            "top_p": sampling.top_p,
            "n": sampling.n,
            "stream": sampling.stream,
            "timeout": self.default_timeout if timeout is None else timeout,
        }

        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s top_p=%s n=%s stream=%s",
            self.model, sampling.temperature, sampling.max_tokens, sampling.top_p, sampling.n, sampling.stream,
        )

        resp = self.client.chat.completions.create(**params)

        if not sampling.stream:
            self.logger.debug("Raw ChatCompletion response: %r", resp)

        # Return the full response object (or the stream iterator)
        return resp

    def generate(
            self,
            messages: List[Message],
            *,
            sampling: SamplingParams,
            timeout: Optional[float] = None,
            cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        if cancel_event is not None and cancel_event.is_set():
            raise PipelineCancelledError("Generation request cancelled")

        try:
            resp = self.chat(messages, sampling, timeout=timeout)
        except OpenAIError as e:
            self.logger.error("Chat request failed: %s", e)
            raise GenerationServiceError(f"Chat request failed: {e}", prompt=_prompt_text(messages)) from e

        if sampling.stream:
            return self._collect_stream(resp, messages, cancel_event)

        try:
            content = resp.choices[0].message.content or ""
        except (AttributeError, IndexError, TypeError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            raise GenerationServiceError(
                f"Unexpected chat response format: {e}", prompt=_prompt_text(messages)
            ) from e

        self.logger.info("Chat answer generated (model=%s, chars=%d)", getattr(resp, "model", None), len(content))
        self.logger.debug("Token usage: %r", getattr(resp, "usage", None))

        return {
            "answer": content,
            "model": getattr(resp, "model", None),
            "usage": _usage_dict(getattr(resp, "usage", None)),
        }

    def _collect_stream(
            self,
            stream: Any,
            messages: List[Message],
            cancel_event: Optional[threading.Event],
    ) -> Dict[str, Any]:
        parts: List[str] = []
        model = None
        try:
            for event in stream:
                if cancel_event is not None and cancel_event.is_set():
                    raise PipelineCancelledError("Generation stream cancelled")
                model = model or getattr(event, "model", None)
                if not getattr(event, "choices", None):
                    continue
                delta = event.choices[0].delta
                if delta and getattr(delta, "content", None):
                    parts.append(delta.content)
        except OpenAIError as e:
            raise GenerationServiceError(f"Chat stream failed: {e}", prompt=_prompt_text(messages)) from e

        return {"answer": "".join(parts), "model": model, "usage": None}

    # Convenience helper functions
    def simple_chat(
            self,
            user_text: str,
            system_text: Optional[str] = None,
            sampling: Optional[SamplingParams] = None,
            timeout: Optional[float] = None,
    ) -> dict:
        messages: List[Message] = []
        if system_text:
            messages.append({"role": "system", "content": system_text})
        messages.append({"role": "user", "content": user_text})

        return self.generate(messages, sampling=sampling or SamplingParams.from_settings(), timeout=timeout)

    def healthcheck(self) -> bool:
        try:
            out = self.simple_chat(
                "Say OK if you can read this.",
                system_text="You are a model probe. Reply briefly to confirm connectivity.",
                sampling=SamplingParams(max_tokens=5, temperature=0.0),
            )
            return bool(out["answer"].strip())
        except GenerationServiceError as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
