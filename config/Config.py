# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # OpenAI (embeddings + chat)
    openai_api_key: str
    openai_base_url: str = ""
    openai_org: str = ""
    openai_embed_model: str = "text-embedding-ada-002"
    openai_chat_model: str = "gpt-4"

    # Corpus file (delimited, with text + embedding columns)
    corpus_path: str = ""

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",      # e.g. https://api.openai.com/v1
        "openai_org": "OPENAI_ORG",
        "openai_embed_model": "OPENAI_EMBED_MODEL",
        "openai_chat_model": "OPENAI_CHAT_MODEL",
        "corpus_path": "CQA_CORPUS_PATH",
    }

    REQUIRED_FIELDS = (
        "openai_api_key",
        "openai_embed_model",
        "openai_chat_model",
        "corpus_path",
    )

    # Convenient *groups* for use in tests / health checks
    OPENAI_ENV_VARS = (
        "OPENAI_API_KEY",
        "OPENAI_EMBED_MODEL",
        "OPENAI_CHAT_MODEL",
    )

    @staticmethod
    def from_env(**overrides: str) -> "Config":
        """Build Config object from environment variables; explicit overrides win."""
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                kwargs[field_name] = value.strip()
        kwargs.update({k: v for k, v in overrides.items() if v})
        kwargs.setdefault("openai_api_key", "")
        return Config(**kwargs)

    def __post_init__(self):
        """Fail fast if any required config is missing."""
        missing_fields = [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url or "https://api.openai.com/v1",
            "openai_embed_model": self.openai_embed_model,
            "openai_chat_model": self.openai_chat_model,
            "corpus_path": self.corpus_path,
        }
