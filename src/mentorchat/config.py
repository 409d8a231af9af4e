"""Runtime configuration.

Centralizes the environment variables mentorchat reads. Values come from the
process environment, which the CLI populates from a ``.env`` file first.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_DATA_DIR = "~/.mentorchat"
DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"


class MentorConfig(BaseModel):
    """Settings for storage, the completion provider and logging."""

    data_dir: Path = Field(default=Path(DEFAULT_DATA_DIR), description="Directory for JSON records")
    storage_backend: Literal["json", "memory"] = Field(default="json")
    llm_provider: str = Field(default="openai", description="openai or deepseek")
    openai_api_key: str | None = None
    openai_chat_model: str = DEFAULT_CHAT_MODEL
    deepseek_api_key: str | None = None
    deepseek_model: str = "deepseek-chat"
    latency_scale: float = Field(default=1.0, ge=0.0, description="Multiplier for simulated thinking time")
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "MentorConfig":
        """Build a config from environment variables.

        Environment variables:
            MENTORCHAT_DATA_DIR: Record directory (default: ~/.mentorchat)
            MENTORCHAT_STORAGE: json or memory (default: json)
            MENTORCHAT_SIMULATED_LATENCY: Delay multiplier, 0 disables (default: 1)
            MENTORCHAT_LOG_LEVEL: Logging level (default: WARNING)
            LLM_PROVIDER: openai or deepseek (default: openai)
            OPENAI_API_KEY: OpenAI API key
            OPENAI_CHAT_MODEL: OpenAI model (default: gpt-3.5-turbo)
            DEEPSEEK_API_KEY: DeepSeek API key
            DEEPSEEK_MODEL: DeepSeek model (default: deepseek-chat)
        """
        env = os.environ if environ is None else environ
        return cls(
            data_dir=Path(env.get("MENTORCHAT_DATA_DIR", DEFAULT_DATA_DIR)).expanduser(),
            storage_backend=env.get("MENTORCHAT_STORAGE", "json").lower(),
            llm_provider=env.get("LLM_PROVIDER", "openai").lower(),
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            openai_chat_model=env.get("OPENAI_CHAT_MODEL", DEFAULT_CHAT_MODEL),
            deepseek_api_key=env.get("DEEPSEEK_API_KEY") or None,
            deepseek_model=env.get("DEEPSEEK_MODEL", "deepseek-chat"),
            latency_scale=float(env.get("MENTORCHAT_SIMULATED_LATENCY", "1")),
            log_level=env.get("MENTORCHAT_LOG_LEVEL", "WARNING").upper(),
        )
