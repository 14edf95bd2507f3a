"""Runtime configuration read from the environment."""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


_TRUE_VALUES = {"1", "true", "yes", "on"}


class EaseSettings(BaseModel):
    """
    Static configuration for the chat backend and logging.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    google_api_key: Optional[str] = Field(
        default=None, description="API key for the Gemini API."
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash", description="Gemini model identifier."
    )
    temperature: float = Field(
        default=0.7, ge=0.0, le=2.0, description="Sampling temperature."
    )
    max_tokens: int = Field(
        default=1000, gt=0, description="Maximum output tokens per reply."
    )
    include_system_prompt: bool = Field(
        default=True,
        description="Whether a new conversation starts with the Sage system prompt.",
    )
    log_level: str = Field(default="INFO", description="Root log level.")

    @classmethod
    def from_env(cls) -> "EaseSettings":
        """Builds settings from environment variables, falling back to defaults."""
        env = os.environ
        values: dict[str, object] = {
            "google_api_key": env.get("GOOGLE_API_KEY") or None,
            "gemini_model": env.get("GEMINI_MODEL", "gemini-2.0-flash"),
            "log_level": env.get("LOG_LEVEL", "INFO").upper(),
        }
        if "EASE_TEMPERATURE" in env:
            values["temperature"] = env["EASE_TEMPERATURE"]
        if "EASE_MAX_TOKENS" in env:
            values["max_tokens"] = env["EASE_MAX_TOKENS"]
        if "EASE_INCLUDE_SYSTEM_PROMPT" in env:
            values["include_system_prompt"] = (
                env["EASE_INCLUDE_SYSTEM_PROMPT"].strip().lower() in _TRUE_VALUES
            )
        return cls(**values)
