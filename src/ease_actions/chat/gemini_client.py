"""Gemini-backed chat client producing Sage's replies.

The reply is plain text that may contain call-site markers; turning those
into actions is the response pipeline's job.
"""

import logging
from typing import Any, Optional

import google.generativeai as genai

from ease_actions.chat.prompt import SAGE_ACKNOWLEDGEMENT, build_system_prompt
from ease_actions.config import EaseSettings
from ease_actions.errors import ChatBackendError
from ease_actions.observability.logging import get_logger, log_event
from ease_actions.registry.abstract import Registry


logger = get_logger(__name__)

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"


class GeminiChatClient:
    """Sends a conversation to Gemini and returns the raw reply text."""

    def __init__(self, registry: Registry, settings: Optional[EaseSettings] = None):
        """Initializes the client.

        Args:
            registry: Registry whose actions are advertised in the system prompt.
            settings: Runtime settings. Defaults to EaseSettings.from_env().
        """
        self.settings = settings or EaseSettings.from_env()
        self.registry = registry
        self.model_name = self.settings.gemini_model

        genai.configure(api_key=self.settings.google_api_key)

    def _build_contents(
        self, message: str, history: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """Converts the chat history into Gemini 'contents'.

        A fresh conversation is primed with the system prompt as a user turn
        and Sage's acknowledgement as a model turn.
        """
        contents: list[dict[str, Any]] = []
        if self.settings.include_system_prompt and not history:
            contents.append(
                {"role": "user", "parts": [build_system_prompt(self.registry)]}
            )
            contents.append({"role": "model", "parts": [SAGE_ACKNOWLEDGEMENT]})

        for turn in history:
            role = "model" if turn.get("role") == "assistant" else "user"
            contents.append(
                {"role": role, "parts": [str(turn.get("content") or "")]}
            )

        contents.append({"role": "user", "parts": [message]})
        return contents

    def _generation_config(self) -> dict[str, Any]:
        return {
            "temperature": self.settings.temperature,
            "max_output_tokens": self.settings.max_tokens,
            "candidate_count": 1,
        }

    def _safety_settings(self) -> list[dict[str, str]]:
        return [
            {"category": category, "threshold": SAFETY_THRESHOLD}
            for category in SAFETY_CATEGORIES
        ]

    def reply(self, message: str, history: Optional[list[dict[str, Any]]] = None) -> str:
        """Returns Sage's reply to message given the prior turns.

        Args:
            message: The user's new message.
            history: Prior turns as dicts with 'role' and 'content'.

        Returns:
            The raw reply text, possibly containing call-site markers.

        Raises:
            ChatBackendError: If the message is blank or Gemini fails.
        """
        if not message or not message.strip():
            raise ChatBackendError("Message is required")

        contents = self._build_contents(message, history or [])
        model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config=self._generation_config(),
            safety_settings=self._safety_settings(),
        )

        try:
            response = model.generate_content(contents)
            text = response.text
        except Exception as e:
            log_event(
                logger,
                logging.ERROR,
                "Gemini request failed",
                "gemini.error",
                exc_info=True,
                model=self.model_name,
            )
            raise ChatBackendError(f"Error communicating with Gemini: {e}") from e

        usage = getattr(response, "usage_metadata", None)
        log_event(
            logger,
            logging.INFO,
            "Gemini reply received",
            "gemini.reply",
            model=self.model_name,
            total_tokens=getattr(usage, "total_token_count", None),
        )
        return text or ""
