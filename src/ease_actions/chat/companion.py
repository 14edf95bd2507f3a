"""One chat turn with Sage: ask the backend, then act on the reply."""

import asyncio
import logging
from typing import Any, Optional, Protocol

from ease_actions.chat.pipeline import ProcessedResponse, ResponsePipeline
from ease_actions.errors import ChatBackendError
from ease_actions.execution.context import ExecutionContext
from ease_actions.observability.logging import get_logger, log_event


logger = get_logger(__name__)

EMPTY_REPLY_FALLBACK = "I'm here to help you with whatever you're going through."
BACKEND_ERROR_REPLY = (
    "I'm sorry, I'm having trouble connecting right now. Please try again in "
    "a moment. Remember, if you're in crisis, please reach out to a mental "
    "health professional or call 988."
)


class ChatBackend(Protocol):
    def reply(
        self, message: str, history: Optional[list[dict[str, Any]]] = None
    ) -> str: ...


class CompanionChat:
    """Ties a chat backend to the response pipeline."""

    def __init__(self, backend: ChatBackend, pipeline: ResponsePipeline) -> None:
        self.backend = backend
        self.pipeline = pipeline

    async def arespond(
        self,
        message: str,
        history: Optional[list[dict[str, Any]]],
        context: ExecutionContext,
    ) -> ProcessedResponse:
        try:
            # The backend call is blocking network I/O
            raw = await asyncio.to_thread(
                self.backend.reply, message, history or []
            )
        except ChatBackendError as e:
            log_event(
                logger,
                logging.WARNING,
                "Chat backend unavailable",
                "companion.backend_error",
                detail=str(e),
            )
            return ProcessedResponse(display_text=BACKEND_ERROR_REPLY)

        return await self.pipeline.aprocess(raw or EMPTY_REPLY_FALLBACK, context)

    def respond(
        self,
        message: str,
        history: Optional[list[dict[str, Any]]],
        context: ExecutionContext,
    ) -> ProcessedResponse:
        """Runs one turn synchronously.

        Args:
            message: The user's message.
            history: Prior turns as dicts with 'role' and 'content'.
            context: Capabilities granted to the action handlers.

        Returns:
            The processed reply. Backend failures yield an apology with no
            actions rather than an exception.
        """
        return asyncio.run(self.arespond(message, history, context))
