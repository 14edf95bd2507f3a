"""Top-level processing of one AI reply.

Extracts call sites, dispatches them in order and renders the text shown to
the user. Nothing in here raises for any reply text.
"""

import asyncio
import logging
from typing import Optional

from pydantic import BaseModel, Field

from ease_actions.chat.formatting import compose_display_text
from ease_actions.execution.context import ExecutionContext
from ease_actions.execution.engine import ActionDispatcher
from ease_actions.models.action import ActionCall
from ease_actions.models.execution_result import ActionResult
from ease_actions.observability.logging import get_logger, log_event
from ease_actions.parsing.extractor import CallExtractor, MarkerCallExtractor
from ease_actions.registry.abstract import Registry


logger = get_logger(__name__)


class ProcessedResponse(BaseModel):
    """The user-facing rendering of one reply plus its structured outcomes.

    Attributes:
        display_text: Cleaned prose followed by one status line per call.
        calls: The calls extracted from the reply, in order.
        results: One result per call, in dispatch order.
    """

    display_text: str = Field(
        ..., description="Cleaned prose followed by one status line per call."
    )
    calls: list[ActionCall] = Field(
        default_factory=list, description="The calls extracted from the reply."
    )
    results: list[ActionResult] = Field(
        default_factory=list, description="One result per call, in dispatch order."
    )


class ResponsePipeline:
    """Extract, dispatch and aggregate for a single AI reply."""

    def __init__(
        self,
        registry: Registry,
        *,
        extractor: Optional[CallExtractor] = None,
        dispatcher: Optional[ActionDispatcher] = None,
    ) -> None:
        self.registry = registry
        self.extractor = extractor or MarkerCallExtractor()
        self.dispatcher = dispatcher or ActionDispatcher(registry)

    async def aprocess(
        self, text: Optional[str], context: ExecutionContext
    ) -> ProcessedResponse:
        text = text or ""
        try:
            calls = self.extractor.extract(text)
            clean_text = self.extractor.clean(text)
        except Exception:
            log_event(
                logger,
                logging.ERROR,
                "Call extraction failed; showing reply without actions",
                "pipeline.extract_failed",
                exc_info=True,
            )
            calls, clean_text = [], text.strip()

        results = await self.dispatcher.dispatch_all(calls, context)

        return ProcessedResponse(
            display_text=compose_display_text(clean_text, results),
            calls=calls,
            results=results,
        )

    def process(
        self, text: Optional[str], context: ExecutionContext
    ) -> ProcessedResponse:
        """Synchronous wrapper around aprocess() for callers without a loop.

        Raises:
            RuntimeError: If called while an event loop is running in this
                thread. Await aprocess() there instead.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.aprocess(text, context))
        raise RuntimeError(
            "process() cannot be called from a running event loop; "
            "await aprocess() instead"
        )
