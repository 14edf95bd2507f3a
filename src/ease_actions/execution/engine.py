import logging
from typing import Iterable, Optional

from ..errors import ArgumentValidationError, SchemaNotFound, UnknownAction
from ..models.action import ActionCall
from ..models.enums import ErrorCode
from ..models.execution_result import ActionResult
from ..observability.logging import get_logger, log_event
from ..observability.metrics import DispatchMetrics
from ..registry.abstract import Registry
from .context import ExecutionContext, maybe_await
from .validation import validate_arguments


logger = get_logger(__name__)


class ActionDispatcher:
    """
    Validates extracted calls against the registry and executes their handlers,
    one at a time and in order. Never raises for a single call.
    """

    def __init__(
        self,
        registry: Registry,
        *,
        metrics: Optional[DispatchMetrics] = None,
    ) -> None:
        self._registry = registry
        self.metrics = metrics or DispatchMetrics()

    async def dispatch_all(
        self, calls: Iterable[ActionCall], context: ExecutionContext
    ) -> list[ActionResult]:
        results: list[ActionResult] = []
        for call in calls:
            results.append(await self.dispatch(call, context))
        return results

    async def dispatch(
        self, call: ActionCall, context: ExecutionContext
    ) -> ActionResult:
        try:
            schema = self._registry.get_schema(call.name)
            handler = self._registry.get_handler(call.name)
        except SchemaNotFound:
            err = UnknownAction(call.name)
            return self._record(
                call,
                ActionResult.fail(
                    err.user_message,
                    code=err.code,
                    detail=f"Action not in registry: {call.name}",
                ),
            )

        try:
            arguments = validate_arguments(schema, call.arguments)
        except ArgumentValidationError as e:
            return self._record(
                call,
                ActionResult.fail(
                    e.user_message, code=e.code, parameter=e.parameter
                ),
            )
        except Exception as e:
            log_event(
                logger,
                logging.ERROR,
                "Argument validation failed unexpectedly",
                "dispatch.validation_exception",
                exc_info=True,
                action=call.name,
            )
            return self._record(
                call,
                ActionResult.fail(
                    f"Execution failed for {call.name}",
                    code=ErrorCode.EXECUTION_EXCEPTION,
                    detail=str(e) or type(e).__name__,
                ),
            )

        try:
            result = await maybe_await(handler(arguments, context))
            if not isinstance(result, ActionResult):
                raise TypeError(
                    f"Handler returned {type(result).__name__}, expected ActionResult"
                )
        except Exception as e:
            log_event(
                logger,
                logging.ERROR,
                "Action handler failed",
                "dispatch.exception",
                exc_info=True,
                action=call.name,
            )
            result = ActionResult.fail(
                f"Execution failed for {call.name}",
                code=ErrorCode.EXECUTION_EXCEPTION,
                detail=str(e) or type(e).__name__,
            )

        return self._record(call, result)

    def _record(self, call: ActionCall, result: ActionResult) -> ActionResult:
        if result.action is None:
            result = result.model_copy(update={"action": call.name})

        self.metrics.record(result)
        log_event(
            logger,
            logging.INFO,
            "Dispatched action",
            "dispatch.result",
            action=call.name,
            success=result.success,
            error_code=result.error.code if result.error else None,
        )
        return result
