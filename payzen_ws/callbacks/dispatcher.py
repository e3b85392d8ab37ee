import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from ..errors import CallbackError
from ..result import ServiceResult

logger = logging.getLogger(__name__)

ResponseCallback = Callable[[ServiceResult], Union[None, Awaitable[None]]]


class ResponseDispatcher:
    """
    Hands a finished result to the caller's callback, if there is one.

    The callback runs inline: a coroutine callback is awaited before the
    operation returns. Whatever it raises is logged as a CallbackError and
    dropped; the operation's result is returned unchanged either way.
    """

    async def dispatch(self, callback: Optional[ResponseCallback], result: ServiceResult) -> ServiceResult:
        if callback is None:
            return result

        try:
            outcome = callback(result)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            error = CallbackError(f"Cannot handle {result.operation.value} response: {exc}")
            error.__cause__ = exc
            logger.error("Cannot handle response.", exc_info=error)

        return result
