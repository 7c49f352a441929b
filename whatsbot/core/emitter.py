"""Host-side event stream."""

import asyncio
import inspect
import logging
from collections import defaultdict
from typing import Any, Callable, Optional, Union

from whatsbot.models import Events

logger = logging.getLogger(__name__)

EventName = Union[Events, str]
Handler = Callable[..., Any]


def _key(event: EventName) -> str:
    return event.value if isinstance(event, Events) else event


class EventEmitter:
    """
    Minimal event emitter with isolated handler dispatch.

    Plain handlers run inline; coroutine handlers are scheduled as tasks
    so a slow handler never holds up the next event. Handler failures are
    logged and never reach the caller of ``emit``.
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self._once: set[tuple[str, int]] = set()
        self._tasks: set[asyncio.Task] = set()

    def on(self, event: EventName, handler: Optional[Handler] = None) -> Any:
        """Register a handler. Without a handler, returns a decorator."""
        if handler is None:
            return lambda fn: self.on(event, fn)
        self._handlers[_key(event)].append(handler)
        return handler

    def once(self, event: EventName, handler: Handler) -> Handler:
        """Register a handler that is removed after its first call."""
        self._once.add((_key(event), id(handler)))
        return self.on(event, handler)

    def off(self, event: EventName, handler: Handler) -> None:
        name = _key(event)
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)
        if handler not in handlers:
            self._once.discard((name, id(handler)))

    def listeners(self, event: EventName) -> list[Handler]:
        return list(self._handlers.get(_key(event), []))

    def wait_for(self, event: EventName) -> "asyncio.Future[tuple]":
        """Future resolved with the arguments of the next emission."""
        future = asyncio.get_running_loop().create_future()

        def _resolve(*args: Any) -> None:
            if not future.done():
                future.set_result(args)

        self.once(event, _resolve)
        return future

    def emit(self, event: EventName, *args: Any) -> None:
        name = _key(event)
        for handler in list(self._handlers.get(name, [])):
            if (name, id(handler)) in self._once:
                self.off(name, handler)
            self._dispatch(name, handler, args)

    def _dispatch(self, name: str, handler: Handler, args: tuple) -> None:
        try:
            result = handler(*args)
        except Exception:
            logger.exception(f"Handler {handler!r} for '{name}' raised")
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(lambda t: self._task_done(name, t))

    def _task_done(self, name: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Async handler for '{name}' failed: {exc}", exc_info=exc)

    async def drain(self) -> None:
        """Wait for all scheduled async handlers to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
