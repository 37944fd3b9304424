"""Loading status stream.

Subscribers receive the current status immediately and every transition
after that, so a late subscriber can tell whether configuration is loaded.
"""

import asyncio
import logging
from typing import AsyncIterator, Callable

from .interfaces import LoadingContext

logger = logging.getLogger(__name__)

LoadListener = Callable[[LoadingContext], None]


class Subscription:
    """Handle returned by :meth:`LoadEventStream.subscribe`."""

    def __init__(self, stream: "LoadEventStream", listener: LoadListener):
        self._stream = stream
        self._listener = listener

    @property
    def closed(self) -> bool:
        return self._listener not in self._stream._listeners

    def unsubscribe(self) -> None:
        if not self.closed:
            self._stream._listeners.remove(self._listener)


class LoadEventStream:
    """Replaying stream of :class:`LoadingContext` transitions."""

    def __init__(self, initial: LoadingContext = LoadingContext()):
        self._current = initial
        self._listeners: list[LoadListener] = []
        self._queues: set[asyncio.Queue] = set()

    @property
    def current(self) -> LoadingContext:
        return self._current

    def subscribe(self, listener: LoadListener) -> Subscription:
        """Register a callback; it is called with the current context at once."""
        self._listeners.append(listener)
        subscription = Subscription(self, listener)
        self._notify(listener, self._current)
        return subscription

    async def listen(self) -> AsyncIterator[LoadingContext]:
        """Yield the current context, then each transition as it happens."""
        queue: asyncio.Queue = asyncio.Queue()
        queue.put_nowait(self._current)
        self._queues.add(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._queues.discard(queue)

    def emit(self, context: LoadingContext) -> None:
        self._current = context
        for listener in list(self._listeners):
            self._notify(listener, context)
        for queue in self._queues:
            queue.put_nowait(context)

    @staticmethod
    def _notify(listener: LoadListener, context: LoadingContext) -> None:
        try:
            listener(context)
        except Exception:
            logger.exception(f"Load event listener failed for {context}")
