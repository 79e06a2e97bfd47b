"""
Process-wide "notes changed" broadcast.

Editor windows publish after every successful save; the dashboard
subscribes and re-reads the note list. Events carry no payload.
"""
from __future__ import annotations

import asyncio
import inspect
import logging

logger = logging.getLogger(__name__)


class Subscription:
    def __init__(self, bus, handler):
        self._bus = bus
        self.handler = handler

    @property
    def active(self):
        return self in self._bus._subscriptions

    def unsubscribe(self):
        if self.active:
            self._bus._subscriptions.remove(self)


class RefreshBus:
    """
    Handlers run one at a time on the event loop, once per published event
    and in publish order. A coroutine handler is awaited before the next
    handler (or the next event) is dispatched.
    """

    def __init__(self):
        self._subscriptions = []
        self._events = asyncio.Queue()
        self._dispatcher = None
        self._closed = False

    def start(self):
        if self._dispatcher is None and not self._closed:
            self._dispatcher = asyncio.get_running_loop().create_task(self._dispatch())

    async def close(self):
        self._closed = True
        self._subscriptions.clear()
        if self._dispatcher is not None:
            self._dispatcher.cancel()
            try:
                await self._dispatcher
            except asyncio.CancelledError:
                pass
            self._dispatcher = None

    def subscribe(self, handler) -> Subscription:
        subscription = Subscription(self, handler)
        self._subscriptions.append(subscription)
        return subscription

    @property
    def subscriber_count(self):
        return len(self._subscriptions)

    def publish(self):
        if self._closed:
            logger.debug("Refresh published after the bus was closed; dropped")
            return
        self._events.put_nowait(None)

    async def wait_idle(self):
        """Wait until every event published so far has been handled."""
        await self._events.join()

    async def _dispatch(self):
        while True:
            await self._events.get()
            try:
                for subscription in list(self._subscriptions):
                    if not subscription.active:
                        continue
                    try:
                        result = subscription.handler()
                        if inspect.isawaitable(result):
                            await result
                    except Exception:
                        logger.exception("Refresh handler %r failed", subscription.handler)
            finally:
                self._events.task_done()
