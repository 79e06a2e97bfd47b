"""Running coroutines from Qt signal handlers on the qasync loop."""
import asyncio
import logging

logger = logging.getLogger(__name__)

_running = set()


def spawn(coro):
    """Schedule ``coro`` and keep it alive until it finishes."""
    task = asyncio.ensure_future(coro)
    _running.add(task)
    task.add_done_callback(_finished)
    return task


def _finished(task):
    _running.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error("Background task failed", exc_info=error)
