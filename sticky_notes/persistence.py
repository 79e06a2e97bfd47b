"""
Debounced saving for one editor window.

Every edit restarts a single timer; when the timer runs out the latest
content is written to the store. ``flush_now`` forces the write at once and
is what a closing window awaits before it is destroyed.
"""
from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SAVE_DELAY = 1.0


class SaveState(enum.Enum):
    IDLE = "idle"
    ARMED = "armed"
    FIRING = "firing"


@dataclass
class ScheduledSave:
    handle: asyncio.TimerHandle
    deadline: float
    snapshot: str


@dataclass
class EditorSession:
    note_id: str
    last_known_content: str = ""
    pending_save: Optional[ScheduledSave] = field(default=None, repr=False)


class DebouncedPersistence:
    def __init__(self, note_id, store, bus, initial_content="", delay=DEFAULT_SAVE_DELAY):
        self.session = EditorSession(note_id, initial_content)
        self.store = store
        self.bus = bus
        self.delay = delay
        self._inflight = None
        self._queued = None
        self._discarded = False

    @property
    def note_id(self):
        return self.session.note_id

    @property
    def last_known_content(self):
        return self.session.last_known_content

    @property
    def running_save(self):
        """The task writing this note right now, or None."""
        return self._inflight

    @property
    def state(self) -> SaveState:
        if self._inflight is not None:
            return SaveState.FIRING
        if self.session.pending_save is not None:
            return SaveState.ARMED
        return SaveState.IDLE

    def on_edit(self, content: str):
        self.session.last_known_content = content
        self._cancel_pending()
        loop = asyncio.get_running_loop()
        scheduled = ScheduledSave(handle=None, deadline=loop.time() + self.delay, snapshot=content)
        scheduled.handle = loop.call_at(scheduled.deadline, self._on_timer, scheduled)
        self.session.pending_save = scheduled

    async def flush_now(self):
        """
        Write pending content immediately and wait for it to land.

        Also waits for a save that is already running, so nothing this
        session issued is still outstanding when this returns.
        """
        scheduled = self.session.pending_save
        if scheduled is not None:
            self._cancel_pending()
            self._start_save(scheduled.snapshot)
        await self.settle()

    async def settle(self):
        """Wait for the save that is running, if any."""
        if self._inflight is not None:
            # The save is never cancelled, even if the caller is.
            await asyncio.shield(self._inflight)

    def discard(self):
        """
        Stop writing this note (it is being deleted).

        Cancels the pending save and any save queued behind the running
        one. A save already running still lands; await ``settle()`` before
        removing the note from the store.
        """
        if self.session.pending_save is not None or self._queued is not None:
            logger.info("Discarding unsaved edits to note %s", self.note_id)
        self._discarded = True
        self._queued = None
        self._cancel_pending()

    def _cancel_pending(self):
        scheduled = self.session.pending_save
        if scheduled is not None:
            scheduled.handle.cancel()
            self.session.pending_save = None

    def _on_timer(self, scheduled):
        if self.session.pending_save is not scheduled:
            return
        self.session.pending_save = None
        self._start_save(scheduled.snapshot)

    def _start_save(self, content):
        if self._discarded:
            return
        self._queued = content
        if self._inflight is None:
            self._inflight = asyncio.get_running_loop().create_task(self._run_saves())
        # Otherwise the running save picks the queued content up when it finishes.

    async def _run_saves(self):
        try:
            while self._queued is not None and not self._discarded:
                content, self._queued = self._queued, None
                await self._save(content)
        finally:
            self._inflight = None
            self._queued = None

    async def _save(self, content):
        try:
            await self.store.save(self.note_id, content)
        except Exception:
            logger.exception("Saving note %s failed; the edit is kept in memory only", self.note_id)
            return False
        self.bus.publish()
        return True
