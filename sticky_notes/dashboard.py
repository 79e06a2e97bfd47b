from __future__ import annotations

import asyncio
import logging
from typing import Optional

from sticky_notes import roles
from sticky_notes.errors import NoteNotFoundError

logger = logging.getLogger(__name__)


class DashboardAggregator:
    """
    The note list shown on the dashboard.

    The list is replaced wholesale on every refresh. When refreshes overlap,
    a response only lands if no later-issued request has landed already.
    """

    def __init__(self, store, bus, window_manager):
        self.store = store
        self.bus = bus
        self.windows = window_manager
        self.summaries = []
        self._issued = 0
        self._applied = 0
        self._creating = False
        self._subscription = None
        self._listeners = []

    @property
    def busy(self):
        """True while a note is being created."""
        return self._creating

    def add_listener(self, listener):
        self._listeners.append(listener)

    async def start(self):
        if self._subscription is None:
            self._subscription = self.bus.subscribe(self.refresh)
        await self.refresh()

    def stop(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def refresh(self) -> bool:
        self._issued += 1
        request = self._issued
        try:
            summaries = await self.store.list_all()
        except Exception:
            logger.exception("Refreshing the note list failed; keeping the previous list")
            return False
        if request < self._applied:
            logger.debug("Dropping stale note list from request %d", request)
            return False
        self._applied = request
        self.summaries = list(summaries)
        for listener in list(self._listeners):
            try:
                listener(self.summaries)
            except Exception:
                logger.exception("Note list listener %r failed", listener)
        return True

    async def create_note(self) -> Optional[str]:
        if self._creating:
            logger.debug("Note creation already in progress")
            return None
        self._creating = True
        try:
            note_id = await self.store.create_note()
        except Exception:
            logger.exception("Creating a note failed")
            return None
        finally:
            self._creating = False
        self.open_note(note_id)
        self.bus.publish()
        return note_id

    async def delete_note(self, note_id: str) -> bool:
        """
        Delete a note the user has already confirmed.

        The editor window goes first, and any save it has running lands
        before the file is removed, so nothing writes the note back.
        """
        running_save = None
        try:
            running_save = self.windows.destroy(roles.note_label(note_id))
        except Exception:
            logger.exception("Closing the window of note %s failed", note_id)
        if running_save is not None:
            await asyncio.shield(running_save)
        try:
            await self.store.delete(note_id)
        except NoteNotFoundError:
            logger.warning("Note %s was already deleted", note_id)
        except Exception:
            logger.exception("Deleting note %s failed", note_id)
            return False
        await self.refresh()
        return True

    def open_note(self, note_id: str):
        try:
            self.windows.open(roles.note_label(note_id))
        except Exception:
            logger.exception("Opening note %s failed", note_id)
