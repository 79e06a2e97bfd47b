"""Pin, minimize and close handling for a single window."""
from __future__ import annotations

import asyncio
import enum
import logging

from sticky_notes import roles
from sticky_notes.persistence import DEFAULT_SAVE_DELAY, DebouncedPersistence

logger = logging.getLogger(__name__)


class EditorState(enum.Enum):
    LOADING = "loading"
    EDITING = "editing"
    CLOSING = "closing"
    DESTROYED = "destroyed"


class WindowLifecycle:
    """
    Owns the state of one window, identified by its label.

    For an editor window this walks LOADING -> EDITING -> CLOSING -> DESTROYED.
    Closing is one-way: the pending edit is flushed, and only then is the
    window destroyed. The dashboard is only ever hidden.
    """

    def __init__(self, label, window_manager, store=None, bus=None, save_delay=DEFAULT_SAVE_DELAY):
        self.label = label
        self.role = roles.resolve(label)
        self.windows = window_manager
        self.store = store
        self.bus = bus
        self.save_delay = save_delay
        self.pinned = False
        self.persistence = None
        self.state = EditorState.LOADING if self.is_editor else None
        self._closing = None

    @property
    def is_editor(self):
        return isinstance(self.role, roles.NoteEditor)

    @property
    def note_id(self):
        return self.role.note_id if self.is_editor else None

    async def load(self) -> str:
        """Fetch the note's content and start accepting edits."""
        if not self.is_editor:
            raise TypeError("only editor windows load note content")
        try:
            content = await self.store.load(self.note_id)
        except Exception:
            logger.exception("Loading note %s failed; opening it empty", self.note_id)
            content = ""
        if self.state is not EditorState.LOADING:
            # Closed while the content was still loading.
            return content
        self.persistence = DebouncedPersistence(
            self.note_id, self.store, self.bus, initial_content=content, delay=self.save_delay
        )
        self._transition(EditorState.EDITING)
        return content

    def on_edit(self, content: str):
        if self.state is not EditorState.EDITING:
            logger.debug("Ignoring edit to %s while %s", self.label, self.state)
            return
        self.persistence.on_edit(content)

    def toggle_pin(self) -> bool:
        if not self.is_editor:
            return False
        self.pinned = not self.pinned
        self.windows.set_always_on_top(self.label, self.pinned)
        return self.pinned

    def minimize(self):
        self.windows.minimize(self.label)

    async def close(self):
        if not self.is_editor:
            self.windows.hide(self.label)
            return
        if self._closing is None:
            self._closing = asyncio.get_running_loop().create_task(self._close_editor())
        await asyncio.shield(self._closing)

    def abandon(self):
        """
        Forget unsaved edits; used when the note is being deleted.

        Returns the save still running for this note, or None, so the caller
        can wait for it before removing the note from the store.
        """
        running = None
        if self.persistence is not None:
            self.persistence.discard()
            running = self.persistence.running_save
        if self.is_editor:
            self._transition(EditorState.DESTROYED)
        return running

    async def _close_editor(self):
        self._transition(EditorState.CLOSING)
        if self.persistence is not None:
            await self.persistence.flush_now()
        try:
            self.windows.destroy(self.label)
        except Exception:
            logger.exception("Destroying window %s failed", self.label)
        self._transition(EditorState.DESTROYED)

    def _transition(self, state):
        if self.state is state:
            return
        logger.debug("%s: %s -> %s", self.label, self.state and self.state.value, state.value)
        self.state = state
