import asyncio

import pytest

from sticky_notes.errors import NoteNotFoundError, StoreError
from sticky_notes.store import NoteSummary


class FakeStore:
    """In-memory note store that records every call in a shared event log."""

    def __init__(self, events=None):
        self.notes = {}
        self.events = events if events is not None else []
        self.saves = []
        self.list_calls = 0
        self.save_delay = 0
        self.create_delay = 0
        self.list_delays = []
        self.fail_saves = False
        self.fail_load = False
        self.fail_list = False
        self._next_id = 0

    async def load(self, note_id):
        if self.fail_load:
            raise StoreError("disk on fire")
        if note_id not in self.notes:
            raise NoteNotFoundError(note_id)
        return self.notes[note_id]

    async def save(self, note_id, content):
        self.events.append(("save-start", note_id, content))
        if self.save_delay:
            await asyncio.sleep(self.save_delay)
        if self.fail_saves:
            self.events.append(("save-failed", note_id, content))
            raise StoreError("disk full")
        self.notes[note_id] = content
        self.saves.append((note_id, content))
        self.events.append(("save", note_id, content))

    async def delete(self, note_id):
        if note_id not in self.notes:
            raise NoteNotFoundError(note_id)
        del self.notes[note_id]
        self.events.append(("delete", note_id))

    async def list_all(self):
        self.list_calls += 1
        call = self.list_calls
        snapshot = [NoteSummary(note_id, content[:100]) for note_id, content in self.notes.items()]
        delay = self.list_delays[call - 1] if call <= len(self.list_delays) else 0
        if delay:
            await asyncio.sleep(delay)
        if self.fail_list:
            raise StoreError("cannot list")
        return snapshot

    async def create_note(self):
        if self.create_delay:
            await asyncio.sleep(self.create_delay)
        self._next_id += 1
        note_id = f"n{self._next_id}"
        self.notes[note_id] = ""
        self.events.append(("create", note_id))
        return note_id


class FakeWindowManager:
    def __init__(self, events=None):
        self.events = events if events is not None else []

    def open(self, label):
        self.events.append(("open", label))

    def focus(self, label):
        self.events.append(("focus", label))

    def hide(self, label):
        self.events.append(("hide", label))

    def destroy(self, label):
        self.events.append(("destroy", label))

    def set_always_on_top(self, label, on_top):
        self.events.append(("always-on-top", label, on_top))

    def minimize(self, label):
        self.events.append(("minimize", label))


@pytest.fixture
def events():
    return []


@pytest.fixture
def store(events):
    return FakeStore(events)


@pytest.fixture
def window_manager(events):
    return FakeWindowManager(events)
