from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from sticky_notes.errors import NoteNotFoundError, StoreError

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


@dataclass(frozen=True)
class NoteSummary:
    note_id: str
    preview: str


@runtime_checkable
class NoteStore(Protocol):
    async def load(self, note_id: str) -> str:
        ...

    async def save(self, note_id: str, content: str) -> None:
        ...

    async def delete(self, note_id: str) -> None:
        ...

    async def list_all(self) -> list[NoteSummary]:
        ...

    async def create_note(self) -> str:
        ...


class FileNoteStore:
    """
    Keeps each note as ``<notes_dir>/<id>.md``.

    File access runs in a worker thread so the UI loop never blocks on disk.
    """

    def __init__(self, notes_dir: Path, preview_length: int = 100):
        self.notes_dir = Path(notes_dir)
        self.preview_length = preview_length

    def path_for(self, note_id: str) -> Path:
        if not note_id or "/" in note_id or "\\" in note_id or note_id in (".", ".."):
            raise StoreError(f"invalid note id {note_id!r}")
        return self.notes_dir / f"{note_id}{NOTE_SUFFIX}"

    async def load(self, note_id: str) -> str:
        return await asyncio.to_thread(self._load, note_id)

    async def save(self, note_id: str, content: str) -> None:
        await asyncio.to_thread(self._save, note_id, content)

    async def delete(self, note_id: str) -> None:
        await asyncio.to_thread(self._delete, note_id)

    async def list_all(self) -> list[NoteSummary]:
        return await asyncio.to_thread(self._list_all)

    async def create_note(self) -> str:
        return await asyncio.to_thread(self._create_note)

    # --- Blocking implementations ---

    def _load(self, note_id):
        path = self.path_for(note_id)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise NoteNotFoundError(note_id) from None
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"could not read note {note_id!r}: {e}") from e

    def _save(self, note_id, content):
        path = self.path_for(note_id)
        try:
            self.notes_dir.mkdir(parents=True, exist_ok=True)
            # Write beside the target and rename so a crash never leaves half a note.
            tmp_path = path.with_suffix(NOTE_SUFFIX + ".tmp")
            tmp_path.write_text(content, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StoreError(f"could not write note {note_id!r}: {e}") from e
        logger.debug("Saved note %s (%d chars)", note_id, len(content))

    def _delete(self, note_id):
        path = self.path_for(note_id)
        try:
            path.unlink()
        except FileNotFoundError:
            raise NoteNotFoundError(note_id) from None
        except OSError as e:
            raise StoreError(f"could not delete note {note_id!r}: {e}") from e
        logger.info("Deleted note %s", note_id)

    def _list_all(self):
        if not self.notes_dir.exists():
            return []
        entries = []
        try:
            for path in self.notes_dir.iterdir():
                if not path.is_file() or path.suffix != NOTE_SUFFIX:
                    continue
                try:
                    content = path.read_text(encoding="utf-8")
                    mtime = path.stat().st_mtime
                except (OSError, UnicodeDecodeError):
                    # The note may have been deleted between iterdir() and read.
                    logger.warning("Skipping unreadable note file %s", path, exc_info=True)
                    continue
                entries.append((mtime, NoteSummary(path.stem, content[:self.preview_length])))
        except OSError as e:
            raise StoreError(f"could not list notes in {self.notes_dir}: {e}") from e
        entries.sort(key=lambda entry: (-entry[0], entry[1].note_id))
        return [summary for _, summary in entries]

    def _create_note(self):
        note_id = str(uuid.uuid4())
        path = self.path_for(note_id)
        try:
            self.notes_dir.mkdir(parents=True, exist_ok=True)
            # Exists immediately so the dashboard lists it before the first edit.
            path.write_text("", encoding="utf-8")
        except OSError as e:
            raise StoreError(f"could not create note {note_id!r}: {e}") from e
        logger.info("Created note %s", note_id)
        return note_id
