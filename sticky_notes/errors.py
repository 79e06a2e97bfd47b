class StickyNotesError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(StickyNotesError):
    pass


class StoreError(StickyNotesError):
    """The note store could not complete an operation (I/O failure, bad data)."""


class NoteNotFoundError(StoreError):
    def __init__(self, note_id):
        super().__init__(f"note {note_id!r} does not exist")
        self.note_id = note_id
