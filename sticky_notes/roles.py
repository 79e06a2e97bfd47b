"""
Window labels encode what a window is for.

The dashboard is always labelled ``main``; an editor window for note ``<id>``
is labelled ``note-<id>``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

logger = logging.getLogger(__name__)

DASHBOARD_LABEL = "main"
NOTE_LABEL_PREFIX = "note-"


@dataclass(frozen=True)
class Dashboard:
    pass


@dataclass(frozen=True)
class NoteEditor:
    note_id: str


WindowRole = Union[Dashboard, NoteEditor]


def note_label(note_id: str) -> str:
    return f"{NOTE_LABEL_PREFIX}{note_id}"


def resolve(label: str) -> WindowRole:
    """Map a window label to the role of that window."""
    if label == DASHBOARD_LABEL:
        return Dashboard()
    if label.startswith(NOTE_LABEL_PREFIX):
        return NoteEditor(label[len(NOTE_LABEL_PREFIX):])
    # Unknown labels still open as an editor so startup never fails on them.
    logger.warning("Unrecognised window label %r, treating it as a raw note id", label)
    return NoteEditor(label)
