import logging

import pytest

from sticky_notes.roles import Dashboard, NoteEditor, note_label, resolve


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("main", Dashboard()),
        ("note-42", NoteEditor("42")),
        ("note-3f1c9a2e-0d5b-4a8e-9a77-1b2c3d4e5f60", NoteEditor("3f1c9a2e-0d5b-4a8e-9a77-1b2c3d4e5f60")),
        ("note-note-7", NoteEditor("note-7")),
    ],
)
def test_resolve(label: str, expected) -> None:
    assert resolve(label) == expected


def test_note_label_is_the_inverse_of_resolve() -> None:
    assert resolve(note_label("abc")) == NoteEditor("abc")


def test_unknown_label_falls_back_to_raw_note_id_and_warns(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="sticky_notes.roles"):
        role = resolve("scratchpad")

    assert role == NoteEditor("scratchpad")
    assert "scratchpad" in caplog.text


def test_main_prefix_alone_is_not_the_dashboard() -> None:
    assert resolve("main-2") == NoteEditor("main-2")
