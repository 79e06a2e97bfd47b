import json

from sticky_notes.session_state import SessionState


def test_missing_state_file_means_no_open_notes(tmp_path) -> None:
    assert SessionState(tmp_path / "state.json").open_notes == []


def test_touch_moves_note_to_the_end_and_persists(tmp_path) -> None:
    state_file = tmp_path / "state.json"
    state = SessionState(state_file)
    state.touch("a")
    state.touch("b")
    state.touch("a")

    assert state.open_notes == ["b", "a"]
    assert json.loads(state_file.read_text()) == {"open_notes": ["b", "a"]}
    assert SessionState(state_file).open_notes == ["b", "a"]


def test_forget_removes_the_note(tmp_path) -> None:
    state = SessionState(tmp_path / "state.json")
    state.touch("a")
    state.touch("b")
    state.forget("a")
    state.forget("never-open")

    assert state.open_notes == ["b"]


def test_corrupt_state_file_is_treated_as_empty(tmp_path) -> None:
    state_file = tmp_path / "state.json"
    state_file.write_text("{not json", encoding="utf-8")
    assert SessionState(state_file).open_notes == []


def test_non_string_ids_are_skipped(tmp_path) -> None:
    state_file = tmp_path / "state.json"
    state_file.write_text(json.dumps({"open_notes": ["a", 3, None, "b"]}), encoding="utf-8")
    assert SessionState(state_file).open_notes == ["a", "b"]


def test_state_directory_is_created_on_save(tmp_path) -> None:
    state = SessionState(tmp_path / "nested" / "state.json")
    state.touch("a")
    assert (tmp_path / "nested" / "state.json").exists()
