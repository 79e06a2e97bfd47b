"""Which note windows were open, in the order they were last focused."""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class SessionState:
    def __init__(self, state_file):
        self.state_file = Path(state_file)
        self.open_notes = self.load_state()

    def load_state(self):
        if self.state_file.exists():
            try:
                with open(self.state_file, 'r', encoding="utf-8") as f:
                    state = json.load(f)
            except (OSError, json.JSONDecodeError):
                logger.warning("Could not read %s, starting with no open notes", self.state_file)
                return []
            open_notes = state.get("open_notes", []) if isinstance(state, dict) else []
            return [note_id for note_id in open_notes if isinstance(note_id, str)]
        return []

    def save_state(self):
        state = {"open_notes": list(self.open_notes)}
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.state_file, 'w', encoding="utf-8") as f:
                json.dump(state, f, indent=2)
        except OSError:
            logger.exception("Could not write %s", self.state_file)

    def touch(self, note_id):
        """Move a note to the top of the order (opened or focused)."""
        if self.open_notes and self.open_notes[-1] == note_id:
            return
        self._update(note_id, remove=False)

    def forget(self, note_id):
        if note_id in self.open_notes:
            self._update(note_id, remove=True)

    def _update(self, note_id, remove):
        self.open_notes = [other for other in self.open_notes if other != note_id]
        if not remove:
            self.open_notes.append(note_id)
        self.save_state()
