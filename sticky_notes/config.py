from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from sticky_notes.errors import ConfigError

DEFAULT_DATA_DIR = Path.home() / ".sticky_notes_qt"
DEFAULT_SAVE_DELAY_MS = 1000
DEFAULT_PREVIEW_LENGTH = 100
DEFAULT_HOTKEY = "<alt>+<shift>+n"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    save_delay_ms: int
    preview_length: int
    hotkey: str
    log_level: str

    @property
    def notes_dir(self) -> Path:
        return self.data_dir / "notes"

    @property
    def state_file(self) -> Path:
        return self.data_dir / "state.json"

    @property
    def save_delay(self) -> float:
        """Debounce delay in seconds."""
        return self.save_delay_ms / 1000


def _positive_int(environ, name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ=None) -> Settings:
    if environ is None:
        environ = os.environ
    data_dir = environ.get("STICKY_NOTES_DATA_DIR")
    log_level = environ.get("STICKY_NOTES_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"STICKY_NOTES_LOG_LEVEL is not a log level: {log_level!r}")
    return Settings(
        data_dir=Path(data_dir).expanduser().resolve() if data_dir else DEFAULT_DATA_DIR,
        save_delay_ms=_positive_int(environ, "STICKY_NOTES_SAVE_DELAY_MS", DEFAULT_SAVE_DELAY_MS),
        preview_length=_positive_int(environ, "STICKY_NOTES_PREVIEW_LENGTH", DEFAULT_PREVIEW_LENGTH),
        hotkey=environ.get("STICKY_NOTES_HOTKEY", DEFAULT_HOTKEY),
        log_level=log_level,
    )
