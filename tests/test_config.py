from pathlib import Path

import pytest

from sticky_notes.config import DEFAULT_DATA_DIR, load_settings
from sticky_notes.errors import ConfigError


def test_defaults() -> None:
    settings = load_settings({})
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.notes_dir == DEFAULT_DATA_DIR / "notes"
    assert settings.state_file == DEFAULT_DATA_DIR / "state.json"
    assert settings.save_delay_ms == 1000
    assert settings.save_delay == 1.0
    assert settings.preview_length == 100
    assert settings.hotkey == "<alt>+<shift>+n"
    assert settings.log_level == "INFO"


def test_environment_overrides(tmp_path) -> None:
    settings = load_settings(
        {
            "STICKY_NOTES_DATA_DIR": str(tmp_path),
            "STICKY_NOTES_SAVE_DELAY_MS": "250",
            "STICKY_NOTES_PREVIEW_LENGTH": "40",
            "STICKY_NOTES_HOTKEY": "<ctrl>+<alt>+n",
            "STICKY_NOTES_LOG_LEVEL": "debug",
        }
    )
    assert settings.data_dir == Path(tmp_path).resolve()
    assert settings.save_delay == 0.25
    assert settings.preview_length == 40
    assert settings.hotkey == "<ctrl>+<alt>+n"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "environ",
    [
        {"STICKY_NOTES_SAVE_DELAY_MS": "soon"},
        {"STICKY_NOTES_SAVE_DELAY_MS": "0"},
        {"STICKY_NOTES_PREVIEW_LENGTH": "-5"},
        {"STICKY_NOTES_LOG_LEVEL": "chatty"},
    ],
)
def test_invalid_values_raise_config_error(environ) -> None:
    with pytest.raises(ConfigError):
        load_settings(environ)
