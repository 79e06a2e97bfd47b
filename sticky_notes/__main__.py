import sys

from sticky_notes.config import load_settings
from sticky_notes.errors import ConfigError
from sticky_notes.log import configure_logging


def main():
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"sticky-notes: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.log_level)

    # Qt is only imported once settings are known to be valid.
    from sticky_notes.qt.app import StickyNotesApp
    return StickyNotesApp(settings).run()


if __name__ == "__main__":
    sys.exit(main())
