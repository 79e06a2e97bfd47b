import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level="INFO"):
    """Send every package logger to stderr at the given level."""
    root = logging.getLogger()
    if not any(getattr(h, "_sticky_notes", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._sticky_notes = True
        root.addHandler(handler)
    root.setLevel(level)
