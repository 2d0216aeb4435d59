import logging
from flask import current_app


def log_event(level: int, message: str, **data):
    """Lightweight structured logging helper."""
    try:
        serialized = " | ".join(f"{k}={v}" for k, v in data.items())
        current_app.logger.log(level, f"{message}{' | ' + serialized if serialized else ''}")
    except RuntimeError:  # outside an app context
        logging.getLogger("siteedit").log(level, message)
