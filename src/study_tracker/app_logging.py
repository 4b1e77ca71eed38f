"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the tracker logger and apply the level.

    Calling it again only updates the level, so app factories and tests can
    call it freely.
    """
    tracker_logger = logging.getLogger("study_tracker")
    tracker_logger.setLevel(level.upper())
    if not tracker_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        tracker_logger.addHandler(handler)
        tracker_logger.propagate = False
    return tracker_logger
