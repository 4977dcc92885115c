"""Status side-channel for non-fatal import/export conditions.

Classes
-------
- StatusReporter  — logs a status message and forwards it to an optional callback
"""
from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str, object], None]


class StatusReporter:
    """Fire-and-forget reporter for skipped intents, merge results and similar.

    Every message is logged at debug level.  When a ``callback`` is supplied
    it additionally receives the message and the optional context object.

    Parameters
    ----------
    callback:
        Optional callable ``(message, data) -> None``.
    """

    def __init__(self, callback: StatusCallback | None = None) -> None:
        self._callback = callback

    def __call__(self, message: str, data: object = None) -> None:
        if data is None:
            logger.debug(message)
        else:
            logger.debug("%s %r", message, data)
        if self._callback is not None:
            self._callback(message, data)
