"""
Notice buffering for the API layer.

Notices are fire-and-forget: nothing awaits them and a notifier never
raises back into the view model.
"""

import logging
from typing import Callable, Optional

from .interfaces import INotifier
from .models import Notice, NoticeLevel

logger = logging.getLogger(__name__)


class NoticeCollector(INotifier):
    """
    Notifier that buffers notices for the API layer.

    Request handlers drain the buffer into their response body; the
    stream endpoint passes on_notice to forward each notice as it happens.
    """

    def __init__(self, on_notice: Optional[Callable[[Notice], None]] = None):
        self._notices: list[Notice] = []
        self._on_notice = on_notice

    def success(self, message: str) -> None:
        self._push(Notice(level=NoticeLevel.SUCCESS, message=message))

    def error(self, message: str) -> None:
        self._push(Notice(level=NoticeLevel.ERROR, message=message))

    def _push(self, notice: Notice) -> None:
        logger.debug(f"Notice ({notice.level.value}): {notice.message}")
        self._notices.append(notice)
        if self._on_notice is not None:
            self._on_notice(notice)

    def drain(self) -> list[Notice]:
        """Return buffered notices and empty the buffer."""
        notices, self._notices = self._notices, []
        return notices
