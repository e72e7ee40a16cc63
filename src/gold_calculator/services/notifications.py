"""
Transient user notifications (item removed, price lookup outcome).
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str = ""
    variant: str = DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == DESTRUCTIVE


class Notifier:
    """
    Collects notifications until the UI drains them.

    An optional listener is called for each notification as it arrives.
    """

    def __init__(self, listener: Optional[Callable[[Notification], None]] = None):
        self._pending: list[Notification] = []
        self._listener = listener

    def notify(self, title: str, description: str = "", variant: str = DEFAULT) -> Notification:
        note = Notification(title=title, description=description, variant=variant)
        if note.is_error:
            logger.warning("%s: %s", title, description)
        else:
            logger.info("%s: %s", title, description)
        self._pending.append(note)
        if self._listener:
            self._listener(note)
        return note

    def error(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description, variant=DESTRUCTIVE)

    def drain(self) -> list[Notification]:
        """Return and clear pending notifications."""
        notes, self._pending = self._pending, []
        return notes
