"""
Status messages shown on the message line.
"""

from dataclasses import dataclass
from enum import Enum


class MessageKind(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """A message together with the time it was set."""

    text: str
    kind: MessageKind = MessageKind.INFO
    set_at: float = 0.0

    def is_active(self, now: float, duration: float) -> bool:
        """Check whether the message is still within its display time."""

        return bool(self.text) and now - self.set_at < duration
