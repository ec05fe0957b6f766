"""Exception hierarchy for the notification dispatch queue."""
from __future__ import annotations

from typing import Optional


class NotificationError(Exception):
    """Base class for every error raised by the notification package."""


class TemplateNotFoundError(NotificationError, KeyError):
    """Raised when rendering a template name that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Template '{name}' not found")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.args[0]


class UnknownTemplateError(TemplateNotFoundError):
    """Raised at enqueue time when a job references an unregistered template."""


class DeliveryError(NotificationError):
    """A delivery sink failed to hand a message to its transport."""

    def __init__(self, message: str, *, recipient: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.recipient = recipient
        self.cause = cause


__all__ = [
    "NotificationError",
    "TemplateNotFoundError",
    "UnknownTemplateError",
    "DeliveryError",
]
