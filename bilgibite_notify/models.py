from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

PRIORITY_HIGH = "high"
PRIORITY_NORMAL = "normal"
PRIORITY_LOW = "low"

PRIORITY_WEIGHTS = {
    PRIORITY_HIGH: 3,
    PRIORITY_NORMAL: 2,
    PRIORITY_LOW: 1,
}

STATUS_PENDING = "pending"
STATUS_SENDING = "sending"
STATUS_SENT = "sent"
STATUS_FAILED = "failed"

DEFAULT_MAX_ATTEMPTS = 3


@dataclass(frozen=True, slots=True)
class Template:
    """Named message skeleton with ``{{placeholder}}`` tokens."""

    name: str
    subject: str
    html_body: str
    text_body: str


@dataclass(slots=True)
class Recipient:
    """Destination for a notification plus its own variable overrides."""

    address: str
    display_name: Optional[str] = None
    variables: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RenderedMessage:
    subject: str
    html_body: str
    text_body: str


@dataclass(frozen=True, slots=True)
class OutgoingMessage:
    """Payload handed to a delivery sink for a single recipient."""

    to: str
    display_name: Optional[str]
    subject: str
    html_body: str
    text_body: str


@dataclass(slots=True)
class NotificationJob:
    """One enqueued notification request, fanned out per recipient."""

    template_name: str
    recipients: List[Recipient]
    variables: Dict[str, Any] = field(default_factory=dict)
    priority: str = PRIORITY_NORMAL
    id: Optional[str] = None
    attempt_count: int = 0
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    status: str = STATUS_PENDING
    enqueued_at: datetime = field(default_factory=datetime.utcnow)
    last_error: Optional[str] = None

    @property
    def weight(self) -> int:
        return PRIORITY_WEIGHTS[self.priority]


@dataclass(frozen=True, slots=True)
class QueueStats:
    total_queued: int
    pending_count: int
    failed_count: int
    high_priority_count: int
    templates_available: List[str]


@dataclass(frozen=True, slots=True)
class SendResult:
    """Synchronous acknowledgment returned to callers of the service."""

    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success}
        if self.message_id is not None:
            payload["messageId"] = self.message_id
        if self.error is not None:
            payload["error"] = self.error
        return payload
