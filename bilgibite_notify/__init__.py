"""Notification dispatch queue for BilgiBite e-mails."""
from .config import NotificationSettings, load_settings
from .dispatch_queue import DispatchQueue
from .errors import DeliveryError, NotificationError, TemplateNotFoundError, UnknownTemplateError
from .models import NotificationJob, OutgoingMessage, Recipient, SendResult, Template
from .service import NotificationService, build_service
from .templates import TemplateStore, render_template
from .worker import QueueWorker

__all__ = [
    "DeliveryError",
    "DispatchQueue",
    "NotificationError",
    "NotificationJob",
    "NotificationService",
    "NotificationSettings",
    "OutgoingMessage",
    "QueueWorker",
    "Recipient",
    "SendResult",
    "Template",
    "TemplateNotFoundError",
    "TemplateStore",
    "UnknownTemplateError",
    "build_service",
    "load_settings",
    "render_template",
]
