from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from .catalog import register_default_templates
from .channels import build_sink
from .config import NotificationSettings, load_settings
from .dispatch_queue import DispatchQueue
from .errors import UnknownTemplateError
from .models import (
    PRIORITY_HIGH,
    PRIORITY_NORMAL,
    NotificationJob,
    Recipient,
    SendResult,
)
from .templates import TemplateStore
from .worker import QueueWorker

LOGGER = logging.getLogger(__name__)

DEFAULT_CANCELLATION_REASON = "Kullanıcı talebi"


class NotificationService:
    """Application-facing entry point: enqueue, introspect, run the worker."""

    def __init__(
        self,
        store: TemplateStore,
        queue: DispatchQueue,
        worker: QueueWorker,
        settings: NotificationSettings,
    ) -> None:
        self.store = store
        self.queue = queue
        self.worker = worker
        self.settings = settings

    def send_notification(
        self,
        template_name: str,
        recipients: Sequence[Recipient],
        variables: Optional[Mapping[str, Any]] = None,
        priority: str = PRIORITY_NORMAL,
    ) -> SendResult:
        """Queue a notification; delivery happens later on the worker."""
        job = NotificationJob(
            template_name=template_name,
            recipients=list(recipients),
            variables=dict(variables or {}),
            priority=priority or PRIORITY_NORMAL,
            max_attempts=self.settings.max_attempts,
        )
        try:
            job_id = self.queue.enqueue(job)
        except (UnknownTemplateError, ValueError) as exc:
            LOGGER.warning("Notification queue error: %s", exc)
            return SendResult(success=False, error=str(exc))
        return SendResult(success=True, message_id=job_id)

    def get_queue_stats(self) -> Dict[str, Any]:
        stats = self.queue.stats()
        return {
            "totalQueued": stats.total_queued,
            "pending": stats.pending_count,
            "failed": stats.failed_count,
            "highPriority": stats.high_priority_count,
            "isProcessing": self.worker.is_processing,
            "availableTemplates": stats.templates_available,
        }

    def start(self) -> None:
        self.worker.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self.worker.stop(timeout)

    # -- helpers for billing events ---------------------------------------

    def _single(self, email: str, name: str) -> list[Recipient]:
        return [Recipient(address=email, display_name=name)]

    def subscription_activated(self, email: str, user_name: str, plan: Mapping[str, Any]) -> SendResult:
        features = plan.get("features") or []
        if isinstance(features, str):
            features = [features]
        return self.send_notification(
            "subscription-activated",
            self._single(email, user_name),
            {
                "userName": user_name,
                "planName": plan.get("name"),
                "monthlyPrice": plan.get("price"),
                "nextPaymentDate": plan.get("nextPaymentDate"),
                "features": ", ".join(str(feature) for feature in features),
                "appUrl": self.settings.app_url,
            },
            priority=PRIORITY_HIGH,
        )

    def payment_failed(self, email: str, user_name: str, payment: Mapping[str, Any]) -> SendResult:
        return self.send_notification(
            "payment-failed",
            self._single(email, user_name),
            {
                "userName": user_name,
                "planName": payment.get("planName"),
                "amount": payment.get("amount"),
                "lastFourDigits": payment.get("lastFourDigits"),
                "errorMessage": payment.get("errorMessage"),
                "retryDate": payment.get("retryDate"),
                "paymentUrl": f"{self.settings.app_url}/subscription",
            },
            priority=PRIORITY_HIGH,
        )

    def ai_credit_purchased(self, email: str, user_name: str, credit: Mapping[str, Any]) -> SendResult:
        return self.send_notification(
            "ai-credit-purchased",
            self._single(email, user_name),
            {
                "userName": user_name,
                "creditAmount": credit.get("creditAmount"),
                "paidAmount": credit.get("paidAmount"),
                "totalBalance": credit.get("totalBalance"),
                "expiryDate": credit.get("expiryDate"),
                "aiEducationUrl": f"{self.settings.app_url}/ai-education",
            },
        )

    def subscription_cancelled(self, email: str, user_name: str, cancellation: Mapping[str, Any]) -> SendResult:
        return self.send_notification(
            "subscription-cancelled",
            self._single(email, user_name),
            {
                "userName": user_name,
                "planName": cancellation.get("planName"),
                "cancellationDate": cancellation.get("cancellationDate"),
                "lastPaymentDate": cancellation.get("lastPaymentDate"),
                "cancellationReason": cancellation.get("reason") or DEFAULT_CANCELLATION_REASON,
                "refundAmount": cancellation.get("refundAmount") or 0,
                "reactivateUrl": f"{self.settings.app_url}/subscription",
            },
        )


def build_service(settings: Optional[NotificationSettings] = None, sink=None) -> NotificationService:
    """Wire store, queue and worker together. Call once at startup."""
    settings = settings or load_settings()
    store = register_default_templates(TemplateStore())
    queue = DispatchQueue(store)
    worker = QueueWorker(queue, store, sink if sink is not None else build_sink(settings), interval=settings.poll_interval)
    return NotificationService(store, queue, worker, settings)


__all__ = ["NotificationService", "build_service"]
