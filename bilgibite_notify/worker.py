from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from .config import DEFAULT_NOTIFICATION_SETTINGS
from .dispatch_queue import DispatchQueue
from .errors import DeliveryError
from .models import (
    STATUS_FAILED,
    STATUS_SENDING,
    STATUS_SENT,
    NotificationJob,
    OutgoingMessage,
)
from .templates import TemplateStore, render_template

LOGGER = logging.getLogger(__name__)

DEFAULT_INTERVAL = DEFAULT_NOTIFICATION_SETTINGS["poll_interval"]


class QueueWorker:
    """Drain a :class:`DispatchQueue` one job per tick.

    Only one tick may run at a time. A tick that fires while another is still
    delivering returns without touching the queue. There is no timeout around
    ``sink.deliver``: a sink that never returns stalls every later tick.
    """

    def __init__(
        self,
        queue: DispatchQueue,
        store: TemplateStore,
        sink,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.queue = queue
        self.store = store
        self.sink = sink
        self.interval = interval
        self._flight = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_processing(self) -> bool:
        return self._flight.locked()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> Optional[NotificationJob]:
        """Run one dispatch cycle and return the job it handled, if any."""
        if not self._flight.acquire(blocking=False):
            LOGGER.debug("Previous dispatch cycle still running; skipping tick")
            return None
        try:
            if not self.queue:
                return None
            job = self.queue.dequeue_next()
            if job is None:
                return None
            self._process(job)
            return job
        except Exception:
            LOGGER.exception("Notification queue processing error")
            return None
        finally:
            self._flight.release()

    def _process(self, job: NotificationJob) -> None:
        job.status = STATUS_SENDING
        try:
            self._deliver_all(job)
        except DeliveryError as exc:
            self._handle_failure(job, exc)
            return
        job.status = STATUS_SENT
        LOGGER.info("Notification sent: %s", job.id)

    def _deliver_all(self, job: NotificationJob) -> None:
        try:
            template = self.store.get(job.template_name)
        except KeyError as exc:
            raise DeliveryError(str(exc), cause=exc) from exc

        for recipient in job.recipients:
            merged: Dict[str, Any] = {**job.variables, **recipient.variables}
            rendered = render_template(template, merged)
            message = OutgoingMessage(
                to=recipient.address,
                display_name=recipient.display_name,
                subject=rendered.subject,
                html_body=rendered.html_body,
                text_body=rendered.text_body,
            )
            try:
                self.sink.deliver(message)
            except DeliveryError as exc:
                if exc.recipient is None:
                    exc.recipient = recipient.address
                raise
            except Exception as exc:
                raise DeliveryError(
                    f"Delivery to {recipient.address} failed: {exc}",
                    recipient=recipient.address,
                    cause=exc,
                ) from exc

    def _handle_failure(self, job: NotificationJob, error: DeliveryError) -> None:
        job.attempt_count += 1
        job.last_error = str(error)
        if job.attempt_count < job.max_attempts:
            self.queue.requeue(job)
            LOGGER.warning("Notification retry %d/%d: %s", job.attempt_count, job.max_attempts, job.id)
            return
        job.status = STATUS_FAILED
        LOGGER.error(
            "Notification failed after %d attempts: %s (%s)",
            job.attempt_count,
            job.id,
            error,
        )

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="notification-worker", daemon=True)
        self._thread.start()
        LOGGER.info("Notification worker started (interval=%ss)", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                # stalled in a delivery; start() stays a no-op until it exits
                LOGGER.warning("Notification worker did not stop within %ss", timeout)
                return
        self._thread = None
        LOGGER.info("Notification worker stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.tick()


__all__ = ["QueueWorker", "DEFAULT_INTERVAL"]
