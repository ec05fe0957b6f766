from __future__ import annotations

import logging
import threading
import time
import uuid
from typing import List, Optional

from .errors import UnknownTemplateError
from .models import (
    PRIORITY_HIGH,
    PRIORITY_WEIGHTS,
    STATUS_FAILED,
    STATUS_PENDING,
    NotificationJob,
    QueueStats,
)
from .templates import TemplateStore

LOGGER = logging.getLogger(__name__)


def new_job_id() -> str:
    return f"email_{int(time.time() * 1000)}_{uuid.uuid4().hex[:13]}"


class DispatchQueue:
    """In-memory notification jobs ordered high > normal > low.

    Jobs of equal priority keep their insertion order. Only ``pending`` jobs
    live here; the worker drops terminal jobs.
    """

    def __init__(self, store: TemplateStore) -> None:
        self._store = store
        self._jobs: List[NotificationJob] = []
        self._lock = threading.Lock()

    def enqueue(self, job: NotificationJob) -> str:
        if not isinstance(job.template_name, str) or job.template_name not in self._store:
            raise UnknownTemplateError(job.template_name)
        if not job.recipients:
            raise ValueError("A notification job needs at least one recipient")
        if not isinstance(job.priority, str) or job.priority not in PRIORITY_WEIGHTS:
            raise ValueError(f"Unknown priority '{job.priority}'")

        job.id = new_job_id()
        job.status = STATUS_PENDING
        job.attempt_count = 0
        with self._lock:
            self._jobs.append(job)
            self._sort()
        LOGGER.debug("Queued %s (%s, priority=%s)", job.id, job.template_name, job.priority)
        return job.id

    def requeue(self, job: NotificationJob) -> None:
        """Put a retryable job back behind the jobs of its own priority."""
        job.status = STATUS_PENDING
        with self._lock:
            self._jobs.append(job)
            self._sort()

    def dequeue_next(self) -> Optional[NotificationJob]:
        with self._lock:
            if not self._jobs:
                return None
            return self._jobs.pop(0)

    def snapshot(self) -> List[NotificationJob]:
        with self._lock:
            return list(self._jobs)

    def stats(self) -> QueueStats:
        jobs = self.snapshot()
        return QueueStats(
            total_queued=len(jobs),
            pending_count=sum(1 for job in jobs if job.status == STATUS_PENDING),
            failed_count=sum(1 for job in jobs if job.status == STATUS_FAILED),
            high_priority_count=sum(1 for job in jobs if job.priority == PRIORITY_HIGH),
            templates_available=self._store.names(),
        )

    def _sort(self) -> None:
        # list.sort is stable, so insertion order survives within a tier
        self._jobs.sort(key=lambda job: job.weight, reverse=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def __bool__(self) -> bool:
        return len(self) > 0


__all__ = ["DispatchQueue", "new_job_id"]
