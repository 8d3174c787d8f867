"""Deferred generation.

The queue itself belongs to the host application; this module only fixes the
contract (``JobQueue.enqueue``), ships an in-process queue, and provides the
handler that runs a queued generation against a located record.
"""

from __future__ import annotations

import uuid
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from promptable.core.telemetry.logging import LogCapability, get_logger

RecordLocator = Callable[[Any], Any]


class JobQueue(Protocol):
    def enqueue(
        self,
        type_name: str,
        record_id: Any,
        context: dict[str, Any],
        kwargs: dict[str, Any] | None,
    ) -> Any:
        """Accept a generation for later execution and return a job handle."""


class GenerationHooks:
    """Optional capabilities a record opts into by subclassing.

    Both hooks are no-ops unless overridden.
    """

    def ai_generation_completed(self, result: str | None) -> None:
        return None

    def store_generated_content(self, result: str | None) -> None:
        return None


@dataclass(slots=True)
class QueuedJob:
    type_name: str
    record_id: Any
    context: dict[str, Any]
    kwargs: dict[str, Any] | None
    job_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    enqueued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class BackgroundGenerationJob:
    def __init__(self, locators: Mapping[str, RecordLocator] | None = None, logger: LogCapability | None = None) -> None:
        self._locators: dict[str, RecordLocator] = dict(locators or {})
        self.logger = logger or get_logger("promptable.jobs")

    def register(self, type_name: str, locator: RecordLocator) -> None:
        self._locators[type_name] = locator

    def perform(
        self,
        type_name: str,
        record_id: Any,
        context: dict[str, Any] | None = None,
        kwargs: dict[str, Any] | None = None,
    ) -> str | None:
        locator = self._locators.get(type_name)
        if locator is None:
            raise LookupError(f"no record locator registered for type: {type_name}")

        record = locator(record_id)
        if record is None:
            return None

        result = record.ai_generate(context=context or {}, **(kwargs or {}))
        if isinstance(record, GenerationHooks):
            record.ai_generation_completed(result)
            record.store_generated_content(result)

        self.logger.info("background_generation_completed", record_type=type_name, record_id=record_id)
        return result


class InMemoryJobQueue:
    def __init__(self) -> None:
        self._pending: deque[QueuedJob] = deque()

    def enqueue(
        self,
        type_name: str,
        record_id: Any,
        context: dict[str, Any],
        kwargs: dict[str, Any] | None,
    ) -> QueuedJob:
        job = QueuedJob(type_name=type_name, record_id=record_id, context=context, kwargs=kwargs)
        self._pending.append(job)
        return job

    def pending(self) -> list[QueuedJob]:
        return list(self._pending)

    def run_pending(self, handler: BackgroundGenerationJob) -> list[str | None]:
        results: list[str | None] = []
        while self._pending:
            job = self._pending.popleft()
            results.append(handler.perform(job.type_name, job.record_id, job.context, job.kwargs))
        return results
