"""In-memory collaborator implementations.

Hosts can wire these in directly for local runs; the test-suite uses them
as fakes. The audit log keeps a bounded buffer of recent events and lets
callers register hooks that see every event as it is recorded.
"""

import threading
from collections import deque
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import structlog

from ledger_digest.config import get_settings
from ledger_digest.events import (
    AuditEvent,
    AuditEventType,
    denied_attempt,
    summarization_recorded,
)
from ledger_digest.models import Actor, FinancialStatement, RequestedMode, SummarizationResult

logger = structlog.get_logger(__name__)


class InMemoryActorDirectory:
    """Actor lookup backed by a dict keyed on actor id."""

    def __init__(self, actors: Iterable[Actor] = ()):
        self._actors: dict[int, Actor] = {actor.id: actor for actor in actors}

    def add(self, actor: Actor) -> None:
        self._actors[actor.id] = actor

    def get(self, actor_id: int) -> Actor | None:
        return self._actors.get(actor_id)


class InMemoryStatementStore:
    """Statement source returning whatever was stored for an actor id."""

    def __init__(self, statements: Mapping[int, Sequence[FinancialStatement]] | None = None):
        self._statements: dict[int, list[FinancialStatement]] = {
            actor_id: list(items) for actor_id, items in (statements or {}).items()
        }

    def add(self, actor_id: int, *statements: FinancialStatement) -> None:
        self._statements.setdefault(actor_id, []).extend(statements)

    def get_statements(self, actor: Actor) -> list[FinancialStatement]:
        return list(self._statements.get(actor.id, []))


class InMemoryAuditLog:
    """Auditing gateway that keeps recent audit events in memory.

    Usage:
        audit_log = InMemoryAuditLog()
        audit_log.add_event_hook(print)

        audit_log.record_success(actor_id=1, window_start=window_start)
        audit_log.recent_events
    """

    def __init__(self, buffer_size: int | None = None):
        settings = get_settings()
        self._buffer_size = buffer_size or settings.audit_buffer_size
        self._events: deque[AuditEvent] = deque(maxlen=self._buffer_size)
        self._lock = threading.Lock()

        # Event hooks for external processing
        self._event_hooks: list[Callable[[AuditEvent], None]] = []

        self._logger = logger.bind(component="audit_log")

    @property
    def recent_events(self) -> list[AuditEvent]:
        """Get recorded events, oldest first."""
        with self._lock:
            return list(self._events)

    def events_of_type(self, event_type: AuditEventType) -> list[AuditEvent]:
        return [event for event in self.recent_events if event.event_type == event_type]

    def add_event_hook(self, hook: Callable[[AuditEvent], None]) -> None:
        """Add a hook called synchronously for every recorded event."""
        self._event_hooks.append(hook)

    def remove_event_hook(self, hook: Callable[[AuditEvent], None]) -> None:
        """Remove an event hook."""
        if hook in self._event_hooks:
            self._event_hooks.remove(hook)

    def record_denied_attempt(self, actor: Actor, mode: RequestedMode) -> None:
        self._record(denied_attempt(actor, mode))

    def record_success(self, actor_id: int, window_start: datetime) -> None:
        self._record(summarization_recorded(actor_id, window_start))

    def _record(self, event: AuditEvent) -> None:
        with self._lock:
            self._events.append(event)

        for hook in self._event_hooks:
            try:
                hook(event)
            except Exception as e:
                self._logger.error("event_hook_error", error=str(e))

        self._logger.debug("audit_event_recorded", event_type=event.event_type.value)

    def get_status(self) -> dict[str, Any]:
        """Get audit log status information."""
        return {
            "buffer_size": self._buffer_size,
            "event_count": len(self.recent_events),
            "hook_count": len(self._event_hooks),
        }


class RecordingDelivery:
    """Delivery gateway that keeps every delivered summarization."""

    def __init__(self) -> None:
        self.delivered: list[SummarizationResult] = []

    def deliver(self, result: SummarizationResult) -> None:
        self.delivered.append(result)


class SystemClock:
    """Wall clock in a fixed IANA zone (defaults to settings.timezone)."""

    def __init__(self, timezone: str | None = None):
        self._zone = ZoneInfo(timezone or get_settings().timezone)

    @property
    def zone(self) -> ZoneInfo:
        return self._zone

    def now(self) -> datetime:
        return datetime.now(self._zone)


class FixedClock:
    """Clock frozen at one instant."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            raise ValueError("FixedClock requires a timezone-aware datetime")
        self._instant = instant

    def now(self) -> datetime:
        return self._instant
