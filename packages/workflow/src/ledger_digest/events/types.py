"""Audit event definitions.

These are the records an auditing gateway keeps: denied attempts to use an
operating mode and summarizations that were delivered.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from ledger_digest.models import Actor, RequestedMode


class AuditEventType(str, Enum):
    """Types of events recorded in the audit trail."""

    DENIED_ATTEMPT = "audit.denied_attempt"
    SUMMARIZATION_RECORDED = "audit.summarization_recorded"


@dataclass
class AuditEvent:
    """Base structure for all audit events."""

    event_type: AuditEventType
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_id: UUID = field(default_factory=uuid4)
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize event to a JSON-friendly dictionary."""
        return {
            "id": str(self.event_id),
            "type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "data": self.data,
        }


@dataclass
class DeniedAttemptEvent(AuditEvent):
    """An actor tried to run in a mode it is not allowed to use."""

    actor_id: int = 0
    actor_kind: str = ""
    mode: RequestedMode | None = None

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["actor"] = {"id": self.actor_id, "kind": self.actor_kind}
        base["mode"] = self.mode.value if self.mode else None
        return base


@dataclass
class SummarizationRecordedEvent(AuditEvent):
    """A summarization was delivered to the actor."""

    actor_id: int = 0
    window_start: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["actor"] = {"id": self.actor_id}
        base["window_start"] = self.window_start.isoformat() if self.window_start else None
        return base


# Factory functions for creating events


def denied_attempt(actor: Actor, mode: RequestedMode) -> DeniedAttemptEvent:
    """Create a denied attempt event, keeping the variant-specific detail."""
    return DeniedAttemptEvent(
        event_type=AuditEventType.DENIED_ATTEMPT,
        actor_id=actor.id,
        actor_kind=actor.kind,
        mode=mode,
        data=actor.to_dict(),
    )


def summarization_recorded(actor_id: int, window_start: datetime) -> SummarizationRecordedEvent:
    """Create a summarization recorded event."""
    return SummarizationRecordedEvent(
        event_type=AuditEventType.SUMMARIZATION_RECORDED,
        actor_id=actor_id,
        window_start=window_start,
    )
