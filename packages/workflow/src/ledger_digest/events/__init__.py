"""Audit events recorded by the workflow's auditing gateway."""

from ledger_digest.events.types import (
    AuditEvent,
    AuditEventType,
    DeniedAttemptEvent,
    SummarizationRecordedEvent,
    denied_attempt,
    summarization_recorded,
)

__all__ = [
    "AuditEvent",
    "AuditEventType",
    "DeniedAttemptEvent",
    "SummarizationRecordedEvent",
    "denied_attempt",
    "summarization_recorded",
]
