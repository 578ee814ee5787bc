"""Collaborator interfaces and in-memory implementations."""

from ledger_digest.gateways.memory import (
    FixedClock,
    InMemoryActorDirectory,
    InMemoryAuditLog,
    InMemoryStatementStore,
    RecordingDelivery,
    SystemClock,
)
from ledger_digest.gateways.protocols import (
    ActorLookup,
    AuditingGateway,
    Clock,
    DeliveryGateway,
    StatementSource,
)

__all__ = [
    # Interfaces
    "ActorLookup",
    "StatementSource",
    "AuditingGateway",
    "DeliveryGateway",
    "Clock",
    # In-memory implementations
    "InMemoryActorDirectory",
    "InMemoryStatementStore",
    "InMemoryAuditLog",
    "RecordingDelivery",
    "SystemClock",
    "FixedClock",
]
