"""Collaborator interfaces the workflow depends on.

Implementations signal failure by raising. The workflow catches whatever
they raise at its boundary and turns it into a returned error value, so a
failing collaborator never escapes ``WorkflowOrchestrator.run``.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from ledger_digest.models import Actor, FinancialStatement, RequestedMode, SummarizationResult


class ActorLookup(Protocol):
    def get(self, actor_id: int) -> Actor | None:
        """Return the actor, or None if no such actor exists."""
        ...


class StatementSource(Protocol):
    def get_statements(self, actor: Actor) -> Sequence[FinancialStatement]:
        """Return the statements held for the actor."""
        ...


class AuditingGateway(Protocol):
    def record_denied_attempt(self, actor: Actor, mode: RequestedMode) -> None: ...

    def record_success(self, actor_id: int, window_start: datetime) -> None: ...


class DeliveryGateway(Protocol):
    def deliver(self, result: SummarizationResult) -> None: ...


class Clock(Protocol):
    def now(self) -> datetime: ...
