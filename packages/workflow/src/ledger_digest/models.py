"""Domain model: actors, operating modes and financial statements.

Everything here is immutable and lives for a single workflow request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Literal, TypeAlias


class TrustLevel(str, Enum):
    """How far a standard user is trusted."""

    POSSIBLE_RISK = "possible_risk"
    TRUSTED_OPERATIVE = "trusted_operative"
    NON_COMBATANT = "non_combatant"


class RequestedMode(str, Enum):
    """Operating context requested by the caller. Modes carry no ordering."""

    MODE_1 = "mode_1"
    MODE_2 = "mode_2"
    MODE_3 = "mode_3"


@dataclass(frozen=True)
class Administrator:
    """An administrator, optionally a super admin."""

    id: int
    is_super_admin: bool = False
    kind: Literal["administrator"] = field(default="administrator", init=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "kind": self.kind, "is_super_admin": self.is_super_admin}


@dataclass(frozen=True)
class StandardUser:
    """A standard (non-admin) user with a trust level."""

    id: int
    trust_level: TrustLevel
    kind: Literal["standard_user"] = field(default="standard_user", init=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "kind": self.kind, "trust_level": self.trust_level.value}


Actor: TypeAlias = Administrator | StandardUser


@dataclass(frozen=True)
class FinancialPeriod:
    """The span of time a statement covers."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class FinancialStatement:
    """A statement for one account over one period, produced upstream."""

    record_id: int
    owner_id: int
    account_id: int
    amount: int  # minor currency units (pence, cents)
    created_at: datetime
    period: FinancialPeriod

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_id": self.record_id,
            "owner_id": self.owner_id,
            "account_id": self.account_id,
            "amount": self.amount,
            "created_at": self.created_at.isoformat(),
            "period": {
                "start": self.period.start.isoformat(),
                "end": self.period.end.isoformat(),
            },
        }


@dataclass(frozen=True)
class SummarizationResult:
    """Validated statements for one actor within the trailing window.

    All statements share one account id and belong to ``actor``; each has
    ``period.start >= window_start``. Statement order is the order received.
    """

    actor: Actor
    window_start: datetime
    statements: tuple[FinancialStatement, ...] = ()

    @property
    def account_id(self) -> int | None:
        """The single account summarized, or None when nothing was retained."""
        if not self.statements:
            return None
        return self.statements[0].account_id

    @property
    def total_amount(self) -> int:
        return sum(statement.amount for statement in self.statements)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for delivery."""
        return {
            "actor": self.actor.to_dict(),
            "window_start": self.window_start.isoformat(),
            "account_id": self.account_id,
            "total_amount": self.total_amount,
            "statements": [statement.to_dict() for statement in self.statements],
        }
