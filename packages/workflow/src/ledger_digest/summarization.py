"""Statement validation and trailing-window filtering.

Validation and filtering are kept as a linear set of steps over the
statements the actor's source returned, with no I/O: the caller supplies
``now``. Calling ``summarize`` twice with the same arguments gives equal
results.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

import structlog

from ledger_digest.models import Actor, FinancialStatement, SummarizationResult

logger = structlog.get_logger(__name__)


class DataError(Exception):
    """Statements returned for an actor failed an integrity check."""

    def __init__(self, message: str, actor_id: int):
        super().__init__(message)
        self.actor_id = actor_id

    def _payload(self) -> tuple[Any, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        """Equal when type, actor and offending ids all match."""
        if not isinstance(other, DataError) or type(other) is not type(self):
            return NotImplemented
        return (self.actor_id, self._payload()) == (other.actor_id, other._payload())

    def __hash__(self) -> int:
        return hash((type(self), self.actor_id, self._payload()))

    def to_dict(self) -> dict[str, Any]:
        return {"type": type(self).__name__, "actor_id": self.actor_id, "message": str(self)}


class TooManyAccounts(DataError):
    """Statements span more than one account."""

    def __init__(self, actor_id: int, account_ids: list[int]):
        super().__init__(
            f"For actor {actor_id} there should only be one account id found, "
            f"received {account_ids}",
            actor_id,
        )
        self.account_ids = account_ids

    def _payload(self) -> tuple[Any, ...]:
        return tuple(self.account_ids)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "account_ids": list(self.account_ids)}


class ForeignOwnerIds(DataError):
    """Statements belonging to other owners were returned."""

    def __init__(self, actor_id: int, bad_ids: list[int]):
        super().__init__(
            f"For actor {actor_id} only its own statements should be returned, "
            f"received them for the following ids {bad_ids}",
            actor_id,
        )
        self.bad_ids = bad_ids

    def _payload(self) -> tuple[Any, ...]:
        return tuple(self.bad_ids)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "bad_ids": list(self.bad_ids)}


def distinct_account_ids(statements: Sequence[FinancialStatement]) -> list[int]:
    """Distinct account ids in first-seen order."""
    return list(dict.fromkeys(statement.account_id for statement in statements))


def foreign_owner_ids(actor: Actor, statements: Sequence[FinancialStatement]) -> list[int]:
    """Every owner id that is not the actor's, duplicates kept, in input order."""
    return [s.owner_id for s in statements if s.owner_id != actor.id]


def window_start_for(now: datetime, max_days_to_process: int) -> datetime:
    """Start of the trailing window.

    ``timedelta`` arithmetic on an aware datetime works on wall-clock time in
    ``now``'s zone, so the window is measured in calendar days and keeps the
    local time of day across DST changes.
    """
    return now - timedelta(days=max_days_to_process)


def starts_within(statement: FinancialStatement, window_start: datetime) -> bool:
    """True when the period starts at or after ``window_start``.

    Compared as UTC instants: datetimes sharing a tzinfo otherwise compare by
    wall-clock time, which misorders the repeated hour after clocks go back.
    """
    if statement.period.start.tzinfo is None:
        raise ValueError(f"statement {statement.record_id} has a naive period start")
    return statement.period.start.astimezone(timezone.utc) >= window_start.astimezone(
        timezone.utc
    )


class SummarizationCalculator:
    """Validates an actor's statements and keeps those inside the window."""

    def summarize(
        self,
        actor: Actor,
        statements: Iterable[FinancialStatement],
        max_days_to_process: int,
        now: datetime,
    ) -> SummarizationResult | DataError:
        statements = tuple(statements)
        error = self.validate(actor, statements)
        if error is not None:
            logger.info(
                "statements_rejected",
                actor_id=actor.id,
                error=type(error).__name__,
                statement_count=len(statements),
            )
            return error

        window_start = window_start_for(now, max_days_to_process)
        retained = tuple(s for s in statements if starts_within(s, window_start))

        logger.debug(
            "statements_summarized",
            actor_id=actor.id,
            window_start=window_start.isoformat(),
            received=len(statements),
            retained=len(retained),
        )
        return SummarizationResult(actor=actor, window_start=window_start, statements=retained)

    @staticmethod
    def validate(actor: Actor, statements: Sequence[FinancialStatement]) -> DataError | None:
        """Return the first integrity violation, ownership first."""
        bad_ids = foreign_owner_ids(actor, statements)
        if bad_ids:
            return ForeignOwnerIds(actor_id=actor.id, bad_ids=bad_ids)

        account_ids = distinct_account_ids(statements)
        if len(account_ids) > 1:
            return TooManyAccounts(actor_id=actor.id, account_ids=account_ids)

        return None
