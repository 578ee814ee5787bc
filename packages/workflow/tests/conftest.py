"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

# Pin settings before anything reads them
os.environ.setdefault("DIGEST_TIMEZONE", "UTC")
os.environ.setdefault("DIGEST_MAX_DAYS_TO_PROCESS", "30")

from ledger_digest.config.settings import get_settings  # noqa: E402
from ledger_digest.gateways import (  # noqa: E402
    FixedClock,
    InMemoryActorDirectory,
    InMemoryAuditLog,
    InMemoryStatementStore,
    RecordingDelivery,
)
from ledger_digest.models import (  # noqa: E402
    Administrator,
    FinancialPeriod,
    FinancialStatement,
    StandardUser,
    TrustLevel,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def non_combatant() -> StandardUser:
    return StandardUser(id=1, trust_level=TrustLevel.NON_COMBATANT)


@pytest.fixture
def regular_admin() -> Administrator:
    return Administrator(id=2, is_super_admin=False)


@pytest.fixture
def make_statement() -> Callable[..., FinancialStatement]:
    """Build statements for actor 1 / account 10 unless told otherwise."""
    counter = iter(range(1, 10_000))

    def _make(
        owner_id: int = 1,
        account_id: int = 10,
        amount: int = 10_000,
        start: datetime | None = None,
        days_ago: int = 1,
    ) -> FinancialStatement:
        period_start = start or NOW - timedelta(days=days_ago)
        return FinancialStatement(
            record_id=next(counter),
            owner_id=owner_id,
            account_id=account_id,
            amount=amount,
            created_at=period_start + timedelta(days=1),
            period=FinancialPeriod(start=period_start, end=period_start + timedelta(days=1)),
        )

    return _make


@pytest.fixture
def directory(non_combatant, regular_admin) -> InMemoryActorDirectory:
    return InMemoryActorDirectory([non_combatant, regular_admin])


@pytest.fixture
def statement_store() -> InMemoryStatementStore:
    return InMemoryStatementStore()


@pytest.fixture
def audit_log() -> InMemoryAuditLog:
    return InMemoryAuditLog(buffer_size=10)


@pytest.fixture
def delivery() -> RecordingDelivery:
    return RecordingDelivery()
