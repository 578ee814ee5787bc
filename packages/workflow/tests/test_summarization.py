"""Tests for statement validation and window filtering."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from ledger_digest.models import (
    FinancialPeriod,
    FinancialStatement,
    StandardUser,
    SummarizationResult,
    TrustLevel,
)
from ledger_digest.summarization import (
    ForeignOwnerIds,
    SummarizationCalculator,
    TooManyAccounts,
    distinct_account_ids,
    foreign_owner_ids,
    window_start_for,
)


@pytest.fixture
def actor() -> StandardUser:
    return StandardUser(id=1, trust_level=TrustLevel.NON_COMBATANT)


@pytest.fixture
def calculator() -> SummarizationCalculator:
    return SummarizationCalculator()


class TestValidation:
    """Tests for the integrity checks."""

    def test_too_many_accounts_in_first_seen_order(self, calculator, actor, now, make_statement):
        statements = [
            make_statement(account_id=20),
            make_statement(account_id=10),
            make_statement(account_id=20),
            make_statement(account_id=30),
        ]

        result = calculator.summarize(actor, statements, 3, now)

        assert isinstance(result, TooManyAccounts)
        assert result.actor_id == 1
        assert result.account_ids == [20, 10, 30]

    def test_foreign_owner_ids_keep_duplicates_in_order(
        self, calculator, actor, now, make_statement
    ):
        statements = [
            make_statement(owner_id=7),
            make_statement(owner_id=1),
            make_statement(owner_id=5),
            make_statement(owner_id=7),
        ]

        result = calculator.summarize(actor, statements, 3, now)

        assert isinstance(result, ForeignOwnerIds)
        assert result.bad_ids == [7, 5, 7]

    def test_ownership_check_wins_over_account_check(
        self, calculator, actor, now, make_statement
    ):
        statements = [
            make_statement(account_id=10),
            make_statement(owner_id=9, account_id=20),
        ]

        result = calculator.summarize(actor, statements, 3, now)

        assert isinstance(result, ForeignOwnerIds)
        assert result.bad_ids == [9]

    def test_checks_scan_statements_outside_the_window(
        self, calculator, actor, now, make_statement
    ):
        """Validation runs before filtering, so old statements still count."""
        statements = [make_statement(days_ago=1), make_statement(account_id=99, days_ago=400)]

        result = calculator.summarize(actor, statements, 3, now)

        assert isinstance(result, TooManyAccounts)

    def test_helpers(self, actor, make_statement):
        statements = [make_statement(account_id=3), make_statement(owner_id=2, account_id=3)]

        assert distinct_account_ids(statements) == [3]
        assert foreign_owner_ids(actor, statements) == [2]

    def test_error_to_dict(self):
        error = TooManyAccounts(actor_id=1, account_ids=[10, 20])

        assert error.to_dict() == {
            "type": "TooManyAccounts",
            "actor_id": 1,
            "message": "For actor 1 there should only be one account id found, received [10, 20]",
            "account_ids": [10, 20],
        }


class TestWindowFiltering:
    """Tests for the trailing window."""

    def test_empty_input_is_valid(self, calculator, actor, now):
        result = calculator.summarize(actor, [], 3, now)

        assert result == SummarizationResult(
            actor=actor, window_start=now - timedelta(days=3), statements=()
        )
        assert result.account_id is None
        assert result.total_amount == 0

    def test_boundary_is_inclusive(self, calculator, actor, now, make_statement):
        window_start = now - timedelta(days=3)
        on_boundary = make_statement(start=window_start)
        just_before = make_statement(start=window_start - timedelta(milliseconds=1))

        result = calculator.summarize(actor, [just_before, on_boundary], 3, now)

        assert isinstance(result, SummarizationResult)
        assert result.statements == (on_boundary,)

    def test_retained_statements_keep_input_order(self, calculator, actor, now, make_statement):
        newest = make_statement(days_ago=0, amount=300)
        oldest = make_statement(days_ago=2, amount=100)
        expired = make_statement(days_ago=10, amount=999)
        middle = make_statement(days_ago=1, amount=200)

        result = calculator.summarize(actor, [newest, expired, oldest, middle], 3, now)

        assert result.statements == (newest, oldest, middle)
        assert result.account_id == 10
        assert result.total_amount == 600

    def test_summarize_is_idempotent(self, calculator, actor, now, make_statement):
        statements = [make_statement(days_ago=1), make_statement(days_ago=5)]

        first = calculator.summarize(actor, statements, 3, now)
        second = calculator.summarize(actor, statements, 3, now)

        assert first == second

    @pytest.mark.parametrize(
        ("owner_ids", "account_ids"),
        [([1, 1], [10, 20]), ([1, 4], [10, 10])],
        ids=["too_many_accounts", "foreign_owner_ids"],
    )
    def test_summarize_is_idempotent_for_data_errors(
        self, calculator, actor, now, make_statement, owner_ids, account_ids
    ):
        statements = [
            make_statement(owner_id=owner_id, account_id=account_id)
            for owner_id, account_id in zip(owner_ids, account_ids)
        ]

        first = calculator.summarize(actor, statements, 3, now)
        second = calculator.summarize(actor, statements, 3, now)

        assert first is not second
        assert first == second
        assert hash(first) == hash(second)

    def test_data_errors_differ_by_payload_and_type(self):
        assert TooManyAccounts(1, [10, 20]) != TooManyAccounts(1, [10, 30])
        assert TooManyAccounts(1, [10, 20]) != TooManyAccounts(2, [10, 20])
        assert TooManyAccounts(1, [4]) != ForeignOwnerIds(1, [4])

    def test_iterator_input_is_validated_and_filtered(
        self, calculator, actor, now, make_statement
    ):
        recent = make_statement(days_ago=1)
        stale = make_statement(days_ago=10)

        result = calculator.summarize(actor, iter([recent, stale]), 3, now)

        assert isinstance(result, SummarizationResult)
        assert result.statements == (recent,)

    def test_iterator_input_still_fails_validation(self, calculator, actor, now, make_statement):
        statements = iter([make_statement(account_id=10), make_statement(account_id=20)])

        result = calculator.summarize(actor, statements, 3, now)

        assert result == TooManyAccounts(actor_id=1, account_ids=[10, 20])

    def test_repeated_hour_is_compared_as_instants(self, calculator, actor, make_statement):
        london = ZoneInfo("Europe/London")
        # 01:30 GMT on 2024-10-28; the window opens at 01:30 BST (00:30 UTC) the day before.
        now = datetime(2024, 10, 28, 1, 30, tzinfo=london)
        # Second 01:15 after clocks went back, 01:15 UTC, inside the window.
        repeated = make_statement(start=datetime(2024, 10, 27, 1, 15, tzinfo=london, fold=1))
        # First 01:15, still BST, 00:15 UTC, before the window.
        first_pass = make_statement(start=datetime(2024, 10, 27, 1, 15, tzinfo=london))

        result = calculator.summarize(actor, [repeated, first_pass], 1, now)

        assert result.window_start.astimezone(timezone.utc) == datetime(
            2024, 10, 27, 0, 30, tzinfo=timezone.utc
        )
        assert result.statements == (repeated,)

    def test_naive_period_start_is_rejected(self, calculator, actor, now):
        naive_start = datetime(2024, 3, 14, 12, 0)
        statement = FinancialStatement(
            record_id=1,
            owner_id=1,
            account_id=10,
            amount=500,
            created_at=naive_start,
            period=FinancialPeriod(start=naive_start, end=naive_start + timedelta(days=1)),
        )

        with pytest.raises(ValueError, match="naive period start"):
            calculator.summarize(actor, [statement], 3, now)

    def test_window_uses_calendar_days_across_dst(self):
        london = ZoneInfo("Europe/London")
        # Clocks went forward on 2024-03-31, so these three days hold 71 hours.
        now = datetime(2024, 4, 2, 12, 0, tzinfo=london)

        window_start = window_start_for(now, 3)

        assert window_start == datetime(2024, 3, 30, 12, 0, tzinfo=london)
        assert window_start.astimezone(timezone.utc) == datetime(
            2024, 3, 30, 12, 0, tzinfo=timezone.utc
        )
        assert now.astimezone(timezone.utc) - window_start.astimezone(timezone.utc) == timedelta(
            hours=71
        )

    def test_zero_days_keeps_only_current_periods(self, calculator, actor, now, make_statement):
        current = make_statement(start=now)
        earlier = make_statement(days_ago=1)

        result = calculator.summarize(actor, [current, earlier], 0, now)

        assert result.window_start == now
        assert result.statements == (current,)

    def test_to_dict(self, calculator, actor, now, make_statement):
        statement = make_statement(days_ago=1, amount=1234)

        payload = calculator.summarize(actor, [statement], 3, now).to_dict()

        assert payload["actor"]["id"] == 1
        assert payload["window_start"] == (now - timedelta(days=3)).isoformat()
        assert payload["total_amount"] == 1234
        assert payload["statements"][0]["record_id"] == statement.record_id
