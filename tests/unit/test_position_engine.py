"""
Unit tests for PositionEngine and BalanceValidator.

Tests cover:
- Point-in-time balances by ledger replay
- Order independence of the signed sum
- Voided entries excluded from balances
- Holdings and outstanding share reports
- Debit validation against a fresh replay
"""

import pytest

from captable.services import PositionEngine, BalanceValidator, signed_total
from captable.domain.models import TransactionEntry, TransactionKind, EntryStatus
from captable.core.exceptions import InsufficientBalanceError, ValidationError

from tests.conftest import ISSUER, d


def _entry(entry_id: str, qty: int, on: str, status: EntryStatus = EntryStatus.ACTIVE) -> TransactionEntry:
    kind = TransactionKind.DEPOSIT if qty > 0 else TransactionKind.WITHDRAWAL
    return TransactionEntry(
        entry_id=entry_id,
        issuer_id=ISSUER,
        security_id="SEC1",
        shareholder_id="holder-1",
        kind=kind,
        signed_quantity=qty,
        transaction_date=d(on),
        status=status,
    )


# =============================================================================
# SIGNED SUM TESTS
# =============================================================================


class TestSignedTotal:
    """Tests for the replay fold."""

    def test_sum_is_order_independent(self):
        """
        GIVEN the same entries in two different orders
        WHEN I sum them
        THEN the totals are equal
        """
        entries = [_entry("a", 100, "2024-01-01"), _entry("b", -40, "2024-02-01"), _entry("c", 15, "2024-03-01")]

        assert signed_total(entries) == signed_total(list(reversed(entries))) == 75

    def test_inactive_entries_ignored(self):
        entries = [_entry("a", 100, "2024-01-01"), _entry("b", -40, "2024-02-01", EntryStatus.INACTIVE)]
        assert signed_total(entries) == 100

    def test_empty_is_zero(self):
        assert signed_total([]) == 0


# =============================================================================
# BALANCE AS OF TESTS
# =============================================================================


class TestBalanceAsOf:
    """Tests for point-in-time balance reconstruction."""

    def test_no_entries_gives_zero(self, position_engine: PositionEngine, holder):
        assert position_engine.balance_as_of(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01")) == 0

    def test_point_in_time_reconstruction(self, position_engine: PositionEngine, holder, credit_factory):
        """
        GIVEN +100 on 2024-01-01 and -40 on 2024-06-01
        WHEN I ask for balances on 2024-03-01 and 2024-12-01
        THEN I get 100 and 60
        """
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))
        credit_factory(holder.shareholder_id, "SEC1", 40, d("2024-06-01"), kind=TransactionKind.WITHDRAWAL)

        assert position_engine.balance_as_of(ISSUER, holder.shareholder_id, "SEC1", d("2024-03-01")) == 100
        assert position_engine.balance_as_of(ISSUER, holder.shareholder_id, "SEC1", d("2024-12-01")) == 60

    def test_entry_on_as_of_date_is_included(self, position_engine: PositionEngine, holder, credit_factory):
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))
        assert position_engine.balance_as_of(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01")) == 100
        assert position_engine.balance_as_of(ISSUER, holder.shareholder_id, "SEC1", d("2023-12-31")) == 0

    def test_other_securities_and_holders_excluded(
        self, position_engine: PositionEngine, holder, shareholder_factory, credit_factory
    ):
        other = shareholder_factory(name="Other")
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))
        credit_factory(holder.shareholder_id, "SEC2", 7, d("2024-01-01"))
        credit_factory(other.shareholder_id, "SEC1", 900, d("2024-01-01"))

        assert position_engine.balance_as_of(ISSUER, holder.shareholder_id, "SEC1", d("2024-12-31")) == 100

    def test_voided_entry_excluded(self, position_engine: PositionEngine, ledger_service, holder, credit_factory):
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))
        second = credit_factory(holder.shareholder_id, "SEC1", 25, d("2024-02-01"))
        ledger_service.void_entry(second.entry_id)

        assert position_engine.balance_as_of(ISSUER, holder.shareholder_id, "SEC1", d("2024-12-31")) == 100


# =============================================================================
# REPORT TESTS
# =============================================================================


class TestHoldingsAndOutstanding:
    """Tests for multi-security and multi-holder reports."""

    def test_holdings_lists_non_zero_positions(self, position_engine: PositionEngine, holder, credit_factory):
        """
        GIVEN a holder with SEC1 100, SEC2 fully withdrawn, SEC3 5
        WHEN I request holdings
        THEN only SEC1 and SEC3 appear
        """
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))
        credit_factory(holder.shareholder_id, "SEC2", 10, d("2024-01-01"))
        credit_factory(holder.shareholder_id, "SEC2", 10, d("2024-02-01"), kind=TransactionKind.WITHDRAWAL)
        credit_factory(holder.shareholder_id, "SEC3", 5, d("2024-01-01"))

        holdings = position_engine.holdings_as_of(ISSUER, holder.shareholder_id, d("2024-12-31"))

        assert holdings == {"SEC1": 100, "SEC3": 5}

    def test_outstanding_sums_all_holders(
        self, position_engine: PositionEngine, holder, shareholder_factory, credit_factory
    ):
        other = shareholder_factory(name="Other")
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))
        credit_factory(other.shareholder_id, "SEC1", 250, d("2024-01-01"))

        assert position_engine.outstanding_as_of(ISSUER, "SEC1", d("2024-12-31")) == 350


# =============================================================================
# BALANCE VALIDATOR TESTS
# =============================================================================


class TestBalanceValidator:
    """Tests for the non-negative balance invariant."""

    def test_debit_exceeding_balance_rejected(self, balance_validator: BalanceValidator, holder, credit_factory):
        """
        GIVEN a holder with 100 shares
        WHEN a debit of 150 is checked
        THEN InsufficientBalanceError carries current=100 and requested=150
        """
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))

        with pytest.raises(InsufficientBalanceError) as exc_info:
            balance_validator.assert_sufficient(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01"), 150)

        assert exc_info.value.current == 100
        assert exc_info.value.requested == 150
        assert exc_info.value.context["current"] == 100
        assert exc_info.value.context["requested"] == 150

    def test_debit_of_entire_balance_allowed(self, balance_validator: BalanceValidator, holder, credit_factory):
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))

        current = balance_validator.assert_sufficient(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01"), 100)

        assert current == 100

    def test_check_uses_balance_as_of_posting_date(self, balance_validator: BalanceValidator, holder, credit_factory):
        """
        GIVEN shares credited on 2024-06-01
        WHEN a debit dated 2024-03-01 is checked
        THEN it is rejected because nothing was held yet
        """
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-06-01"))

        with pytest.raises(InsufficientBalanceError) as exc_info:
            balance_validator.assert_sufficient(ISSUER, holder.shareholder_id, "SEC1", d("2024-03-01"), 10)
        assert exc_info.value.current == 0

    def test_non_positive_debit_rejected(self, balance_validator: BalanceValidator, holder):
        with pytest.raises(ValidationError):
            balance_validator.assert_sufficient(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01"), 0)
