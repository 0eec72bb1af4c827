"""Position engine: point-in-time holdings by replaying the ledger."""

import logging
from collections import defaultdict
from datetime import date

from captable.domain.models import TransactionEntry
from captable.repositories.protocols import LedgerRepository

logger = logging.getLogger(__name__)


def signed_total(entries: list[TransactionEntry]) -> int:
    """Plain signed sum of active entries; order does not matter."""
    return sum(e.signed_quantity for e in entries if e.is_active)


class PositionEngine:
    """
    Engine for computing holdings from the ledger.

    Every call is a full replay of the eligible history; nothing is carried
    over from earlier calls or from the snapshot cache.
    """

    def __init__(self, ledger_repo: LedgerRepository):
        self._ledger_repo = ledger_repo

    def balance_as_of(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
    ) -> int:
        """
        Holder's balance of one security at the end of as_of_date.

        Entries dated on as_of_date are included. Returns 0 when the holder
        has no entries.
        """
        entries = self._ledger_repo.query(
            issuer_id=issuer_id,
            shareholder_id=shareholder_id,
            security_id=security_id,
            as_of_date=as_of_date,
        )
        balance = signed_total(entries)
        logger.debug(
            "Replayed %d entries for %s/%s/%s as of %s -> %d",
            len(entries), issuer_id, shareholder_id, security_id, as_of_date, balance,
        )
        return balance

    def holdings_as_of(
        self,
        issuer_id: str,
        shareholder_id: str,
        as_of_date: date,
    ) -> dict[str, int]:
        """
        All of a holder's non-zero balances on a record date.

        Returns dict mapping security_id -> shares.
        """
        entries = self._ledger_repo.query_by_shareholder(
            issuer_id=issuer_id,
            shareholder_id=shareholder_id,
            as_of_date=as_of_date,
        )
        totals: dict[str, int] = defaultdict(int)
        for entry in entries:
            if entry.is_active:
                totals[entry.security_id] += entry.signed_quantity
        return {sec: qty for sec, qty in sorted(totals.items()) if qty != 0}

    def outstanding_as_of(self, issuer_id: str, security_id: str, as_of_date: date) -> int:
        """Shares of a security held across all holders."""
        entries = self._ledger_repo.query_by_security(
            issuer_id=issuer_id,
            security_id=security_id,
            as_of_date=as_of_date,
        )
        return signed_total(entries)
