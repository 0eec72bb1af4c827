"""Balance invariant validator: no debit may take a holding below zero."""

import logging
from datetime import date

from captable.core.exceptions import InsufficientBalanceError, ValidationError
from captable.services.position_engine import PositionEngine

logger = logging.getLogger(__name__)


class BalanceValidator:
    """
    Gatekeeper run immediately before a debit-signed posting is appended.

    Each check is a fresh replay; callers must not pass in a balance read
    earlier. Two concurrent debits for the same holder and security can
    still both pass between check and append; that window is accepted.
    """

    def __init__(self, position_engine: PositionEngine):
        self._engine = position_engine

    def assert_sufficient(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
        proposed_debit: int,
    ) -> int:
        """
        Ensure the holder can absorb a debit of ``proposed_debit`` shares.

        Returns the current balance. Raises InsufficientBalanceError carrying
        the current balance and the requested magnitude otherwise.
        """
        if proposed_debit <= 0:
            raise ValidationError(f"Debit magnitude must be positive, got {proposed_debit}")

        current = self._engine.balance_as_of(
            issuer_id=issuer_id,
            shareholder_id=shareholder_id,
            security_id=security_id,
            as_of_date=as_of_date,
        )
        if current - proposed_debit < 0:
            logger.info(
                "Rejected debit of %d %s for %s: balance %d",
                proposed_debit, security_id, shareholder_id, current,
            )
            raise InsufficientBalanceError(
                security_id=security_id,
                current=current,
                requested=proposed_debit,
            )
        return current
