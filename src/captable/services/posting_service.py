"""Single-entry posting flow: validate, append, refresh, notify."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from captable.core.timezone import today_eastern
from captable.core.exceptions import (
    ValidationError,
    SecurityNotFoundError,
    AuthorizedSharesExceededError,
)
from captable.domain.models import Security, TransactionEntry, TransactionKind, PostingEventType
from captable.domain.views import PostingResult, PostingEvent, EventLeg
from captable.providers import PostingEventPublisher, LoggingEventPublisher
from captable.repositories.protocols import SecurityDirectory
from captable.services.ledger_service import LedgerService, EntryCreate
from captable.services.position_engine import PositionEngine
from captable.services.balance_validator import BalanceValidator
from captable.services.snapshot_cache import SnapshotCache
from captable.services.notifications import publish_safely

logger = logging.getLogger(__name__)


@dataclass
class PostingRequest:
    """A single movement; ``quantity`` is the unsigned share count."""

    issuer_id: str
    shareholder_id: str
    security_id: str
    kind: TransactionKind
    quantity: int
    transaction_date: date
    restriction_id: Optional[str] = None
    note: Optional[str] = None
    actor: Optional[str] = None


class PostingService:
    """
    Posts issuances, deposits, withdrawals and transfers.

    Order of work for every posting:
    1. Resolve the security
    2. Authorized-share cap (credits, when enabled)
    3. Balance check (debits), a fresh replay right before the append
    4. Append to the ledger (the only step that can fail the posting)
    5. Refresh snapshots; failures become warnings on the result
    6. Publish an event; failures are logged only
    """

    def __init__(
        self,
        ledger_service: LedgerService,
        security_directory: SecurityDirectory,
        position_engine: PositionEngine,
        validator: BalanceValidator,
        snapshot_cache: SnapshotCache,
        publisher: Optional[PostingEventPublisher] = None,
        enforce_authorized_shares: bool = False,
    ):
        self._ledger = ledger_service
        self._securities = security_directory
        self._engine = position_engine
        self._validator = validator
        self._cache = snapshot_cache
        self._publisher = publisher or LoggingEventPublisher()
        self._enforce_authorized_shares = enforce_authorized_shares

    def post(self, request: PostingRequest) -> PostingResult:
        """Post one movement and return the committed entry with cache status."""
        kind = self._parse_kind(request.kind)
        if kind.is_split_leg:
            raise ValidationError("Split legs can only be posted as part of a split")
        quantity = request.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Quantity must be a positive whole number, got {quantity!r}")

        security = self._resolve_security(request.issuer_id, request.security_id)

        if kind.is_debit:
            self._validator.assert_sufficient(
                issuer_id=request.issuer_id,
                shareholder_id=request.shareholder_id,
                security_id=security.security_id,
                as_of_date=request.transaction_date,
                proposed_debit=quantity,
            )
        elif self._enforce_authorized_shares:
            self._check_authorized(security, request.transaction_date, quantity)

        entry = self._ledger.append(
            EntryCreate(
                issuer_id=request.issuer_id,
                security_id=security.security_id,
                shareholder_id=request.shareholder_id,
                kind=kind,
                signed_quantity=kind.signed(quantity),
                transaction_date=request.transaction_date,
                restriction_id=request.restriction_id,
                note=request.note,
            )
        )
        logger.info(
            "Posted %s %+d %s for %s on %s",
            kind.value, entry.signed_quantity, entry.security_id,
            entry.shareholder_id, entry.transaction_date,
        )

        report = self._cache.refresh_after_posting(
            issuer_id=entry.issuer_id,
            shareholder_id=entry.shareholder_id,
            security_ids=[entry.security_id],
            as_of_date=entry.transaction_date,
        )
        self._publish(PostingEventType.POSTING, [entry], request.actor)
        return PostingResult(entries=[entry], snapshots=report.snapshots, warnings=report.warnings)

    def void(self, entry_id: str, actor: Optional[str] = None) -> PostingResult:
        """
        Void an entry so it stops counting toward balances.

        Removing a credit lowers the holder's balance on every date from the
        entry date onward, so it is checked like a debit of the same size on
        each date the balance can dip: the entry date, every later debit date
        and the later of the entry date and today. Split legs are never voided
        one at a time.
        """
        entry = self._ledger.get_entry(entry_id)
        if not entry.is_active:
            return PostingResult(entries=[entry])
        if entry.kind.is_split_leg:
            raise ValidationError("Split legs cannot be voided individually")

        if entry.signed_quantity > 0:
            for check_date in self._void_check_dates(entry):
                self._validator.assert_sufficient(
                    issuer_id=entry.issuer_id,
                    shareholder_id=entry.shareholder_id,
                    security_id=entry.security_id,
                    as_of_date=check_date,
                    proposed_debit=entry.magnitude,
                )

        voided = self._ledger.void_entry(entry_id)
        logger.info("Voided entry %s (%s %+d)", entry_id, entry.kind.value, entry.signed_quantity)

        report = self._cache.refresh_after_posting(
            issuer_id=voided.issuer_id,
            shareholder_id=voided.shareholder_id,
            security_ids=[voided.security_id],
            as_of_date=voided.transaction_date,
        )
        self._publish(PostingEventType.VOID, [voided], actor)
        return PostingResult(entries=[voided], snapshots=report.snapshots, warnings=report.warnings)

    def _void_check_dates(self, entry: TransactionEntry) -> list[date]:
        """Dates on or after the entry where the pair's balance is at a local low."""
        horizon = max(entry.transaction_date, today_eastern())
        dates = {entry.transaction_date, horizon}
        for other in self._ledger.query(
            issuer_id=entry.issuer_id,
            shareholder_id=entry.shareholder_id,
            security_id=entry.security_id,
            as_of_date=date.max,
        ):
            if other.signed_quantity < 0 and other.transaction_date >= entry.transaction_date:
                dates.add(other.transaction_date)
        return sorted(dates)

    def _resolve_security(self, issuer_id: str, security_id: str) -> Security:
        security = self._securities.get(issuer_id, security_id)
        if not security:
            raise SecurityNotFoundError(issuer_id, "Posting", security_id)
        return security

    def _check_authorized(self, security: Security, transaction_date: date, quantity: int) -> None:
        if security.total_authorized_shares is None:
            return
        outstanding = self._engine.outstanding_as_of(
            issuer_id=security.issuer_id,
            security_id=security.security_id,
            as_of_date=max(transaction_date, today_eastern()),
        )
        if outstanding + quantity > security.total_authorized_shares:
            raise AuthorizedSharesExceededError(
                security_id=security.security_id,
                authorized=security.total_authorized_shares,
                outstanding=outstanding,
                requested=quantity,
            )

    def _publish(
        self,
        event_type: PostingEventType,
        entries: list[TransactionEntry],
        actor: Optional[str],
    ) -> None:
        first = entries[0]
        if event_type == PostingEventType.VOID:
            legs = [EventLeg(e.security_id, -e.signed_quantity) for e in entries]
        else:
            legs = [EventLeg(e.security_id, e.signed_quantity) for e in entries]
        publish_safely(
            self._publisher,
            PostingEvent(
                event_type=event_type,
                kind=first.kind.value,
                issuer_id=first.issuer_id,
                shareholder_id=first.shareholder_id,
                transaction_date=first.transaction_date,
                legs=legs,
                entry_ids=[e.entry_id for e in entries],
                actor=actor,
            ),
        )

    @staticmethod
    def _parse_kind(kind) -> TransactionKind:
        try:
            return TransactionKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown transaction kind: {kind!r}")
