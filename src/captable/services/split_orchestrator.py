"""Split orchestrator: one units debit fanned out into three ledger legs."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_FLOOR
from typing import Callable, Iterable, Optional

from captable.core.exceptions import ValidationError, SecurityNotFoundError
from captable.domain.models import (
    Security,
    SecurityRole,
    SplitConfiguration,
    SplitSecurityType,
    TransactionKind,
    PostingEventType,
)
from captable.domain.views import (
    SplitResult,
    SplitSecurities,
    LegQuantities,
    PostingEvent,
    EventLeg,
)
from captable.providers import PostingEventPublisher, LoggingEventPublisher
from captable.repositories.protocols import SecurityDirectory
from captable.services.ledger_service import LedgerService, EntryCreate
from captable.services.balance_validator import BalanceValidator
from captable.services.snapshot_cache import SnapshotCache
from captable.services.split_config_service import SplitConfigService
from captable.services.notifications import publish_safely

logger = logging.getLogger(__name__)

DEFAULT_BASE_TERMS = ("unit",)
DEFAULT_CLASS_A_TERMS = ("class a", "common stock", "ordinary shares")


def _new_correlation_id() -> str:
    return f"split-{uuid.uuid4()}"


def floor_shares(quantity: int, ratio: Decimal) -> int:
    """floor(quantity * ratio) in exact decimal arithmetic."""
    product = Decimal(quantity) * Decimal(ratio)
    return int(product.to_integral_value(rounding=ROUND_FLOOR))


@dataclass
class SplitRequest:
    """Split ``quantity`` base units held by one shareholder."""

    issuer_id: str
    shareholder_id: str
    quantity: int
    transaction_date: date
    base_security_id: Optional[str] = None
    note: Optional[str] = None
    restriction_id: Optional[str] = None
    actor: Optional[str] = None


class SplitOrchestrator:
    """
    Converts units into class A shares plus warrants or rights.

    The three legs are appended in a single batch: either all of them are in
    the ledger or none is. Only the units debit is balance-checked; the two
    legs are credits.
    """

    def __init__(
        self,
        ledger_service: LedgerService,
        security_directory: SecurityDirectory,
        split_config_service: SplitConfigService,
        validator: BalanceValidator,
        snapshot_cache: SnapshotCache,
        publisher: Optional[PostingEventPublisher] = None,
        trigger_kind: TransactionKind = TransactionKind.WITHDRAWAL,
        base_terms: Iterable[str] = DEFAULT_BASE_TERMS,
        class_a_terms: Iterable[str] = DEFAULT_CLASS_A_TERMS,
        correlation_factory: Callable[[], str] = _new_correlation_id,
    ):
        self._ledger = ledger_service
        self._securities = security_directory
        self._configs = split_config_service
        self._validator = validator
        self._cache = snapshot_cache
        self._publisher = publisher or LoggingEventPublisher()
        self._trigger_kind = trigger_kind
        self._base_terms = [t.lower() for t in base_terms]
        self._class_a_terms = [t.lower() for t in class_a_terms]
        self._correlation_factory = correlation_factory

    def resolve_securities(
        self,
        issuer_id: str,
        base_security_id: Optional[str] = None,
        secondary_type: SplitSecurityType = SplitSecurityType.WARRANT,
    ) -> SplitSecurities:
        """
        Find the units, class A and warrant/right securities of an issuer.

        Matching is a case-insensitive substring search over class names, in
        registration order. Class A tries each configured term in turn; the
        secondary slot tries the preferred label, then the other one.
        Securities that look like units are never picked for the derivative
        roles.
        """
        securities = self._securities.list_by_issuer(issuer_id)

        if base_security_id:
            base = self._securities.get(issuer_id, base_security_id)
            if base is None or not self._is_base(base):
                raise SecurityNotFoundError(
                    issuer_id,
                    SecurityRole.BASE.value,
                    f"{base_security_id} is not a units security",
                )
        else:
            base = next((s for s in securities if self._is_base(s)), None)
            if base is None:
                raise SecurityNotFoundError(issuer_id, SecurityRole.BASE.value, "no units security")

        candidates = [s for s in securities if not self._is_base(s)]

        class_a = self._first_match(candidates, self._class_a_terms)
        if class_a is None:
            raise SecurityNotFoundError(
                issuer_id,
                SecurityRole.CLASS_A.value,
                "create a Class A security first",
            )

        secondary_terms = [secondary_type.value.lower(), secondary_type.alternate.value.lower()]
        secondary = self._first_match(
            [s for s in candidates if s.security_id != class_a.security_id],
            secondary_terms,
        )
        if secondary is None:
            raise SecurityNotFoundError(
                issuer_id,
                SecurityRole.SECONDARY.value,
                f"create a {secondary_type.value}/{secondary_type.alternate.value} security first",
            )

        return SplitSecurities(
            base=base,
            class_a=class_a,
            secondary=secondary,
            secondary_type=secondary_type,
        )

    @staticmethod
    def compute_leg_quantities(quantity: int, config: SplitConfiguration) -> LegQuantities:
        """Floor each derivative quantity; any fractional share is dropped."""
        return LegQuantities(
            units=quantity,
            class_a=floor_shares(quantity, config.class_a_ratio),
            secondary=floor_shares(quantity, config.secondary_ratio),
            class_a_ratio=config.class_a_ratio,
            secondary_ratio=config.secondary_ratio,
        )

    def post_split(self, request: SplitRequest) -> SplitResult:
        """
        Post a split as one units debit and two derivative credits.

        Raises before anything is written when the configuration or a
        security is missing, a derivative leg floors to zero, or the holder
        has fewer units than requested. A store failure during the batch
        append leaves the ledger unchanged.
        """
        quantity = request.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Split quantity must be a positive whole number, got {quantity!r}")

        config = self._configs.get(request.issuer_id, self._trigger_kind)
        securities = self.resolve_securities(
            request.issuer_id,
            base_security_id=request.base_security_id,
            secondary_type=config.secondary_type,
        )
        legs = self.compute_leg_quantities(quantity, config)
        if legs.class_a <= 0 or legs.secondary <= 0:
            raise ValidationError(
                f"Splitting {quantity} units yields {legs.class_a} class A and "
                f"{legs.secondary} {config.secondary_type.plural.lower()}; "
                "every leg must be at least one share"
            )

        self._validator.assert_sufficient(
            issuer_id=request.issuer_id,
            shareholder_id=request.shareholder_id,
            security_id=securities.base.security_id,
            as_of_date=request.transaction_date,
            proposed_debit=quantity,
        )

        correlation_id = self._correlation_factory()
        suffix = f" | {request.note}" if request.note else ""
        leg_specs = [
            (securities.base, TransactionKind.SPLIT_DEBIT, quantity, "Debit Units"),
            (securities.class_a, TransactionKind.SPLIT_CREDIT, legs.class_a, "Credit Class A"),
            (
                securities.secondary,
                TransactionKind.SPLIT_CREDIT,
                legs.secondary,
                f"Credit {config.secondary_type.plural}",
            ),
        ]
        entries = self._ledger.append_batch([
            EntryCreate(
                issuer_id=request.issuer_id,
                security_id=security.security_id,
                shareholder_id=request.shareholder_id,
                kind=kind,
                signed_quantity=kind.signed(shares),
                transaction_date=request.transaction_date,
                restriction_id=request.restriction_id,
                note=f"Split transaction - {label}{suffix}",
                correlation_id=correlation_id,
            )
            for security, kind, shares, label in leg_specs
        ])
        logger.info(
            "Split %d %s for %s into %d %s + %d %s (%s)",
            quantity, securities.base.security_id, request.shareholder_id,
            legs.class_a, securities.class_a.security_id,
            legs.secondary, securities.secondary.security_id,
            correlation_id,
        )

        report = self._cache.refresh_after_posting(
            issuer_id=request.issuer_id,
            shareholder_id=request.shareholder_id,
            security_ids=securities.security_ids,
            as_of_date=request.transaction_date,
        )
        if report.warnings:
            logger.warning("Split processed but position update may need manual refresh")

        publish_safely(
            self._publisher,
            PostingEvent(
                event_type=PostingEventType.SPLIT,
                kind=self._trigger_kind.value,
                issuer_id=request.issuer_id,
                shareholder_id=request.shareholder_id,
                transaction_date=request.transaction_date,
                legs=[EventLeg(e.security_id, e.signed_quantity) for e in entries],
                entry_ids=[e.entry_id for e in entries],
                actor=request.actor,
            ),
        )

        return SplitResult(
            entries=entries,
            snapshots=report.snapshots,
            warnings=report.warnings,
            securities=securities,
            units_debited=quantity,
            class_a_credited=legs.class_a,
            secondary_credited=legs.secondary,
            correlation_id=correlation_id,
        )

    def _is_base(self, security: Security) -> bool:
        name = (security.class_name or "").lower()
        return any(term in name for term in self._base_terms)

    @staticmethod
    def _first_match(securities: list[Security], terms: list[str]) -> Optional[Security]:
        for term in terms:
            for security in securities:
                if term in (security.class_name or "").lower():
                    return security
        return None
