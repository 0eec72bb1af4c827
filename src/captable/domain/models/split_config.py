"""Split configuration domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from captable.domain.models.enums import TransactionKind, SplitSecurityType


@dataclass
class SplitConfiguration:
    """
    Per-issuer conversion rates for splitting units.

    One unit converts into class_a_ratio shares of the class A security and
    secondary_ratio shares of the warrant/right security.
    """

    issuer_id: str
    trigger_kind: TransactionKind = TransactionKind.WITHDRAWAL
    class_a_ratio: Decimal = field(default_factory=lambda: Decimal("1"))
    secondary_ratio: Decimal = field(default_factory=lambda: Decimal("1"))
    secondary_type: SplitSecurityType = SplitSecurityType.WARRANT
    updated_at_est: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.trigger_kind, str):
            self.trigger_kind = TransactionKind(self.trigger_kind)
        if isinstance(self.secondary_type, str):
            self.secondary_type = SplitSecurityType(self.secondary_type)
