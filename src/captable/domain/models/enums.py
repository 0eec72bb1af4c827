"""Enumerations for domain models."""

from enum import Enum


class TransactionKind(str, Enum):
    """Closed set of ledger movement kinds; each kind carries exactly one sign."""

    ORIGINAL_ISSUANCE = "ORIGINAL_ISSUANCE"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"
    SPLIT_DEBIT = "SPLIT_DEBIT"
    SPLIT_CREDIT = "SPLIT_CREDIT"

    @property
    def sign(self) -> int:
        """+1 for credits, -1 for debits."""
        return _KIND_SIGNS[self]

    @property
    def is_debit(self) -> bool:
        return self.sign < 0

    @property
    def is_split_leg(self) -> bool:
        return self in (TransactionKind.SPLIT_DEBIT, TransactionKind.SPLIT_CREDIT)

    def signed(self, magnitude: int) -> int:
        """Return ``magnitude`` with this kind's sign applied."""
        return self.sign * abs(magnitude)


_KIND_SIGNS: dict[TransactionKind, int] = {
    TransactionKind.ORIGINAL_ISSUANCE: 1,
    TransactionKind.DEPOSIT: 1,
    TransactionKind.WITHDRAWAL: -1,
    TransactionKind.TRANSFER_IN: 1,
    TransactionKind.TRANSFER_OUT: -1,
    TransactionKind.SPLIT_DEBIT: -1,
    TransactionKind.SPLIT_CREDIT: 1,
}


class EntryStatus(str, Enum):
    """Ledger entry status. Only ACTIVE entries count toward balances."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class SplitSecurityType(str, Enum):
    """Issuer-selectable label for the second derivative security of a split."""

    WARRANT = "Warrant"
    RIGHT = "Right"

    @property
    def plural(self) -> str:
        return f"{self.value}s"

    @property
    def alternate(self) -> "SplitSecurityType":
        """The other label, searched when the preferred one is absent."""
        if self is SplitSecurityType.WARRANT:
            return SplitSecurityType.RIGHT
        return SplitSecurityType.WARRANT


class SecurityRole(str, Enum):
    """Role a security plays in a split."""

    BASE = "BASE"
    CLASS_A = "CLASS_A"
    SECONDARY = "SECONDARY"


class PostingOutcome(str, Enum):
    """Result of a committed posting."""

    COMMITTED = "COMMITTED"
    COMMITTED_CACHE_PENDING = "COMMITTED_CACHE_PENDING"


class PostingEventType(str, Enum):
    """Kinds of events emitted after a successful posting."""

    POSTING = "POSTING"
    SPLIT = "SPLIT"
    VOID = "VOID"
