"""Split configuration repository protocol."""

from typing import Protocol, Optional

from captable.domain.models import SplitConfiguration, TransactionKind


class SplitConfigRepository(Protocol):
    """Interface for split configuration data access."""

    def get(self, issuer_id: str, trigger_kind: TransactionKind) -> Optional[SplitConfiguration]:
        """Retrieve the configuration for an issuer and trigger kind."""
        ...

    def upsert(self, config: SplitConfiguration) -> SplitConfiguration:
        """Insert or replace the configuration for its issuer and trigger kind."""
        ...
