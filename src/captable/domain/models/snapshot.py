"""Position snapshot model (derived, rebuildable)."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass
class PositionSnapshot:
    """
    Cached holding per issuer/shareholder/security/as-of date.

    IMPORTANT: Never edit directly; always overwrite with a fresh replay.
    """

    issuer_id: str
    shareholder_id: str
    security_id: str
    as_of_date: date
    shares_owned: int = 0
    last_updated_at_est: Optional[datetime] = field(default=None)

    @property
    def key(self) -> tuple[str, str, str, date]:
        return (self.issuer_id, self.shareholder_id, self.security_id, self.as_of_date)
