"""Security and shareholder directory records."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Security:
    """A security class of an issuer, identified by a CUSIP-style code."""

    issuer_id: str
    security_id: str
    class_name: str
    total_authorized_shares: Optional[int] = None


@dataclass
class Shareholder:
    """A holder of record."""

    shareholder_id: str
    issuer_id: str
    name: str
