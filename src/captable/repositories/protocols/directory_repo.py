"""Security and shareholder directory protocols."""

from typing import Protocol, Optional

from captable.domain.models import Security, Shareholder


class SecurityDirectory(Protocol):
    """Interface for security metadata lookups."""

    def create(self, security: Security) -> Security:
        """Register a security."""
        ...

    def get(self, issuer_id: str, security_id: str) -> Optional[Security]:
        """Retrieve a security by issuer and code."""
        ...

    def list_by_issuer(self, issuer_id: str) -> list[Security]:
        """List an issuer's securities in registration order."""
        ...


class ShareholderDirectory(Protocol):
    """Interface for shareholder lookups."""

    def create(self, shareholder: Shareholder) -> Shareholder:
        """Register a shareholder."""
        ...

    def get(self, shareholder_id: str) -> Optional[Shareholder]:
        """Retrieve a shareholder by ID."""
        ...

    def delete(self, shareholder_id: str) -> None:
        """Remove a shareholder (hard delete)."""
        ...
