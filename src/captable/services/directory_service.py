"""Security and shareholder registration."""

import uuid
from typing import Optional

from captable.core.exceptions import ValidationError, NotFoundError
from captable.domain.models import Security, Shareholder
from captable.repositories.protocols import SecurityDirectory, ShareholderDirectory


class DirectoryService:
    """
    Thin service over the security and shareholder directories.

    These records are owned elsewhere in a full transfer-agent system; the
    engine only needs to resolve and look them up.
    """

    def __init__(
        self,
        security_directory: SecurityDirectory,
        shareholder_directory: ShareholderDirectory,
    ):
        self._securities = security_directory
        self._shareholders = shareholder_directory

    def register_security(
        self,
        issuer_id: str,
        security_id: str,
        class_name: str,
        total_authorized_shares: Optional[int] = None,
    ) -> Security:
        """
        Register a security class for an issuer.

        Args:
            issuer_id: Owning issuer
            security_id: CUSIP-style code, unique within the issuer
            class_name: Human label, e.g. "Units" or "Class A Ordinary Shares"
            total_authorized_shares: Optional cap on shares outstanding
        """
        if not issuer_id or not security_id:
            raise ValidationError("issuer_id and security_id are required")
        if not class_name or not class_name.strip():
            raise ValidationError("class_name is required")
        if total_authorized_shares is not None and total_authorized_shares < 0:
            raise ValidationError("total_authorized_shares cannot be negative")
        if self._securities.get(issuer_id, security_id):
            raise ValidationError(f"Security '{security_id}' already exists for issuer {issuer_id}")

        return self._securities.create(
            Security(
                issuer_id=issuer_id,
                security_id=security_id,
                class_name=class_name.strip(),
                total_authorized_shares=total_authorized_shares,
            )
        )

    def get_security(self, issuer_id: str, security_id: str) -> Security:
        security = self._securities.get(issuer_id, security_id)
        if not security:
            raise NotFoundError("Security", security_id)
        return security

    def list_securities(self, issuer_id: str) -> list[Security]:
        return self._securities.list_by_issuer(issuer_id)

    def register_shareholder(
        self,
        issuer_id: str,
        name: str,
        shareholder_id: Optional[str] = None,
    ) -> Shareholder:
        """Register a holder of record; an id is generated when none is given."""
        if not name or not name.strip():
            raise ValidationError("Shareholder name is required")
        shareholder_id = shareholder_id or str(uuid.uuid4())
        if self._shareholders.get(shareholder_id):
            raise ValidationError(f"Shareholder '{shareholder_id}' already exists")

        return self._shareholders.create(
            Shareholder(shareholder_id=shareholder_id, issuer_id=issuer_id, name=name.strip())
        )

    def get_shareholder(self, issuer_id: str, shareholder_id: str) -> Shareholder:
        shareholder = self._shareholders.get(shareholder_id)
        if not shareholder or shareholder.issuer_id != issuer_id:
            raise NotFoundError("Shareholder", shareholder_id)
        return shareholder
