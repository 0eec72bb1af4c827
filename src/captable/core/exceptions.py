"""Application-level exceptions."""

from typing import Any, Optional


class AppError(Exception):
    """Base exception for application errors."""

    status_code: int = 400

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        context: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {"error": self.code, "message": self.message, "context": self.context}


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} not found: {identifier}",
            code="NOT_FOUND",
            context={"resource": resource, "identifier": identifier},
        )


class ShareholderNotFoundError(AppError):
    """Raised when a posting references a shareholder the store does not know."""

    status_code = 404

    def __init__(self, shareholder_id: str):
        super().__init__(
            f"Shareholder not found: {shareholder_id}",
            code="SHAREHOLDER_NOT_FOUND",
            context={"shareholder_id": shareholder_id},
        )


class SecurityNotFoundError(AppError):
    """Raised when a security (or one of the split roles) cannot be resolved."""

    status_code = 404

    def __init__(self, issuer_id: str, role: str, detail: str):
        super().__init__(
            f"{role} security not found for issuer {issuer_id}: {detail}",
            code="SECURITY_NOT_FOUND",
            context={"issuer_id": issuer_id, "role": role},
        )
        self.role = role


class ConfigurationMissingError(AppError):
    """Raised when an issuer has no split configuration for the trigger kind."""

    status_code = 409

    def __init__(self, issuer_id: str, trigger_kind: str):
        super().__init__(
            f"No split configuration for issuer {issuer_id} ({trigger_kind})",
            code="CONFIGURATION_MISSING",
            context={"issuer_id": issuer_id, "trigger_kind": trigger_kind},
        )


class InsufficientBalanceError(AppError):
    """Raised when a debit would take a holder's balance below zero."""

    status_code = 409

    def __init__(self, security_id: str, current: int, requested: int):
        super().__init__(
            f"Insufficient balance of {security_id}: requested {requested}, available {current}",
            code="INSUFFICIENT_BALANCE",
            context={"security_id": security_id, "current": current, "requested": requested},
        )
        self.security_id = security_id
        self.current = current
        self.requested = requested


class AuthorizedSharesExceededError(AppError):
    """Raised when a credit would exceed a security's authorized share count."""

    status_code = 409

    def __init__(self, security_id: str, authorized: int, outstanding: int, requested: int):
        super().__init__(
            f"Authorized shares exceeded for {security_id}: "
            f"authorized {authorized}, outstanding {outstanding}, requested {requested}",
            code="AUTHORIZED_SHARES_EXCEEDED",
            context={
                "security_id": security_id,
                "authorized": authorized,
                "outstanding": outstanding,
                "requested": requested,
            },
        )


class PostingFailureError(AppError):
    """Raised when the ledger store rejects a write; nothing was committed."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="POSTING_FAILURE")


class CacheRefreshError(AppError):
    """
    Raised by the snapshot cache when a refresh cannot be written.

    Never propagated past a posting: the ledger write already succeeded and
    the failure is reported as a warning on the result.
    """

    status_code = 500

    def __init__(self, security_id: str, as_of: str, reason: str):
        super().__init__(
            f"Position refresh failed for {security_id} as of {as_of}: {reason}",
            code="CACHE_REFRESH_FAILED",
            context={"security_id": security_id, "as_of": as_of},
        )
