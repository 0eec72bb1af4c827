"""Core utilities and shared functionality."""

from captable.core.timezone import (
    now_eastern,
    today_eastern,
    to_eastern,
    parse_transaction_date,
    EASTERN_TZ,
)
from captable.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ShareholderNotFoundError,
    SecurityNotFoundError,
    ConfigurationMissingError,
    InsufficientBalanceError,
    AuthorizedSharesExceededError,
    PostingFailureError,
    CacheRefreshError,
)

__all__ = [
    "now_eastern",
    "today_eastern",
    "to_eastern",
    "parse_transaction_date",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ShareholderNotFoundError",
    "SecurityNotFoundError",
    "ConfigurationMissingError",
    "InsufficientBalanceError",
    "AuthorizedSharesExceededError",
    "PostingFailureError",
    "CacheRefreshError",
]
