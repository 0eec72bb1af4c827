"""Administrative management of per-issuer split ratios."""

from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Optional, Union

from captable.core.timezone import now_eastern
from captable.core.exceptions import ValidationError, ConfigurationMissingError
from captable.domain.models import SplitConfiguration, SplitSecurityType, TransactionKind
from captable.repositories.protocols import SplitConfigRepository

# Matches the Numeric(18, 8) ratio columns
RATIO_PLACES = 8
RATIO_QUANTUM = Decimal(1).scaleb(-RATIO_PLACES)
MAX_RATIO = Decimal(10) ** (18 - RATIO_PLACES)


def parse_ratio(name: str, value: Union[Decimal, str, int, float]) -> Decimal:
    """
    Parse a split ratio given as a decimal ("0.5") or a fraction ("1/3").

    Fractions are rounded down to RATIO_PLACES places, so a stored ratio never
    credits more shares than the fraction would. Decimals are taken as
    written and rejected when they carry more places than can be stored.
    """
    text = str(value).strip()
    try:
        if "/" in text:
            numerator, _, denominator = text.partition("/")
            divisor = Decimal(denominator.strip())
            if divisor == 0:
                raise ValidationError(f"{name} has a zero denominator: {text!r}")
            ratio = (Decimal(numerator.strip()) / divisor).quantize(RATIO_QUANTUM, rounding=ROUND_FLOOR)
        else:
            ratio = Decimal(text)
            if ratio.is_finite() and ratio != ratio.quantize(RATIO_QUANTUM, rounding=ROUND_FLOOR):
                raise ValidationError(f"{name} allows at most {RATIO_PLACES} decimal places, got {text}")
    except InvalidOperation:
        raise ValidationError(f"{name} must be a number or a fraction, got {value!r}")

    if not ratio.is_finite() or ratio < 0 or ratio >= MAX_RATIO:
        raise ValidationError(f"{name} must be a non-negative number below {MAX_RATIO}, got {value}")
    return ratio


class SplitConfigService:
    """Creates, replaces and reads split configurations."""

    def __init__(self, split_config_repo: SplitConfigRepository):
        self._repo = split_config_repo

    def configure(
        self,
        issuer_id: str,
        class_a_ratio: Union[Decimal, str, int, float],
        secondary_ratio: Union[Decimal, str, int, float],
        secondary_type: SplitSecurityType = SplitSecurityType.WARRANT,
        trigger_kind: TransactionKind = TransactionKind.WITHDRAWAL,
    ) -> SplitConfiguration:
        """Create or replace the configuration for (issuer, trigger kind)."""
        if not issuer_id:
            raise ValidationError("issuer_id is required")
        config = SplitConfiguration(
            issuer_id=issuer_id,
            trigger_kind=trigger_kind,
            class_a_ratio=parse_ratio("class_a_ratio", class_a_ratio),
            secondary_ratio=parse_ratio("secondary_ratio", secondary_ratio),
            secondary_type=secondary_type,
            updated_at_est=now_eastern(),
        )
        return self._repo.upsert(config)

    def find(
        self,
        issuer_id: str,
        trigger_kind: TransactionKind = TransactionKind.WITHDRAWAL,
    ) -> Optional[SplitConfiguration]:
        return self._repo.get(issuer_id, trigger_kind)

    def get(
        self,
        issuer_id: str,
        trigger_kind: TransactionKind = TransactionKind.WITHDRAWAL,
    ) -> SplitConfiguration:
        """Get the configuration or raise ConfigurationMissingError."""
        config = self._repo.get(issuer_id, trigger_kind)
        if config is None:
            raise ConfigurationMissingError(issuer_id, trigger_kind.value)
        return config
