"""SQLAlchemy implementation of SplitConfigRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from captable.domain.models import SplitConfiguration, TransactionKind
from captable.repositories.sqlalchemy.orm_models import SplitConfigurationORM


class SqlAlchemySplitConfigRepository:
    """SQLAlchemy-backed split configuration repository."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, issuer_id: str, trigger_kind: TransactionKind) -> Optional[SplitConfiguration]:
        """Retrieve the configuration for an issuer and trigger kind."""
        orm_cfg = self._db.query(SplitConfigurationORM).filter(
            SplitConfigurationORM.issuer_id == issuer_id,
            SplitConfigurationORM.trigger_kind == trigger_kind,
        ).first()
        return self._to_domain(orm_cfg) if orm_cfg else None

    def upsert(self, config: SplitConfiguration) -> SplitConfiguration:
        """Insert or replace the configuration for its issuer and trigger kind."""
        orm_cfg = self._db.query(SplitConfigurationORM).filter(
            SplitConfigurationORM.issuer_id == config.issuer_id,
            SplitConfigurationORM.trigger_kind == config.trigger_kind,
        ).first()

        if orm_cfg:
            orm_cfg.class_a_ratio = config.class_a_ratio
            orm_cfg.secondary_ratio = config.secondary_ratio
            orm_cfg.secondary_type = config.secondary_type
            orm_cfg.updated_at_est = config.updated_at_est
        else:
            orm_cfg = SplitConfigurationORM(
                issuer_id=config.issuer_id,
                trigger_kind=config.trigger_kind,
                class_a_ratio=config.class_a_ratio,
                secondary_ratio=config.secondary_ratio,
                secondary_type=config.secondary_type,
                updated_at_est=config.updated_at_est,
            )
            self._db.add(orm_cfg)

        self._db.commit()
        self._db.refresh(orm_cfg)
        return self._to_domain(orm_cfg)

    @staticmethod
    def _to_domain(orm: SplitConfigurationORM) -> SplitConfiguration:
        return SplitConfiguration(
            issuer_id=orm.issuer_id,
            trigger_kind=orm.trigger_kind,
            class_a_ratio=Decimal(str(orm.class_a_ratio)),
            secondary_ratio=Decimal(str(orm.secondary_ratio)),
            secondary_type=orm.secondary_type,
            updated_at_est=orm.updated_at_est,
        )
