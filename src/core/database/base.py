from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.types import TypeDecorator

from src.core.config import settings

# BigInteger for PostgreSQL, Integer for SQLite (required for autoincrement)
BigIntPK = BigInteger().with_variant(Integer, "sqlite")


class LocalDateTime(TypeDecorator):
    """
    Timestamp held in the business timezone.

    Naive input is business-local wall-clock time; aware input is converted.
    PostgreSQL stores timestamptz, SQLite stores the local wall clock.
    Loaded values are always aware and in the business timezone.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    @staticmethod
    def _tz() -> ZoneInfo:
        return ZoneInfo(settings.timezone)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        tz = self._tz()
        value = value.replace(tzinfo=tz) if value.tzinfo is None else value.astimezone(tz)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        tz = self._tz()
        return value.replace(tzinfo=tz) if value.tzinfo is None else value.astimezone(tz)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class BaseModel(Base):
    """Base model with common fields: id, created_at, updated_at."""

    __abstract__ = True

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class TenantScopedModel(BaseModel):
    """Business row owned by exactly one tenant. Every query must filter on tenant_id."""

    __abstract__ = True

    @declared_attr
    def tenant_id(cls) -> Mapped[int]:
        return mapped_column(
            BigIntPK, ForeignKey("tenants.id"), nullable=False, index=True
        )
