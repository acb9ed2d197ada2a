"""Tenant (tutoring business) and membership models."""

from enum import StrEnum
from typing import Any

from sqlalchemy import JSON, BigInteger, Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database.base import BaseModel


class TenantRole(StrEnum):
    """Role of a user inside a tenant."""

    OWNER = "owner"
    ADMIN = "admin"
    TUTOR = "tutor"


class Tenant(BaseModel):
    """An isolated tutoring business. All business rows are partitioned by tenant."""

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    domain: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    settings: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    owner_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=True
    )

    members: Mapped[list["TenantUser"]] = relationship(
        "TenantUser", back_populates="tenant"
    )


class TenantUser(BaseModel):
    """Membership row mapping a user to its tenant."""

    __tablename__ = "tenant_users"
    __table_args__ = (UniqueConstraint("user_id", name="uq_tenant_users_user_id"),)

    tenant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tenants.id"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TenantRole.TUTOR.value
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="members")

    def has_role(self, *roles: TenantRole) -> bool:
        return self.role in [r.value for r in roles]
