"""Tenant resolution and tenant management."""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import DuplicateError, NotFoundError, TenantNotFoundError
from src.core.tenants.models import Tenant, TenantRole, TenantUser
from src.core.tenants.schemas import TenantCreate, TenantUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantScope:
    """Resolved tenant of the calling user. Passed explicitly into every service call."""

    tenant_id: int
    user_id: int
    role: str

    def has_role(self, *roles: TenantRole) -> bool:
        return self.role in [r.value for r in roles]


class TenantService:
    """Maps users to tenants and manages tenant rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_membership(self, user_id: int) -> TenantUser | None:
        result = await self.db.execute(
            select(TenantUser)
            .join(Tenant, Tenant.id == TenantUser.tenant_id)
            .where(
                TenantUser.user_id == user_id,
                TenantUser.is_active == True,  # noqa: E712
                Tenant.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def resolve_scope(self, user_id: int) -> TenantScope:
        """
        Resolve the unique tenant scope of a user.

        Raises:
            TenantNotFoundError: no active membership exists.
        """
        membership = await self.get_membership(user_id)
        if membership is None:
            raise TenantNotFoundError(user_id)
        return TenantScope(
            tenant_id=membership.tenant_id,
            user_id=user_id,
            role=membership.role,
        )

    async def resolve_tenant_id(self, user_id: int) -> int:
        return (await self.resolve_scope(user_id)).tenant_id

    async def create_tenant(self, data: TenantCreate, owner_id: int) -> Tenant:
        """Create a tenant and make the caller its owner. A user belongs to one tenant only."""
        existing = await self.db.execute(
            select(TenantUser).where(TenantUser.user_id == owner_id)
        )
        if existing.scalar_one_or_none():
            raise DuplicateError("Tenant membership", "user_id", owner_id)

        if data.domain:
            taken = await self.db.execute(select(Tenant).where(Tenant.domain == data.domain))
            if taken.scalar_one_or_none():
                raise DuplicateError("Tenant", "domain", data.domain)

        tenant = Tenant(
            name=data.name,
            domain=data.domain,
            settings=data.settings,
            owner_id=owner_id,
            is_active=True,
        )
        self.db.add(tenant)
        await self.db.flush()

        self.db.add(
            TenantUser(
                tenant_id=tenant.id,
                user_id=owner_id,
                role=TenantRole.OWNER.value,
                is_active=True,
            )
        )
        await self.db.commit()
        await self.db.refresh(tenant)
        logger.info("Created tenant id=%s for user id=%s", tenant.id, owner_id)
        return tenant

    async def get_tenant(self, tenant_id: int) -> Tenant:
        result = await self.db.execute(select(Tenant).where(Tenant.id == tenant_id))
        tenant = result.scalar_one_or_none()
        if not tenant:
            raise NotFoundError("Tenant", tenant_id)
        return tenant

    async def update_tenant(self, tenant_id: int, data: TenantUpdate) -> Tenant:
        tenant = await self.get_tenant(tenant_id)
        if data.domain is not None and data.domain != tenant.domain:
            taken = await self.db.execute(
                select(Tenant).where(Tenant.domain == data.domain, Tenant.id != tenant_id)
            )
            if taken.scalar_one_or_none():
                raise DuplicateError("Tenant", "domain", data.domain)
            tenant.domain = data.domain
        if data.name is not None:
            tenant.name = data.name
        if data.settings is not None:
            tenant.settings = data.settings
        await self.db.commit()
        await self.db.refresh(tenant)
        return tenant

    async def add_member(
        self, tenant_id: int, user_id: int, role: TenantRole = TenantRole.TUTOR
    ) -> TenantUser:
        """Attach an existing user to a tenant."""
        existing = await self.db.execute(
            select(TenantUser).where(TenantUser.user_id == user_id)
        )
        if existing.scalar_one_or_none():
            raise DuplicateError("Tenant membership", "user_id", user_id)
        membership = TenantUser(
            tenant_id=tenant_id, user_id=user_id, role=role.value, is_active=True
        )
        self.db.add(membership)
        await self.db.commit()
        await self.db.refresh(membership)
        return membership
