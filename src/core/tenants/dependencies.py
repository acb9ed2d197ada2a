import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.auth.dependencies import get_current_user
from src.core.auth.models import User
from src.core.database import get_db
from src.core.exceptions import AuthorizationError, TenantNotFoundError
from src.core.tenants.models import TenantRole
from src.core.tenants.service import TenantScope, TenantService

logger = logging.getLogger(__name__)


async def get_tenant_scope(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TenantScope:
    """Tenant of the current user; 404 when the user has no membership."""
    return await TenantService(db).resolve_scope(current_user.id)


async def get_optional_tenant_scope(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TenantScope | None:
    """
    Tenant of the current user, or None.

    Read views use this so that a user without membership sees an empty
    state instead of an error.
    """
    try:
        return await TenantService(db).resolve_scope(current_user.id)
    except TenantNotFoundError:
        logger.info("No tenant membership for user id=%s, rendering empty state", current_user.id)
        return None


def require_tenant_roles(*roles: TenantRole):
    """
    Dependency factory requiring one of the given roles inside the tenant.

    Usage:
        @router.delete("/{student_id}")
        async def delete_student(
            scope: TenantScope = Depends(require_tenant_roles(TenantRole.OWNER))
        ):
            ...
    """

    async def role_checker(
        scope: TenantScope = Depends(get_tenant_scope),
    ) -> TenantScope:
        if not scope.has_role(*roles):
            allowed = ", ".join(r.value for r in roles)
            raise AuthorizationError(f"Required role: {allowed}")
        return scope

    return role_checker


Scope = Annotated[TenantScope, Depends(get_tenant_scope)]
OptionalScope = Annotated[TenantScope | None, Depends(get_optional_tenant_scope)]
ManagerScope = Annotated[
    TenantScope, Depends(require_tenant_roles(TenantRole.OWNER, TenantRole.ADMIN))
]
