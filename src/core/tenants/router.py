from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.auth.dependencies import CurrentUser
from src.core.database import get_db
from src.core.tenants.dependencies import ManagerScope, Scope
from src.core.tenants.schemas import TenantCreate, TenantResponse, TenantUpdate
from src.core.tenants.service import TenantService
from src.shared.schemas import ApiResponse

router = APIRouter(prefix="/tenants", tags=["Tenants"])


def _to_response(tenant, role: str | None) -> TenantResponse:
    response = TenantResponse.model_validate(tenant)
    response.role = role
    return response


@router.post(
    "",
    response_model=ApiResponse[TenantResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_tenant(
    data: TenantCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """Create a tutoring business; the caller becomes its owner."""
    tenant = await TenantService(db).create_tenant(data, owner_id=current_user.id)
    return ApiResponse(
        data=_to_response(tenant, "owner"),
        message="Tenant created successfully",
    )


@router.get("/me", response_model=ApiResponse[TenantResponse])
async def get_my_tenant(scope: Scope, db: AsyncSession = Depends(get_db)):
    """Tenant of the current user."""
    tenant = await TenantService(db).get_tenant(scope.tenant_id)
    return ApiResponse(data=_to_response(tenant, scope.role))


@router.patch("/me", response_model=ApiResponse[TenantResponse])
async def update_my_tenant(
    data: TenantUpdate,
    scope: ManagerScope,
    db: AsyncSession = Depends(get_db),
):
    """Rename the tenant or change its settings. Owner/admin only."""
    tenant = await TenantService(db).update_tenant(scope.tenant_id, data)
    return ApiResponse(
        data=_to_response(tenant, scope.role),
        message="Tenant updated successfully",
    )
