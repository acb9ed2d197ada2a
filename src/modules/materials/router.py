"""API endpoints for Materials module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.core.tenants.dependencies import OptionalScope, Scope
from src.modules.materials.schemas import (
    MaterialCreate,
    MaterialListResponse,
    MaterialResponse,
    MaterialUpdate,
)
from src.modules.materials.service import MaterialService
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/materials", tags=["Materials"])


@router.post(
    "",
    response_model=ApiResponse[MaterialResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_material(
    data: MaterialCreate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Add a learning material to the catalog."""
    material = await MaterialService(db).create_material(scope.tenant_id, data)
    return ApiResponse(
        message="Material created successfully",
        data=MaterialResponse.model_validate(material),
    )


@router.get(
    "",
    response_model=ApiResponse[MaterialListResponse],
)
async def list_materials(
    scope: OptionalScope,
    search: str | None = Query(None, description="Search by title, description or subject"),
    subject: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    view = await MaterialService(db).list_view(
        scope.tenant_id if scope else None, search=search, subject=subject
    )
    return ApiResponse(data=view)


@router.get(
    "/{material_id}",
    response_model=ApiResponse[MaterialResponse],
)
async def get_material(
    material_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    material = await MaterialService(db).get_material_by_id(scope.tenant_id, material_id)
    return ApiResponse(data=MaterialResponse.model_validate(material))


@router.patch(
    "/{material_id}",
    response_model=ApiResponse[MaterialResponse],
)
async def update_material(
    material_id: int,
    data: MaterialUpdate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    material = await MaterialService(db).update_material(scope.tenant_id, material_id, data)
    return ApiResponse(
        message="Material updated successfully",
        data=MaterialResponse.model_validate(material),
    )


@router.delete(
    "/{material_id}",
    response_model=ApiResponse[None],
)
async def delete_material(
    material_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    await MaterialService(db).delete_material(scope.tenant_id, material_id)
    return ApiResponse(message="Material deleted successfully", data=None)


@router.post(
    "/{material_id}/download",
    response_model=ApiResponse[MaterialResponse],
)
async def download_material(
    material_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Count a download and return the material (with its file_url)."""
    material = await MaterialService(db).register_download(scope.tenant_id, material_id)
    return ApiResponse(data=MaterialResponse.model_validate(material))
