"""Service for Materials module."""

import logging

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import NotFoundError
from src.modules.materials.models import LearningMaterial
from src.modules.materials.schemas import (
    MaterialCreate,
    MaterialListResponse,
    MaterialResponse,
    MaterialUpdate,
)

logger = logging.getLogger(__name__)


class MaterialService:
    """Learning material catalog of one tenant."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_material(self, tenant_id: int, data: MaterialCreate) -> LearningMaterial:
        material = LearningMaterial(
            tenant_id=tenant_id,
            **data.model_dump(exclude={"file_type"}),
            file_type=data.file_type.value,
            download_count=0,
        )
        self.db.add(material)
        await self.db.commit()
        await self.db.refresh(material)
        return material

    async def get_material_by_id(self, tenant_id: int, material_id: int) -> LearningMaterial:
        result = await self.db.execute(
            select(LearningMaterial).where(
                LearningMaterial.id == material_id,
                LearningMaterial.tenant_id == tenant_id,
            )
        )
        material = result.scalar_one_or_none()
        if not material:
            raise NotFoundError("Learning material", material_id)
        return material

    async def list_materials(
        self,
        tenant_id: int,
        search: str | None = None,
        subject: str | None = None,
    ) -> list[LearningMaterial]:
        """Newest first. Search matches title, description or subject."""
        query = (
            select(LearningMaterial)
            .where(LearningMaterial.tenant_id == tenant_id)
            .order_by(LearningMaterial.created_at.desc(), LearningMaterial.id.desc())
        )
        if subject:
            query = query.where(LearningMaterial.subject == subject)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    LearningMaterial.title.ilike(pattern),
                    LearningMaterial.description.ilike(pattern),
                    LearningMaterial.subject.ilike(pattern),
                )
            )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_view(
        self,
        tenant_id: int | None,
        search: str | None = None,
        subject: str | None = None,
    ) -> MaterialListResponse:
        if tenant_id is None:
            return MaterialListResponse()
        materials = await self.list_materials(tenant_id, search=search, subject=subject)
        return MaterialListResponse(
            items=[MaterialResponse.model_validate(m) for m in materials],
            total_materials=len(materials),
            total_downloads=sum(m.download_count or 0 for m in materials),
            subjects=sorted({m.subject for m in materials if m.subject}),
        )

    async def update_material(
        self, tenant_id: int, material_id: int, data: MaterialUpdate
    ) -> LearningMaterial:
        material = await self.get_material_by_id(tenant_id, material_id)
        changes = data.model_dump(exclude_unset=True)
        for required in ("title", "file_type", "tags", "is_public"):
            if changes.get(required, "") is None:
                changes.pop(required)
        for field, value in changes.items():
            setattr(material, field, value)
        await self.db.commit()
        await self.db.refresh(material)
        return material

    async def delete_material(self, tenant_id: int, material_id: int) -> None:
        material = await self.get_material_by_id(tenant_id, material_id)
        await self.db.delete(material)
        await self.db.commit()

    async def register_download(self, tenant_id: int, material_id: int) -> LearningMaterial:
        """Increment download_count with a single UPDATE statement."""
        material = await self.get_material_by_id(tenant_id, material_id)
        await self.db.execute(
            update(LearningMaterial)
            .where(LearningMaterial.id == material.id)
            .values(download_count=LearningMaterial.download_count + 1)
        )
        await self.db.commit()
        await self.db.refresh(material)
        logger.info("Material id=%s downloaded (count=%s)", material.id, material.download_count)
        return material
