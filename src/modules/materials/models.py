"""Learning material model."""

from enum import StrEnum

from sqlalchemy import JSON, BigInteger, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import TenantScopedModel


class MaterialType(StrEnum):
    DOCUMENT = "document"
    VIDEO = "video"
    IMAGE = "image"
    PRESENTATION = "presentation"


class LearningMaterial(TenantScopedModel):
    """Catalog entry for a file shared with students."""

    __tablename__ = "learning_materials"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    subject: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    grade_level: Mapped[str | None] = mapped_column(String(50), nullable=True)
    file_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MaterialType.DOCUMENT.value
    )
    file_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
