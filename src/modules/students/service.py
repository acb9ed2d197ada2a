"""Service for Students module."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import NotFoundError
from src.modules.students.models import Student
from src.modules.students.schemas import StudentCreate, StudentUpdate


class StudentService:
    """Service for managing students of one tenant."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_student(self, tenant_id: int, data: StudentCreate) -> Student:
        """Create a new student."""
        student = Student(
            tenant_id=tenant_id,
            is_active=True,
            **data.model_dump(),
        )
        self.db.add(student)
        await self.db.commit()
        await self.db.refresh(student)
        return student

    async def get_student_by_id(
        self, tenant_id: int, student_id: int, include_inactive: bool = True
    ) -> Student:
        """Get student by ID inside the tenant. Other tenants' students are reported as not found."""
        query = select(Student).where(
            Student.id == student_id,
            Student.tenant_id == tenant_id,
        )
        if not include_inactive:
            query = query.where(Student.is_active == True)  # noqa: E712
        result = await self.db.execute(query)
        student = result.scalar_one_or_none()
        if not student:
            raise NotFoundError("Student", student_id)
        return student

    async def list_students(
        self,
        tenant_id: int,
        search: str | None = None,
        include_inactive: bool = False,
        page: int = 1,
        limit: int = 100,
    ) -> tuple[list[Student], int]:
        """List students, newest first. Search matches name, subject or email."""
        query = (
            select(Student)
            .where(Student.tenant_id == tenant_id)
            .order_by(Student.created_at.desc(), Student.id.desc())
        )

        if not include_inactive:
            query = query.where(Student.is_active == True)  # noqa: E712
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Student.name.ilike(pattern),
                    Student.subject.ilike(pattern),
                    Student.email.ilike(pattern),
                )
            )

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        query = query.offset((page - 1) * limit).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def update_student(
        self, tenant_id: int, student_id: int, data: StudentUpdate
    ) -> Student:
        """Update a student. Only fields present in the request are changed."""
        student = await self.get_student_by_id(tenant_id, student_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("name", "") is None:
            changes.pop("name")
        for field, value in changes.items():
            setattr(student, field, value)
        await self.db.commit()
        await self.db.refresh(student)
        return student

    async def deactivate_student(self, tenant_id: int, student_id: int) -> Student:
        """Soft delete: the row stays so payments and schedules keep their reference."""
        student = await self.get_student_by_id(tenant_id, student_id)
        student.is_active = False
        await self.db.commit()
        await self.db.refresh(student)
        return student

    async def ensure_active_student(self, tenant_id: int, student_id: int | None) -> Student | None:
        """Validate a student reference supplied by another module's form."""
        if student_id is None:
            return None
        return await self.get_student_by_id(tenant_id, student_id, include_inactive=False)
