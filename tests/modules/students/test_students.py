import pytest
from httpx import AsyncClient
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import NotFoundError
from src.modules.students.schemas import StudentCreate, StudentUpdate
from src.modules.students.service import StudentService


class TestStudentSchemas:
    def test_phone_normalized(self):
        data = StudentCreate(name="Andi", phone="0812-3456-7890", parent_phone="6281234567891")
        assert data.phone == "+6281234567890"
        assert data.parent_phone == "+6281234567891"

    def test_invalid_phone(self):
        with pytest.raises(PydanticValidationError):
            StudentCreate(name="Andi", phone="12345")

    def test_empty_phone_is_none(self):
        assert StudentCreate(name="Andi", phone="").phone is None


class TestStudentService:
    """Tests for StudentService."""

    async def test_create_student(self, db_session: AsyncSession, owner: dict):
        service = StudentService(db_session)

        student = await service.create_student(
            owner["tenant_id"],
            StudentCreate(name="Andi Wijaya", subject="Matematika", grade="SMA 11"),
        )

        assert student.id is not None
        assert student.tenant_id == owner["tenant_id"]
        assert student.is_active is True
        assert student.created_at is not None

    async def test_get_student_of_other_tenant(
        self, db_session: AsyncSession, owner: dict, make_owner
    ):
        other = await make_owner(email="other@example.com", tenant_name="Bimbel Lain")
        service = StudentService(db_session)
        student = await service.create_student(other["tenant_id"], StudentCreate(name="Rina"))

        with pytest.raises(NotFoundError):
            await service.get_student_by_id(owner["tenant_id"], student.id)

    async def test_list_students_search_and_inactive(self, db_session: AsyncSession, owner: dict):
        service = StudentService(db_session)
        tenant_id = owner["tenant_id"]
        andi = await service.create_student(
            tenant_id, StudentCreate(name="Andi Wijaya", subject="Matematika")
        )
        await service.create_student(tenant_id, StudentCreate(name="Siti Rahma", subject="Fisika"))
        await service.deactivate_student(tenant_id, andi.id)

        students, total = await service.list_students(tenant_id)
        assert total == 1
        assert students[0].name == "Siti Rahma"

        students, total = await service.list_students(tenant_id, include_inactive=True)
        assert total == 2

        students, total = await service.list_students(
            tenant_id, search="matem", include_inactive=True
        )
        assert [s.name for s in students] == ["Andi Wijaya"]

    async def test_update_student(self, db_session: AsyncSession, owner: dict):
        service = StudentService(db_session)
        student = await service.create_student(
            owner["tenant_id"], StudentCreate(name="Andi", subject="Matematika")
        )

        updated = await service.update_student(
            owner["tenant_id"], student.id, StudentUpdate(subject="Fisika")
        )

        assert updated.subject == "Fisika"
        assert updated.name == "Andi"

    async def test_update_ignores_null_name(self, db_session: AsyncSession, owner: dict):
        service = StudentService(db_session)
        student = await service.create_student(
            owner["tenant_id"], StudentCreate(name="Andi", subject="Matematika")
        )

        updated = await service.update_student(
            owner["tenant_id"], student.id, StudentUpdate(name=None, subject=None)
        )

        assert updated.name == "Andi"
        assert updated.subject is None

    async def test_ensure_active_student_rejects_inactive(
        self, db_session: AsyncSession, owner: dict
    ):
        service = StudentService(db_session)
        student = await service.create_student(owner["tenant_id"], StudentCreate(name="Andi"))
        await service.deactivate_student(owner["tenant_id"], student.id)

        assert await service.ensure_active_student(owner["tenant_id"], None) is None
        with pytest.raises(NotFoundError):
            await service.ensure_active_student(owner["tenant_id"], student.id)


class TestStudentEndpoints:
    async def test_create_and_list(self, client: AsyncClient, owner: dict):
        response = await client.post(
            "/api/v1/students",
            json={"name": "Andi Wijaya", "subject": "Matematika", "phone": "081234567890"},
            headers=owner["headers"],
        )
        assert response.status_code == 201
        created = response.json()["data"]
        assert created["phone"] == "+6281234567890"

        response = await client.get("/api/v1/students", headers=owner["headers"])
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 1
        assert data["items"][0]["id"] == created["id"]

    async def test_list_without_tenant_is_empty(self, client: AsyncClient, loner: dict):
        response = await client.get("/api/v1/students", headers=loner["headers"])

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["items"] == []
        assert data["total"] == 0

    async def test_create_without_tenant_is_not_found(self, client: AsyncClient, loner: dict):
        response = await client.post(
            "/api/v1/students", json={"name": "Andi"}, headers=loner["headers"]
        )
        assert response.status_code == 404

    async def test_deactivate(self, client: AsyncClient, owner: dict):
        response = await client.post(
            "/api/v1/students", json={"name": "Andi"}, headers=owner["headers"]
        )
        student_id = response.json()["data"]["id"]

        response = await client.delete(f"/api/v1/students/{student_id}", headers=owner["headers"])

        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False

    async def test_patch_null_name(self, client: AsyncClient, owner: dict):
        response = await client.post(
            "/api/v1/students", json={"name": "Andi"}, headers=owner["headers"]
        )
        student_id = response.json()["data"]["id"]

        response = await client.patch(
            f"/api/v1/students/{student_id}",
            json={"name": None, "grade": "SMA 12"},
            headers=owner["headers"],
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Andi"
        assert data["grade"] == "SMA 12"

    async def test_tenant_isolation(self, client: AsyncClient, owner: dict, make_owner):
        other = await make_owner(email="other@example.com", tenant_name="Bimbel Lain")
        response = await client.post(
            "/api/v1/students", json={"name": "Rina"}, headers=other["headers"]
        )
        student_id = response.json()["data"]["id"]

        response = await client.get(f"/api/v1/students/{student_id}", headers=owner["headers"])
        assert response.status_code == 404

        response = await client.get("/api/v1/students", headers=owner["headers"])
        assert response.json()["data"]["total"] == 0
