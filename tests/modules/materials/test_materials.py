from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.modules.materials.schemas import MaterialCreate, MaterialUpdate, split_tags
from src.modules.materials.service import MaterialService


class TestTags:
    def test_split_tags(self):
        assert split_tags("aljabar, kelas 10 ,, ") == ["aljabar", "kelas 10"]
        assert split_tags(["  ujian", ""]) == ["ujian"]
        assert split_tags(None) == []


class TestMaterialService:
    async def test_create_and_list_view(self, db_session: AsyncSession, owner: dict):
        service = MaterialService(db_session)
        await service.create_material(
            owner["tenant_id"],
            MaterialCreate(title="Rumus Fisika Dasar", subject="Fisika", tags="rumus, sma"),
        )
        await service.create_material(
            owner["tenant_id"],
            MaterialCreate(title="Latihan Aljabar", subject="Matematika", file_type="presentation"),
        )

        view = await service.list_view(owner["tenant_id"])
        assert view.total_materials == 2
        assert view.total_downloads == 0
        assert view.subjects == ["Fisika", "Matematika"]

        view = await service.list_view(owner["tenant_id"], search="aljabar")
        assert [m.title for m in view.items] == ["Latihan Aljabar"]
        assert view.items[0].file_type == "presentation"

    async def test_register_download(self, db_session: AsyncSession, owner: dict):
        service = MaterialService(db_session)
        material = await service.create_material(
            owner["tenant_id"], MaterialCreate(title="Soal UTBK")
        )

        await service.register_download(owner["tenant_id"], material.id)
        material = await service.register_download(owner["tenant_id"], material.id)

        assert material.download_count == 2

    async def test_update_material(self, db_session: AsyncSession, owner: dict):
        service = MaterialService(db_session)
        material = await service.create_material(
            owner["tenant_id"], MaterialCreate(title="Soal UTBK", tags=["utbk"])
        )

        updated = await service.update_material(
            owner["tenant_id"], material.id, MaterialUpdate(title=None, is_public=True, tags=None)
        )

        assert updated.title == "Soal UTBK"
        assert updated.is_public is True
        assert updated.tags == ["utbk"]


class TestMaterialEndpoints:
    async def test_download_endpoint(self, client: AsyncClient, owner: dict):
        response = await client.post(
            "/api/v1/materials",
            json={"title": "Kamus Istilah Kimia", "subject": "Kimia", "tags": "kimia,istilah"},
            headers=owner["headers"],
        )
        assert response.status_code == 201
        material = response.json()["data"]
        assert material["tags"] == ["kimia", "istilah"]

        response = await client.post(
            f"/api/v1/materials/{material['id']}/download", headers=owner["headers"]
        )
        assert response.status_code == 200
        assert response.json()["data"]["download_count"] == 1

    async def test_other_tenant_material_not_found(
        self, client: AsyncClient, owner: dict, make_owner
    ):
        other = await make_owner(email="other@example.com", tenant_name="Bimbel Lain")
        response = await client.post(
            "/api/v1/materials", json={"title": "Rahasia"}, headers=other["headers"]
        )
        material_id = response.json()["data"]["id"]

        response = await client.post(
            f"/api/v1/materials/{material_id}/download", headers=owner["headers"]
        )
        assert response.status_code == 404

    async def test_without_tenant(self, client: AsyncClient, loner: dict):
        response = await client.get("/api/v1/materials", headers=loner["headers"])
        assert response.status_code == 200
        assert response.json()["data"]["total_materials"] == 0
