"""DashboardClient against the application over ASGI transport."""

from datetime import date

import httpx
import pytest
from httpx import AsyncClient

from src.client.dashboard import DashboardClient, ScheduleDayView


class TestDashboardClient:
    async def test_login_and_reads(self, client: AsyncClient, owner: dict):
        api = DashboardClient(client=client)

        data = await api.login("owner@example.com", "Password123")
        assert api.token == data["access_token"]

        dashboard = await api.get_dashboard()
        assert dashboard["active_students_count"] == 0

        report = await api.get_report("week", months=2)
        assert report["period"] == "week"
        assert len(report["monthly_stats"]) == 2

        day = await api.get_day_schedule(date(2026, 10, 19))
        assert day["day"] == "2026-10-19"
        assert day["items"] == []

        stats = await api.get_schedule_stats()
        assert stats["week_sessions"] == 0

    async def test_unauthenticated_request_raises(self, client: AsyncClient):
        api = DashboardClient(client=client)

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await api.get_dashboard()

        assert exc_info.value.response.status_code == 401

    async def test_view_loads_from_api(self, client: AsyncClient, owner: dict):
        api = DashboardClient(client=client, token=owner["token"])
        view = ScheduleDayView(api, day=date(2026, 10, 19))

        assert await view.load() is True
        assert view.data["date_label"] == "Senin, 19 Oktober 2026"

    async def test_view_without_token_shows_no_data(self, client: AsyncClient):
        view = ScheduleDayView(DashboardClient(client=client), day=date(2026, 10, 19))

        assert await view.load() is True
        assert view.data is None
