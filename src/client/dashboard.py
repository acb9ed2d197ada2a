"""Async client for the tutoring dashboard API and the view state built on it."""

import logging
from datetime import date, timedelta
from typing import Any

import httpx

from src.client.gate import ContextGate

logger = logging.getLogger(__name__)


class DashboardClient:
    """Thin wrapper over the `/api/v1` endpoints the views read."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
        api_prefix: str = "/api/v1",
    ):
        self._client = client or httpx.AsyncClient(base_url=base_url)
        self.api_prefix = api_prefix
        self.token = token

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = await self._client.get(
            f"{self.api_prefix}{path}", params=params, headers=self._headers()
        )
        response.raise_for_status()
        return response.json()["data"]

    async def login(self, email: str, password: str) -> dict:
        response = await self._client.post(
            f"{self.api_prefix}/auth/login", json={"email": email, "password": password}
        )
        response.raise_for_status()
        data = response.json()["data"]
        self.token = data["access_token"]
        return data

    async def get_dashboard(self) -> dict:
        return await self._get("/dashboard")

    async def get_report(
        self, period: str = "month", months: int | None = None, limit: int | None = None
    ) -> dict:
        params: dict[str, Any] = {"period": period}
        if months is not None:
            params["months"] = months
        if limit is not None:
            params["limit"] = limit
        return await self._get("/reports/summary", params)

    async def get_day_schedule(self, day: date) -> dict:
        return await self._get("/schedules", {"date": day.isoformat()})

    async def get_schedule_stats(self) -> dict:
        return await self._get("/schedules/stats")


class _GatedView:
    """Display state (context, data, loading) committed only for the latest context."""

    name = "view"

    def __init__(self, client: DashboardClient):
        self.client = client
        self.gate = ContextGate(self.name)
        self.context: Any = None
        self.data: dict | None = None
        self.loading = False

    async def _load(self, context: Any, fetch) -> bool:
        """Returns True when the response was applied, False when it was stale."""
        self.context = context
        self.loading = True
        ticket = self.gate.activate(context)
        try:
            data = await fetch()
        except httpx.HTTPError as e:
            # Fetch failures render the "no data" state
            logger.warning("Loading %s for %r failed: %s", self.name, context, e)
            data = None
        if not self.gate.is_current(ticket):
            logger.debug("Dropping stale %s response for %r", self.name, context)
            return False
        self.data = data
        self.loading = False
        return True


class ReportView(_GatedView):
    name = "reports"

    async def load(self, period: str = "month", months: int | None = None) -> bool:
        context = (self.client.token, period, months)
        return await self._load(context, lambda: self.client.get_report(period, months))


class ScheduleDayView(_GatedView):
    name = "schedule-day"

    def __init__(self, client: DashboardClient, day: date | None = None):
        super().__init__(client)
        self.day = day or date.today()

    async def load(self, day: date | None = None) -> bool:
        if day is not None:
            self.day = day
        target = self.day
        context = (self.client.token, target)
        return await self._load(context, lambda: self.client.get_day_schedule(target))

    async def next_day(self) -> bool:
        return await self.load(self.day + timedelta(days=1))

    async def previous_day(self) -> bool:
        return await self.load(self.day - timedelta(days=1))
