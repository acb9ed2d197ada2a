"""Performance tests for Dashboard Service."""
import asyncio
import time

from sqlalchemy.ext.asyncio import AsyncSession

from src.modules.dashboard.service import DashboardService
from src.modules.reports.fetcher import RowFetcher


class TestDashboardPerformance:
    """Performance tests for dashboard service."""

    async def test_dashboard_query_performance(self, db_session: AsyncSession, owner: dict):
        """Test that dashboard completes in reasonable time."""
        service = DashboardService(db_session)

        start_time = time.time()
        result = await service.get_summary(owner["tenant_id"])
        elapsed = time.time() - start_time

        # Should complete quickly even with empty DB
        assert elapsed < 1.0, f"Dashboard took {elapsed:.3f}s, expected < 1.0s"
        assert result.active_students_count == 0

    async def test_fetches_run_concurrently(
        self, db_session: AsyncSession, owner: dict, monkeypatch
    ):
        """All four fetches are in flight before any of them completes."""
        original_fetch = RowFetcher.fetch
        in_flight = 0
        peak = 0

        async def slow_fetch(self, tenant_id, kind, **kwargs):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.05)
            try:
                return await original_fetch(self, tenant_id, kind, **kwargs)
            finally:
                in_flight -= 1

        monkeypatch.setattr(RowFetcher, "fetch", slow_fetch)

        await DashboardService(db_session).get_summary(owner["tenant_id"])

        assert peak == 4
