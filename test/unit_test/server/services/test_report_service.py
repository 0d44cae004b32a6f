"""
Unit tests for the admin dashboard and workload reports.
"""

from __future__ import annotations

import pytest

from legal_aid.core.models.domain.enums import CaseCategory, CaseStatus
from legal_aid.server.services.reports import ReportService, success_rate


@pytest.mark.parametrize(
    ("resolved", "total", "expected"),
    [(0, 0, 0.0), (1, 3, 33.33), (2, 2, 100.0), (0, 5, 0.0)],
)
def test_success_rate(resolved: int, total: int, expected: float):
    assert success_rate(resolved, total) == expected


class TestReportService:
    @pytest.mark.asyncio
    async def test_dashboard_counts(self, repos, factory):
        office = await factory.office()
        await factory.admin()
        await factory.coordinator(office)
        client = await factory.client(office)
        await factory.lawyer(office)
        await factory.case(office, client=client, status=CaseStatus.RESOLVED)
        await factory.case(office, status=CaseStatus.PENDING, category=CaseCategory.LABOR)
        await factory.case(office, status=CaseStatus.ACTIVE)
        await factory.case(office, status=CaseStatus.RESOLVED)
        await repos.activities.record("CREATE_USER", None, {"user_id": client.id})
        await repos.commit()

        stats = await ReportService(repos).dashboard()

        assert stats.users.total == 4
        assert (stats.users.lawyers, stats.users.coordinators, stats.users.clients) == (1, 1, 1)
        assert stats.cases.total == 4
        assert stats.cases.resolved == 2
        assert stats.cases.by_category == {"FAMILY": 3, "LABOR": 1}
        assert stats.success_rate == 50.0
        assert stats.recent_activities[0].details == {"user_id": client.id}

    @pytest.mark.asyncio
    async def test_lawyer_workload_utilization(self, repos, factory):
        office = await factory.office()
        await factory.lawyer(office, max_caseload=4, current_caseload=1)

        [workload] = await ReportService(repos).lawyer_workload()

        assert workload.utilization == 25.0
        assert workload.active_assignments == 0

    @pytest.mark.asyncio
    async def test_coordinator_workload_counts_pending(self, repos, factory):
        office = await factory.office()
        busy = await factory.coordinator(office)
        await factory.coordinator(office)
        await factory.pending_coordinator_assignment(await factory.case(office), busy)

        rows = await ReportService(repos).coordinator_workload()

        assert [(row.coordinator.id, row.pending_assignments) for row in rows][0] == (busy.id, 1)
        assert rows[1].pending_assignments == 0
