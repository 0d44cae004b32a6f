"""
Reporting service for the admin dashboard and workload views.
"""

from __future__ import annotations

from typing import List

from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.models.domain.enums import CaseStatus, UserRole
from legal_aid.core.models.io.reports import (
    ActivityRead,
    CaseCounts,
    CoordinatorWorkload,
    DashboardStats,
    LawyerWorkload,
    UserCounts,
)
from legal_aid.core.models.io.users import UserRead


def success_rate(resolved: int, total: int) -> float:
    """Resolved cases as a percentage of all cases, rounded to 2 decimals."""
    if total <= 0:
        return 0.0
    return round(resolved / total * 100, 2)


class ReportService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def dashboard(self) -> DashboardStats:
        by_role = await self.repos.users.count_by_role()
        by_status = await self.repos.cases.count_by_status()
        total_cases = sum(by_status.values())
        resolved = by_status.get(CaseStatus.RESOLVED.value, 0)

        recent = []
        for activity in await self.repos.activities.recent(10):
            recent.append(
                ActivityRead(
                    id=activity.id,
                    user_id=activity.user_id,
                    action=activity.action,
                    details=activity.get_details_dict(),
                    created_at=activity.created_at,
                )
            )

        return DashboardStats(
            users=UserCounts(
                total=sum(by_role.values()),
                lawyers=by_role.get(UserRole.LAWYER.value, 0),
                coordinators=by_role.get(UserRole.COORDINATOR.value, 0),
                clients=by_role.get(UserRole.CLIENT.value, 0),
            ),
            cases=CaseCounts(
                total=total_cases,
                resolved=resolved,
                by_status=by_status,
                by_category=await self.repos.cases.count_by_category(),
            ),
            documents=await self.repos.documents.count_by_status(),
            recent_activities=recent,
            success_rate=success_rate(resolved, total_cases),
        )

    async def lawyer_workload(self) -> List[LawyerWorkload]:
        active = await self.repos.assignments.count_active_by_assignee(UserRole.LAWYER.value)
        return [
            LawyerWorkload(
                lawyer=UserRead.model_validate(user),
                office_id=profile.office_id,
                current_caseload=profile.current_caseload,
                max_caseload=profile.max_caseload,
                utilization=round(profile.current_caseload / profile.max_caseload * 100, 2)
                if profile.max_caseload
                else 0.0,
                active_assignments=active.get(user.id, 0),
            )
            for profile, user in await self.repos.lawyers.list_with_users()
        ]

    async def coordinator_workload(self) -> List[CoordinatorWorkload]:
        return [
            CoordinatorWorkload(
                coordinator=UserRead.model_validate(user),
                office_id=profile.office_id,
                pending_assignments=pending,
            )
            for profile, user, pending in await self.repos.coordinators.workload()
        ]
