"""
Case assignment rules.

Coordinator auto-assignment picks the active coordinator of the case's office
with the fewest PENDING coordinator assignments, ties broken by the lowest
coordinator profile id. Selection and insert run in the caller's transaction
with the office row locked, so concurrent registrations for one office cannot
both read the same workload.

Lawyer caseload is counted on acceptance: ``current_caseload`` grows when a
lawyer assignment becomes ACCEPTED and shrinks when the case closes.
"""

from __future__ import annotations

from typing import List, Optional

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.cases import Case, CaseActivity, CaseAssignment
from legal_aid.core.database.entities.users import LawyerProfile
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import (
    AssignmentStatus,
    CaseActivityType,
    CaseStatus,
    NotificationType,
    UserRole,
)
from legal_aid.core.monitoring import log_case_event

from .notifications import NotificationService

logger = get_logger(__name__)

CLOSED_CASE_STATUSES = frozenset({CaseStatus.RESOLVED.value, CaseStatus.CANCELLED.value})


class CaseAssigner:
    """Coordinator and lawyer assignment for cases, staged in the caller's transaction."""

    def __init__(self, repos: RepoBundle, notifications: Optional[NotificationService] = None) -> None:
        self.repos = repos
        self.notifications = notifications or NotificationService(repos)

    async def record_activity(
        self,
        case_id: int,
        activity_type: CaseActivityType,
        title: str,
        *,
        user_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> CaseActivity:
        return await self.repos.case_activities.add(
            CaseActivity(
                case_id=case_id,
                user_id=user_id,
                activity_type=activity_type.value,
                title=title,
                description=description,
            )
        )

    async def assign_coordinator(self, case: Case, *, assigned_by_id: Optional[int] = None) -> Optional[CaseAssignment]:
        """Assign the least loaded coordinator of the case's office.

        Returns:
            The new PENDING assignment, or None when the office has no active
            coordinator. The case stays PENDING either way.
        """
        await self.repos.cases.lock_office(case.office_id)
        picked = await self.repos.coordinators.least_loaded(case.office_id)
        if picked is None:
            logger.warning(f"No active coordinator in office {case.office_id}; case {case.id} left unassigned")
            return None

        profile, pending = picked
        return await self.assign_coordinator_user(
            case, profile.user_id, assigned_by_id=assigned_by_id, notes=f"Auto-assigned ({pending} pending)"
        )

    async def assign_coordinator_user(
        self,
        case: Case,
        coordinator_user_id: int,
        *,
        assigned_by_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> CaseAssignment:
        assignment = await self.repos.assignments.add(
            CaseAssignment(
                case_id=case.id,
                assigned_to_id=coordinator_user_id,
                assigned_by_id=assigned_by_id,
                assignee_role=UserRole.COORDINATOR.value,
                status=AssignmentStatus.PENDING.value,
                notes=notes,
            )
        )
        case.coordinator_id = coordinator_user_id
        self.repos.session.add(case)
        await self.record_activity(
            case.id,
            CaseActivityType.COORDINATOR_ASSIGNED,
            "Coordinator assigned",
            user_id=assigned_by_id,
        )
        if coordinator_user_id != assigned_by_id:
            await self.notifications.notify(
                coordinator_user_id,
                "New case assigned",
                f"Case '{case.title}' was assigned to you for review.",
                type=NotificationType.TASK_ASSIGNED,
                link=f"/coordinator/cases/{case.id}",
            )
        log_case_event(case.id, "coordinator_assigned", coordinator_id=coordinator_user_id)
        return assignment

    async def match_lawyer(self, case: Case) -> Optional[LawyerProfile]:
        """Available lawyer of the office specialized in the case category."""
        return await self.repos.lawyers.find_available(case.office_id, case.category)

    async def assign_lawyer(
        self,
        case: Case,
        lawyer: LawyerProfile,
        *,
        assigned_by_id: Optional[int] = None,
        accepted: bool = False,
        notes: Optional[str] = None,
    ) -> CaseAssignment:
        """Hand the case to ``lawyer``.

        Open lawyer assignments of the case are superseded and the pending
        coordinator assignment is completed. With ``accepted`` the assignment
        starts ACCEPTED and counts against the lawyer's caseload right away.
        """
        now = utc_now()
        for previous in await self.repos.assignments.open_for_case(case.id, UserRole.LAWYER.value):
            if previous.status == AssignmentStatus.ACCEPTED.value:
                await self._release_caseload(previous.assigned_to_id)
            previous.status = AssignmentStatus.COMPLETED.value
            previous.completed_at = now
            self.repos.session.add(previous)
        await self.complete_coordinator_assignments(case.id)

        status = AssignmentStatus.ACCEPTED if accepted else AssignmentStatus.PENDING
        assignment = await self.repos.assignments.add(
            CaseAssignment(
                case_id=case.id,
                assigned_to_id=lawyer.user_id,
                assigned_by_id=assigned_by_id,
                assignee_role=UserRole.LAWYER.value,
                status=status.value,
                notes=notes,
            )
        )
        case.lawyer_id = lawyer.user_id
        if accepted:
            lawyer.current_caseload += 1
            self.repos.session.add(lawyer)
            if case.status == CaseStatus.PENDING.value:
                case.status = CaseStatus.ACTIVE.value
        case.updated_at = now
        self.repos.session.add(case)

        await self.record_activity(
            case.id,
            CaseActivityType.LAWYER_ASSIGNED,
            "Lawyer assigned",
            user_id=assigned_by_id,
            description=notes,
        )
        await self.notifications.notify(
            lawyer.user_id,
            "New case assignment",
            f"You have been assigned to case '{case.title}'.",
            type=NotificationType.TASK_ASSIGNED,
            link=f"/lawyer/cases/{case.id}",
        )
        log_case_event(case.id, "lawyer_assigned", lawyer_id=lawyer.user_id, accepted=accepted)
        return assignment

    async def complete_coordinator_assignments(self, case_id: int) -> List[CaseAssignment]:
        completed = []
        now = utc_now()
        for assignment in await self.repos.assignments.open_for_case(case_id, UserRole.COORDINATOR.value):
            assignment.status = AssignmentStatus.COMPLETED.value
            assignment.completed_at = now
            self.repos.session.add(assignment)
            completed.append(assignment)
        return completed

    async def close_case(self, case: Case) -> None:
        """Complete every open assignment of a case that reached a closed status."""
        now = utc_now()
        for assignment in await self.repos.assignments.open_for_case(case.id):
            if (
                assignment.assignee_role == UserRole.LAWYER.value
                and assignment.status == AssignmentStatus.ACCEPTED.value
            ):
                await self._release_caseload(assignment.assigned_to_id)
            assignment.status = AssignmentStatus.COMPLETED.value
            assignment.completed_at = now
            self.repos.session.add(assignment)
        if case.status == CaseStatus.RESOLVED.value:
            case.resolved_at = now

    async def _release_caseload(self, lawyer_user_id: int) -> None:
        profile = await self.repos.lawyers.get_by_user(lawyer_user_id)
        if profile is not None and profile.current_caseload > 0:
            profile.current_caseload -= 1
            self.repos.session.add(profile)
