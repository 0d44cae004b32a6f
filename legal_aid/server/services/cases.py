"""
Case service.

Implements case registration and lifecycle for the client, coordinator,
lawyer and admin portals. Every mutation checks ownership before touching the
case: clients own their cases, coordinators act within their office and
lawyers on cases assigned to them.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.cases import Case, CaseAssignment
from legal_aid.core.database.entities.users import CoordinatorProfile, LawyerProfile, User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Forbidden, NotFound, ValidationFailed
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import (
    AppointmentStatus,
    AssignmentStatus,
    CaseActivityType,
    CaseStatus,
    DocumentStatus,
    NotificationType,
    UserRole,
)
from legal_aid.core.models.domain.transitions import CASE_TRANSITIONS, ensure_transition
from legal_aid.core.models.io.cases import (
    AdminAssignRequest,
    AssignableCases,
    AssignLawyerRequest,
    AssignmentDecision,
    CaseDetail,
    ClientCaseCreate,
    ClientStats,
    CoordinatorCaseCreate,
    CaseStatusUpdate,
    LawyerCaseload,
)
from legal_aid.core.models.io.users import LawyerProfileRead, UserRead
from legal_aid.core.monitoring import log_case_event

from .assignment import CLOSED_CASE_STATUSES, CaseAssigner
from .notifications import NotificationService

logger = get_logger(__name__)


def page_offset(page: int, limit: int) -> int:
    return (max(page, 1) - 1) * limit


class CaseService:
    """Case registration, listing, status changes and lawyer assignment."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos
        self.notifications = NotificationService(repos)
        self.assigner = CaseAssigner(repos, self.notifications)

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    async def coordinator_profile(self, user: User) -> CoordinatorProfile:
        profile = await self.repos.coordinators.get_by_user(user.id)
        if profile is None:
            raise Forbidden("Coordinator profile not found")
        return profile

    async def lawyer_profile(self, user: User) -> LawyerProfile:
        profile = await self.repos.lawyers.get_by_user(user.id)
        if profile is None:
            raise Forbidden("Lawyer profile not found")
        return profile

    async def detail(self, case: Case) -> CaseDetail:
        activities = await self.repos.case_activities.list_for_case(case.id)
        assignments = await self.repos.assignments.list(filters={"case_id": case.id})
        return CaseDetail.model_validate(
            {"case": case, "activities": activities, "assignments": assignments}, from_attributes=True
        )

    async def get_case(self, case_id: int) -> Case:
        case = await self.repos.cases.get_by_id(case_id)
        if case is None:
            raise NotFound("Case not found")
        return case

    async def _change_status(self, case: Case, target: CaseStatus, actor: User, note: Optional[str] = None) -> Case:
        current = CaseStatus(case.status)
        ensure_transition(CASE_TRANSITIONS, current, target)

        case.status = target.value
        case.updated_at = utc_now()
        if note:
            case.notes = f"{case.notes}\n{note}" if case.notes else note
        if target.value in CLOSED_CASE_STATUSES:
            await self.assigner.close_case(case)
        elif current == CaseStatus.CANCELLED:
            case.resolved_at = None
        self.repos.session.add(case)

        await self.assigner.record_activity(
            case.id,
            CaseActivityType.STATUS_CHANGE,
            f"Status changed from {current.value} to {target.value}",
            user_id=actor.id,
            description=note,
        )
        if case.client_id is not None and case.client_id != actor.id:
            await self.notifications.notify(
                case.client_id,
                "Case status updated",
                f"Your case '{case.title}' is now {target.value}.",
                type=NotificationType.CASE_UPDATE,
                link=f"/client/cases/{case.id}",
            )
        await self.repos.commit()
        log_case_event(case.id, "status_changed", previous=current.value, status=target.value, actor_id=actor.id)
        return case

    # ------------------------------------------------------------------
    # Client portal
    # ------------------------------------------------------------------

    async def register_client_case(self, user: User, payload: ClientCaseCreate) -> Case:
        """Register a case for a logged-in client.

        The case takes its office and location from the client's profile. Own
        uploaded documents listed in ``document_ids`` are linked to the case,
        a coordinator is auto-assigned and, when one is free, a lawyer
        specialized in the category gets a PENDING assignment.

        Raises:
            ValidationFailed: The client has no profile or no office.
        """
        profile = await self.repos.clients.get_by_user(user.id)
        if profile is None:
            raise ValidationFailed("User profile not found")
        if profile.office_id is None:
            raise ValidationFailed("Client profile has no office")

        case = await self.repos.cases.add(
            Case(
                title=payload.title,
                description=payload.description,
                category=payload.category.value,
                priority=payload.priority.value,
                status=CaseStatus.PENDING.value,
                client_id=user.id,
                client_name=user.full_name,
                client_phone=profile.phone or user.phone,
                office_id=profile.office_id,
                region=profile.region,
                zone=profile.zone,
                wereda=profile.wereda,
                kebele=profile.kebele,
                house_number=profile.house_number,
                request_details=payload.request_details,
            )
        )
        await self.assigner.record_activity(
            case.id, CaseActivityType.CREATED, "Case registered", user_id=user.id, description=payload.description
        )

        documents = await self.repos.documents.list_owned(payload.document_ids, user.id)
        for document in documents:
            document.case_id = case.id
            self.repos.session.add(document)
        if documents:
            await self.assigner.record_activity(
                case.id,
                CaseActivityType.DOCUMENT_UPLOAD,
                f"{len(documents)} document(s) attached",
                user_id=user.id,
                description=", ".join(document.title for document in documents),
            )

        await self.assigner.assign_coordinator(case)
        lawyer = await self.assigner.match_lawyer(case)
        if lawyer is not None:
            await self.assigner.assign_lawyer(case, lawyer, notes="Matched on specialization")
        else:
            logger.info(f"No available {case.category} lawyer in office {case.office_id} for case {case.id}")

        await self.repos.commit()
        log_case_event(case.id, "registered", office_id=case.office_id, channel="client")
        return case

    async def list_client_cases(
        self, user: User, *, status: Optional[CaseStatus] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[Case], int]:
        return await self.repos.cases.search(
            client_id=user.id, status=status, limit=limit, offset=page_offset(page, limit)
        )

    async def get_client_case(self, user: User, case_id: int) -> CaseDetail:
        case = await self.repos.cases.get_by_id(case_id)
        if case is None or case.client_id != user.id:
            raise NotFound("Case not found")
        return await self.detail(case)

    async def client_stats(self, user: User) -> ClientStats:
        by_status = await self.repos.cases.count_by_status(client_id=user.id)
        upcoming = await self.repos.appointments.list_for_participant(client_id=user.id, upcoming_from=utc_now())
        documents = await self.repos.documents.count_by_status(uploaded_by_id=user.id)
        return ClientStats(
            total_cases=sum(by_status.values()),
            cases_by_status=by_status,
            upcoming_appointments=sum(
                1
                for apt in upcoming
                if apt.status in (AppointmentStatus.SCHEDULED.value, AppointmentStatus.RESCHEDULED.value)
            ),
            pending_documents=documents.get(DocumentStatus.PENDING.value, 0),
            unread_notifications=await self.repos.notifications.count_unread(user.id),
        )

    # ------------------------------------------------------------------
    # Coordinator portal
    # ------------------------------------------------------------------

    async def _office_case(self, coordinator: CoordinatorProfile, case_id: int) -> Case:
        case = await self.repos.cases.get_by_id(case_id)
        if case is None or case.office_id != coordinator.office_id:
            raise NotFound("Case not found in your office")
        return case

    async def create_coordinator_case(self, user: User, payload: CoordinatorCaseCreate) -> Case:
        """Open a case in the coordinator's office on behalf of a client.

        The coordinator takes the case themselves.
        """
        coordinator = await self.coordinator_profile(user)
        if payload.client_id is not None:
            client = await self.repos.users.get_by_id(payload.client_id)
            if client is None or client.role != UserRole.CLIENT.value:
                raise NotFound("Client not found")

        case = await self.repos.cases.add(
            Case(
                title=payload.title,
                description=payload.description,
                category=payload.category.value,
                priority=payload.priority.value,
                status=CaseStatus.PENDING.value,
                client_id=payload.client_id,
                client_name=payload.client_name,
                client_phone=payload.client_phone,
                office_id=coordinator.office_id,
                region=payload.region,
                zone=payload.zone,
                wereda=payload.wereda,
                kebele=payload.kebele,
                house_number=payload.house_number,
            )
        )
        await self.assigner.record_activity(
            case.id,
            CaseActivityType.CREATED,
            "Case created by coordinator",
            user_id=user.id,
            description=payload.description,
        )
        await self.assigner.assign_coordinator_user(case, user.id, assigned_by_id=user.id)
        await self.repos.commit()
        log_case_event(case.id, "registered", office_id=case.office_id, channel="coordinator")
        return case

    async def list_office_cases(
        self, user: User, *, status: Optional[CaseStatus] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[Case], int]:
        coordinator = await self.coordinator_profile(user)
        return await self.repos.cases.search(
            office_id=coordinator.office_id, status=status, limit=limit, offset=page_offset(page, limit)
        )

    async def get_office_case(self, user: User, case_id: int) -> CaseDetail:
        coordinator = await self.coordinator_profile(user)
        return await self.detail(await self._office_case(coordinator, case_id))

    async def coordinator_change_status(self, user: User, case_id: int, payload: CaseStatusUpdate) -> Case:
        coordinator = await self.coordinator_profile(user)
        case = await self._office_case(coordinator, case_id)
        return await self._change_status(case, payload.status, user, payload.note)

    async def reject_case(self, user: User, case_id: int, reason: Optional[str]) -> Case:
        """Cancel a case with a mandatory reason appended to its notes."""
        if not reason or not reason.strip():
            raise ValidationFailed("Rejection reason is required")
        coordinator = await self.coordinator_profile(user)
        case = await self._office_case(coordinator, case_id)
        ensure_transition(CASE_TRANSITIONS, CaseStatus(case.status), CaseStatus.CANCELLED)

        reason = reason.strip()
        case.status = CaseStatus.CANCELLED.value
        case.notes = f"{case.notes}\nRejected: {reason}" if case.notes else f"Rejected: {reason}"
        case.updated_at = utc_now()
        await self.assigner.close_case(case)
        self.repos.session.add(case)
        await self.assigner.record_activity(
            case.id, CaseActivityType.REJECTED, "Case rejected", user_id=user.id, description=reason
        )
        if case.client_id is not None:
            await self.notifications.notify(
                case.client_id,
                "Case rejected",
                f"Your case '{case.title}' was rejected: {reason}",
                type=NotificationType.CASE_UPDATE,
                link=f"/client/cases/{case.id}",
            )
        await self.repos.commit()
        log_case_event(case.id, "rejected", actor_id=user.id)
        return case

    async def office_lawyers(self, user: User) -> List[LawyerCaseload]:
        coordinator = await self.coordinator_profile(user)
        return [
            LawyerCaseload(user=UserRead.model_validate(account), profile=LawyerProfileRead.model_validate(profile))
            for profile, account in await self.repos.lawyers.list_with_users(coordinator.office_id)
        ]

    async def coordinator_assign_lawyer(self, user: User, case_id: int, payload: AssignLawyerRequest) -> CaseAssignment:
        """Assign a lawyer of the coordinator's office to an office case.

        Raises:
            NotFound: Case or lawyer outside the coordinator's office.
            ValidationFailed: The lawyer has no free capacity or the case is closed.
        """
        coordinator = await self.coordinator_profile(user)
        case = await self._office_case(coordinator, case_id)
        if case.status in CLOSED_CASE_STATUSES:
            raise ValidationFailed(f"Cannot assign a lawyer to a {case.status} case")

        lawyer = await self.repos.lawyers.get_by_user(payload.lawyer_id)
        if lawyer is None or lawyer.office_id != coordinator.office_id:
            raise NotFound("Lawyer not found in your office")
        if not lawyer.has_capacity:
            raise ValidationFailed("Lawyer has reached maximum caseload")

        assignment = await self.assigner.assign_lawyer(case, lawyer, assigned_by_id=user.id, notes=payload.notes)
        await self.repos.commit()
        return assignment

    # ------------------------------------------------------------------
    # Admin portal
    # ------------------------------------------------------------------

    async def assignable(self) -> AssignableCases:
        cases = await self.repos.cases.list_assignable()
        lawyers = await self.repos.lawyers.list_with_users()
        return AssignableCases.model_validate(
            {
                "cases": cases,
                "lawyers": [{"user": account, "profile": profile} for profile, account in lawyers],
            },
            from_attributes=True,
        )

    async def admin_assign(self, admin: User, payload: AdminAssignRequest) -> CaseAssignment:
        """Assign a lawyer directly; the assignment starts ACCEPTED and the case becomes ACTIVE."""
        case = await self.get_case(payload.case_id)
        if case.status in CLOSED_CASE_STATUSES:
            raise ValidationFailed(f"Cannot assign a lawyer to a {case.status} case")
        lawyer = await self.repos.lawyers.get_by_user(payload.lawyer_id)
        if lawyer is None:
            raise NotFound("Lawyer not found")
        if not lawyer.has_capacity:
            raise ValidationFailed("Lawyer has reached maximum caseload")

        assignment = await self.assigner.assign_lawyer(
            case, lawyer, assigned_by_id=admin.id, accepted=True, notes=payload.notes
        )
        case.status = CaseStatus.ACTIVE.value
        self.repos.session.add(case)
        await self.repos.activities.record(
            "CASE_ASSIGNMENT",
            admin.id,
            {"case_id": case.id, "lawyer_id": lawyer.user_id, "notes": payload.notes},
        )
        await self.repos.commit()
        return assignment

    async def admin_cases(
        self,
        *,
        office_id: Optional[int] = None,
        status: Optional[CaseStatus] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Case], int]:
        return await self.repos.cases.search(
            office_id=office_id, status=status, limit=limit, offset=page_offset(page, limit)
        )

    # ------------------------------------------------------------------
    # Lawyer portal
    # ------------------------------------------------------------------

    async def list_lawyer_cases(
        self, user: User, *, status: Optional[CaseStatus] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[Case], int]:
        return await self.repos.cases.search(
            lawyer_id=user.id, status=status, limit=limit, offset=page_offset(page, limit)
        )

    async def get_lawyer_case(self, user: User, case_id: int) -> CaseDetail:
        case = await self.repos.cases.get_by_id(case_id)
        if case is None or case.lawyer_id != user.id:
            raise NotFound("Case not found or not assigned to you")
        return await self.detail(case)

    async def list_lawyer_assignments(
        self, user: User, status: Optional[AssignmentStatus] = None
    ) -> List[CaseAssignment]:
        return await self.repos.assignments.list_for_assignee(user.id, status.value if status else None)

    async def respond_to_assignment(self, user: User, assignment_id: int, decision: AssignmentDecision) -> CaseAssignment:
        """Accept or decline a PENDING lawyer assignment.

        Accepting counts the case against the lawyer's caseload and activates a
        PENDING case. Declining unassigns the lawyer from the case.
        """
        assignment = await self.repos.assignments.get_by_id(assignment_id)
        if (
            assignment is None
            or assignment.assigned_to_id != user.id
            or assignment.assignee_role != UserRole.LAWYER.value
        ):
            raise NotFound("Assignment not found")
        if assignment.status != AssignmentStatus.PENDING.value:
            raise ValidationFailed(f"Assignment is already {assignment.status}")

        case = await self.get_case(assignment.case_id)
        lawyer = await self.lawyer_profile(user)
        now = utc_now()

        if decision.accept:
            if not lawyer.has_capacity:
                raise ValidationFailed("Lawyer has reached maximum caseload")
            assignment.status = AssignmentStatus.ACCEPTED.value
            lawyer.current_caseload += 1
            self.repos.session.add(lawyer)
            if case.status == CaseStatus.PENDING.value:
                case.status = CaseStatus.ACTIVE.value
            title = "Assignment accepted"
        else:
            assignment.status = AssignmentStatus.REJECTED.value
            assignment.completed_at = now
            if case.lawyer_id == user.id:
                case.lawyer_id = None
            title = "Assignment declined"

        if decision.notes:
            assignment.notes = decision.notes
        case.updated_at = now
        self.repos.session.add(assignment)
        self.repos.session.add(case)
        await self.assigner.record_activity(
            case.id, CaseActivityType.ASSIGNMENT_RESPONSE, title, user_id=user.id, description=decision.notes
        )
        for recipient in {case.coordinator_id, assignment.assigned_by_id} - {None, user.id}:
            await self.notifications.notify(
                recipient,
                title,
                f"{user.full_name}: {title.lower()} for case '{case.title}'.",
                type=NotificationType.CASE_UPDATE,
                link=f"/coordinator/cases/{case.id}",
            )
        await self.repos.commit()
        log_case_event(case.id, "assignment_response", lawyer_id=user.id, accepted=decision.accept)
        return assignment

    async def lawyer_change_status(self, user: User, case_id: int, payload: CaseStatusUpdate) -> Case:
        case = await self.repos.cases.get_by_id(case_id)
        if case is None or case.lawyer_id != user.id:
            raise NotFound("Case not found or not assigned to you")
        return await self._change_status(case, payload.status, user, payload.note)
