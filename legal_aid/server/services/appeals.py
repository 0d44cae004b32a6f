"""
Appeal service.

A lawyer may file an appeal on a case assigned to them, with at most one
PENDING appeal at a time. Admins decide appeals and schedule hearings.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.appeals import Appeal, AppealHearing
from legal_aid.core.database.entities.users import User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Forbidden, NotFound, ValidationFailed
from legal_aid.core.models.domain.enums import (
    AppealStatus,
    CaseActivityType,
    HearingStatus,
    NotificationType,
)
from legal_aid.core.models.domain.transitions import APPEAL_TRANSITIONS, ensure_transition
from legal_aid.core.models.io.appeals import (
    AppealCreate,
    AppealDecision,
    AppealRead,
    AppealUpdate,
    HearingCreate,
    HearingRead,
)
from legal_aid.core.monitoring import log_case_event

from .assignment import CaseAssigner
from .cases import page_offset
from .notifications import NotificationService

_DECIDED = frozenset({AppealStatus.APPROVED, AppealStatus.REJECTED, AppealStatus.WITHDRAWN})


class AppealService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos
        self.notifications = NotificationService(repos)
        self.assigner = CaseAssigner(repos, self.notifications)

    async def read(self, appeal: Appeal) -> AppealRead:
        hearings = await self.repos.hearings.list_for_appeal(appeal.id)
        read = AppealRead.model_validate(appeal)
        read.hearings = [HearingRead.model_validate(hearing) for hearing in hearings]
        return read

    async def file(self, lawyer: User, payload: AppealCreate) -> Appeal:
        """File an appeal on a case assigned to ``lawyer``.

        Raises:
            ValidationFailed: The lawyer already has a PENDING appeal.
            NotFound: The case does not exist or is not assigned to the lawyer.
        """
        if await self.repos.appeals.has_pending(lawyer.id):
            raise ValidationFailed("You already have a pending appeal")
        case = await self.repos.cases.get_by_id(payload.case_id)
        if case is None or case.lawyer_id != lawyer.id:
            raise NotFound("Case not found or not assigned to you")

        appeal = await self.repos.appeals.add(
            Appeal(
                case_id=case.id,
                lawyer_id=lawyer.id,
                title=payload.title,
                description=payload.description,
                status=AppealStatus.PENDING.value,
            )
        )
        if payload.hearing_date is not None:
            await self.repos.hearings.add(
                AppealHearing(
                    appeal_id=appeal.id,
                    scheduled_date=payload.hearing_date,
                    status=HearingStatus.SCHEDULED.value,
                )
            )
        await self.assigner.record_activity(
            case.id, CaseActivityType.APPEAL_FILED, f"Appeal filed: {appeal.title}", user_id=lawyer.id
        )
        if case.client_id is not None:
            await self.notifications.notify(
                case.client_id,
                "Appeal filed",
                f"An appeal was filed on your case '{case.title}'.",
                type=NotificationType.APPEAL,
                link=f"/client/cases/{case.id}",
            )
        await self.repos.commit()
        log_case_event(case.id, "appeal_filed", appeal_id=appeal.id, lawyer_id=lawyer.id)
        return appeal

    async def page(
        self,
        *,
        lawyer_id: Optional[int] = None,
        status: Optional[AppealStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Appeal], int]:
        return await self.repos.appeals.page(
            lawyer_id=lawyer_id,
            status=status.value if status else None,
            limit=limit,
            offset=page_offset(page, limit),
        )

    async def get(self, appeal_id: int) -> Appeal:
        appeal = await self.repos.appeals.get_by_id(appeal_id)
        if appeal is None:
            raise NotFound("Appeal not found")
        return appeal

    async def update(self, lawyer: User, appeal_id: int, payload: AppealUpdate) -> Appeal:
        """Edit an own appeal.

        A lawyer may only withdraw an appeal; every other status is decided by
        an admin. ``hearing_date`` moves the next scheduled hearing, or
        schedules one when there is none.

        Raises:
            NotFound: The appeal does not exist or was filed by someone else.
            Forbidden: A status other than WITHDRAWN was requested.
            InvalidTransition: The appeal can no longer be withdrawn.
        """
        appeal = await self.repos.appeals.get_for_lawyer(appeal_id, lawyer.id)
        if appeal is None:
            raise NotFound("Appeal not found")

        if payload.status is not None and payload.status.value != appeal.status:
            if payload.status != AppealStatus.WITHDRAWN:
                raise Forbidden("Lawyers can only withdraw an appeal")
            ensure_transition(APPEAL_TRANSITIONS, AppealStatus(appeal.status), payload.status)
            appeal.status = payload.status.value
            appeal.decided_at = utc_now()
        if payload.title is not None:
            appeal.title = payload.title
        if payload.description is not None:
            appeal.description = payload.description
        if payload.hearing_date is not None:
            if AppealStatus(appeal.status) in _DECIDED:
                raise ValidationFailed(f"Cannot schedule a hearing for a {appeal.status} appeal")
            await self._move_hearing(appeal.id, payload.hearing_date)
        return await self.repos.appeals.update(appeal)

    async def _move_hearing(self, appeal_id: int, when: datetime) -> None:
        scheduled = [
            hearing
            for hearing in await self.repos.hearings.list_for_appeal(appeal_id)
            if hearing.status == HearingStatus.SCHEDULED.value
        ]
        if scheduled:
            scheduled[0].scheduled_date = when
            self.repos.session.add(scheduled[0])
        else:
            await self.repos.hearings.add(
                AppealHearing(appeal_id=appeal_id, scheduled_date=when, status=HearingStatus.SCHEDULED.value)
            )

    async def delete(self, lawyer: User, appeal_id: int) -> None:
        """Delete an own appeal together with its hearings."""
        appeal = await self.repos.appeals.get_for_lawyer(appeal_id, lawyer.id)
        if appeal is None:
            raise NotFound("Appeal not found")
        case_id = appeal.case_id
        removed = await self.repos.hearings.delete_for_appeal(appeal.id)
        # Hearings reference the appeal; flush them out first
        await self.repos.session.flush()
        await self.repos.session.delete(appeal)
        await self.repos.commit()
        log_case_event(case_id, "appeal_deleted", appeal_id=appeal_id, hearings=removed)

    async def decide(self, admin: User, appeal_id: int, payload: AppealDecision) -> Appeal:
        appeal = await self.get(appeal_id)
        ensure_transition(APPEAL_TRANSITIONS, AppealStatus(appeal.status), payload.status)

        appeal.status = payload.status.value
        if payload.decision is not None:
            appeal.decision = payload.decision
        if payload.status in _DECIDED:
            appeal.decided_at = utc_now()
        appeal.updated_at = utc_now()
        self.repos.session.add(appeal)
        await self.notifications.notify(
            appeal.lawyer_id,
            "Appeal updated",
            f"Your appeal '{appeal.title}' is now {payload.status.value}.",
            type=NotificationType.APPEAL,
        )
        await self.repos.activities.record(
            "APPEAL_DECISION", admin.id, {"appeal_id": appeal.id, "status": payload.status.value}
        )
        await self.repos.commit()
        log_case_event(appeal.case_id, "appeal_decided", appeal_id=appeal.id, status=payload.status.value)
        return appeal

    async def add_hearing(self, admin: User, appeal_id: int, payload: HearingCreate) -> AppealHearing:
        """Schedule a hearing; a PENDING appeal becomes SCHEDULED."""
        appeal = await self.get(appeal_id)
        if AppealStatus(appeal.status) in _DECIDED:
            raise ValidationFailed(f"Cannot schedule a hearing for a {appeal.status} appeal")

        hearing = await self.repos.hearings.add(
            AppealHearing(
                appeal_id=appeal.id,
                scheduled_date=payload.scheduled_date,
                location=payload.location,
                notes=payload.notes,
                status=HearingStatus.SCHEDULED.value,
            )
        )
        if appeal.status == AppealStatus.PENDING.value:
            appeal.status = AppealStatus.SCHEDULED.value
            appeal.updated_at = utc_now()
            self.repos.session.add(appeal)
        await self.notifications.notify(
            appeal.lawyer_id,
            "Hearing scheduled",
            f"A hearing for appeal '{appeal.title}' is scheduled on {payload.scheduled_date:%Y-%m-%d %H:%M}.",
            type=NotificationType.APPEAL,
        )
        await self.repos.commit()
        return hearing
