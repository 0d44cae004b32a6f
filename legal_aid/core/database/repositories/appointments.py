"""
Appointment repository.

Overlap checks need ``scheduled_time + duration`` which is not portable SQL
across SQLite and PostgreSQL; candidate rows are narrowed in SQL by start
time and the end-time comparison runs in Python.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from legal_aid.core.models.domain.enums import AppointmentStatus

from ..entities.appointments import Appointment
from .base import BaseRepository

# Upper bound of a single appointment; used to narrow overlap candidates.
MAX_APPOINTMENT_MINUTES = 8 * 60

_BLOCKING_STATUSES = [AppointmentStatus.SCHEDULED.value, AppointmentStatus.RESCHEDULED.value]


class AppointmentRepository(BaseRepository[Appointment]):
    """Repository for client/coordinator appointments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Appointment)

    async def find_conflicts(
        self,
        *,
        start: datetime,
        end: datetime,
        coordinator_id: Optional[int] = None,
        client_id: Optional[int] = None,
        exclude_id: Optional[int] = None,
    ) -> List[Appointment]:
        """Scheduled appointments of the coordinator or the client overlapping ``[start, end)``."""
        participants = []
        if coordinator_id is not None:
            participants.append(Appointment.coordinator_id == coordinator_id)
        if client_id is not None:
            participants.append(Appointment.client_id == client_id)
        if not participants:
            return []

        stmt = select(Appointment).where(
            or_(*participants),
            Appointment.status.in_(_BLOCKING_STATUSES),  # type: ignore[attr-defined]
            Appointment.scheduled_time < end,
            Appointment.scheduled_time > start - timedelta(minutes=MAX_APPOINTMENT_MINUTES),
        )
        if exclude_id is not None:
            stmt = stmt.where(Appointment.id != exclude_id)
        result = await self.session.execute(stmt)
        return [apt for apt in result.scalars().all() if apt.end_time > start]

    async def list_between(
        self, start: datetime, end: datetime, coordinator_id: Optional[int] = None
    ) -> List[Appointment]:
        """Blocking appointments starting inside ``[start, end]``."""
        stmt = select(Appointment).where(
            Appointment.scheduled_time >= start,
            Appointment.scheduled_time <= end,
            Appointment.status.in_(_BLOCKING_STATUSES),  # type: ignore[attr-defined]
        )
        if coordinator_id is not None:
            stmt = stmt.where(Appointment.coordinator_id == coordinator_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_participant(
        self,
        *,
        client_id: Optional[int] = None,
        coordinator_id: Optional[int] = None,
        status: Optional[str] = None,
        upcoming_from: Optional[datetime] = None,
    ) -> List[Appointment]:
        stmt = select(Appointment)
        if client_id is not None:
            stmt = stmt.where(Appointment.client_id == client_id)
        if coordinator_id is not None:
            stmt = stmt.where(Appointment.coordinator_id == coordinator_id)
        if status is not None:
            stmt = stmt.where(Appointment.status == status)
        if upcoming_from is not None:
            stmt = stmt.where(Appointment.scheduled_time >= upcoming_from)
        stmt = stmt.order_by(Appointment.scheduled_time.asc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def due_for_reminder(self, now: datetime, horizon: timedelta) -> List[Appointment]:
        """SCHEDULED appointments starting within ``horizon`` that were not reminded yet."""
        stmt = select(Appointment).where(
            Appointment.status == AppointmentStatus.SCHEDULED.value,
            Appointment.reminder_sent == False,  # noqa: E712
            Appointment.scheduled_time >= now,
            Appointment.scheduled_time <= now + horizon,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
