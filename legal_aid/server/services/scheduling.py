"""
Appointment scheduling service.

Appointments block the coordinator and the client for ``duration`` minutes.
A SCHEDULED or RESCHEDULED appointment of either participant overlapping the
requested window is a conflict. Free slots are offered on weekdays between
09:00 and 17:00 in 30 minute steps.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.appointments import Appointment
from legal_aid.core.database.entities.users import User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import NotFound, ValidationFailed
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import (
    AppointmentStatus,
    CoordinatorStatus,
    NotificationType,
    UserRole,
)
from legal_aid.core.models.domain.transitions import APPOINTMENT_TRANSITIONS, ensure_transition
from legal_aid.core.models.io.appointments import (
    AppointmentCreate,
    AppointmentUpdate,
    ClientAppointmentCreate,
    ReminderRunResult,
    SlotCoordinator,
    SlotRead,
)

from .notifications import NotificationService

logger = get_logger(__name__)

WORKDAY_START = time(9, 0)
WORKDAY_END = time(17, 0)
SLOT_MINUTES = 30
REMINDER_HORIZON = timedelta(hours=24)


class SchedulingService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos
        self.notifications = NotificationService(repos)

    async def _ensure_free(
        self,
        start: datetime,
        duration: int,
        *,
        coordinator_id: int,
        client_id: int,
        exclude_id: Optional[int] = None,
    ) -> None:
        conflicts = await self.repos.appointments.find_conflicts(
            start=start,
            end=start + timedelta(minutes=duration),
            coordinator_id=coordinator_id,
            client_id=client_id,
            exclude_id=exclude_id,
        )
        if conflicts:
            raise ValidationFailed("Time slot conflicts with an existing appointment")

    @staticmethod
    def _ensure_future(start: datetime) -> None:
        if start <= utc_now():
            raise ValidationFailed("Appointments must be scheduled in the future")

    @staticmethod
    def _naive(value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.replace(tzinfo=None) - (value.utcoffset() or timedelta())

    async def _book(
        self,
        *,
        client_id: int,
        coordinator_id: int,
        start: datetime,
        duration: int,
        purpose: str,
        case_type: Optional[str],
        case_id: Optional[int],
        venue: Optional[str],
        notes: Optional[str],
        notify_user_id: int,
    ) -> Appointment:
        start = self._naive(start)
        self._ensure_future(start)
        await self._ensure_free(start, duration, coordinator_id=coordinator_id, client_id=client_id)

        appointment = await self.repos.appointments.add(
            Appointment(
                client_id=client_id,
                coordinator_id=coordinator_id,
                case_id=case_id,
                scheduled_time=start,
                duration=duration,
                purpose=purpose,
                case_type=case_type,
                venue=venue,
                notes=notes,
                status=AppointmentStatus.SCHEDULED.value,
            )
        )
        await self.notifications.notify(
            notify_user_id,
            "New appointment",
            f"Appointment '{purpose}' scheduled for {start:%Y-%m-%d %H:%M}.",
            type=NotificationType.APPOINTMENT,
        )
        await self.repos.commit()
        logger.info(f"Appointment {appointment.id} booked for client {client_id} with coordinator {coordinator_id}")
        return appointment

    async def coordinator_book(self, coordinator: User, payload: AppointmentCreate) -> Appointment:
        client = await self.repos.users.get_by_id(payload.client_id)
        if client is None or client.role != UserRole.CLIENT.value:
            raise NotFound("Client not found")
        if payload.case_id is not None:
            await self._ensure_case(payload.case_id)
        return await self._book(
            client_id=client.id,
            coordinator_id=coordinator.id,
            start=payload.scheduled_time,
            duration=payload.duration,
            purpose=payload.purpose,
            case_type=payload.case_type.value,
            case_id=payload.case_id,
            venue=payload.venue,
            notes=payload.notes,
            notify_user_id=client.id,
        )

    async def client_book(self, client: User, payload: ClientAppointmentCreate) -> Appointment:
        coordinator = await self.repos.coordinators.get_by_user(payload.coordinator_id)
        if coordinator is None:
            raise NotFound("Coordinator not found")
        if payload.case_id is not None:
            case = await self._ensure_case(payload.case_id)
            if case.client_id != client.id:
                raise NotFound("Case not found")
        return await self._book(
            client_id=client.id,
            coordinator_id=coordinator.user_id,
            start=payload.scheduled_time,
            duration=payload.duration,
            purpose=payload.purpose,
            case_type=payload.case_type.value if payload.case_type else None,
            case_id=payload.case_id,
            venue=None,
            notes=payload.notes,
            notify_user_id=coordinator.user_id,
        )

    async def _ensure_case(self, case_id: int):
        case = await self.repos.cases.get_by_id(case_id)
        if case is None:
            raise NotFound("Case not found")
        return case

    async def list_for_client(self, client: User, *, upcoming: bool = False) -> List[Appointment]:
        return await self.repos.appointments.list_for_participant(
            client_id=client.id, upcoming_from=utc_now() if upcoming else None
        )

    async def list_for_coordinator(
        self, coordinator: User, *, status: Optional[AppointmentStatus] = None, upcoming: bool = False
    ) -> List[Appointment]:
        return await self.repos.appointments.list_for_participant(
            coordinator_id=coordinator.id,
            status=status.value if status else None,
            upcoming_from=utc_now() if upcoming else None,
        )

    async def update(self, coordinator: User, appointment_id: int, payload: AppointmentUpdate) -> Appointment:
        """Change the status of an appointment or move it.

        Moving a SCHEDULED appointment marks it RESCHEDULED; the new window is
        checked for conflicts like a new booking.
        """
        appointment = await self.repos.appointments.get_by_id(appointment_id)
        if appointment is None or appointment.coordinator_id != coordinator.id:
            raise NotFound("Appointment not found")

        current = AppointmentStatus(appointment.status)
        new_start = self._naive(payload.scheduled_time) if payload.scheduled_time else None
        moved = (new_start is not None and new_start != appointment.scheduled_time) or (
            payload.duration is not None and payload.duration != appointment.duration
        )

        if moved:
            target = payload.status or (
                AppointmentStatus.RESCHEDULED if current == AppointmentStatus.SCHEDULED else current
            )
            if current not in (AppointmentStatus.SCHEDULED, AppointmentStatus.RESCHEDULED):
                raise ValidationFailed(f"Cannot reschedule a {current.value} appointment")
            start = new_start or appointment.scheduled_time
            duration = payload.duration or appointment.duration
            self._ensure_future(start)
            await self._ensure_free(
                start,
                duration,
                coordinator_id=appointment.coordinator_id,
                client_id=appointment.client_id,
                exclude_id=appointment.id,
            )
            appointment.scheduled_time = start
            appointment.duration = duration
            appointment.reminder_sent = False
        else:
            target = payload.status or current

        if target != current:
            ensure_transition(APPOINTMENT_TRANSITIONS, current, target)
            appointment.status = target.value
        if payload.venue is not None:
            appointment.venue = payload.venue
        if payload.notes is not None:
            appointment.notes = payload.notes
        appointment.updated_at = utc_now()
        self.repos.session.add(appointment)

        if moved or target != current:
            await self.notifications.notify(
                appointment.client_id,
                "Appointment updated",
                f"Your appointment '{appointment.purpose}' on {appointment.scheduled_time:%Y-%m-%d %H:%M} "
                f"is {appointment.status}.",
                type=NotificationType.APPOINTMENT,
            )
        await self.repos.commit()
        return appointment

    async def available_slots(
        self,
        *,
        office_id: Optional[int] = None,
        coordinator_id: Optional[int] = None,
        start_date: Optional[date] = None,
        days: int = 7,
    ) -> Dict[str, List[SlotRead]]:
        """Free weekday slots of the matching coordinators, keyed by ISO date."""
        now = utc_now()
        first_day = start_date or now.date()
        window_start = datetime.combine(first_day, time.min)
        window_end = window_start + timedelta(days=days)

        coordinators = [
            (profile, user)
            for profile, user, _ in await self.repos.coordinators.workload(office_id)
            if profile.status == CoordinatorStatus.ACTIVE.value
            and (coordinator_id is None or user.id == coordinator_id)
        ]
        offices = {office.id: office.name for office in await self.repos.offices.list()}
        busy = defaultdict(list)
        for appointment in await self.repos.appointments.list_between(window_start, window_end):
            busy[appointment.coordinator_id].append(appointment)

        slots: Dict[str, List[SlotRead]] = defaultdict(list)
        step = timedelta(minutes=SLOT_MINUTES)
        for offset in range(days):
            day = first_day + timedelta(days=offset)
            if day.weekday() >= 5:
                continue
            slot_start = datetime.combine(day, WORKDAY_START)
            day_end = datetime.combine(day, WORKDAY_END)
            while slot_start + step <= day_end:
                slot_end = slot_start + step
                if slot_start > now:
                    for profile, user in coordinators:
                        taken = any(
                            apt.scheduled_time < slot_end and apt.end_time > slot_start for apt in busy[user.id]
                        )
                        if not taken:
                            slots[day.isoformat()].append(
                                SlotRead(
                                    start_time=slot_start,
                                    end_time=slot_end,
                                    coordinator=SlotCoordinator(
                                        id=user.id, name=user.full_name, office=offices.get(profile.office_id)
                                    ),
                                )
                            )
                slot_start = slot_end
        return dict(slots)

    async def slots_for_client(
        self,
        client: User,
        *,
        coordinator_id: Optional[int] = None,
        start_date: Optional[date] = None,
        days: int = 7,
    ) -> Dict[str, List[SlotRead]]:
        profile = await self.repos.clients.get_by_user(client.id)
        return await self.available_slots(
            office_id=profile.office_id if profile else None,
            coordinator_id=coordinator_id,
            start_date=start_date,
            days=days,
        )

    async def send_reminders(self) -> ReminderRunResult:
        """Notify clients of SCHEDULED appointments starting within the next 24 hours."""
        due = await self.repos.appointments.due_for_reminder(utc_now(), REMINDER_HORIZON)
        for appointment in due:
            await self.notifications.notify(
                appointment.client_id,
                "Appointment reminder",
                f"Reminder: '{appointment.purpose}' on {appointment.scheduled_time:%Y-%m-%d %H:%M}.",
                type=NotificationType.APPOINTMENT_REMINDER,
            )
            appointment.reminder_sent = True
            self.repos.session.add(appointment)
        await self.repos.commit()
        if due:
            logger.info(f"Sent {len(due)} appointment reminder(s)")
        return ReminderRunResult(reminded=len(due), appointment_ids=[apt.id for apt in due])
