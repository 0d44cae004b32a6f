"""
Status transition tables.

Every mutable status field has an explicit table of allowed moves. Services
call :func:`ensure_transition` before changing a status so an illegal move is
reported as a 400 instead of silently overwriting the field.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Mapping, TypeVar

from legal_aid.core.errors import InvalidTransition

from .enums import AppealStatus, AppointmentStatus, CaseStatus, DocumentStatus, PaymentStatus

StatusT = TypeVar("StatusT", bound=Enum)

CASE_TRANSITIONS: Dict[CaseStatus, FrozenSet[CaseStatus]] = {
    CaseStatus.PENDING: frozenset({CaseStatus.ACTIVE, CaseStatus.IN_PROGRESS, CaseStatus.CANCELLED}),
    CaseStatus.ACTIVE: frozenset({CaseStatus.IN_PROGRESS, CaseStatus.RESOLVED, CaseStatus.CANCELLED}),
    CaseStatus.IN_PROGRESS: frozenset({CaseStatus.ACTIVE, CaseStatus.RESOLVED, CaseStatus.CANCELLED}),
    CaseStatus.CANCELLED: frozenset({CaseStatus.PENDING}),
    CaseStatus.RESOLVED: frozenset(),
}

APPEAL_TRANSITIONS: Dict[AppealStatus, FrozenSet[AppealStatus]] = {
    AppealStatus.PENDING: frozenset(
        {AppealStatus.SCHEDULED, AppealStatus.WITHDRAWN, AppealStatus.APPROVED, AppealStatus.REJECTED}
    ),
    AppealStatus.SCHEDULED: frozenset({AppealStatus.HEARD, AppealStatus.WITHDRAWN}),
    AppealStatus.HEARD: frozenset({AppealStatus.APPROVED, AppealStatus.REJECTED}),
    AppealStatus.APPROVED: frozenset(),
    AppealStatus.REJECTED: frozenset(),
    AppealStatus.WITHDRAWN: frozenset(),
}

APPOINTMENT_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset(
        {
            AppointmentStatus.COMPLETED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.NO_SHOW,
            AppointmentStatus.RESCHEDULED,
        }
    ),
    AppointmentStatus.RESCHEDULED: frozenset(
        {
            AppointmentStatus.SCHEDULED,
            AppointmentStatus.COMPLETED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.NO_SHOW,
        }
    ),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.NO_SHOW: frozenset(),
}

PAYMENT_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.COMPLETED, PaymentStatus.FAILED, PaymentStatus.CANCELLED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PENDING}),
    PaymentStatus.COMPLETED: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.CANCELLED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}

DOCUMENT_TRANSITIONS: Dict[DocumentStatus, FrozenSet[DocumentStatus]] = {
    DocumentStatus.PENDING: frozenset({DocumentStatus.APPROVED, DocumentStatus.REJECTED}),
    DocumentStatus.REJECTED: frozenset({DocumentStatus.PENDING}),
    DocumentStatus.APPROVED: frozenset(),
}

_ENTITY_NAMES = {
    CaseStatus: "case",
    AppealStatus: "appeal",
    AppointmentStatus: "appointment",
    PaymentStatus: "payment",
    DocumentStatus: "document",
}


def can_transition(table: Mapping[StatusT, FrozenSet[StatusT]], current: StatusT, target: StatusT) -> bool:
    """Return True when ``current -> target`` is listed in ``table``."""
    return target in table.get(current, frozenset())


def ensure_transition(table: Mapping[StatusT, FrozenSet[StatusT]], current: StatusT, target: StatusT) -> None:
    """Raise :class:`InvalidTransition` unless ``current -> target`` is allowed."""
    if not can_transition(table, current, target):
        entity = _ENTITY_NAMES.get(type(target), "status")
        raise InvalidTransition(entity, current.value, target.value)
