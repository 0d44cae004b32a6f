"""
Unit tests for public intake and coordinator auto-assignment.

Tests cover:
- Registration creates the client, the profile and a PENDING case together
- The least loaded coordinator of the office receives the case
- Ties go to the coordinator with the lowest profile id
- Offices without an active coordinator leave the case unassigned
- Duplicate contact details and inactive offices are rejected
- Coordinators register walk-in clients and search the clients of their office
"""

from __future__ import annotations

import pytest

from legal_aid.core.database.entities.cases import CaseAssignment
from legal_aid.core.errors import Forbidden, NotFound, ValidationFailed
from legal_aid.core.models.domain.enums import (
    AssignmentStatus,
    CaseCategory,
    CaseStatus,
    ClientSearchField,
    OfficeStatus,
    UserRole,
    UserStatus,
)
from legal_aid.core.models.io.cases import IntakeRegistration, WalkInClientCreate
from legal_aid.core.security import verify_password
from legal_aid.server.services.intake import IntakeService


def registration(office_id: int, **overrides) -> IntakeRegistration:
    fields = {
        "full_name": "Abebe Kebede",
        "email": "Abebe@Example.org",
        "phone": "0911223344",
        "password": "Secret123!",
        "region": "Addis Ababa",
        "wereda": "Bole",
        "kebele": "Kebele 03",
        "office_id": office_id,
        "case_title": "Land dispute",
        "case_description": "Neighbour claims part of the plot",
        "category": CaseCategory.PROPERTY,
    }
    fields.update(overrides)
    return IntakeRegistration(**fields)


class TestRegistration:
    """Tests for IntakeService.register."""

    @pytest.mark.asyncio
    async def test_creates_client_profile_and_pending_case(self, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)

        result = await IntakeService(repos).register(registration(office.id))

        assert result.user.role == UserRole.CLIENT.value
        assert result.user.email == "abebe@example.org"
        assert verify_password(result.user.password_hash, "Secret123!")
        assert result.profile.office_id == office.id
        assert result.profile.kebele == "Kebele 03"
        assert result.case.status == CaseStatus.PENDING.value
        assert result.case.client_id == result.user.id
        assert result.case.coordinator_id == coordinator.id
        assert result.coordinator_assignment.status == AssignmentStatus.PENDING.value

    @pytest.mark.asyncio
    async def test_registration_notifies_client_and_coordinator(self, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)

        result = await IntakeService(repos).register(registration(office.id))

        assert await repos.notifications.count_unread(result.user.id) == 1
        assert await repos.notifications.count_unread(coordinator.id) == 1
        activities = await repos.case_activities.list_for_case(result.case.id)
        assert {a.activity_type for a in activities} == {"CREATED", "COORDINATOR_ASSIGNED"}

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, repos, factory):
        office = await factory.office()
        await factory.client(office, email="abebe@example.org")

        with pytest.raises(ValidationFailed, match="already exists"):
            await IntakeService(repos).register(registration(office.id))

    @pytest.mark.asyncio
    async def test_duplicate_phone_is_rejected(self, repos, factory):
        office = await factory.office()
        await factory.client(office, phone="0911223344")

        with pytest.raises(ValidationFailed):
            await IntakeService(repos).register(registration(office.id, email="other@example.org"))

    @pytest.mark.asyncio
    async def test_inactive_office_is_not_found(self, repos, factory):
        office = await factory.office(status=OfficeStatus.INACTIVE.value)

        with pytest.raises(NotFound, match="Office not found"):
            await IntakeService(repos).register(registration(office.id))

    @pytest.mark.asyncio
    async def test_unknown_office_is_not_found(self, repos):
        with pytest.raises(NotFound):
            await IntakeService(repos).register(registration(9999))


class TestCoordinatorAutoAssignment:
    """The least loaded active coordinator of the office gets the new case."""

    @pytest.mark.asyncio
    async def test_least_loaded_coordinator_wins(self, repos, factory):
        office = await factory.office()
        busy = await factory.coordinator(office)
        free = await factory.coordinator(office)
        for _ in range(2):
            await factory.pending_coordinator_assignment(await factory.case(office), busy)

        result = await IntakeService(repos).register(registration(office.id))

        assert result.case.coordinator_id == free.id

    @pytest.mark.asyncio
    async def test_tie_goes_to_lowest_profile_id(self, repos, factory):
        office = await factory.office()
        first = await factory.coordinator(office)
        await factory.coordinator(office)

        result = await IntakeService(repos).register(registration(office.id))

        assert result.case.coordinator_id == first.id

    @pytest.mark.asyncio
    async def test_only_pending_assignments_count(self, repos, factory):
        office = await factory.office()
        first = await factory.coordinator(office)
        second = await factory.coordinator(office)
        await factory.pending_coordinator_assignment(await factory.case(office), second)
        done = await factory.pending_coordinator_assignment(await factory.case(office), first)
        done.status = AssignmentStatus.COMPLETED.value
        await repos.assignments.update(done)
        done_again = await factory.pending_coordinator_assignment(await factory.case(office), first)
        done_again.status = AssignmentStatus.COMPLETED.value
        await repos.assignments.update(done_again)

        result = await IntakeService(repos).register(registration(office.id))

        assert result.case.coordinator_id == first.id

    @pytest.mark.asyncio
    async def test_inactive_and_foreign_coordinators_are_skipped(self, repos, factory):
        office = await factory.office()
        other_office = await factory.office()
        await factory.coordinator(office, status=UserStatus.SUSPENDED)
        await factory.coordinator(office, profile_status="INACTIVE")
        await factory.coordinator(other_office)
        expected = await factory.coordinator(office)

        result = await IntakeService(repos).register(registration(office.id))

        assert result.case.coordinator_id == expected.id

    @pytest.mark.asyncio
    async def test_office_without_coordinator_leaves_case_pending(self, repos, factory):
        office = await factory.office()

        result = await IntakeService(repos).register(registration(office.id))

        assert result.coordinator_assignment is None
        assert result.case.coordinator_id is None
        assert result.case.status == CaseStatus.PENDING.value
        assignments = await repos.assignments.list(filters={"case_id": result.case.id})
        assert assignments == []

    @pytest.mark.asyncio
    async def test_assignment_rows_are_recorded_for_coordinator(self, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)

        result = await IntakeService(repos).register(registration(office.id))

        stored = await repos.assignments.get_by_id(result.coordinator_assignment.id)
        assert isinstance(stored, CaseAssignment)
        assert stored.assigned_to_id == coordinator.id
        assert stored.assignee_role == UserRole.COORDINATOR.value
        assert stored.assigned_by_id is None


def walk_in(**overrides) -> WalkInClientCreate:
    fields = {
        "full_name": "Tigist Haile",
        "phone": "0922334455",
        "region": "Amhara",
        "wereda": "Bahir Dar",
        "kebele": "Kebele 11",
    }
    fields.update(overrides)
    return WalkInClientCreate(**fields)


class TestWalkInRegistration:
    """Tests for IntakeService.register_walk_in."""

    @pytest.mark.asyncio
    async def test_registers_client_in_coordinator_office(self, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)

        result = await IntakeService(repos).register_walk_in(coordinator, walk_in())

        assert result.user.role == UserRole.CLIENT.value
        assert result.user.status == UserStatus.ACTIVE.value
        assert result.user.email.endswith("@walk-in.legal-aid.local")
        assert result.profile.office_id == office.id
        assert result.profile.kebele == "Kebele 11"
        assert verify_password(result.user.password_hash, result.temporary_password)

    @pytest.mark.asyncio
    async def test_given_password_is_not_returned(self, repos, factory):
        coordinator = await factory.coordinator(await factory.office())

        result = await IntakeService(repos).register_walk_in(
            coordinator, walk_in(email="Tigist@Example.org", password="Secret123!")
        )

        assert result.temporary_password is None
        assert result.user.email == "tigist@example.org"
        assert verify_password(result.user.password_hash, "Secret123!")

    @pytest.mark.asyncio
    async def test_duplicate_phone_is_rejected(self, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)
        await factory.client(office, phone="0922334455")

        with pytest.raises(ValidationFailed, match="already exists"):
            await IntakeService(repos).register_walk_in(coordinator, walk_in())

    @pytest.mark.asyncio
    async def test_inactive_office_is_rejected(self, repos, factory):
        coordinator = await factory.coordinator(await factory.office(status=OfficeStatus.INACTIVE.value))

        with pytest.raises(ValidationFailed, match="not active"):
            await IntakeService(repos).register_walk_in(coordinator, walk_in())

    @pytest.mark.asyncio
    async def test_requires_coordinator_profile(self, repos, factory):
        stranger = await factory.user(UserRole.COORDINATOR)

        with pytest.raises(Forbidden):
            await IntakeService(repos).register_walk_in(stranger, walk_in())


class TestClientSearch:
    """Tests for IntakeService.search_clients."""

    @pytest.mark.asyncio
    async def test_search_by_name_returns_open_cases(self, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)
        client = await factory.client(office, full_name="Almaz Bekele")
        open_case = await factory.case(office, client=client, status=CaseStatus.ACTIVE)
        await factory.case(office, client=client, status=CaseStatus.RESOLVED)
        await factory.client(office, full_name="Dawit Mekonnen")

        [result] = await IntakeService(repos).search_clients(coordinator, "almaz", ClientSearchField.NAME)

        assert result.user.id == client.id
        assert [case.id for case in result.open_cases] == [open_case.id]

    @pytest.mark.asyncio
    async def test_search_by_phone(self, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)
        client = await factory.client(office, phone="0933111222")

        results = await IntakeService(repos).search_clients(coordinator, "111222", ClientSearchField.PHONE)

        assert [r.user.id for r in results] == [client.id]

    @pytest.mark.asyncio
    async def test_clients_of_other_offices_are_hidden(self, repos, factory):
        coordinator = await factory.coordinator(await factory.office())
        await factory.client(await factory.office(), full_name="Almaz Bekele")

        assert await IntakeService(repos).search_clients(coordinator, "Almaz", ClientSearchField.NAME) == []

    @pytest.mark.asyncio
    async def test_client_with_case_in_office_is_found(self, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)
        client = await factory.client(await factory.office(), full_name="Almaz Bekele")
        await factory.case(office, client=client)

        results = await IntakeService(repos).search_clients(coordinator, "Almaz", ClientSearchField.NAME)

        assert [r.user.id for r in results] == [client.id]

    @pytest.mark.asyncio
    async def test_blank_query_is_rejected(self, repos, factory):
        coordinator = await factory.coordinator(await factory.office())

        with pytest.raises(ValidationFailed, match="query"):
            await IntakeService(repos).search_clients(coordinator, "  ", ClientSearchField.NAME)
