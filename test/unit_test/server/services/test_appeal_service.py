"""Unit tests for appeals and hearings."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from legal_aid.core.errors import Forbidden, InvalidTransition, NotFound, ValidationFailed
from legal_aid.core.models.domain.enums import AppealStatus, CaseStatus
from legal_aid.core.models.io.appeals import AppealCreate, AppealDecision, AppealUpdate, HearingCreate
from legal_aid.server.services.appeals import AppealService


@pytest.fixture
def appeals(repos) -> AppealService:
    return AppealService(repos)


@pytest.fixture
async def assigned(factory):
    office = await factory.office()
    lawyer = await factory.lawyer(office)
    client = await factory.client(office)
    case = await factory.case(office, client=client, status=CaseStatus.ACTIVE, lawyer_id=lawyer.id)
    return lawyer, client, case


@pytest.mark.asyncio
async def test_file_appeal_notifies_client(appeals, repos, assigned):
    lawyer, client, case = assigned

    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal to high court"))

    assert appeal.status == AppealStatus.PENDING.value
    assert appeal.lawyer_id == lawyer.id
    notifications = await repos.notifications.list_for_user(client.id)
    assert notifications[0].title == "Appeal filed"
    activities = await repos.case_activities.list_for_case(case.id)
    assert activities[-1].activity_type == "APPEAL_FILED"


@pytest.mark.asyncio
async def test_only_one_pending_appeal_per_lawyer(appeals, factory, assigned):
    lawyer, client, case = assigned
    other_case = await factory.case(
        await factory.office(), client=client, status=CaseStatus.ACTIVE, lawyer_id=lawyer.id
    )
    await appeals.file(lawyer, AppealCreate(case_id=case.id, title="First"))

    with pytest.raises(ValidationFailed, match="pending appeal"):
        await appeals.file(lawyer, AppealCreate(case_id=other_case.id, title="Second"))


@pytest.mark.asyncio
async def test_appeal_on_foreign_case_is_not_found(appeals, factory, assigned):
    _, _, case = assigned
    stranger = await factory.lawyer(await factory.office())

    with pytest.raises(NotFound):
        await appeals.file(stranger, AppealCreate(case_id=case.id, title="Not mine"))


@pytest.mark.asyncio
async def test_hearing_schedules_pending_appeal(appeals, factory, assigned):
    lawyer, _, case = assigned
    admin = await factory.admin()
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))

    hearing = await appeals.add_hearing(
        admin, appeal.id, HearingCreate(scheduled_date=datetime(2031, 3, 4, 10, 0), location="Federal High Court")
    )

    assert hearing.location == "Federal High Court"
    read = await appeals.read(await appeals.get(appeal.id))
    assert read.status == AppealStatus.SCHEDULED
    assert [h.id for h in read.hearings] == [hearing.id]


@pytest.mark.asyncio
async def test_hearing_date_on_filing_creates_hearing(appeals, repos, assigned):
    lawyer, _, case = assigned

    appeal = await appeals.file(
        lawyer,
        AppealCreate(case_id=case.id, title="Appeal", hearing_date=datetime.now() + timedelta(days=30)),
    )

    assert len(await repos.hearings.list_for_appeal(appeal.id)) == 1


@pytest.mark.asyncio
async def test_scheduled_appeal_must_be_heard_before_decision(appeals, factory, assigned):
    lawyer, _, case = assigned
    admin = await factory.admin()
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))
    await appeals.add_hearing(admin, appeal.id, HearingCreate(scheduled_date=datetime(2031, 3, 4, 10, 0)))

    with pytest.raises(InvalidTransition):
        await appeals.decide(admin, appeal.id, AppealDecision(status=AppealStatus.APPROVED))

    await appeals.decide(admin, appeal.id, AppealDecision(status=AppealStatus.HEARD))
    decided = await appeals.decide(
        admin, appeal.id, AppealDecision(status=AppealStatus.APPROVED, decision="Judgment reversed")
    )

    assert decided.status == AppealStatus.APPROVED.value
    assert decided.decision == "Judgment reversed"
    assert decided.decided_at is not None


@pytest.mark.asyncio
async def test_decided_appeal_frees_lawyer_for_a_new_one(appeals, factory, assigned):
    lawyer, _, case = assigned
    admin = await factory.admin()
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))
    await appeals.decide(admin, appeal.id, AppealDecision(status=AppealStatus.REJECTED))

    second = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Second appeal"))

    assert second.status == AppealStatus.PENDING.value


@pytest.mark.asyncio
async def test_no_hearing_for_decided_appeal(appeals, factory, assigned):
    lawyer, _, case = assigned
    admin = await factory.admin()
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))
    await appeals.decide(admin, appeal.id, AppealDecision(status=AppealStatus.REJECTED))

    with pytest.raises(ValidationFailed, match="REJECTED"):
        await appeals.add_hearing(admin, appeal.id, HearingCreate(scheduled_date=datetime(2031, 3, 4, 10, 0)))


@pytest.mark.asyncio
async def test_lawyer_withdraws_own_appeal(appeals, assigned):
    lawyer, _, case = assigned
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))

    updated = await appeals.update(lawyer, appeal.id, AppealUpdate(status=AppealStatus.WITHDRAWN, title="Withdrawn"))

    assert updated.status == AppealStatus.WITHDRAWN.value
    assert updated.title == "Withdrawn"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "target", [AppealStatus.APPROVED, AppealStatus.REJECTED, AppealStatus.SCHEDULED, AppealStatus.HEARD]
)
async def test_lawyer_cannot_decide_own_appeal(appeals, assigned, target):
    lawyer, _, case = assigned
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))

    with pytest.raises(Forbidden, match="only withdraw"):
        await appeals.update(lawyer, appeal.id, AppealUpdate(status=target))

    stored = await appeals.get(appeal.id)
    assert stored.status == AppealStatus.PENDING.value
    assert stored.decided_at is None


@pytest.mark.asyncio
async def test_decided_appeal_cannot_be_withdrawn(appeals, factory, assigned):
    lawyer, _, case = assigned
    admin = await factory.admin()
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))
    await appeals.decide(admin, appeal.id, AppealDecision(status=AppealStatus.REJECTED))

    with pytest.raises(InvalidTransition):
        await appeals.update(lawyer, appeal.id, AppealUpdate(status=AppealStatus.WITHDRAWN))


@pytest.mark.asyncio
async def test_hearing_date_edit_moves_scheduled_hearing(appeals, repos, assigned):
    lawyer, _, case = assigned
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal", hearing_date=datetime(2031, 1, 5, 9)))

    await appeals.update(lawyer, appeal.id, AppealUpdate(hearing_date=datetime(2031, 2, 7, 14)))

    [hearing] = await repos.hearings.list_for_appeal(appeal.id)
    assert hearing.scheduled_date == datetime(2031, 2, 7, 14)


@pytest.mark.asyncio
async def test_hearing_date_edit_schedules_first_hearing(appeals, repos, assigned):
    lawyer, _, case = assigned
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))

    await appeals.update(lawyer, appeal.id, AppealUpdate(hearing_date=datetime(2031, 2, 7, 14)))

    assert len(await repos.hearings.list_for_appeal(appeal.id)) == 1


@pytest.mark.asyncio
async def test_lawyer_deletes_own_appeal_with_hearings(appeals, repos, assigned):
    lawyer, _, case = assigned
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal", hearing_date=datetime(2031, 1, 5, 9)))

    await appeals.delete(lawyer, appeal.id)

    assert await repos.appeals.get_by_id(appeal.id) is None
    assert await repos.hearings.list_for_appeal(appeal.id) == []
    assert not await repos.appeals.has_pending(lawyer.id)


@pytest.mark.asyncio
async def test_other_lawyer_cannot_delete_appeal(appeals, factory, assigned):
    lawyer, _, case = assigned
    stranger = await factory.lawyer(await factory.office())
    appeal = await appeals.file(lawyer, AppealCreate(case_id=case.id, title="Appeal"))

    with pytest.raises(NotFound):
        await appeals.delete(stranger, appeal.id)
