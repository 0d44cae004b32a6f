"""
Office and kebele service.
"""

from __future__ import annotations

from typing import List, Optional

from legal_aid.core.database.entities.offices import Kebele, KebeleManager, Office
from legal_aid.core.database.entities.users import User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Forbidden, NotFound, ValidationFailed
from legal_aid.core.models.domain.enums import UserRole, UserStatus
from legal_aid.core.models.io.cases import CaseRead
from legal_aid.core.models.io.offices import (
    KebeleCreate,
    KebeleDashboard,
    KebeleManagerRead,
    KebeleRead,
    KebeleUpdate,
    OfficeCreate,
    OfficeUpdate,
)
from legal_aid.core.security import hash_password


class OfficeService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    # ------------------------------------------------------------------
    # Offices
    # ------------------------------------------------------------------

    async def list_offices(self) -> List[Office]:
        return await self.repos.offices.list()

    async def get_office(self, office_id: int) -> Office:
        office = await self.repos.offices.get_by_id(office_id)
        if office is None:
            raise NotFound("Office not found")
        return office

    async def create_office(self, payload: OfficeCreate) -> Office:
        if await self.repos.offices.get_by_name(payload.name) is not None:
            raise ValidationFailed("Office name already exists")
        data = payload.model_dump()
        data["status"] = payload.status.value
        return await self.repos.offices.create(Office(**data))

    async def update_office(self, office_id: int, payload: OfficeUpdate) -> Office:
        office = await self.get_office(office_id)
        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] != office.name:
            existing = await self.repos.offices.get_by_name(changes["name"])
            if existing is not None and existing.id != office.id:
                raise ValidationFailed("Office name already exists")
        if changes.get("status") is not None:
            changes["status"] = payload.status.value
        for key, value in changes.items():
            setattr(office, key, value)
        return await self.repos.offices.update(office)

    async def delete_office(self, office_id: int) -> None:
        office = await self.get_office(office_id)
        if await self.repos.offices.count_references(office.id) > 0:
            raise ValidationFailed("Cannot delete an office that still has cases or staff")
        await self.repos.offices.delete(office.id)

    # ------------------------------------------------------------------
    # Kebeles
    # ------------------------------------------------------------------

    async def read_kebele(self, kebele: Kebele) -> KebeleRead:
        read = KebeleRead.model_validate(kebele)
        link = await self.repos.kebele_managers.get_by_kebele(kebele.id)
        if link is not None:
            manager = await self.repos.users.get_by_id(link.user_id)
            if manager is not None:
                read.manager = KebeleManagerRead(
                    user_id=manager.id,
                    full_name=manager.full_name,
                    email=manager.email,
                    phone=manager.phone,
                    position=link.position,
                )
        return read

    async def list_kebeles(self) -> List[KebeleRead]:
        return [await self.read_kebele(kebele) for kebele in await self.repos.kebeles.list_ordered()]

    async def get_kebele(self, kebele_id: int) -> Kebele:
        kebele = await self.repos.kebeles.get_by_id(kebele_id)
        if kebele is None:
            raise NotFound("Kebele not found")
        return kebele

    async def create_kebele(self, payload: KebeleCreate) -> Kebele:
        """Create a kebele and, when given, its KEBELE_MANAGER account."""
        if await self.repos.kebeles.get_by_number(payload.kebele_number) is not None:
            raise ValidationFailed("Kebele number already exists")
        if payload.office_id is not None:
            await self.get_office(payload.office_id)

        kebele = await self.repos.kebeles.add(Kebele(**payload.model_dump(exclude={"manager"})))
        if payload.manager is not None:
            manager = payload.manager
            if await self.repos.users.find_by_email_or_phone(manager.email, manager.phone) is not None:
                raise ValidationFailed("A user with this email or phone already exists")
            user = await self.repos.users.add(
                User(
                    email=manager.email.lower(),
                    phone=manager.phone,
                    full_name=manager.full_name,
                    password_hash=hash_password(manager.password),
                    role=UserRole.KEBELE_MANAGER.value,
                    status=UserStatus.ACTIVE.value,
                )
            )
            await self.repos.kebele_managers.add(
                KebeleManager(user_id=user.id, kebele_id=kebele.id, position=manager.position)
            )
        await self.repos.commit()
        return kebele

    async def update_kebele(self, kebele_id: int, payload: KebeleUpdate) -> Kebele:
        kebele = await self.get_kebele(kebele_id)
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("office_id") is not None:
            await self.get_office(changes["office_id"])
        for key, value in changes.items():
            setattr(kebele, key, value)
        return await self.repos.kebeles.update(kebele)

    async def delete_kebele(self, kebele_id: int) -> None:
        kebele = await self.get_kebele(kebele_id)
        link = await self.repos.kebele_managers.get_by_kebele(kebele.id)
        if link is not None:
            raise ValidationFailed("Cannot delete a kebele that still has a manager")
        await self.repos.kebeles.delete(kebele.id)

    async def manager_dashboard(self, manager: User, recent_limit: int = 10) -> KebeleDashboard:
        """Case overview for the kebele the manager looks after."""
        link = await self.repos.kebele_managers.get_by_user(manager.id)
        if link is None:
            raise Forbidden("No kebele is linked to this account")
        kebele = await self.get_kebele(link.kebele_id)

        by_status = await self.repos.cases.count_by_status(kebele=kebele.kebele_name)
        recent, total = await self.repos.cases.search(kebele=kebele.kebele_name, limit=recent_limit)
        return KebeleDashboard(
            kebele=await self.read_kebele(kebele),
            total_cases=total,
            cases_by_status=by_status,
            recent_cases=[CaseRead.model_validate(case) for case in recent],
        )

    async def kebele_cases(self, manager: User, *, limit: int = 20, offset: int = 0):
        link = await self.repos.kebele_managers.get_by_user(manager.id)
        if link is None:
            raise Forbidden("No kebele is linked to this account")
        kebele = await self.get_kebele(link.kebele_id)
        return await self.repos.cases.search(kebele=kebele.kebele_name, limit=limit, offset=offset)

    async def kebele_id_for(self, user: User) -> Optional[int]:
        link = await self.repos.kebele_managers.get_by_user(user.id)
        return link.kebele_id if link else None
