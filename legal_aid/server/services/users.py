"""
User administration service.

Admins create staff accounts with the profile of their role, suspend or
reactivate accounts and attach custom roles.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from legal_aid.core.database.entities.offices import KebeleManager
from legal_aid.core.database.entities.users import ClientProfile, CoordinatorProfile, LawyerProfile, User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Forbidden, NotFound, ValidationFailed
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import UserRole, UserStatus
from legal_aid.core.models.io.users import (
    ClientProfileUpdate,
    CurrentUserRead,
    LawyerProfileUpdate,
    StaffCreate,
    UserRoleUpdate,
    UserStatusUpdate,
)
from legal_aid.core.security import hash_password

logger = get_logger(__name__)

_STAFF_WITH_OFFICE = (UserRole.LAWYER, UserRole.COORDINATOR)


class UserService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def get_user(self, user_id: int) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def profile_of(self, user: User) -> CurrentUserRead:
        """The user together with the profile matching their role."""
        data = {"user": user}
        if user.role == UserRole.CLIENT.value:
            data["client_profile"] = await self.repos.clients.get_by_user(user.id)
        elif user.role == UserRole.LAWYER.value:
            data["lawyer_profile"] = await self.repos.lawyers.get_by_user(user.id)
        elif user.role == UserRole.COORDINATOR.value:
            data["coordinator_profile"] = await self.repos.coordinators.get_by_user(user.id)
        elif user.role == UserRole.KEBELE_MANAGER.value:
            link = await self.repos.kebele_managers.get_by_user(user.id)
            data["kebele_id"] = link.kebele_id if link else None
        return CurrentUserRead.model_validate(data, from_attributes=True)

    async def search(
        self,
        *,
        role: Optional[UserRole] = None,
        status: Optional[UserStatus] = None,
        query: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[User], int]:
        return await self.repos.users.search(
            role=role.value if role else None,
            status=status.value if status else None,
            query=query,
            limit=limit,
            offset=offset,
        )

    async def create_staff(self, admin: User, payload: StaffCreate) -> User:
        """Create a staff account and its role profile.

        Raises:
            ValidationFailed: Client role requested, missing office for a
                lawyer or coordinator, missing kebele for a kebele
                manager, a kebele that already has a manager, or duplicate
                email/phone.
            NotFound: The office or kebele does not exist.
            Forbidden: A non super admin tried to create a SUPER_ADMIN.
        """
        if payload.role == UserRole.CLIENT:
            raise ValidationFailed("Clients register through the intake form")
        if payload.role == UserRole.SUPER_ADMIN and admin.role != UserRole.SUPER_ADMIN.value:
            raise Forbidden("Only a super admin can create super admins")
        if payload.role in _STAFF_WITH_OFFICE:
            if payload.office_id is None:
                raise ValidationFailed("office_id is required for lawyers and coordinators")
            if await self.repos.offices.get_by_id(payload.office_id) is None:
                raise NotFound("Office not found")
        if payload.role == UserRole.KEBELE_MANAGER:
            if payload.kebele_id is None:
                raise ValidationFailed("kebele_id is required for kebele managers")
            if await self.repos.kebeles.get_by_id(payload.kebele_id) is None:
                raise NotFound("Kebele not found")
            if await self.repos.kebele_managers.get_by_kebele(payload.kebele_id) is not None:
                raise ValidationFailed("This kebele already has a manager")
        if await self.repos.users.find_by_email_or_phone(payload.email, payload.phone) is not None:
            raise ValidationFailed("A user with this email or phone already exists")

        user = await self.repos.users.add(
            User(
                email=payload.email.lower(),
                phone=payload.phone,
                full_name=payload.full_name,
                password_hash=hash_password(payload.password),
                role=payload.role.value,
                status=UserStatus.ACTIVE.value,
                is_admin=payload.role in (UserRole.ADMIN, UserRole.SUPER_ADMIN),
            )
        )
        if payload.role == UserRole.LAWYER:
            profile = LawyerProfile(
                user_id=user.id,
                office_id=payload.office_id,
                experience_years=payload.experience_years,
                license_number=payload.license_number,
                max_caseload=payload.max_caseload,
            )
            profile.set_specializations_list([category.value for category in payload.specializations])
            await self.repos.lawyers.add(profile)
        elif payload.role == UserRole.COORDINATOR:
            await self.repos.coordinators.add(
                CoordinatorProfile(
                    user_id=user.id,
                    office_id=payload.office_id,
                    coordinator_type=payload.coordinator_type.value,
                    qualifications=payload.qualifications,
                )
            )
        elif payload.role == UserRole.KEBELE_MANAGER:
            await self.repos.kebele_managers.add(
                KebeleManager(user_id=user.id, kebele_id=payload.kebele_id, position=payload.position)
            )
        await self.repos.activities.record(
            "CREATE_USER", admin.id, {"user_id": user.id, "role": user.role, "email": user.email}
        )
        try:
            await self.repos.commit()
        except IntegrityError as e:
            await self.repos.rollback()
            raise ValidationFailed("A user with this email or phone already exists") from e
        logger.info(f"Admin {admin.id} created {user.role} account {user.id}")
        return user

    async def update_status(self, admin: User, user_id: int, payload: UserStatusUpdate) -> User:
        """Change account status; any non ACTIVE status revokes every open session."""
        user = await self.get_user(user_id)
        if user.id == admin.id and payload.status != UserStatus.ACTIVE:
            raise ValidationFailed("You cannot deactivate your own account")
        user.status = payload.status.value
        if payload.status != UserStatus.ACTIVE:
            await self.repos.auth_sessions.deactivate_for_user(user.id)
        self.repos.session.add(user)
        await self.repos.activities.record(
            "UPDATE_USER_STATUS", admin.id, {"user_id": user.id, "status": payload.status.value}
        )
        await self.repos.commit()
        return user

    async def assign_role(self, admin: User, user_id: int, payload: UserRoleUpdate) -> User:
        user = await self.get_user(user_id)
        if payload.role_id is not None:
            role = await self.repos.roles.get_by_id(payload.role_id)
            if role is None:
                raise NotFound("Role not found")
            if role.is_system_role:
                raise ValidationFailed("Only custom roles can be assigned")
        user.role_id = payload.role_id
        self.repos.session.add(user)
        await self.repos.activities.record("ASSIGN_ROLE", admin.id, {"user_id": user.id, "role_id": payload.role_id})
        await self.repos.commit()
        return user

    async def update_lawyer_profile(self, user_id: int, payload: LawyerProfileUpdate) -> LawyerProfile:
        profile = await self.repos.lawyers.get_by_user(user_id)
        if profile is None:
            raise NotFound("Lawyer profile not found")
        changes = payload.model_dump(exclude_unset=True)
        if "specializations" in changes:
            profile.set_specializations_list([category.value for category in payload.specializations or []])
            changes.pop("specializations")
        if changes.get("office_id") is not None and await self.repos.offices.get_by_id(changes["office_id"]) is None:
            raise NotFound("Office not found")
        for key, value in changes.items():
            if value is not None:
                setattr(profile, key, value)
        return await self.repos.lawyers.update(profile)

    async def update_client_profile(self, user: User, payload: ClientProfileUpdate) -> ClientProfile:
        profile = await self.repos.clients.get_by_user(user.id)
        if profile is None:
            raise ValidationFailed("User profile not found")
        changes = payload.model_dump(exclude_unset=True)
        full_name = changes.pop("full_name", None)
        if full_name:
            user.full_name = full_name
            self.repos.session.add(user)
        if changes.get("gender") is not None:
            changes["gender"] = payload.gender.value
        for key, value in changes.items():
            setattr(profile, key, value)
        return await self.repos.clients.update(profile)
