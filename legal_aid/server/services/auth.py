"""
Authentication service.

Handles credential checks, token issuance with a server side session row,
logout and password changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.users import AuthSession, User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Forbidden, Unauthorized, ValidationFailed
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import UserRole, UserStatus
from legal_aid.core.security import create_access_token, hash_password, verify_password
from legal_aid.server.core.config import AuthConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime
    user: User


class AuthService:
    """Login, logout and credential management."""

    def __init__(self, repos: RepoBundle, config: AuthConfig) -> None:
        self.repos = repos
        self.config = config

    async def _claims_for(self, user: User) -> Dict[str, Any]:
        claims: Dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
            "is_admin": user.is_admin or user.role in (UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value),
        }
        if user.role == UserRole.COORDINATOR.value:
            profile = await self.repos.coordinators.get_by_user(user.id)
            if profile is not None:
                claims["coordinator_id"] = profile.id
                claims["office_id"] = profile.office_id
        elif user.role == UserRole.LAWYER.value:
            profile = await self.repos.lawyers.get_by_user(user.id)
            if profile is not None:
                claims["office_id"] = profile.office_id
        elif user.role == UserRole.CLIENT.value:
            profile = await self.repos.clients.get_by_user(user.id)
            if profile is not None and profile.office_id is not None:
                claims["office_id"] = profile.office_id
        return claims

    async def login(
        self, email: str, password: str, *, user_agent: Optional[str] = None, ip_address: Optional[str] = None
    ) -> IssuedToken:
        """Verify credentials and open a new session.

        Raises:
            Unauthorized: Unknown email or wrong password.
            Forbidden: The account is not ACTIVE.
        """
        user = await self.repos.users.get_by_email(email)
        if user is None or not verify_password(user.password_hash, password):
            logger.info(f"Failed login attempt for {email}")
            raise Unauthorized("Invalid credentials")
        if user.status != UserStatus.ACTIVE.value:
            raise Forbidden("Account is not active")

        token, expires_at = create_access_token(
            await self._claims_for(user),
            secret=self.config.jwt_secret,
            algorithm=self.config.jwt_algorithm,
            expires_in=timedelta(hours=self.config.jwt_expire_hours),
        )
        await self.repos.auth_sessions.add(
            AuthSession(
                user_id=user.id,
                token=token,
                user_agent=(user_agent or "")[:512] or None,
                ip_address=ip_address,
                expires_at=expires_at,
            )
        )
        user.last_login_at = utc_now()
        self.repos.session.add(user)
        await self.repos.commit()
        logger.info(f"User {user.id} logged in")
        return IssuedToken(token=token, expires_at=expires_at, user=user)

    async def logout(self, token: str) -> None:
        session = await self.repos.auth_sessions.get_active(token, utc_now())
        if session is None:
            return
        session.is_active = False
        self.repos.session.add(session)
        await self.repos.commit()

    async def change_password(self, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(user.password_hash, current_password):
            raise ValidationFailed("Current password is incorrect")
        if current_password == new_password:
            raise ValidationFailed("New password must differ from the current password")
        user.password_hash = hash_password(new_password)
        self.repos.session.add(user)
        await self.repos.commit()
