"""
Request Dependencies.

Provides the per-request repository bundle, the authenticated user and role
guards, and service instances for API endpoints.
"""

from typing import Annotated, AsyncIterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from legal_aid.core.database import get_session
from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.users import User
from legal_aid.core.database.repositories import RepoBundle, build_repos
from legal_aid.core.errors import Forbidden, Unauthorized
from legal_aid.core.models.domain.enums import UserRole, UserStatus
from legal_aid.core.security import TokenError, decode_access_token
from legal_aid.server.core.config import settings

from .access import AccessService
from .appeals import AppealService
from .auth import AuthService
from .billing import BillingService, ChapaClient
from .cases import CaseService
from .documents import DocumentService
from .intake import IntakeService
from .notifications import NotificationService
from .offices import OfficeService
from .reports import ReportService
from .scheduling import SchedulingService
from .users import UserService

_bearer = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> RepoBundle:
    return build_repos(session)


ReposDep = Annotated[RepoBundle, Depends(get_repos)]


def extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Bearer header first, then the session cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth_cookie_name)


async def get_current_user(
    request: Request,
    repos: ReposDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer)] = None,
) -> User:
    """Resolve the authenticated user of the request.

    The token must decode, match an active unexpired session row and belong to
    an ACTIVE user. The raw token is kept on ``request.state`` for logout.
    """
    token = extract_token(request, credentials)
    if not token:
        raise Unauthorized("Authentication required")
    try:
        claims = decode_access_token(token, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
    except TokenError as e:
        raise Unauthorized(str(e)) from e

    session = await repos.auth_sessions.get_active(token, utc_now())
    if session is None:
        raise Unauthorized("Session expired or invalid")

    user = await repos.users.get_by_id(int(claims.get("sub", session.user_id)))
    if user is None or user.id != session.user_id:
        raise Unauthorized("Session expired or invalid")
    if user.status != UserStatus.ACTIVE.value:
        raise Forbidden("Account is not active")

    request.state.token = token
    request.state.claims = claims
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole):
    """Dependency factory allowing only ``roles``. SUPER_ADMIN is always allowed."""
    allowed = {role.value for role in roles} | {UserRole.SUPER_ADMIN.value}

    async def _guard(user: CurrentUserDep) -> User:
        if user.role not in allowed:
            raise Forbidden("Insufficient permissions")
        return user

    return _guard


AdminDep = Annotated[User, Depends(require_roles(UserRole.ADMIN))]
ClientDep = Annotated[User, Depends(require_roles(UserRole.CLIENT))]
CoordinatorDep = Annotated[User, Depends(require_roles(UserRole.COORDINATOR))]
LawyerDep = Annotated[User, Depends(require_roles(UserRole.LAWYER))]
KebeleManagerDep = Annotated[User, Depends(require_roles(UserRole.KEBELE_MANAGER))]


async def get_chapa_client() -> AsyncIterator[ChapaClient]:
    client = ChapaClient(settings.chapa)
    try:
        yield client
    finally:
        await client.aclose()


ChapaClientDep = Annotated[ChapaClient, Depends(get_chapa_client)]


def get_auth_service(repos: ReposDep) -> AuthService:
    return AuthService(repos, settings.auth)


def get_billing_service(repos: ReposDep, chapa: ChapaClientDep) -> BillingService:
    return BillingService(repos, chapa)


def get_document_service(repos: ReposDep) -> DocumentService:
    return DocumentService(repos, settings.storage)


def get_access_service(repos: ReposDep) -> AccessService:
    return AccessService(repos)


def get_appeal_service(repos: ReposDep) -> AppealService:
    return AppealService(repos)


def get_case_service(repos: ReposDep) -> CaseService:
    return CaseService(repos)


def get_intake_service(repos: ReposDep) -> IntakeService:
    return IntakeService(repos)


def get_notification_service(repos: ReposDep) -> NotificationService:
    return NotificationService(repos)


def get_office_service(repos: ReposDep) -> OfficeService:
    return OfficeService(repos)


def get_report_service(repos: ReposDep) -> ReportService:
    return ReportService(repos)


def get_scheduling_service(repos: ReposDep) -> SchedulingService:
    return SchedulingService(repos)


def get_user_service(repos: ReposDep) -> UserService:
    return UserService(repos)


AccessServiceDep = Annotated[AccessService, Depends(get_access_service)]
AppealServiceDep = Annotated[AppealService, Depends(get_appeal_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BillingServiceDep = Annotated[BillingService, Depends(get_billing_service)]
CaseServiceDep = Annotated[CaseService, Depends(get_case_service)]
DocumentServiceDep = Annotated[DocumentService, Depends(get_document_service)]
IntakeServiceDep = Annotated[IntakeService, Depends(get_intake_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
OfficeServiceDep = Annotated[OfficeService, Depends(get_office_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
SchedulingServiceDep = Annotated[SchedulingService, Depends(get_scheduling_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
