"""
Authentication Endpoints.

Login issues a signed access token, records it as a server side session and
sets it as an http-only cookie. Clients may send the token back either as a
``Bearer`` header or through the cookie.
"""

from fastapi import APIRouter, Request, Response

from legal_aid.core.models.io import ApiResponse, ok
from legal_aid.core.models.io.auth import ChangePasswordRequest, LoginRequest, LoginResponse
from legal_aid.core.models.io.users import CurrentUserRead, UserRead
from legal_aid.server.core.config import settings
from legal_aid.server.services.deps import AuthServiceDep, CurrentUserDep, UserServiceDep

router = APIRouter()


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    summary="Log In",
    description="Authenticate with email and password and receive an access token.",
    responses={401: {"description": "Invalid credentials"}, 403: {"description": "Account is not active"}},
)
async def login(payload: LoginRequest, request: Request, response: Response, auth: AuthServiceDep):
    """
    Log in.

    - **email**: Account email (case-insensitive)
    - **password**: Account password

    The token is valid for the configured lifetime (24 hours by default).
    """
    issued = await auth.login(
        payload.email,
        payload.password,
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
    )
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=issued.token,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
        max_age=settings.jwt_expire_hours * 3600,
    )
    return ok(
        LoginResponse(token=issued.token, expires_at=issued.expires_at, user=UserRead.model_validate(issued.user)),
        "Login successful",
    )


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    summary="Log Out",
    description="Revoke the current session and clear the auth cookie.",
)
async def logout(request: Request, response: Response, user: CurrentUserDep, auth: AuthServiceDep):
    await auth.logout(request.state.token)
    response.delete_cookie(settings.auth_cookie_name)
    return ok(message="Logged out")


@router.get(
    "/me",
    response_model=ApiResponse[CurrentUserRead],
    summary="Current User",
    description="Return the authenticated user with the profile of their role.",
)
async def me(user: CurrentUserDep, users: UserServiceDep):
    return ok(await users.profile_of(user))


@router.post(
    "/change-password",
    response_model=ApiResponse[None],
    summary="Change Password",
    responses={400: {"description": "Current password is incorrect"}},
)
async def change_password(payload: ChangePasswordRequest, user: CurrentUserDep, auth: AuthServiceDep):
    await auth.change_password(user, payload.current_password, payload.new_password)
    return ok(message="Password updated")
