# 📄 File: app/modules/user_management/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for creating an account, signing in, renewing a sign-in, and signing out
# of one or all devices.
#
# 🧪 Purpose (Technical Summary):
# FastAPI authentication routes. Request schemas become application commands, services are
# resolved from the application container, and failed ApplicationResults are raised as
# LMSExceptions for the global handler. Credential endpoints share the slowapi limiter.
#
# 🔗 Dependencies:
# - FastAPI router, slowapi limiter
# - AuthenticationService, UserApplicationService, SessionService (via container)
# - auth_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted under /api/v1/auth)

"""
Authentication API Endpoints

Endpoints:
- POST /register: Create a STUDENT or INSTRUCTOR account
- POST /login: Email/password authentication (rate limited)
- POST /refresh: Exchange a refresh token for a new pair
- POST /logout: Revoke the current session
- POST /logout-all: Revoke every session of the current user
- GET /sessions: List the current user's active sessions
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.modules.user_management.application.commands.user_commands import LoginCommand, RegisterUserCommand
from app.modules.user_management.presentation.api.schemas.auth_schemas import (
    LoginRequest,
    LogoutResponse,
    RegisterRequest,
    SessionListResponse,
    SessionResponse,
    TokenRefreshRequest,
    TokenResponse,
)
from app.modules.user_management.presentation.api.schemas.user_schemas import UserResponse
from app.shared.core.container import ApplicationContainer
from app.shared.core.dependencies import (
    CurrentUser,
    get_client_ip,
    get_container,
    get_current_user,
    get_user_agent,
    raise_for_result,
)
from app.shared.core.rate_limiter import LOGIN_RATE_LIMIT, limiter

logger = logging.getLogger(__name__)

auth_router = APIRouter()


@auth_router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user account",
    responses={
        403: {"description": "Admin accounts cannot be self-registered"},
        409: {"description": "Email already registered"},
        429: {"description": "Too many registration attempts"},
    },
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def register(
    request: Request,
    registration_data: RegisterRequest,
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    command = RegisterUserCommand(**registration_data.model_dump())
    user = raise_for_result(await container.user_service.register_user(command))
    return UserResponse.from_domain(user)


@auth_router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate with email and password",
    responses={
        401: {"description": "Invalid credentials"},
        403: {"description": "Account is deactivated"},
        429: {"description": "Too many login attempts"},
    },
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    container: ApplicationContainer = Depends(get_container),
) -> TokenResponse:
    """
    Verify credentials and open a new session.

    The session remembers the client's user agent and IP address; the
    returned access and refresh tokens share the session's jti.
    """
    command = LoginCommand(
        email=credentials.email,
        password=credentials.password,
        user_agent=get_user_agent(request),
        ip_address=get_client_ip(request),
    )
    result = raise_for_result(await container.authentication_service.login(command))
    return TokenResponse.from_dto(result)


@auth_router.post("/refresh", response_model=TokenResponse, summary="Refresh the token pair")
async def refresh_token(
    request: Request,
    refresh_data: TokenRefreshRequest,
    container: ApplicationContainer = Depends(get_container),
) -> TokenResponse:
    result = raise_for_result(await container.authentication_service.refresh_token(
        refresh_data.refresh_token,
        user_agent=get_user_agent(request),
        ip_address=get_client_ip(request),
    ))
    return TokenResponse.from_dto(result)


@auth_router.post("/logout", response_model=LogoutResponse, summary="Revoke the current session")
async def logout(
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> LogoutResponse:
    raise_for_result(await container.authentication_service.logout(current_user.jti))
    logger.info(f"User {current_user.user_id} logged out")
    return LogoutResponse(message="Logged out successfully")


@auth_router.post("/logout-all", response_model=LogoutResponse, summary="Revoke every session")
async def logout_all(
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> LogoutResponse:
    revoked = raise_for_result(await container.authentication_service.logout_all_sessions(current_user.user_id))
    return LogoutResponse(message="Logged out from all devices", sessions_revoked=revoked)


@auth_router.get("/sessions", response_model=SessionListResponse, summary="List active sessions")
async def list_sessions(
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> SessionListResponse:
    sessions = await container.session_service.get_user_active_sessions(current_user.user_id)
    return SessionListResponse(
        sessions=[SessionResponse.from_domain(s, current_user.jti) for s in sessions],
        total=len(sessions),
    )
