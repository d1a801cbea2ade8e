# 📄 File: app/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# Endpoints for looking at and editing your own account, changing your password, and for
# admins to switch other accounts on or off.
#
# 🧪 Purpose (Technical Summary):
# FastAPI user routes over UserApplicationService. /me routes act on the token's subject;
# activation and deactivation require the ADMIN role.
#
# 🔗 Dependencies:
# - FastAPI router, app.shared.core.dependencies, user_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted under /api/v1/users)

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from app.modules.user_management.application.commands.user_commands import (
    ChangePasswordCommand,
    UpdateProfileCommand,
)
from app.modules.user_management.presentation.api.schemas.user_schemas import (
    ChangePasswordRequest,
    MessageResponse,
    UpdateProfileRequest,
    UserResponse,
)
from app.shared.core.container import ApplicationContainer
from app.shared.core.dependencies import (
    CurrentUser,
    get_container,
    get_current_admin_user,
    get_current_user,
    raise_for_result,
)

logger = logging.getLogger(__name__)

users_router = APIRouter()


@users_router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    user = raise_for_result(await container.user_service.get_user_by_id(current_user.user_id))
    return UserResponse.from_domain(user)


@users_router.patch("/me", response_model=UserResponse, summary="Update current user's profile")
async def update_me(
    profile_data: UpdateProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    command = UpdateProfileCommand(user_id=current_user.user_id, **profile_data.model_dump(exclude_unset=True))
    user = raise_for_result(await container.user_service.update_profile(command))
    return UserResponse.from_domain(user)


@users_router.post("/me/password", response_model=MessageResponse, summary="Change password")
async def change_password(
    password_data: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> MessageResponse:
    raise_for_result(await container.user_service.change_password(ChangePasswordCommand(
        user_id=current_user.user_id,
        current_password=password_data.current_password,
        new_password=password_data.new_password,
    )))
    return MessageResponse(message="Password changed successfully")


@users_router.get("/{user_id}", response_model=UserResponse, summary="Get user by id")
async def get_user(
    user_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    user = raise_for_result(await container.user_service.get_user_by_id(user_id))
    return UserResponse.from_domain(user)


# Admin endpoints

@users_router.post("/{user_id}/deactivate", response_model=UserResponse, summary="Deactivate an account")
async def deactivate_user(
    user_id: UUID,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    user = raise_for_result(await container.user_service.deactivate_user(user_id))
    logger.info(f"Admin {admin.user_id} deactivated user {user_id}")
    return UserResponse.from_domain(user)


@users_router.post("/{user_id}/activate", response_model=UserResponse, summary="Reactivate an account")
async def activate_user(
    user_id: UUID,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    user = raise_for_result(await container.user_service.activate_user(user_id))
    logger.info(f"Admin {admin.user_id} activated user {user_id}")
    return UserResponse.from_domain(user)
