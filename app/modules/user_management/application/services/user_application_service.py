# 📄 File: app/modules/user_management/application/services/user_application_service.py
# 🧭 Purpose (Layman Explanation):
# Everything about an account itself: signing up, editing the profile, changing the password,
# and letting admins switch accounts on or off.
#
# 🧪 Purpose (Technical Summary):
# User use-case service. Registration and password changes enqueue their notification emails
# into the outbox in the same unit of work as the account write; domain events are
# dispatched after commit. All methods return ApplicationResult.
#
# 🔗 Dependencies:
# - AbstractUnitOfWork, SecurityManager (bcrypt hashing), EventDispatcher, OutboxEmail
#
# 🔄 Connected Modules / Calls From:
# - auth and users routes, ApplicationContainer

import logging
from uuid import UUID

from app.modules.notifications.domain.models.outbox_email import OutboxEmail
from app.modules.user_management.application.commands.user_commands import (
    ChangePasswordCommand,
    RegisterUserCommand,
    UpdateProfileCommand,
)
from app.modules.user_management.domain.models.user import User, UserRole
from app.shared.core.event_bus import EventDispatcher
from app.shared.core.exceptions import ErrorKind, NotFoundError
from app.shared.core.result import ApplicationResult, result_boundary
from app.shared.core.security import SecurityManager
from app.shared.core.unit_of_work import AbstractUnitOfWork, UnitOfWorkFactory
from app.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)
audit_logger = get_logger("audit")


class UserApplicationService:
    """Account use cases."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        security_manager: SecurityManager,
        event_dispatcher: EventDispatcher,
    ):
        self._uow_factory = uow_factory
        self._security = security_manager
        self._event_dispatcher = event_dispatcher

    @result_boundary("register user")
    async def register_user(self, command: RegisterUserCommand) -> ApplicationResult[User]:
        if command.role == UserRole.ADMIN:
            return ApplicationResult.fail("Admin accounts cannot be self-registered", ErrorKind.ACCESS_DENIED)

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(command.email) is not None:
                return ApplicationResult.fail("Email already registered", ErrorKind.CONFLICT)

            user = User.create(
                email=command.email,
                password_hash=self._security.get_password_hash(command.password),
                first_name=command.first_name,
                last_name=command.last_name,
                role=command.role,
            )
            await uow.users.create(user)
            await uow.email_outbox.add(OutboxEmail.welcome(user.email, user.first_name))

        logger.info(f"Registered user {user.id} ({user.role.value})")
        await self._event_dispatcher.dispatch_all(user.pull_domain_events())
        return ApplicationResult.ok(user)

    @result_boundary("update profile")
    async def update_profile(self, command: UpdateProfileCommand) -> ApplicationResult[User]:
        async with self._uow_factory() as uow:
            user = await self._get_user(uow, command.user_id)
            user.update_profile(
                first_name=command.first_name,
                last_name=command.last_name,
                avatar_url=command.avatar_url,
            )
            await uow.users.update(user)
        return ApplicationResult.ok(user)

    @result_boundary("change password")
    async def change_password(self, command: ChangePasswordCommand) -> ApplicationResult[bool]:
        async with self._uow_factory() as uow:
            user = await self._get_user(uow, command.user_id)
            if not self._security.verify_password(command.current_password, user.password_hash):
                return ApplicationResult.fail("Current password is incorrect", ErrorKind.VALIDATION)

            user.change_password_hash(self._security.get_password_hash(command.new_password))
            await uow.users.update(user)
            await uow.email_outbox.add(OutboxEmail.password_changed(user.email, user.first_name))

        audit_logger.log_user_action("change_password", str(user.id))
        await self._event_dispatcher.dispatch_all(user.pull_domain_events())
        return ApplicationResult.ok(True)

    @result_boundary("get user")
    async def get_user_by_id(self, user_id: UUID) -> ApplicationResult[User]:
        async with self._uow_factory() as uow:
            user = await self._get_user(uow, user_id)
        return ApplicationResult.ok(user)

    @result_boundary("deactivate user")
    async def deactivate_user(self, user_id: UUID) -> ApplicationResult[User]:
        async with self._uow_factory() as uow:
            user = await self._get_user(uow, user_id)
            user.deactivate()
            await uow.users.update(user)

        audit_logger.log_user_action("deactivate_user", str(user_id))
        await self._event_dispatcher.dispatch_all(user.pull_domain_events())
        return ApplicationResult.ok(user)

    @result_boundary("activate user")
    async def activate_user(self, user_id: UUID) -> ApplicationResult[User]:
        async with self._uow_factory() as uow:
            user = await self._get_user(uow, user_id)
            user.activate()
            await uow.users.update(user)

        audit_logger.log_user_action("activate_user", str(user_id))
        return ApplicationResult.ok(user)

    async def _get_user(self, uow: AbstractUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=str(user_id))
        return user
