"""Tests for registration, login sessions and account management."""

from uuid import uuid4

import pytest

from app.modules.user_management.application.commands.user_commands import (
    ChangePasswordCommand,
    LoginCommand,
    RegisterUserCommand,
    UpdateProfileCommand,
)
from app.modules.user_management.application.services.authentication_service import AuthenticationService
from app.modules.user_management.application.services.session_service import SessionService
from app.modules.user_management.application.services.user_application_service import UserApplicationService
from app.modules.user_management.domain.models.user import UserRole
from app.shared.core.exceptions import ErrorKind

PASSWORD = "correct-horse-battery"


@pytest.fixture
def user_service(uow_factory, security, dispatcher):
    return UserApplicationService(uow_factory, security, dispatcher)


@pytest.fixture
def session_service(uow_factory, security):
    return SessionService(uow_factory, security)


@pytest.fixture
def auth_service(uow_factory, session_service, security):
    return AuthenticationService(uow_factory, session_service, security)


@pytest.fixture
def account(make_user, security):
    """A student whose password hash is real."""
    return make_user(email="learner@learnhub.io", password_hash=security.get_password_hash(PASSWORD))


def _login(email="learner@learnhub.io", password=PASSWORD, user_agent="pytest-agent", ip_address="10.0.0.1"):
    return LoginCommand(email=email, password=password, user_agent=user_agent, ip_address=ip_address)


class TestRegistration:
    """Tests for register_user."""

    @pytest.mark.asyncio
    async def test_register_hashes_password_and_queues_welcome(self, user_service, database, security, recorder):
        result = await user_service.register_user(RegisterUserCommand(
            email="  New.Student@LearnHub.io ",
            password=PASSWORD,
            first_name="Budi",
            last_name="Santoso",
        ))

        user = result.unwrap()
        assert user.email == "new.student@learnhub.io"
        assert user.role == UserRole.STUDENT
        assert user.password_hash != PASSWORD
        assert security.verify_password(PASSWORD, user.password_hash)

        [welcome] = database.all("email_outbox")
        assert welcome.recipient == "new.student@learnhub.io"
        assert welcome.subject == "Welcome to LearnHub"
        assert recorder.types() == ["user.registered"]

    @pytest.mark.asyncio
    async def test_register_instructor(self, user_service):
        result = await user_service.register_user(RegisterUserCommand(
            email="mentor@learnhub.io",
            password=PASSWORD,
            first_name="Siti",
            last_name="Rahma",
            role=UserRole.INSTRUCTOR,
        ))

        assert result.unwrap().can_create_course()

    @pytest.mark.asyncio
    async def test_duplicate_email_is_conflict(self, user_service, account, database):
        result = await user_service.register_user(RegisterUserCommand(
            email="LEARNER@learnhub.io",
            password=PASSWORD,
            first_name="Other",
            last_name="Person",
        ))

        assert result.error_kind == ErrorKind.CONFLICT
        assert len(database.all("users")) == 1
        assert database.all("email_outbox") == []

    @pytest.mark.asyncio
    async def test_admin_cannot_self_register(self, user_service, database):
        result = await user_service.register_user(RegisterUserCommand(
            email="root@learnhub.io",
            password=PASSWORD,
            first_name="Root",
            last_name="User",
            role=UserRole.ADMIN,
        ))

        assert result.error_kind == ErrorKind.ACCESS_DENIED
        assert database.all("users") == []

    @pytest.mark.asyncio
    async def test_invalid_email_is_validation_failure(self, user_service):
        result = await user_service.register_user(RegisterUserCommand(
            email="not-an-email",
            password=PASSWORD,
            first_name="Bad",
            last_name="Email",
        ))

        assert result.error_kind == ErrorKind.VALIDATION


class TestLogin:
    """Tests for login and the session lifecycle."""

    @pytest.mark.asyncio
    async def test_login_issues_tokens_bound_to_session(self, auth_service, account, database, security):
        result = await auth_service.login(_login())

        tokens = result.unwrap()
        assert tokens.token_type == "bearer"
        assert tokens.user.id == account.id

        claims = security.verify_token(tokens.access_token)
        [session] = database.all("sessions")
        assert claims["sub"] == str(account.id)
        assert claims["role"] == "STUDENT"
        assert claims["jti"] == session.jti
        assert session.user_agent == "pytest-agent"
        assert session.ip_address == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_wrong_password_is_unauthenticated(self, auth_service, account, database):
        result = await auth_service.login(_login(password="wrong-password"))

        assert result.error_kind == ErrorKind.UNAUTHENTICATED
        assert result.error == "Invalid credentials"
        assert database.all("sessions") == []

    @pytest.mark.asyncio
    async def test_unknown_email_gives_same_message(self, auth_service):
        result = await auth_service.login(_login(email="ghost@learnhub.io"))

        assert result.error_kind == ErrorKind.UNAUTHENTICATED
        assert result.error == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_deactivated_account_is_denied(self, auth_service, make_user, security):
        make_user(
            email="gone@learnhub.io",
            is_active=False,
            password_hash=security.get_password_hash(PASSWORD),
        )

        result = await auth_service.login(_login(email="gone@learnhub.io"))

        assert result.error_kind == ErrorKind.ACCESS_DENIED

    @pytest.mark.asyncio
    async def test_validate_token_checks_session(self, auth_service, account):
        tokens = (await auth_service.login(_login())).unwrap()

        valid = await auth_service.validate_token(tokens.access_token)
        assert valid.data["sub"] == str(account.id)

        claims = valid.data
        await auth_service.logout(claims["jti"])

        revoked = await auth_service.validate_token(tokens.access_token)
        assert revoked.error_kind == ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_validate_rejects_refresh_token(self, auth_service, account):
        tokens = (await auth_service.login(_login())).unwrap()

        result = await auth_service.validate_token(tokens.refresh_token)

        assert result.error_kind == ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_refresh_keeps_session(self, auth_service, account, security):
        tokens = (await auth_service.login(_login())).unwrap()

        refreshed = (await auth_service.refresh_token(tokens.refresh_token, "pytest-agent", "10.0.0.1")).unwrap()

        old_jti = security.verify_token(tokens.access_token)["jti"]
        new_jti = security.verify_token(refreshed.access_token)["jti"]
        assert new_jti == old_jti

    @pytest.mark.asyncio
    async def test_refresh_from_other_client_rejected(self, auth_service, account):
        tokens = (await auth_service.login(_login())).unwrap()

        result = await auth_service.refresh_token(tokens.refresh_token, "another-browser", "10.0.0.1")

        assert result.error_kind == ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_refresh_with_access_token_rejected(self, auth_service, account):
        tokens = (await auth_service.login(_login())).unwrap()

        result = await auth_service.refresh_token(tokens.access_token)

        assert result.error == "Invalid refresh token"

    @pytest.mark.asyncio
    async def test_logout_unknown_session_is_not_found(self, auth_service):
        result = await auth_service.logout(str(uuid4()))

        assert result.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_logout_all_revokes_every_session(self, auth_service, session_service, account):
        await auth_service.login(_login())
        await auth_service.login(_login(user_agent="phone"))

        result = await auth_service.logout_all_sessions(account.id)

        assert result.data == 2
        assert await session_service.get_user_active_sessions(account.id) == []


class TestSessionService:
    """Tests for session bookkeeping."""

    @pytest.mark.asyncio
    async def test_unbound_session_accepts_any_client(self, session_service, account):
        session = await session_service.create_session(account.id)

        assert await session_service.validate_session(session.jti, "any-agent", "192.168.1.1")

    @pytest.mark.asyncio
    async def test_cleanup_removes_only_expired(self, session_service, database, account):
        live = await session_service.create_session(account.id)
        stale = await session_service.create_session(account.id)
        expired = database.tables["sessions"][stale.id]
        expired.expires_at = expired.created_at.replace(year=2000)

        removed = await session_service.cleanup_expired_sessions()

        assert removed == 1
        assert list(database.tables["sessions"]) == [live.id]


class TestAccountManagement:
    """Tests for profile, password and activation changes."""

    @pytest.mark.asyncio
    async def test_update_profile_keeps_omitted_fields(self, user_service, account):
        result = await user_service.update_profile(UpdateProfileCommand(user_id=account.id, first_name="Maria"))

        user = result.unwrap()
        assert user.first_name == "Maria"
        assert user.last_name == account.last_name

    @pytest.mark.asyncio
    async def test_change_password(self, user_service, auth_service, account, database, recorder):
        result = await user_service.change_password(ChangePasswordCommand(
            user_id=account.id,
            current_password=PASSWORD,
            new_password="a-brand-new-secret",
        ))

        assert result.success
        assert recorder.types() == ["user.password_changed"]
        assert database.all("email_outbox")[0].subject == "Password changed successfully"
        assert (await auth_service.login(_login(password="a-brand-new-secret"))).success
        assert (await auth_service.login(_login())).error_kind == ErrorKind.UNAUTHENTICATED

    @pytest.mark.asyncio
    async def test_change_password_requires_current_password(self, user_service, account, database):
        result = await user_service.change_password(ChangePasswordCommand(
            user_id=account.id,
            current_password="guess",
            new_password="a-brand-new-secret",
        ))

        assert result.error_kind == ErrorKind.VALIDATION
        assert database.all("email_outbox") == []

    @pytest.mark.asyncio
    async def test_deactivate_then_activate(self, user_service, account, database, recorder):
        await user_service.deactivate_user(account.id)
        assert not database.tables["users"][account.id].is_active
        assert recorder.types() == ["user.deactivated"]

        await user_service.activate_user(account.id)
        assert database.tables["users"][account.id].is_active

    @pytest.mark.asyncio
    async def test_get_unknown_user(self, user_service):
        result = await user_service.get_user_by_id(uuid4())

        assert result.error_kind == ErrorKind.NOT_FOUND
