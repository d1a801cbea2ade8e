"""Tests for the shared result envelope, event dispatching, Money and the unit of work."""

from decimal import Decimal

import pytest

from app.shared.core.event_bus import DomainEvent, EventDispatcher, EventHandler
from app.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleViolationError,
    ConflictError,
    ErrorKind,
    ExternalServiceError,
    LMSException,
    NotFoundError,
    PaymentError,
    ValidationError,
    exception_for_kind,
)
from app.shared.core.result import ApplicationResult, result_boundary
from app.shared.domain.money import Money

from tests.fakes import RecordingEventHandler


class TestApplicationResult:
    """Tests for ApplicationResult."""

    def test_ok_unwraps_to_data(self):
        result = ApplicationResult.ok({"id": 1})

        assert result.success
        assert not result.is_failure
        assert result.unwrap() == {"id": 1}
        assert result.to_dict() == {"success": True, "data": {"id": 1}}

    def test_fail_defaults_to_unexpected(self):
        result = ApplicationResult.fail("boom")

        assert result.is_failure
        assert result.error_kind == ErrorKind.UNEXPECTED
        assert result.to_dict() == {"success": False, "error": "boom", "error_kind": "unexpected"}

    @pytest.mark.parametrize("kind, exception_class, status_code", [
        (ErrorKind.NOT_FOUND, NotFoundError, 404),
        (ErrorKind.ACCESS_DENIED, AuthorizationError, 403),
        (ErrorKind.CONFLICT, ConflictError, 409),
        (ErrorKind.VALIDATION, ValidationError, 422),
        (ErrorKind.BUSINESS_RULE, BusinessRuleViolationError, 400),
        (ErrorKind.UNAUTHENTICATED, AuthenticationError, 401),
        (ErrorKind.EXTERNAL_SERVICE, ExternalServiceError, 502),
    ])
    def test_unwrap_raises_exception_for_kind(self, kind, exception_class, status_code):
        result = ApplicationResult.fail("nope", kind, {"resource_id": "42"})

        with pytest.raises(exception_class) as exc_info:
            result.unwrap()

        assert exc_info.value.status_code == status_code
        assert exc_info.value.message == "nope"
        assert exc_info.value.details["resource_id"] == "42"

    def test_unexpected_kind_becomes_internal_error(self):
        exc = exception_for_kind(ErrorKind.UNEXPECTED, "kaput")

        assert type(exc) is LMSException
        assert exc.status_code == 500
        assert exc.error_code == "INTERNAL_ERROR"

    def test_payment_error_keeps_external_kind(self):
        result = ApplicationResult.from_exception(PaymentError("gateway down"))

        assert result.error_kind == ErrorKind.EXTERNAL_SERVICE


class _Service:
    @result_boundary("plain value")
    async def plain(self):
        return 7

    @result_boundary("passthrough")
    async def passthrough(self):
        return ApplicationResult.fail("already failed", ErrorKind.CONFLICT)

    @result_boundary("domain failure")
    async def domain_failure(self):
        raise NotFoundError("Course not found", resource_type="Course", resource_id="c-1")

    @result_boundary("crash")
    async def crash(self):
        raise RuntimeError("disk on fire")


class TestResultBoundary:
    """Tests for the result_boundary decorator."""

    @pytest.mark.asyncio
    async def test_plain_return_is_wrapped(self):
        result = await _Service().plain()

        assert result.success
        assert result.data == 7

    @pytest.mark.asyncio
    async def test_result_passes_through(self):
        result = await _Service().passthrough()

        assert result.error_kind == ErrorKind.CONFLICT
        assert result.error == "already failed"

    @pytest.mark.asyncio
    async def test_domain_exception_keeps_its_kind(self):
        result = await _Service().domain_failure()

        assert result.error_kind == ErrorKind.NOT_FOUND
        assert result.error == "Course not found"
        assert result.details == {"resource_type": "Course", "resource_id": "c-1"}

    @pytest.mark.asyncio
    async def test_unknown_exception_is_unexpected(self):
        result = await _Service().crash()

        assert result.error_kind == ErrorKind.UNEXPECTED
        assert result.error == "disk on fire"


class _ExplodingHandler(EventHandler):
    @property
    def event_type(self) -> str:
        return "enrollment.created"

    async def handle(self, event: DomainEvent) -> None:
        raise RuntimeError("handler failed")


class _CourseHandler(RecordingEventHandler):
    @property
    def event_type(self) -> str:
        return "course.published"


class TestEventDispatcher:
    """Tests for in-process event dispatching."""

    @pytest.mark.asyncio
    async def test_routes_by_type_and_wildcard(self):
        everything, courses = RecordingEventHandler(), _CourseHandler()
        dispatcher = EventDispatcher([everything, courses])

        await dispatcher.dispatch_all([
            DomainEvent(event_type="course.published", aggregate_id="c-1"),
            DomainEvent(event_type="enrollment.created", aggregate_id="e-1"),
        ])

        assert everything.types() == ["course.published", "enrollment.created"]
        assert courses.types() == ["course.published"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self):
        recorder = RecordingEventHandler()
        dispatcher = EventDispatcher([_ExplodingHandler(), recorder])

        await dispatcher.dispatch(DomainEvent(event_type="enrollment.created"))

        assert recorder.types() == ["enrollment.created"]

    def test_event_serializes_timestamp(self):
        event = DomainEvent(event_type="lesson.completed", payload={"lesson_id": "l-1"})

        data = event.to_dict()

        assert data["payload"] == {"lesson_id": "l-1"}
        assert isinstance(data["occurred_at"], str)


class TestMoney:
    """Tests for the Money value object."""

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            Money.create(-1)

    def test_zero_is_free(self):
        assert Money.zero().is_free()
        assert not Money.create("149000.00").is_free()

    def test_arithmetic(self):
        price = Money.create(Decimal("100"))

        assert price.add(Money.create(50)).amount == Decimal("150")
        assert price.subtract(Money.create(40)).amount == Decimal("60")
        with pytest.raises(ValidationError):
            price.subtract(Money.create(150))

    def test_str_has_two_decimals(self):
        assert str(Money.create(5)) == "5.00"


class TestUnitOfWork:
    """Tests for commit and rollback through the in-memory unit of work."""

    @pytest.mark.asyncio
    async def test_rollback_discards_writes(self, uow_factory, database, student):
        with pytest.raises(RuntimeError):
            async with uow_factory() as uow:
                user = await uow.users.get_by_id(student.id)
                user.first_name = "Changed"
                await uow.users.update(user)
                raise RuntimeError("boom")

        assert database.tables["users"][student.id].first_name == "Ana"
        assert database.rollbacks == 1

    @pytest.mark.asyncio
    async def test_change_without_update_is_not_saved(self, uow_factory, database, student):
        async with uow_factory() as uow:
            user = await uow.users.get_by_id(student.id)
            user.first_name = "Changed"
            reloaded = await uow.users.get_by_id(student.id)

        assert reloaded.first_name == "Ana"
        assert database.tables["users"][student.id].first_name == "Ana"
        assert database.commits == 1
