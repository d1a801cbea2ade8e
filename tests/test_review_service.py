"""Tests for course reviews."""

from uuid import uuid4

import pytest

from app.modules.enrollment.domain.models.enrollment import Enrollment
from app.modules.review.application.commands.review_commands import (
    CreateReviewCommand,
    DeleteReviewCommand,
    UpdateReviewCommand,
)
from app.modules.review.application.services.review_application_service import ReviewApplicationService
from app.modules.review.domain.models.review import Review
from app.shared.core.exceptions import ErrorKind, ValidationError


@pytest.fixture
def review_service(uow_factory):
    return ReviewApplicationService(uow_factory)


@pytest.fixture
def course(make_course, instructor):
    return make_course(instructor)


@pytest.fixture
def enroll(database, course):
    """Seed an enrollment of ``user`` at the given progress."""

    def _enroll(user, progress: int = 40, cancelled: bool = False) -> Enrollment:
        enrollment = Enrollment.create(user.id, course.id, 0)
        enrollment.update_progress(progress)
        if cancelled:
            enrollment.cancel()
        return database.add("enrollments", enrollment)

    return _enroll


async def _review(service, user, course, rating=5, comment="Great course"):
    return await service.create_review(
        CreateReviewCommand(user_id=user.id, course_id=course.id, rating=rating, comment=comment)
    )


class TestCreateReview:
    """Tests for review eligibility and creation."""

    @pytest.mark.asyncio
    async def test_started_student_can_review(self, review_service, database, student, course, enroll):
        enroll(student)

        result = await _review(review_service, student, course, comment="  Clear and practical  ")

        review = result.unwrap()
        assert review.rating == 5
        assert review.comment == "Clear and practical"
        assert database.all("reviews") == [review]

    @pytest.mark.asyncio
    async def test_completed_enrollment_can_review(self, review_service, student, course, enroll):
        enroll(student, progress=100)

        assert (await _review(review_service, student, course)).success

    @pytest.mark.asyncio
    async def test_not_enrolled_cannot_review(self, review_service, student, course):
        result = await _review(review_service, student, course)

        assert result.error_kind == ErrorKind.BUSINESS_RULE

    @pytest.mark.asyncio
    async def test_unstarted_enrollment_cannot_review(self, review_service, student, course, enroll):
        enroll(student, progress=0)

        result = await _review(review_service, student, course)

        assert result.error_kind == ErrorKind.BUSINESS_RULE

    @pytest.mark.asyncio
    async def test_cancelled_enrollment_cannot_review(self, review_service, student, course, enroll):
        enroll(student, cancelled=True)

        result = await _review(review_service, student, course)

        assert result.error_kind == ErrorKind.BUSINESS_RULE

    @pytest.mark.asyncio
    async def test_second_review_is_conflict(self, review_service, student, course, enroll):
        enroll(student)
        await _review(review_service, student, course)

        result = await _review(review_service, student, course, rating=1)

        assert result.error_kind == ErrorKind.CONFLICT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", [0, 6])
    async def test_rating_out_of_range(self, review_service, database, student, course, enroll, rating):
        enroll(student)

        result = await _review(review_service, student, course, rating=rating)

        assert result.error_kind == ErrorKind.VALIDATION
        assert database.all("reviews") == []

    @pytest.mark.asyncio
    async def test_unknown_course(self, review_service, student):
        result = await review_service.create_review(
            CreateReviewCommand(user_id=student.id, course_id=uuid4(), rating=4)
        )

        assert result.error_kind == ErrorKind.NOT_FOUND


class TestManageReview:
    """Tests for editing, deleting and listing reviews."""

    @pytest.mark.asyncio
    async def test_author_can_update(self, review_service, student, course, enroll):
        enroll(student)
        review = (await _review(review_service, student, course)).unwrap()

        updated = await review_service.update_review(
            UpdateReviewCommand(review_id=review.id, user_id=student.id, rating=3)
        )

        assert updated.unwrap().rating == 3
        assert updated.unwrap().comment == "Great course"

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, review_service, student, make_user, course, enroll):
        enroll(student)
        review = (await _review(review_service, student, course)).unwrap()

        result = await review_service.update_review(
            UpdateReviewCommand(review_id=review.id, user_id=make_user().id, rating=1)
        )

        assert result.error_kind == ErrorKind.ACCESS_DENIED

    @pytest.mark.asyncio
    async def test_admin_can_delete_any_review(self, review_service, database, student, make_user, course, enroll):
        enroll(student)
        review = (await _review(review_service, student, course)).unwrap()
        moderator = make_user()

        denied = await review_service.delete_review(DeleteReviewCommand(review_id=review.id, user_id=moderator.id))
        allowed = await review_service.delete_review(
            DeleteReviewCommand(review_id=review.id, user_id=moderator.id, is_admin=True)
        )

        assert denied.error_kind == ErrorKind.ACCESS_DENIED
        assert allowed.success
        assert database.all("reviews") == []

    @pytest.mark.asyncio
    async def test_course_reviews_with_rating_summary(self, review_service, make_user, course, enroll):
        for rating in (5, 4, 4):
            reviewer = make_user()
            enroll(reviewer)
            await _review(review_service, reviewer, course, rating=rating)

        summary = (await review_service.get_course_reviews(course.id, limit=2)).unwrap()

        assert len(summary.reviews) == 2
        assert summary.total_reviews == 3
        assert summary.average_rating == 4.33

    @pytest.mark.asyncio
    async def test_course_without_reviews(self, review_service, course):
        summary = (await review_service.get_course_reviews(course.id)).unwrap()

        assert summary.reviews == []
        assert summary.average_rating == 0.0
        assert summary.total_reviews == 0


class TestReviewModel:
    """Tests for the Review entity itself."""

    def test_boolean_rating_rejected(self):
        with pytest.raises(ValidationError):
            Review.create(uuid4(), uuid4(), True)

    def test_blank_comment_becomes_none(self):
        review = Review.create(uuid4(), uuid4(), 4, "   ")

        assert review.comment is None
