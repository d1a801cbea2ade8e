"""
End-to-end HTTP tests.

The application runs with an injected container whose persistence, cache
and external services are in-memory fakes.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import create_application
from app.modules.course_management.domain.models.course import CourseStatus
from app.shared.core.container import ContainerBuilder
from app.shared.infrastructure.cache import InMemoryCacheService

from tests.fakes import FakeEmailSender, FakeYoutubeClient, make_video

PASSWORD = "s3cure-password"


@pytest.fixture
def client(settings, uow_factory, payment_gateway, recorder):
    container = (
        ContainerBuilder(settings)
        .with_uow_factory(uow_factory)
        .with_cache(InMemoryCacheService())
        .with_payment_gateway(payment_gateway)
        .with_youtube_client(FakeYoutubeClient(videos=[make_video("dQw4w9WgXcQ", 213)]))
        .with_email_sender(FakeEmailSender())
        .with_event_handler(recorder)
        .build()
    )
    with TestClient(create_application(container)) as test_client:
        yield test_client


def _register_and_login(client, email, role="STUDENT"):
    response = client.post("/api/v1/auth/register", json={
        "email": email,
        "password": PASSWORD,
        "first_name": "Test",
        "last_name": "User",
        "role": role,
    })
    assert response.status_code == 201, response.text

    response = client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()


def _auth(tokens):
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.fixture
def published_course(client, category):
    """A published two-lesson course built through the API."""
    tokens = _register_and_login(client, "mentor@learnhub.io", role="INSTRUCTOR")
    headers = _auth(tokens)

    response = client.post("/api/v1/courses", headers=headers, json={
        "category_id": str(category.id),
        "title": "HTTP for Humans",
        "price": "0",
        "duration_hours": 2,
    })
    assert response.status_code == 201, response.text
    course = response.json()
    assert course["status"] == CourseStatus.DRAFT.value

    lesson_ids = []
    for number in (1, 2):
        response = client.post(f"/api/v1/courses/{course['id']}/lessons", headers=headers, json={
            "title": f"Part {number}",
            "order_number": number,
            "duration_minutes": 20,
        })
        assert response.status_code == 201, response.text
        lesson_ids.append(response.json()["id"])

    response = client.post(f"/api/v1/courses/{course['id']}/publish", headers=headers)
    assert response.status_code == 200, response.text
    return {"id": course["id"], "lesson_ids": lesson_ids, "headers": headers}


class TestHealth:
    """Tests for the health checks."""

    def test_liveness(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthApi:
    """Tests for the auth endpoints and the error envelope."""

    def test_login_returns_token_pair(self, client):
        tokens = _register_and_login(client, "reader@learnhub.io")

        assert tokens["token_type"] == "bearer"
        assert tokens["user"]["email"] == "reader@learnhub.io"
        assert tokens["access_token"] and tokens["refresh_token"]

    def test_me_requires_authentication(self, client):
        response = client.get("/api/v1/users/me")

        assert response.status_code == 401
        error = response.json()["error"]
        assert error["code"] == "AUTHENTICATION_ERROR"
        assert error["kind"] == "unauthenticated"
        assert "timestamp" in error

    def test_invalid_token_rejected_by_middleware(self, client):
        response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"]["kind"] == "unauthenticated"

    def test_me_with_token(self, client):
        tokens = _register_and_login(client, "reader@learnhub.io")

        response = client.get("/api/v1/users/me", headers=_auth(tokens))

        assert response.status_code == 200
        assert response.json()["email"] == "reader@learnhub.io"

    def test_duplicate_registration_is_409(self, client):
        _register_and_login(client, "reader@learnhub.io")

        response = client.post("/api/v1/auth/register", json={
            "email": "reader@learnhub.io",
            "password": PASSWORD,
            "first_name": "Again",
            "last_name": "User",
        })

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_wrong_password_is_401(self, client):
        _register_and_login(client, "reader@learnhub.io")

        response = client.post("/api/v1/auth/login", json={"email": "reader@learnhub.io", "password": "nope"})

        assert response.status_code == 401

    def test_logout_revokes_access_token(self, client):
        tokens = _register_and_login(client, "reader@learnhub.io")

        assert client.post("/api/v1/auth/logout", headers=_auth(tokens)).status_code == 200

        response = client.get("/api/v1/users/me", headers=_auth(tokens))
        assert response.status_code == 401

    def test_refresh_issues_working_access_token(self, client):
        tokens = _register_and_login(client, "reader@learnhub.io")

        response = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

        assert response.status_code == 200
        refreshed = response.json()
        assert client.get("/api/v1/users/me", headers=_auth(refreshed)).status_code == 200


class TestCourseApi:
    """Tests for catalog endpoints."""

    def test_student_cannot_create_course(self, client, category):
        tokens = _register_and_login(client, "reader@learnhub.io")

        response = client.post("/api/v1/courses", headers=_auth(tokens), json={
            "category_id": str(category.id),
            "title": "Not mine to make",
            "duration_hours": 1,
        })

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "AUTHORIZATION_ERROR"

    def test_published_course_is_listed(self, client, published_course):
        response = client.get("/api/v1/courses", params={"search": "humans"})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["id"] == published_course["id"]

    def test_lessons_listed_in_order(self, client, published_course):
        response = client.get(f"/api/v1/courses/{published_course['id']}/lessons")

        assert [lesson["title"] for lesson in response.json()] == ["Part 1", "Part 2"]

    def test_archive_and_unarchive(self, client, published_course):
        url = f"/api/v1/courses/{published_course['id']}"
        headers = published_course["headers"]

        archived = client.post(f"{url}/archive", headers=headers)
        assert archived.json()["status"] == CourseStatus.ARCHIVED.value

        response = client.post(f"{url}/unarchive", headers=headers)

        assert response.status_code == 200, response.text
        assert response.json()["status"] == CourseStatus.DRAFT.value

    def test_unarchive_requires_instructor(self, client, published_course):
        tokens = _register_and_login(client, "reader@learnhub.io")

        response = client.post(f"/api/v1/courses/{published_course['id']}/unarchive", headers=_auth(tokens))

        assert response.status_code == 403

    def test_unknown_course_is_404(self, client):
        response = client.get("/api/v1/courses/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "not_found"


class TestEnrollmentApi:
    """Tests for the enrollment and progress flow over HTTP."""

    def test_enroll_and_complete_course(self, client, published_course, recorder):
        headers = _auth(_register_and_login(client, "learner@learnhub.io"))

        response = client.post("/api/v1/enrollments", headers=headers, json={"course_id": published_course["id"]})
        assert response.status_code == 201, response.text
        enrollment = response.json()
        assert enrollment["status"] == "ACTIVE"
        assert enrollment["progress_percentage"] == 0

        progress_url = f"/api/v1/enrollments/{enrollment['id']}/progress"
        progress = client.get(progress_url, headers=headers).json()
        assert progress["total_lessons"] == 2
        assert progress["completed_lessons"] == 0

        first, second = published_course["lesson_ids"]
        response = client.put(
            f"/api/v1/enrollments/{enrollment['id']}/lessons/{first}/progress",
            headers=headers,
            json={"watch_duration_seconds": 300},
        )
        assert response.json()["status"] == "IN_PROGRESS"

        client.post(f"/api/v1/enrollments/{enrollment['id']}/lessons/{first}/complete", headers=headers)
        assert client.get(progress_url, headers=headers).json()["progress_percentage"] == 50

        client.post(f"/api/v1/enrollments/{enrollment['id']}/lessons/{second}/complete", headers=headers)
        final = client.get(progress_url, headers=headers).json()
        assert final["progress_percentage"] == 100
        assert final["enrollment"]["status"] == "COMPLETED"
        assert "enrollment.completed" in recorder.types()

    def test_duplicate_enrollment_is_409(self, client, published_course):
        headers = _auth(_register_and_login(client, "learner@learnhub.io"))
        body = {"course_id": published_course["id"]}

        client.post("/api/v1/enrollments", headers=headers, json=body)
        response = client.post("/api/v1/enrollments", headers=headers, json=body)

        assert response.status_code == 409

    def test_negative_watch_time_is_422(self, client, published_course):
        headers = _auth(_register_and_login(client, "learner@learnhub.io"))
        enrollment = client.post(
            "/api/v1/enrollments", headers=headers, json={"course_id": published_course["id"]}
        ).json()

        response = client.put(
            f"/api/v1/enrollments/{enrollment['id']}/lessons/{published_course['lesson_ids'][0]}/progress",
            headers=headers,
            json={"watch_duration_seconds": -5},
        )

        assert response.status_code == 422

    def test_other_student_cannot_read_progress(self, client, published_course):
        owner = _auth(_register_and_login(client, "learner@learnhub.io"))
        intruder = _auth(_register_and_login(client, "intruder@learnhub.io"))
        enrollment = client.post(
            "/api/v1/enrollments", headers=owner, json={"course_id": published_course["id"]}
        ).json()

        response = client.get(f"/api/v1/enrollments/{enrollment['id']}/progress", headers=intruder)

        assert response.status_code == 403

    def test_enrollment_requires_authentication(self, client, published_course):
        response = client.post("/api/v1/enrollments", json={"course_id": published_course["id"]})

        assert response.status_code == 401


class TestYoutubeApi:
    """Tests for the YouTube metadata endpoint."""

    def test_video_metadata(self, client):
        headers = _auth(_register_and_login(client, "mentor@learnhub.io", role="INSTRUCTOR"))

        response = client.get(
            "/api/v1/youtube/metadata",
            params={"url": "https://youtu.be/dQw4w9WgXcQ"},
            headers=headers,
        )

        assert response.status_code == 200, response.text
        assert response.json()["type"] == "video"
