# 📄 File: app/modules/enrollment/application/commands/enrollment_commands.py
# 🧭 Purpose (Layman Explanation):
# The "requests" a student can make about their enrollments: join a course, report how long
# they watched a lesson, mark a lesson as done, or cancel.
#
# 🧪 Purpose (Technical Summary):
# Pydantic command objects for the enrollment write use cases. Shape validation only;
# business rules are enforced by the domain.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - EnrollmentApplicationService, enrollment presentation routes

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class EnrollCourseCommand(BaseModel):
    """Enroll a user in a course."""
    model_config = ConfigDict(frozen=True)

    user_id: UUID = Field(..., description="Enrolling user")
    course_id: UUID = Field(..., description="Course to enroll in")


class UpdateLessonProgressCommand(BaseModel):
    """Record watched time for one lesson of an enrollment."""
    model_config = ConfigDict(frozen=True)

    enrollment_id: UUID
    lesson_id: UUID
    user_id: UUID = Field(..., description="Requesting user; must own the enrollment")
    watch_duration_seconds: int = Field(..., description="Total watched seconds for the lesson")


class CompleteLessonCommand(BaseModel):
    """Mark one lesson of an enrollment as completed."""
    model_config = ConfigDict(frozen=True)

    enrollment_id: UUID
    lesson_id: UUID
    user_id: UUID


class CancelEnrollmentCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    enrollment_id: UUID
    user_id: UUID
