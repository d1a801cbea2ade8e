"""Create LMS tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Create users, catalog, enrollment, payment, review and outbox tables"""

    # 1. Users and sessions
    op.create_table('users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='STUDENT'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        *_timestamps(),

        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.CheckConstraint("role IN ('STUDENT', 'INSTRUCTOR', 'ADMIN')", name='ck_users_role'),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table('sessions',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('jti', sa.String(64), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('user_agent', sa.String(500), nullable=True),
        sa.Column('ip_address', sa.String(64), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),

        sa.PrimaryKeyConstraint('id', name='pk_sessions'),
        sa.UniqueConstraint('jti', name='uq_sessions_jti'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='fk_sessions_user_id_users'),
    )
    op.create_index('ix_sessions_user_id', 'sessions', ['user_id'])
    op.create_index('ix_sessions_jti', 'sessions', ['jti'])
    op.create_index('ix_sessions_expires_at', 'sessions', ['expires_at'])

    # 2. Catalog
    op.create_table('categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),

        sa.PrimaryKeyConstraint('id', name='pk_categories'),
        sa.UniqueConstraint('slug', name='uq_categories_slug'),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'])

    op.create_table('courses',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('instructor_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('category_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('thumbnail_url', sa.String(500), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='DRAFT'),
        sa.Column('duration_hours', sa.Float(), nullable=False),
        sa.Column('level', sa.String(20), nullable=False, server_default='BEGINNER'),
        *_timestamps(),

        sa.PrimaryKeyConstraint('id', name='pk_courses'),
        sa.ForeignKeyConstraint(['instructor_id'], ['users.id'], ondelete='RESTRICT', name='fk_courses_instructor_id_users'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='RESTRICT', name='fk_courses_category_id_categories'),
        sa.CheckConstraint('price >= 0', name='ck_courses_price_non_negative'),
        sa.CheckConstraint("status IN ('DRAFT', 'PUBLISHED', 'ARCHIVED')", name='ck_courses_status'),
        sa.CheckConstraint("level IN ('BEGINNER', 'INTERMEDIATE', 'ADVANCED')", name='ck_courses_level'),
    )
    op.create_index('ix_courses_instructor_id', 'courses', ['instructor_id'])
    op.create_index('ix_courses_category_id', 'courses', ['category_id'])
    op.create_index('ix_courses_status', 'courses', ['status'])

    op.create_table('lessons',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('course_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('video_url', sa.String(500), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('order_number', sa.Integer(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('is_preview', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),

        sa.PrimaryKeyConstraint('id', name='pk_lessons'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE', name='fk_lessons_course_id_courses'),
        sa.UniqueConstraint('course_id', 'order_number', name='uq_lessons_course_order'),
    )
    op.create_index('ix_lessons_course_id', 'lessons', ['course_id'])

    # 3. Enrollment and progress
    op.create_table('enrollments',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('course_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('amount_paid', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('progress_percentage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_enrollments'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='fk_enrollments_user_id_users'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE', name='fk_enrollments_course_id_courses'),
        sa.UniqueConstraint('user_id', 'course_id', name='uq_enrollments_user_course'),
        sa.CheckConstraint('progress_percentage BETWEEN 0 AND 100', name='ck_enrollments_progress_range'),
        sa.CheckConstraint("status IN ('ACTIVE', 'COMPLETED', 'CANCELLED')", name='ck_enrollments_status'),
    )
    op.create_index('ix_enrollments_user_id', 'enrollments', ['user_id'])
    op.create_index('ix_enrollments_course_id', 'enrollments', ['course_id'])

    op.create_table('lesson_progress',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('enrollment_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('lesson_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='NOT_STARTED'),
        sa.Column('watch_duration_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_lesson_progress'),
        sa.ForeignKeyConstraint(['enrollment_id'], ['enrollments.id'], ondelete='CASCADE', name='fk_lesson_progress_enrollment_id_enrollments'),
        sa.ForeignKeyConstraint(['lesson_id'], ['lessons.id'], ondelete='CASCADE', name='fk_lesson_progress_lesson_id_lessons'),
        sa.UniqueConstraint('enrollment_id', 'lesson_id', name='uq_lesson_progress_enrollment_lesson'),
        sa.CheckConstraint('watch_duration_seconds >= 0', name='ck_lesson_progress_watch_non_negative'),
    )
    op.create_index('ix_lesson_progress_enrollment_id', 'lesson_progress', ['enrollment_id'])

    # 4. Payments
    op.create_table('payments',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('enrollment_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('gross_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('order_id', sa.String(120), nullable=False),
        sa.Column('transaction_id', sa.String(120), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='PENDING'),
        sa.Column('payment_type', sa.String(50), nullable=True),
        sa.Column('fraud_status', sa.String(50), nullable=True),
        sa.Column('gateway_response', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('snap_token', sa.String(255), nullable=True),
        sa.Column('transaction_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('settlement_time', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),

        sa.PrimaryKeyConstraint('id', name='pk_payments'),
        sa.ForeignKeyConstraint(['enrollment_id'], ['enrollments.id'], ondelete='CASCADE', name='fk_payments_enrollment_id_enrollments'),
        sa.UniqueConstraint('order_id', name='uq_payments_order_id'),
    )
    op.create_index('ix_payments_enrollment_id', 'payments', ['enrollment_id'])
    op.create_index('ix_payments_order_id', 'payments', ['order_id'])

    # 5. Reviews
    op.create_table('reviews',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('course_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        *_timestamps(),

        sa.PrimaryKeyConstraint('id', name='pk_reviews'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='fk_reviews_user_id_users'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE', name='fk_reviews_course_id_courses'),
        sa.UniqueConstraint('user_id', 'course_id', name='uq_reviews_user_course'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_reviews_rating_range'),
    )
    op.create_index('ix_reviews_course_id', 'reviews', ['course_id'])

    # 6. Email outbox
    op.create_table('email_outbox',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('recipient', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('body_text', sa.Text(), nullable=False),
        sa.Column('body_html', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='PENDING'),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_error', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('claimed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),

        sa.PrimaryKeyConstraint('id', name='pk_email_outbox'),
    )
    op.create_index('ix_email_outbox_status_created_at', 'email_outbox', ['status', 'created_at'])


def downgrade() -> None:
    """Drop LMS tables"""
    op.drop_table('email_outbox')
    op.drop_table('reviews')
    op.drop_table('payments')
    op.drop_table('lesson_progress')
    op.drop_table('enrollments')
    op.drop_table('lessons')
    op.drop_table('courses')
    op.drop_table('categories')
    op.drop_table('sessions')
    op.drop_table('users')
