"""create_certificate_registry

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-12 09:14:52.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e9a7d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'courses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('thumbnail_url', sa.String(), nullable=True),
        sa.Column('estimated_hours', sa.Integer(), nullable=True),
        sa.Column('instructor_id', sa.Uuid(), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['instructor_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_courses_id', 'courses', ['id'])
    op.create_index('ix_courses_slug', 'courses', ['slug'], unique=True)
    op.create_index('ix_courses_instructor_id', 'courses', ['instructor_id'])

    op.create_table(
        'enrollments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('course_id', sa.Uuid(), nullable=False),
        sa.Column('enrolled_at', sa.DateTime(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('certificate_issued_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'course_id', name='uq_user_course_enrollment'),
    )
    op.create_index('ix_enrollments_id', 'enrollments', ['id'])
    op.create_index('ix_enrollments_user_id', 'enrollments', ['user_id'])
    op.create_index('ix_enrollments_course_id', 'enrollments', ['course_id'])
    op.create_index('ix_enrollments_user_course', 'enrollments', ['user_id', 'course_id'])

    op.create_table(
        'certificate_templates',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('course_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('subtitle', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('signature_text', sa.String(length=255), nullable=True),
        sa.Column('signature_image', sa.Text(), nullable=True),
        sa.Column('logo_url', sa.Text(), nullable=True),
        sa.Column('background_url', sa.Text(), nullable=True),
        sa.Column('primary_color', sa.String(length=20), nullable=False),
        sa.Column('secondary_color', sa.String(length=20), nullable=False),
        sa.Column('settings', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_certificate_templates_id', 'certificate_templates', ['id'])
    op.create_index(
        'ix_certificate_templates_course_id', 'certificate_templates', ['course_id'], unique=True
    )

    # Certificates are never deleted; every reference is nulled instead
    op.create_table(
        'issued_certificates',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('credential_id', sa.String(length=50), nullable=False),
        sa.Column('template_id', sa.Uuid(), nullable=True),
        sa.Column('course_id', sa.Uuid(), nullable=True),
        sa.Column('student_id', sa.Uuid(), nullable=True),
        sa.Column('student_name', sa.String(length=255), nullable=False),
        sa.Column('course_name', sa.String(length=255), nullable=False),
        sa.Column('instructor_name', sa.String(length=255), nullable=True),
        sa.Column('course_hours', sa.Integer(), nullable=True),
        sa.Column('issued_at', sa.DateTime(), nullable=False),
        sa.Column('is_revoked', sa.Boolean(), nullable=False),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
        sa.Column('revoked_reason', sa.Text(), nullable=True),
        sa.Column('download_count', sa.Integer(), nullable=False),
        sa.Column('last_downloaded_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ['template_id'], ['certificate_templates.id'], ondelete='SET NULL'
        ),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['student_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            '(is_revoked AND revoked_at IS NOT NULL) OR (NOT is_revoked AND revoked_at IS NULL)',
            name='ck_issued_certificates_revocation_state',
        ),
    )
    op.create_index('ix_issued_certificates_id', 'issued_certificates', ['id'])
    op.create_index(
        'ix_issued_certificates_credential_id',
        'issued_certificates',
        ['credential_id'],
        unique=True,
    )
    op.create_index('ix_issued_certificates_template_id', 'issued_certificates', ['template_id'])
    op.create_index('ix_issued_certificates_course_id', 'issued_certificates', ['course_id'])
    op.create_index('ix_issued_certificates_student_id', 'issued_certificates', ['student_id'])
    op.create_index(
        'ix_issued_certificates_student_course',
        'issued_certificates',
        ['student_id', 'course_id'],
    )
    op.create_index(
        'uq_issued_certificates_active_student_course',
        'issued_certificates',
        ['student_id', 'course_id'],
        unique=True,
        postgresql_where=sa.text('NOT is_revoked'),
        sqlite_where=sa.text('NOT is_revoked'),
    )


def downgrade() -> None:
    op.drop_table('issued_certificates')
    op.drop_table('certificate_templates')
    op.drop_table('enrollments')
    op.drop_table('courses')
    op.drop_table('users')
