"""
Create the job_applications table.

Status is stored as its integer code (0..3) and guarded by a CHECK constraint;
``version`` backs optimistic concurrency on updates.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'job_applications_20251019'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'job_applications',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('company_name', sa.String(length=100), nullable=False),
        sa.Column('position', sa.String(length=100), nullable=False),
        sa.Column('status', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('date_applied', sa.DateTime(timezone=True), nullable=False),
        sa.Column('contact_person', sa.String(length=100), nullable=True),
        sa.Column('contact_email', sa.String(length=100), nullable=True),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        sa.Column('job_url', sa.String(length=500), nullable=True),
        sa.Column('salary_range', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.CheckConstraint('status in (0, 1, 2, 3)', name='ck_job_applications_status'),
        sqlite_autoincrement=True,
    )
    op.create_index('idx_job_applications_status', 'job_applications', ['status'])
    op.create_index('idx_job_applications_date_applied', 'job_applications', ['date_applied'])


def downgrade() -> None:
    op.drop_index('idx_job_applications_date_applied', table_name='job_applications')
    op.drop_index('idx_job_applications_status', table_name='job_applications')
    op.drop_table('job_applications')
