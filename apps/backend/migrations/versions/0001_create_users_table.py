"""create users table

Revision ID: 0001_create_users_table
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '0001_create_users_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index('ux_users_email_lower', 'users', [sa.text('lower(email)')], unique=True)
    op.create_index('ix_users_name', 'users', ['name'])


def downgrade() -> None:
    op.drop_index('ix_users_name', table_name='users')
    op.drop_index('ux_users_email_lower', table_name='users')
    op.drop_table('users')
