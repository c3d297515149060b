"""seed demo users

Revision ID: 0002_seed_demo_users
Revises: 0001_create_users_table
Create Date: 2026-10-18 10:05:00.000000

"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '0002_seed_demo_users'
down_revision = '0001_create_users_table'
branch_labels = None
depends_on = None


def upgrade() -> None:
    users = sa.table(
        'users',
        sa.column('name', sa.String),
        sa.column('email', sa.String),
    )
    op.bulk_insert(
        users,
        [
            {'name': 'John Doe', 'email': 'john@example.com'},
            {'name': 'Jane Smith', 'email': 'jane@example.com'},
        ],
    )


def downgrade() -> None:
    op.execute("DELETE FROM users WHERE email IN ('john@example.com', 'jane@example.com')")
