"""add subscriptions table

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2025-06-02 10:41:12.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from schema_config import get_schema


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    schema = get_schema()
    op.execute(f"CREATE SCHEMA IF NOT EXISTS {schema}")
    op.create_table('subscriptions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('provider_subscription_id', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('current_period_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancel_at_period_end', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('provider_subscription_id'),
        schema=schema
    )
    op.create_index('ix_subscriptions_user_id', 'subscriptions', ['user_id'], schema=schema)
    # Tier lookups filter on both columns
    op.create_index('idx_subscriptions_user_status', 'subscriptions', ['user_id', 'status'], schema=schema)


def downgrade() -> None:
    schema = get_schema()
    op.drop_index('idx_subscriptions_user_status', table_name='subscriptions', schema=schema)
    op.drop_index('ix_subscriptions_user_id', table_name='subscriptions', schema=schema)
    op.drop_table('subscriptions', schema=schema)
