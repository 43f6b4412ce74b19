"""
Schema configuration helper for Alembic migrations.

Migrations read the target schema from DB_SCHEMA so test and per-branch
databases can live side by side.

Usage in migrations:
    from schema_config import get_schema

    def upgrade():
        op.create_table('my_table', ..., schema=get_schema())
"""
from app.config import settings


def get_schema() -> str:
    """
    Get the database schema name for migrations.

    Returns:
        str: The schema name (DB_SCHEMA, default 'enhancer')
    """
    return settings.DB_SCHEMA
