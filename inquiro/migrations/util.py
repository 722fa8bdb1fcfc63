"""Utility functions for Alembic migrations."""
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from alembic import op


def get_uuid_type():
    """Get the appropriate UUID column type for the current database dialect.

    Returns:
        Column type compatible with the current database dialect:
        - PostgreSQL: native UUID type
        - SQLite/other: String(36) holding the hex form written by ``AdaptiveUUID``
    """
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        return UUID(as_uuid=True)
    return sa.String(length=36)
