"""
Schema management for the inventory database.

Handles:
- Schema creation (tables, indexes, reporting view)
- Wiping the schema for a clean import
- Migration of databases created before the ``disabled`` flag existed
"""

import logging

from sqlalchemy import inspect, text
from ..models import Base

logger = logging.getLogger(__name__)

CLASS_C_VIEW = "class_c"

# IPv4 hosts per /24 prefix, most populated first
CLASS_C_VIEW_SQL = f"""
CREATE VIEW IF NOT EXISTS {CLASS_C_VIEW} AS
SELECT
    rtrim(rtrim(ipv4, '0123456789'), '.') AS class_c_network,
    count(*) AS cnt
FROM hosts
WHERE ipv4 IS NOT NULL
GROUP BY class_c_network
ORDER BY cnt DESC
"""

def create_schema(engine):
    """
    Create any missing table, index and the ``class_c`` view.

    Existing tables are left untouched, so this is safe on every start.

    Args:
        engine: SQLAlchemy engine instance
    """
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(text(CLASS_C_VIEW_SQL))

def wipe_schema(engine):
    """
    Drop the reporting view and every inventory table.

    This destroys groups, memberships and variables as well as hosts.

    Args:
        engine: SQLAlchemy engine instance
    """
    logger.warning("Dropping all inventory tables")
    with engine.begin() as conn:
        conn.execute(text(f"DROP VIEW IF EXISTS {CLASS_C_VIEW}"))
    Base.metadata.drop_all(engine)

def migrate_database(engine):
    """
    Perform database migrations to update schema.

    Adds the ``disabled`` column to ``hosts`` tables created without it.

    Args:
        engine: SQLAlchemy engine instance

    Returns:
        bool: True if a migration was applied, False if the schema was current
    """
    inspector = inspect(engine)
    if 'hosts' not in inspector.get_table_names():
        return False

    columns = {c['name'] for c in inspector.get_columns('hosts')}
    if 'disabled' in columns:
        return False

    logger.info("Adding disabled column to hosts table")
    with engine.begin() as conn:
        conn.execute(text("ALTER TABLE hosts ADD COLUMN disabled INTEGER NOT NULL DEFAULT 0"))
    return True

def get_table_names(engine):
    """Return the sorted list of tables present in the database."""
    return sorted(inspect(engine).get_table_names())
