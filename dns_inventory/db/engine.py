"""
Database engine creation and configuration.

Handles:
- Engine instantiation with foreign key enforcement
- Path normalization
- Database initialization (open, wipe, create, migrate, verify)
- Read-only opening of an existing inventory database
"""

import logging
import os
import sqlite3
from pathlib import Path

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)

REQUIRED_TABLES = frozenset(["hosts", "cnames", "host_vars", "groups", "group_vars", "host_groups"])

def normalize_path(path) -> Path:
    """
    Normalize a path string to an absolute Path object.

    Args:
        path (str | Path): Path to normalize (relative or absolute).

    Returns:
        Path: Absolute path object.

    Example:
        >>> normalize_path('inventory.db')
        PosixPath('/srv/ansible/inventory.db')
    """
    return Path(str(path)).expanduser().absolute()

def _enable_foreign_keys(dbapi_connection, connection_record):
    """Turn on SQLite foreign key enforcement for every new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()

def get_engine(db_path) -> Engine:
    """
    Create and return a SQLAlchemy engine for the given path.

    Cascading deletes in the schema depend on ``PRAGMA foreign_keys``, so it
    is enabled on every connection the engine hands out.

    Args:
        db_path (str | Path): Path to the SQLite database file.

    Returns:
        Engine: SQLAlchemy engine instance.
    """
    db_path = normalize_path(db_path)
    engine = create_engine(f"sqlite:///{db_path}")
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine

def _check_database_file(db_path: Path):
    """Reject directories, unreadable files and files that are not SQLite databases."""
    if db_path.is_dir():
        raise DatabaseError(f"Database path is a directory: {db_path}")
    if not os.access(str(db_path), os.R_OK):
        raise DatabaseError(f"No read permission for database file: {db_path}")
    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute("PRAGMA schema_version")
    except sqlite3.DatabaseError as e:
        raise DatabaseError(f"Not a valid database file {db_path}: {str(e)}")
    finally:
        conn.close()

def init_database(db_path, wipe: bool = False) -> Engine:
    """
    Open the database, prepare the schema and return a ready engine.

    Args:
        db_path (str | Path): Path to the SQLite database file.
        wipe (bool): Drop every table and the reporting view before creating them.

    Returns:
        Engine: SQLAlchemy engine with the full schema in place.

    Raises:
        DatabaseError: If the path is unusable, the file is not a SQLite
            database, or the schema cannot be created.
    """
    db_path = normalize_path(db_path)
    logger.info(f"Using database: {db_path}")

    parent_dir = db_path.parent
    if parent_dir.exists() and not parent_dir.is_dir():
        raise DatabaseError(f"Path exists but is not a directory: {parent_dir}")
    try:
        parent_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DatabaseError(f"Failed to create directory {parent_dir}: {str(e)}")

    if db_path.exists():
        _check_database_file(db_path)

    engine = get_engine(db_path)
    try:
        from .schema import create_schema, migrate_database, wipe_schema
        if wipe:
            wipe_schema(engine)
        create_schema(engine)
        migrate_database(engine)

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseError(f"Failed to initialize database {db_path}: {str(e)}")

    return engine

def open_database(db_path) -> Engine:
    """
    Open an existing inventory database for reading.

    Nothing is created or migrated: a missing file, or a file without the
    inventory tables, is an error.

    Args:
        db_path (str | Path): Path to the SQLite database file.

    Returns:
        Engine: SQLAlchemy engine for the database.

    Raises:
        DatabaseError: If the file is missing, unreadable, not a SQLite
            database, or has no inventory schema.
    """
    db_path = normalize_path(db_path)
    if not db_path.exists():
        raise DatabaseError(f"Database file not found: {db_path}")
    _check_database_file(db_path)

    engine = get_engine(db_path)
    try:
        from .schema import get_table_names
        missing = sorted(REQUIRED_TABLES - set(get_table_names(engine)))
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseError(f"Failed to open database {db_path}: {str(e)}")
    if missing:
        engine.dispose()
        raise DatabaseError(f"Not an inventory database {db_path}: missing tables {', '.join(missing)}")

    logger.info(f"Opened database: {db_path}")
    return engine
