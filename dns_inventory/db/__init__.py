# Facade for db submodules
from .engine import get_engine, normalize_path, init_database, open_database
from .schema import create_schema, wipe_schema, migrate_database, get_table_names
