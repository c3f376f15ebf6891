"""
Ansible dynamic inventory script.

The database is only read. It must already exist and hold the inventory
schema, which the import tool creates.

Usage:
    dns-inventory --list [--include-empty-groups] [--db PATH]
    dns-inventory --host NAME [--db PATH]
"""

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from ..db.engine import open_database
from ..exceptions import AppError
from ..services.InventoryService import InventoryService
from ..settings import Settings
from ..utils.SessionManager import SessionManager
from .common import add_common_arguments, configure_logging

logger = logging.getLogger(__name__)

def build_parser(settings):
    parser = argparse.ArgumentParser(
        description="Emit the Ansible inventory stored in the database as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dns-inventory --list
  dns-inventory --list --include-empty-groups --db /srv/ansible/inventory.db
  dns-inventory --host web01.example.com
        """
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='Print the full inventory'
    )
    parser.add_argument(
        '--host',
        type=str,
        default='',
        help='Print the variables of a single host'
    )
    parser.add_argument(
        '--include-empty-groups',
        action='store_true',
        help='Also print groups without enabled members'
    )
    add_common_arguments(parser, settings)
    return parser

def main(argv=None):
    """Entry point; returns the process exit status."""
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings, args.verbose)

    if not args.list and not args.host:
        print("Usage: --list or --host <name>", file=sys.stderr)
        return 1

    include_empty = args.include_empty_groups or bool(settings.get("inventory.include_empty_groups", False))
    indent = settings.get("inventory.json_indent")

    try:
        engine = open_database(args.db)
        try:
            with SessionManager(engine) as session:
                if args.list:
                    document = InventoryService.build_inventory(session, include_empty_groups=include_empty)
                else:
                    document = InventoryService.build_host_vars(session, args.host)
        finally:
            engine.dispose()
        output = InventoryService.render_json(document, indent=indent)
    except (AppError, SQLAlchemyError) as e:
        logger.error(f"inventory: {str(e)}")
        return 1

    sys.stdout.write(output + "\n")
    return 0

if __name__ == "__main__":
    sys.exit(main())
