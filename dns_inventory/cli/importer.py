"""
Zone transfer importer.

Reads ``dig axfr`` output from stdin and rebuilds the hosts and CNAMEs of
the inventory database. Disabled flags, host variables and group
memberships of hosts that are still in DNS are preserved.

Usage:
    dig axfr example.com @ns1.example.com | dns-inventory-import [--db PATH] [--wipe]
"""

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from ..db.engine import init_database
from ..exceptions import AppError
from ..services.ImportService import ImportService
from ..settings import Settings
from ..utils.zone_records import ZoneRecordUtil
from .common import add_common_arguments, configure_logging

logger = logging.getLogger(__name__)

def build_parser(settings):
    parser = argparse.ArgumentParser(
        description="Import A, AAAA and CNAME records from a zone transfer on stdin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dig axfr example.com @ns1 | dns-inventory-import
  dig axfr example.com @ns1 | dns-inventory-import --db inventory.db --wipe
        """
    )
    parser.add_argument(
        '--wipe',
        action='store_true',
        help='Drop and recreate all tables before importing (deletes groups and variables)'
    )
    add_common_arguments(parser, settings)
    return parser

def main(argv=None, stdin=None):
    """Entry point; returns the process exit status."""
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings, args.verbose)
    stdin = stdin if stdin is not None else sys.stdin

    try:
        snapshot = ZoneRecordUtil.read_zone_stream(
            stdin, skip_marker=settings.get("import.skip_marker")
        )
        engine = init_database(args.db, wipe=args.wipe)
        try:
            summary = ImportService().import_snapshot(engine, snapshot)
        finally:
            engine.dispose()
    except (AppError, SQLAlchemyError) as e:
        logger.error(f"import: {str(e)}")
        return 1

    print(f"Import complete. Hosts: {summary.hosts}, CNAMEs: {summary.cnames}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
