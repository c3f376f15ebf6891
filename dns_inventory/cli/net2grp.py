"""
CIDR based group assignment.

Reads ``IPv4-CIDR<space>Group Name`` rules and adds every enabled host to
each group whose network contains its IPv4 address. Existing memberships
are never removed.

Usage:
    dns-inventory-net2grp --file networks.txt [--db PATH] [-v]
"""

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from ..db.engine import init_database
from ..exceptions import AppError
from ..services.CidrAssignmentService import CidrAssignmentService
from ..settings import Settings
from ..utils.cidr_rules import load_rules
from .common import add_common_arguments, configure_logging

logger = logging.getLogger(__name__)

def build_parser(settings):
    parser = argparse.ArgumentParser(
        description="Assign hosts to groups by IPv4 network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Rule file format (one rule per line, '#' starts a comment):
  10.0.0.0/8      Datacenter
  10.1.0.0/16     Web Frontends

Examples:
  dns-inventory-net2grp --file networks.txt
  dns-inventory-net2grp --file networks.txt --db inventory.db -v
        """
    )
    parser.add_argument(
        '--file',
        type=str,
        required=True,
        help="Path to the file with 'IPv4-CIDR<space>Group Name' lines"
    )
    add_common_arguments(parser, settings)
    return parser

def main(argv=None):
    """Entry point; returns the process exit status."""
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings, args.verbose)

    try:
        rules = load_rules(args.file)
        engine = init_database(args.db)
        try:
            summary = CidrAssignmentService().assign(engine, rules)
        finally:
            engine.dispose()
    except (AppError, SQLAlchemyError) as e:
        logger.error(f"net2grp: {str(e)}")
        return 1

    print(
        f"Assignment complete. Hosts: {summary.hosts}, "
        f"memberships processed: {summary.processed} (new: {summary.created}), "
        f"groups: {summary.groups}"
    )
    return 0

if __name__ == "__main__":
    sys.exit(main())
