"""
Administrative edits of the inventory database.

Every command runs in its own transaction.

Usage:
    dns-inventory-manage disable HOST
    dns-inventory-manage set-group-var GROUP KEY VALUE
    dns-inventory-manage class-c
"""

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from ..db.engine import init_database
from ..exceptions import AppError
from ..services.BaseService import BaseService
from ..services.GroupService import GroupService
from ..services.HostService import HostService
from ..settings import Settings
from .common import add_common_arguments, configure_logging

logger = logging.getLogger(__name__)

def _disable(session, args):
    changed = HostService.set_disabled(session, args.host, True)
    return f"Host {args.host} disabled" if changed else f"Host {args.host} already disabled"

def _enable(session, args):
    changed = HostService.set_disabled(session, args.host, False)
    return f"Host {args.host} enabled" if changed else f"Host {args.host} already enabled"

def _set_host_var(session, args):
    HostService.set_host_var(session, args.host, args.key, args.value)
    return f"Set {args.key} on host {args.host}"

def _unset_host_var(session, args):
    if HostService.delete_host_var(session, args.host, args.key):
        return f"Removed {args.key} from host {args.host}"
    return f"Host {args.host} has no variable {args.key}"

def _set_group_var(session, args):
    GroupService.set_group_var(session, args.group, args.key, args.value)
    return f"Set {args.key} on group {args.group}"

def _unset_group_var(session, args):
    if GroupService.delete_group_var(session, args.group, args.key):
        return f"Removed {args.key} from group {args.group}"
    return f"Group {args.group} has no variable {args.key}"

def _add_member(session, args):
    HostService.require_host(session, args.host)
    GroupService.ensure_group(session, args.group)
    if GroupService.add_membership(session, args.host, args.group):
        return f"Added {args.host} to {args.group}"
    return f"{args.host} is already a member of {args.group}"

def _remove_member(session, args):
    if GroupService.remove_membership(session, args.host, args.group):
        return f"Removed {args.host} from {args.group}"
    return f"{args.host} is not a member of {args.group}"

def _class_c(session, args):
    rows = HostService.class_c_summary(session)
    return "\n".join(f"{network}\t{cnt}" for network, cnt in rows)

def build_parser(settings):
    parser = argparse.ArgumentParser(description="Edit hosts, groups and variables of the inventory")
    add_common_arguments(parser, settings)
    sub = parser.add_subparsers(dest='command', required=True)

    for name, handler, help_text in (
        ('disable', _disable, 'Hide a host from the inventory without deleting it'),
        ('enable', _enable, 'Make a disabled host visible again'),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('host')
        p.set_defaults(handler=handler)

    p = sub.add_parser('set-host-var', help='Create or replace a host variable')
    p.add_argument('host')
    p.add_argument('key')
    p.add_argument('value')
    p.set_defaults(handler=_set_host_var)

    p = sub.add_parser('unset-host-var', help='Remove a host variable')
    p.add_argument('host')
    p.add_argument('key')
    p.set_defaults(handler=_unset_host_var)

    p = sub.add_parser('set-group-var', help='Create or replace a group variable')
    p.add_argument('group')
    p.add_argument('key')
    p.add_argument('value')
    p.set_defaults(handler=_set_group_var)

    p = sub.add_parser('unset-group-var', help='Remove a group variable')
    p.add_argument('group')
    p.add_argument('key')
    p.set_defaults(handler=_unset_group_var)

    p = sub.add_parser('add-member', help='Add a host to a group (creates the group)')
    p.add_argument('host')
    p.add_argument('group')
    p.set_defaults(handler=_add_member)

    p = sub.add_parser('remove-member', help='Remove a host from a group')
    p.add_argument('host')
    p.add_argument('group')
    p.set_defaults(handler=_remove_member)

    p = sub.add_parser('class-c', help='Count IPv4 hosts per /24 network')
    p.set_defaults(handler=_class_c)
    return parser

def main(argv=None):
    """Entry point; returns the process exit status."""
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings, args.verbose)

    try:
        engine = init_database(args.db)
        try:
            with BaseService().session_scope(engine) as session:
                message = args.handler(session, args)
        finally:
            engine.dispose()
    except (AppError, SQLAlchemyError) as e:
        logger.error(f"{args.command}: {str(e)}")
        return 1

    if message:
        print(message)
    return 0

if __name__ == "__main__":
    sys.exit(main())
