import logging
from dataclasses import dataclass

from sqlalchemy import delete, insert, select

from ..models import CName, Host, HostVar, host_groups
from ..utils.zone_records import ZoneSnapshot
from .BaseService import BaseService

logger = logging.getLogger(__name__)

@dataclass
class ImportSummary:
    hosts: int
    cnames: int
    disabled: int

def _none_if_empty(value):
    return value or None

class ImportService(BaseService):
    """
    Replaces the DNS-derived part of the store with a new zone snapshot.

    Hosts and aliases are rebuilt from scratch on every import. Curated data
    of hosts present before and after the import (disabled flag, host
    variables, group memberships) is carried over; rows belonging to hosts
    that vanished from DNS go away with them.
    """

    def import_snapshot(self, engine, snapshot: ZoneSnapshot) -> ImportSummary:
        """
        Import a snapshot in a single transaction.

        Args:
            engine: SQLAlchemy engine
            snapshot: hosts parsed from the zone transfer
        Returns:
            ImportSummary
        Raises:
            DatabaseError: any failure; the store is left as it was
        """
        with self.session_scope(engine) as session:
            disabled_names = {
                name for (name,) in session.query(Host.name).filter(Host.disabled != 0).all()
            }
            saved_vars = session.query(HostVar.host_name, HostVar.key, HostVar.value).all()
            saved_members = session.execute(select(host_groups.c.host, host_groups.c.grp)).all()

            session.execute(delete(CName.__table__))
            # Cascades to host_vars and host_groups
            session.execute(delete(Host.__table__))

            names = sorted(snapshot.hosts)
            host_rows = [
                {
                    'name': name,
                    'ipv4': _none_if_empty(snapshot.hosts[name].ipv4),
                    'ipv6': _none_if_empty(snapshot.hosts[name].ipv6),
                    'disabled': 1 if name in disabled_names else 0,
                }
                for name in names
            ]
            cname_rows = [
                {'alias': alias, 'canonical': name}
                for name in names
                for alias in snapshot.hosts[name].cnames
            ]
            var_rows = [
                {'host': host, 'key': key, 'value': value}
                for host, key, value in saved_vars
                if host in snapshot.hosts
            ]
            member_rows = [
                {'host': host, 'grp': grp}
                for host, grp in saved_members
                if host in snapshot.hosts
            ]

            if host_rows:
                session.execute(insert(Host.__table__), host_rows)
            if cname_rows:
                session.execute(insert(CName.__table__), cname_rows)
            if var_rows:
                session.execute(insert(HostVar.__table__), var_rows)
            if member_rows:
                session.execute(insert(host_groups), member_rows)

            kept_disabled = sum(1 for row in host_rows if row['disabled'])
            dropped = len(disabled_names) - kept_disabled
            if dropped:
                logger.info(f"{dropped} disabled hosts no longer present in DNS")

        logger.info(f"Imported {len(host_rows)} hosts and {snapshot.cname_count} CNAMEs")
        return ImportSummary(hosts=len(host_rows), cnames=snapshot.cname_count, disabled=kept_disabled)
