import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from sqlalchemy import delete, text

from ..constants import ANSIBLE_HOST_KEY, CNAMES_KEY, IPV4_KEY, IPV6_KEY
from ..db.schema import CLASS_C_VIEW
from ..exceptions import NotFoundError
from ..models import CName, Host, HostVar

logger = logging.getLogger(__name__)

def merge_host_vars(ipv4, ipv6, cnames, overlay) -> Dict[str, object]:
    """
    Build the variable map of one host.

    The primary address is the IPv4 address when set, else the IPv6 address,
    else an empty string. Raw addresses and aliases appear only when
    non-empty. The overlay is applied last and may shadow any of them.

    Args:
        ipv4: IPv4 address or None
        ipv6: IPv6 address or None
        cnames: aliases pointing at the host
        overlay: host_vars rows as a key/value mapping
    Returns:
        dict: merged host variables
    """
    result = {ANSIBLE_HOST_KEY: ipv4 or ipv6 or ""}
    if ipv4:
        result[IPV4_KEY] = ipv4
    if ipv6:
        result[IPV6_KEY] = ipv6
    if cnames:
        result[CNAMES_KEY] = sorted(cnames)
    result.update(overlay)
    return result

class HostService:
    @staticmethod
    def list_enabled_host_names(session) -> List[str]:
        """
        Return the names of all enabled hosts, sorted.
        """
        rows = session.query(Host.name).filter(Host.disabled == 0).all()
        return sorted(name for (name,) in rows)

    @staticmethod
    def get_enabled_host(session, name) -> Optional[Host]:
        """
        Return the host when it exists and is enabled, None otherwise.
        """
        return session.query(Host).filter(Host.name == name, Host.disabled == 0).one_or_none()

    @staticmethod
    def resolve_host_vars(session, name) -> Optional[Dict[str, object]]:
        """
        Resolve the merged variables of a single host.

        Absent and disabled hosts are indistinguishable here: both yield None.
        Args:
            session: SQLAlchemy session
            name: str
        Returns:
            dict or None
        """
        host = HostService.get_enabled_host(session, name)
        if host is None:
            logger.debug(f"No enabled host named {name}")
            return None
        cnames = [alias for (alias,) in session.query(CName.alias).filter(CName.canonical == name).all()]
        overlay = dict(session.query(HostVar.key, HostVar.value).filter(HostVar.host_name == name).all())
        return merge_host_vars(host.ipv4, host.ipv6, cnames, overlay)

    @staticmethod
    def resolve_all_host_vars(session) -> Dict[str, Dict[str, object]]:
        """
        Resolve the merged variables of every enabled host.

        Same merge as resolve_host_vars, loaded with one query per table
        instead of one per host.
        Returns:
            dict: host name -> merged variables, in host name order
        """
        hosts = session.query(Host.name, Host.ipv4, Host.ipv6).filter(Host.disabled == 0).all()

        cnames = defaultdict(list)
        for alias, canonical in session.query(CName.alias, CName.canonical).all():
            cnames[canonical].append(alias)

        overlays = defaultdict(dict)
        for host_name, key, value in session.query(HostVar.host_name, HostVar.key, HostVar.value).all():
            overlays[host_name][key] = value

        return {
            name: merge_host_vars(ipv4, ipv6, cnames.get(name, []), overlays.get(name, {}))
            for name, ipv4, ipv6 in sorted(hosts, key=lambda row: row[0])
        }

    @staticmethod
    def list_ipv4_hosts(session) -> List[Tuple[str, str]]:
        """
        Return (name, ipv4) for every enabled host with a non-empty IPv4 address.
        """
        rows = (
            session.query(Host.name, Host.ipv4)
            .filter(Host.disabled == 0, Host.ipv4.isnot(None), Host.ipv4 != '')
            .all()
        )
        return sorted((name, ipv4) for name, ipv4 in rows)

    @staticmethod
    def require_host(session, name) -> Host:
        host = session.get(Host, name)
        if host is None:
            raise NotFoundError(f"Host not found: {name}")
        return host

    @staticmethod
    def set_disabled(session, name, disabled) -> bool:
        """
        Set or clear the disabled flag of a host. The row itself is kept.
        Returns:
            bool: True if the flag changed
        Raises:
            NotFoundError: no host with that name
        """
        host = HostService.require_host(session, name)
        if host.is_disabled == bool(disabled):
            return False
        host.disabled = 1 if disabled else 0
        logger.info(f"{'Disabled' if disabled else 'Enabled'} host {name}")
        return True

    @staticmethod
    def set_host_var(session, name, key, value):
        """
        Create or replace a host variable.
        Raises:
            NotFoundError: no host with that name
        """
        HostService.require_host(session, name)
        session.merge(HostVar(host_name=name, key=key, value=str(value)))

    @staticmethod
    def delete_host_var(session, name, key) -> bool:
        """
        Remove a host variable.
        Returns:
            bool: True if a row was deleted
        """
        result = session.execute(
            delete(HostVar).where(HostVar.host_name == name, HostVar.key == key)
        )
        return result.rowcount > 0

    @staticmethod
    def class_c_summary(session) -> List[Tuple[str, int]]:
        """
        Return (network prefix, host count) rows of the class_c view.
        """
        rows = session.execute(text(f"SELECT class_c_network, cnt FROM {CLASS_C_VIEW}")).all()
        return [(network, cnt) for network, cnt in rows]
