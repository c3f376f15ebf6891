import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from dns_inventory.constants import (
    DEFAULT_SKIP_MARKER,
    MIN_RECORD_FIELDS,
    RECORD_TYPE_A,
    RECORD_TYPE_AAAA,
    RECORD_TYPE_CNAME,
)
from dns_inventory.exceptions import ZoneImportError

logger = logging.getLogger(__name__)

@dataclass
class ZoneHost:
    """
    Addresses and aliases collected for one owner name.
    """
    ipv4: str = ""
    ipv6: str = ""
    cnames: List[str] = field(default_factory=list)

    @property
    def has_address(self):
        return bool(self.ipv4 or self.ipv6)

@dataclass
class ZoneSnapshot:
    """
    Hosts derived from one zone transfer, keyed by host name.
    """
    hosts: Dict[str, ZoneHost] = field(default_factory=dict)

    @property
    def cname_count(self):
        return sum(len(h.cnames) for h in self.hosts.values())

def strip_trailing_dot(name: str) -> str:
    """Drop the FQDN root dot ('web.example.com.' -> 'web.example.com')."""
    return name[:-1] if name.endswith('.') else name

class ZoneRecordUtil:
    """
    Utility class turning zone transfer output into host facts.

    Input lines follow the ``dig axfr`` presentation format:
    ``owner ttl class type value``.
    """
    @staticmethod
    def parse_zone_lines(lines: Iterable[str], skip_marker: str = DEFAULT_SKIP_MARKER) -> ZoneSnapshot:
        """
        Collect A, AAAA and CNAME records into a ZoneSnapshot.

        Lines with fewer than five fields, comment lines, owners containing
        ``skip_marker`` and other record types are skipped. A CNAME is kept
        only when its target ends up with an address record; hosts without
        any address are dropped.
        Args:
            lines: iterable of zone transfer lines
            skip_marker: owner substring marking records to ignore
        Returns:
            ZoneSnapshot
        """
        hosts: Dict[str, ZoneHost] = {}
        aliases: Dict[str, str] = {}
        skipped = 0

        for line in lines:
            fields = line.split()
            if len(fields) < MIN_RECORD_FIELDS or fields[0].startswith(';'):
                skipped += 1
                continue
            owner = strip_trailing_dot(fields[0])
            if skip_marker and skip_marker in owner:
                skipped += 1
                continue
            record_type = fields[3]
            value = strip_trailing_dot(fields[4])

            if record_type == RECORD_TYPE_A:
                hosts.setdefault(owner, ZoneHost()).ipv4 = value
            elif record_type == RECORD_TYPE_AAAA:
                hosts.setdefault(owner, ZoneHost()).ipv6 = value
            elif record_type == RECORD_TYPE_CNAME:
                aliases[owner] = value
            else:
                skipped += 1

        dangling = 0
        for alias, canonical in aliases.items():
            target = hosts.get(canonical)
            if target is None:
                dangling += 1
                continue
            target.cnames.append(alias)

        snapshot = ZoneSnapshot({name: h for name, h in hosts.items() if h.has_address})
        for h in snapshot.hosts.values():
            h.cnames.sort()

        logger.debug(f"Skipped {skipped} zone lines, dropped {dangling} CNAMEs without target")
        return snapshot

    @staticmethod
    def read_zone_stream(stream, skip_marker: str = DEFAULT_SKIP_MARKER) -> ZoneSnapshot:
        """
        Parse a whole zone transfer from a text stream (e.g. stdin).
        Raises:
            ZoneImportError: the stream cannot be read or decoded
        """
        try:
            return ZoneRecordUtil.parse_zone_lines(stream, skip_marker=skip_marker)
        except (OSError, UnicodeDecodeError) as e:
            raise ZoneImportError(f"Failed to read zone records: {str(e)}") from e
