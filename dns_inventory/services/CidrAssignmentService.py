import logging
from dataclasses import dataclass
from typing import List

from ..utils.cidr_rules import CidrRule, compute_memberships
from .BaseService import BaseService
from .GroupService import GroupService
from .HostService import HostService

logger = logging.getLogger(__name__)

@dataclass
class AssignmentSummary:
    hosts: int
    processed: int
    created: int
    groups: int

class CidrAssignmentService(BaseService):
    """
    Derives group memberships from IPv4 network rules.

    Assignment is additive: groups and memberships are created when missing
    and existing rows are never changed or removed, so manually curated
    memberships and memberships from earlier runs survive.
    """

    def assign(self, engine, rules: List[CidrRule]) -> AssignmentSummary:
        """
        Run one assignment batch in a single transaction.

        Args:
            engine: SQLAlchemy engine
            rules: parsed CIDR rules
        Returns:
            AssignmentSummary
        Raises:
            DatabaseError: any failure; nothing from this run is committed
        """
        with self.session_scope(engine) as session:
            hosts = HostService.list_ipv4_hosts(session)
            logger.info(f"Hosts loaded: {len(hosts)}, rules: {len(rules)}")

            memberships = compute_memberships(hosts, rules)

            ensured = set()
            processed = 0
            created = 0
            for host in sorted(memberships):
                for group in sorted(memberships[host]):
                    if group not in ensured:
                        GroupService.ensure_group(session, group)
                        ensured.add(group)
                    if GroupService.add_membership(session, host, group):
                        created += 1
                    processed += 1

        logger.info(f"Processed {processed} memberships ({created} new) across {len(ensured)} groups")
        return AssignmentSummary(hosts=len(hosts), processed=processed, created=created, groups=len(ensured))
