import logging
from dataclasses import dataclass, field
from typing import Dict, List

from sqlalchemy import delete, insert

from ..exceptions import NotFoundError
from ..models import Group, GroupVar, Host, host_groups

logger = logging.getLogger(__name__)

@dataclass
class GroupState:
    """
    A group as seen by the inventory views.

    ``hosts`` holds only enabled, existing members, sorted. A group without
    such members is still represented; whether to show it is decided when
    the inventory document is assembled.
    """
    name: str
    hosts: List[str] = field(default_factory=list)
    vars: Dict[str, str] = field(default_factory=dict)

class GroupService:
    @staticmethod
    def load_groups(session) -> Dict[str, GroupState]:
        """
        Load every group with its surfaced members and variables.

        Groups are outer-joined to memberships and hosts; a membership is
        surfaced only when its host exists and is enabled.
        Args:
            session: SQLAlchemy session
        Returns:
            dict: group name -> GroupState
        """
        rows = (
            session.query(Group.name, host_groups.c.host, Host.disabled)
            .outerjoin(host_groups, host_groups.c.grp == Group.name)
            .outerjoin(Host, Host.name == host_groups.c.host)
            .all()
        )

        groups = {}
        for group_name, host_name, disabled in rows:
            state = groups.setdefault(group_name, GroupState(group_name))
            # disabled is None when the membership points at a missing host
            if host_name and disabled == 0:
                state.hosts.append(host_name)

        for group_name, key, value in session.query(GroupVar.group_name, GroupVar.key, GroupVar.value).all():
            groups.setdefault(group_name, GroupState(group_name)).vars[key] = value

        for state in groups.values():
            state.hosts = sorted(set(state.hosts))
        return groups

    @staticmethod
    def ensure_group(session, name) -> bool:
        """
        Create the group if it does not exist yet.
        Returns:
            bool: True if the group was created
        """
        result = session.execute(insert(Group.__table__).prefix_with("OR IGNORE").values(name=name))
        created = result.rowcount == 1
        if created:
            logger.info(f"Created group {name}")
        return created

    @staticmethod
    def add_membership(session, host, group) -> bool:
        """
        Add a host to a group, leaving an existing membership untouched.
        Returns:
            bool: True if a new membership row was written
        """
        result = session.execute(insert(host_groups).prefix_with("OR IGNORE").values(host=host, grp=group))
        return result.rowcount == 1

    @staticmethod
    def remove_membership(session, host, group) -> bool:
        """
        Remove a host from a group.
        Returns:
            bool: True if a membership row was deleted
        """
        result = session.execute(
            delete(host_groups).where(host_groups.c.host == host, host_groups.c.grp == group)
        )
        return result.rowcount > 0

    @staticmethod
    def set_group_var(session, group, key, value):
        """
        Create or replace a group variable.
        Raises:
            NotFoundError: no group with that name
        """
        if session.get(Group, group) is None:
            raise NotFoundError(f"Group not found: {group}")
        session.merge(GroupVar(group_name=group, key=key, value=str(value)))

    @staticmethod
    def delete_group_var(session, group, key) -> bool:
        """
        Remove a group variable.
        Returns:
            bool: True if a row was deleted
        """
        result = session.execute(
            delete(GroupVar).where(GroupVar.group_name == group, GroupVar.key == key)
        )
        return result.rowcount > 0
