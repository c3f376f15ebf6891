"""
Inventory view builder.

Assembles the two documents consumed by Ansible's dynamic inventory
protocol from the host and group stores:

- ``--list``: every group, the ``all`` and ``ungrouped`` pseudo-groups and
  ``_meta.hostvars`` for every enabled host
- ``--host NAME``: the merged variables of a single host

All host and alias lists are sorted so that repeated runs over the same
data render byte-identical JSON.
"""

import json
import logging
from typing import Dict, Iterable, List

from ..constants import (
    ALL_GROUP,
    DEFAULT_JSON_INDENT,
    META_GROUP,
    RESERVED_GROUP_NAMES,
    UNGROUPED_GROUP,
)
from ..exceptions import InventoryError
from .GroupService import GroupService, GroupState
from .HostService import HostService

logger = logging.getLogger(__name__)

def compute_ungrouped(all_hosts: Iterable[str], groups: Dict[str, GroupState]) -> List[str]:
    """
    Return the enabled hosts that belong to no group, sorted.

    Membership in any group counts, including groups without variables.
    """
    in_group = set()
    for state in groups.values():
        in_group.update(state.hosts)
    return sorted(h for h in all_hosts if h not in in_group)

class InventoryService:
    @staticmethod
    def build_inventory(session, include_empty_groups=False) -> Dict[str, object]:
        """
        Build the full inventory document.

        Args:
            session: SQLAlchemy session
            include_empty_groups (bool): emit groups without enabled members
                as ``{"hosts": []}`` instead of omitting them
        Returns:
            dict: the ``--list`` document
        """
        hostvars = HostService.resolve_all_host_vars(session)
        all_hosts = sorted(hostvars)

        groups = {}
        for name, state in GroupService.load_groups(session).items():
            if name in RESERVED_GROUP_NAMES:
                logger.warning(f"Ignoring group '{name}': name is reserved for the inventory document")
                continue
            groups[name] = state

        document = {
            META_GROUP: {"hostvars": hostvars},
            ALL_GROUP: {"hosts": all_hosts, "vars": {}},
            UNGROUPED_GROUP: {"hosts": compute_ungrouped(all_hosts, groups)},
        }

        for name in sorted(groups):
            state = groups[name]
            if not state.hosts and not include_empty_groups:
                continue
            item = {"hosts": list(state.hosts)}
            if state.vars:
                item["vars"] = dict(state.vars)
            document[name] = item

        logger.info(f"Built inventory: {len(all_hosts)} hosts, {len(document) - 3} groups")
        return document

    @staticmethod
    def build_host_vars(session, name) -> Dict[str, object]:
        """
        Build the ``--host`` document for one host.

        An unknown or disabled host has no facts: the result is an empty
        dict, never an error.
        """
        hostvars = HostService.resolve_host_vars(session, name)
        if hostvars is None:
            return {}
        return hostvars

    @staticmethod
    def render_json(document, indent=DEFAULT_JSON_INDENT) -> str:
        """
        Serialize an inventory document.

        Keys are sorted so the output is stable across runs.
        Raises:
            InventoryError: the document holds values JSON cannot encode
        """
        try:
            return json.dumps(document, indent=indent, sort_keys=True)
        except (TypeError, ValueError) as e:
            raise InventoryError(f"Failed to encode inventory as JSON: {str(e)}") from e
