"""
Tests for InventoryService.

Covers the --list document (pseudo-groups, hostvars, group filtering),
the --host document and JSON rendering.
"""
import json

import pytest

from dns_inventory.exceptions import InventoryError
from dns_inventory.models import Group, Host
from dns_inventory.services.GroupService import GroupState
from dns_inventory.services.HostService import HostService
from dns_inventory.services.InventoryService import InventoryService, compute_ungrouped


def test_compute_ungrouped():
    groups = {
        "a": GroupState("a", hosts=["h1"]),
        "b": GroupState("b", hosts=["h1", "h3"]),
    }
    assert compute_ungrouped(["h4", "h3", "h2", "h1"], groups) == ["h2", "h4"]


class TestBuildInventory:
    """Test suite for the --list document."""

    def test_document_shape(self, seeded_session, enabled_hosts):
        document = InventoryService.build_inventory(seeded_session)

        assert document["all"] == {"hosts": enabled_hosts, "vars": {}}
        assert document["ungrouped"] == {"hosts": ["v6only.example.com"]}
        assert document["web"] == {
            "hosts": ["web01.example.com", "web02.example.com"],
            "vars": {"http_port": "80"},
        }
        assert document["dbs"] == {"hosts": ["db01.example.com"], "vars": {"tier": "backend"}}

    def test_groups_without_enabled_members_omitted(self, seeded_session):
        document = InventoryService.build_inventory(seeded_session)
        assert "retired" not in document
        assert "empty" not in document

    def test_include_empty_groups(self, seeded_session):
        document = InventoryService.build_inventory(seeded_session, include_empty_groups=True)
        assert document["retired"] == {"hosts": []}
        assert document["empty"] == {"hosts": []}

    def test_hostvars_cover_enabled_hosts_only(self, seeded_session, enabled_hosts):
        document = InventoryService.build_inventory(seeded_session)
        hostvars = document["_meta"]["hostvars"]

        assert sorted(hostvars) == enabled_hosts
        for name in enabled_hosts:
            assert hostvars[name] == HostService.resolve_host_vars(seeded_session, name)

    def test_disabled_host_invisible(self, seeded_session):
        rendered = InventoryService.render_json(InventoryService.build_inventory(seeded_session))
        assert "old.example.com" not in rendered
        assert "legacy.example.com" not in rendered

    def test_every_host_grouped_or_ungrouped(self, seeded_session):
        """Every enabled host is in 'ungrouped' or in at least one real group, never both."""
        document = InventoryService.build_inventory(seeded_session, include_empty_groups=True)
        ungrouped = set(document["ungrouped"]["hosts"])
        grouped = set()
        for name, item in document.items():
            if name not in ("_meta", "all", "ungrouped"):
                grouped.update(item["hosts"])

        assert ungrouped.isdisjoint(grouped)
        assert ungrouped | grouped == set(document["all"]["hosts"])

    def test_reserved_group_names_skipped(self, seeded_session, caplog):
        seeded_session.add(Group(name="all", hosts=[seeded_session.get(Host, "v6only.example.com")]))
        seeded_session.commit()

        document = InventoryService.build_inventory(seeded_session)

        assert document["all"]["vars"] == {}
        assert "v6only.example.com" in document["ungrouped"]["hosts"]
        assert "reserved" in caplog.text

    def test_empty_database(self, test_session):
        document = InventoryService.build_inventory(test_session)
        assert document == {
            "_meta": {"hostvars": {}},
            "all": {"hosts": [], "vars": {}},
            "ungrouped": {"hosts": []},
        }

    def test_rendering_is_deterministic(self, seeded_session):
        first = InventoryService.render_json(InventoryService.build_inventory(seeded_session))
        second = InventoryService.render_json(InventoryService.build_inventory(seeded_session))
        assert first == second


class TestBuildHostVars:
    """Test suite for the --host document."""

    def test_known_host(self, seeded_session):
        result = InventoryService.build_host_vars(seeded_session, "web02.example.com")
        assert result == {"ansible_host": "10.1.2.4", "ipv4": "10.1.2.4"}

    def test_unknown_host_is_empty(self, seeded_session):
        assert InventoryService.build_host_vars(seeded_session, "nope.example.com") == {}

    def test_disabled_host_is_empty(self, seeded_session):
        assert InventoryService.build_host_vars(seeded_session, "old.example.com") == {}


class TestRenderJson:
    """Test suite for JSON rendering."""

    def test_sorted_keys_and_indent(self):
        rendered = InventoryService.render_json({"b": 1, "a": {"d": 2, "c": 3}})
        assert rendered == '{\n  "a": {\n    "c": 3,\n    "d": 2\n  },\n  "b": 1\n}'

    def test_custom_indent(self):
        rendered = InventoryService.render_json({"a": [1]}, indent=4)
        assert rendered == '{\n    "a": [\n        1\n    ]\n}'

    def test_round_trip(self, seeded_session):
        document = InventoryService.build_inventory(seeded_session)
        assert json.loads(InventoryService.render_json(document)) == document

    def test_unencodable_value(self):
        with pytest.raises(InventoryError):
            InventoryService.render_json({"a": object()})
