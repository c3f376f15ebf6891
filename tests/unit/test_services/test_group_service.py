"""
Tests for GroupService.

Tests group loading (surfaced members, empty groups, variables) and the
idempotent group and membership writers.
"""
import pytest
from sqlalchemy import select

from dns_inventory.exceptions import NotFoundError
from dns_inventory.models import Group, Host, host_groups
from dns_inventory.services.GroupService import GroupService, GroupState


def _membership_rows(session):
    return sorted(session.execute(select(host_groups.c.host, host_groups.c.grp)).all())


class TestLoadGroups:
    """Test suite for GroupService.load_groups."""

    def test_all_groups_returned(self, seeded_session):
        groups = GroupService.load_groups(seeded_session)
        assert set(groups) == {"web", "dbs", "retired", "empty"}
        assert all(isinstance(g, GroupState) for g in groups.values())

    def test_disabled_members_not_surfaced(self, seeded_session):
        groups = GroupService.load_groups(seeded_session)
        assert groups["web"].hosts == ["web01.example.com", "web02.example.com"]

    def test_group_without_surfaced_members_kept(self, seeded_session):
        """Only a disabled member, or none at all: the group stays with no hosts."""
        groups = GroupService.load_groups(seeded_session)
        assert groups["retired"].hosts == []
        assert groups["empty"].hosts == []
        assert groups["empty"].vars == {}

    def test_group_vars_merged(self, seeded_session):
        groups = GroupService.load_groups(seeded_session)
        assert groups["web"].vars == {"http_port": "80"}
        assert groups["dbs"].vars == {"tier": "backend"}

    def test_hosts_sorted(self, test_session):
        test_session.add_all([Host(name=n, ipv4="10.0.0.1") for n in ["c", "a", "b"]])
        test_session.add(Group(name="g"))
        test_session.flush()
        for name in ["c", "a", "b"]:
            GroupService.add_membership(test_session, name, "g")
        test_session.commit()

        assert GroupService.load_groups(test_session)["g"].hosts == ["a", "b", "c"]

    def test_no_groups(self, test_session):
        assert GroupService.load_groups(test_session) == {}


class TestGroupWriters:
    """Test suite for GroupService writers."""

    def test_ensure_group_idempotent(self, test_session):
        assert GroupService.ensure_group(test_session, "Web Frontends") is True
        assert GroupService.ensure_group(test_session, "Web Frontends") is False
        test_session.commit()
        assert test_session.query(Group).count() == 1

    def test_add_membership_idempotent(self, seeded_session):
        before = _membership_rows(seeded_session)
        assert GroupService.add_membership(seeded_session, "web01.example.com", "web") is False
        assert GroupService.add_membership(seeded_session, "db01.example.com", "web") is True
        seeded_session.commit()

        after = _membership_rows(seeded_session)
        assert len(after) == len(before) + 1
        assert ("db01.example.com", "web") in after

    def test_remove_membership(self, seeded_session):
        assert GroupService.remove_membership(seeded_session, "web02.example.com", "web") is True
        assert GroupService.remove_membership(seeded_session, "web02.example.com", "web") is False
        seeded_session.commit()
        assert GroupService.load_groups(seeded_session)["web"].hosts == ["web01.example.com"]

    def test_set_group_var(self, seeded_session):
        GroupService.set_group_var(seeded_session, "empty", "owner", "ops")
        GroupService.set_group_var(seeded_session, "web", "http_port", 8080)
        seeded_session.commit()

        groups = GroupService.load_groups(seeded_session)
        assert groups["empty"].vars == {"owner": "ops"}
        assert groups["web"].vars == {"http_port": "8080"}

    def test_set_group_var_unknown_group(self, seeded_session):
        with pytest.raises(NotFoundError):
            GroupService.set_group_var(seeded_session, "missing", "k", "v")

    def test_delete_group_var(self, seeded_session):
        assert GroupService.delete_group_var(seeded_session, "dbs", "tier") is True
        assert GroupService.delete_group_var(seeded_session, "dbs", "tier") is False
        seeded_session.commit()
        assert GroupService.load_groups(seeded_session)["dbs"].vars == {}

    def test_delete_group_var_same_session(self, seeded_session):
        """A variable set and removed in one transaction is gone before commit."""
        GroupService.set_group_var(seeded_session, "empty", "owner", "ops")
        assert GroupService.delete_group_var(seeded_session, "empty", "owner") is True
        assert GroupService.delete_group_var(seeded_session, "empty", "owner") is False
        assert GroupService.load_groups(seeded_session)["empty"].vars == {}
