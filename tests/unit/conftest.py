import pytest
from sqlalchemy.orm import Session

from dns_inventory.db.engine import init_database
from dns_inventory.models import CName, Group, GroupVar, Host, HostVar
from dns_inventory.utils.SessionManager import SessionManager

def seed_inventory(engine):
    """
    Populate a small inventory:

    - web01 (v4+v6, two aliases, one host var) and web02 in group ``web``
    - db01 in group ``dbs``; its host var shadows ``ansible_host``
    - v6only belongs to no group
    - old is disabled but still a member of ``web`` and ``retired``
    - ``empty`` has no members at all
    """
    with SessionManager(engine) as session:
        web01 = Host(name="web01.example.com", ipv4="10.1.2.3", ipv6="fd00::3")
        web02 = Host(name="web02.example.com", ipv4="10.1.2.4")
        db01 = Host(name="db01.example.com", ipv4="10.2.0.5")
        v6only = Host(name="v6only.example.com", ipv6="fd00::10")
        old = Host(name="old.example.com", ipv4="10.1.9.9", disabled=1)
        session.add_all([web01, web02, db01, v6only, old])
        session.add_all([
            CName(alias="www.example.com", canonical="web01.example.com"),
            CName(alias="app.example.com", canonical="web01.example.com"),
            CName(alias="legacy.example.com", canonical="old.example.com"),
            HostVar(host_name="web01.example.com", key="role", value="frontend"),
            HostVar(host_name="db01.example.com", key="ansible_host", value="db01-mgmt.example.com"),
            Group(name="web", hosts=[web01, web02, old]),
            Group(name="dbs", hosts=[db01]),
            Group(name="retired", hosts=[old]),
            Group(name="empty"),
            GroupVar(group_name="web", key="http_port", value="80"),
            GroupVar(group_name="dbs", key="tier", value="backend"),
        ])
        session.commit()

@pytest.fixture
def test_db(tmp_path):
    engine = init_database(tmp_path / "test.db")
    try:
        yield engine
    finally:
        engine.dispose()

@pytest.fixture
def seeded_db(test_db):
    seed_inventory(test_db)
    return test_db

@pytest.fixture
def test_session(test_db):
    session = Session(test_db)
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def seeded_session(seeded_db):
    session = Session(seeded_db)
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def enabled_hosts():
    """Names of the enabled hosts created by seed_inventory, sorted."""
    return [
        "db01.example.com",
        "v6only.example.com",
        "web01.example.com",
        "web02.example.com",
    ]
