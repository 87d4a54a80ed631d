from types import SimpleNamespace

import pytest

from tursoctl.models import Invite, Organization
from tursoctl.orgs import (
    audit_log_rows,
    audit_log_verbose,
    extract_org_names,
    find_org_with_slug,
    format_current,
    invite_rows,
    is_current_org,
    jwks_rows,
    member_role,
    member_rows,
    org_rows,
)


@pytest.fixture(autouse=True)
def _no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


PERSONAL = Organization(name="Me", slug="me", type="personal")
TEAM = Organization(name="Team", slug="team", type="team")


def test_find_org_with_slug():
    assert find_org_with_slug([PERSONAL, TEAM], "team") is TEAM


def test_find_org_with_slug_missing():
    with pytest.raises(LookupError, match="ghost"):
        find_org_with_slug([PERSONAL, TEAM], "ghost")


def test_is_current_org():
    assert is_current_org(PERSONAL, "")
    assert not is_current_org(PERSONAL, "me")
    assert is_current_org(TEAM, "team")
    assert not is_current_org(TEAM, "")


def test_format_current_does_not_mutate():
    formatted = format_current(TEAM)
    assert formatted.name == "Team"
    assert formatted.slug == "team (current)"
    assert TEAM.slug == "team"


def test_extract_org_names():
    assert extract_org_names([PERSONAL, TEAM]) == ["Me", "Team"]
    assert extract_org_names([]) == []


def test_org_rows_marks_current():
    rows, found, personal = org_rows([PERSONAL, TEAM], "team")
    assert found
    assert rows[0] == ["Me", "me"]
    assert rows[1] == ["Team", "team (current)"]
    assert personal == "me"


def test_org_rows_without_current():
    rows, found, personal = org_rows([PERSONAL, TEAM], "other")
    assert not found
    assert personal == "me"
    assert rows == [["Me", "me"], ["Team", "team"]]


def test_invite_rows():
    invites = [Invite("a@example.com", "admin", True), Invite("b@example.com", "member", False)]
    assert invite_rows(invites) == [["a@example.com", "admin", "true"], ["b@example.com", "member", "false"]]


def test_member_rows_accepts_objects_and_dicts():
    members = [SimpleNamespace(name="alice", role="owner"), {"name": "bob", "role": "member"}]
    assert member_rows(members) == [["alice", "owner"], ["bob", "member"]]


def test_jwks_rows():
    jwks = [SimpleNamespace(jwks_name="clerk", jwks_url="https://example.com/jwks.json")]
    assert jwks_rows(jwks) == [["clerk", "https://example.com/jwks.json"]]


def test_audit_log_rows_formats_rfc3339():
    logs = [{"created_at": "2024-01-02T03:04:05Z", "author": "alice", "code": "db-create", "origin": "cli"}]
    assert audit_log_rows(logs) == [["2024-01-02 03:04:05", "alice", "db-create", "cli"]]


def test_audit_log_rows_keeps_unparsable_timestamp():
    logs = [SimpleNamespace(created_at="yesterday", author="a", code="c", origin="o")]
    assert audit_log_rows(logs)[0][0] == "yesterday"


def test_audit_log_verbose_includes_data():
    logs = [
        {"created_at": "t1", "author": "alice", "origin": "cli", "code": "c1", "data": {"db": "x"}},
        {"created_at": "t2", "author": "bob", "origin": "web", "code": "c2", "data": {}},
    ]
    text = audit_log_verbose(logs)
    assert "t1: alice via cli performed c1\n  Data:\n    db: x\n\n" in text
    assert text.endswith("t2: bob via web performed c2\n\n")
    assert text.count("Data:") == 1


def test_member_role():
    assert member_role(True) == "admin"
    assert member_role(False) == "member"