"""Organization, member, invite, JWKS and audit-log presentation."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable

from .colors import emph
from .models import Invite, Organization

PERSONAL = "personal"
_AUDIT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _field(item: Any, name: str, default: Any = "") -> Any:
    if isinstance(item, dict):
        value = item.get(name, default)
    else:
        value = getattr(item, name, default)
    return default if value is None else value


def find_org_with_slug(orgs: Iterable[Organization], slug: str) -> Organization:
    """Return the organization with the slug, raising LookupError if absent."""
    for org in orgs:
        if org.slug == slug:
            return org
    raise LookupError(f"organization with slug {emph(slug)} was not found")


def is_current_org(org: Organization, current_slug: str) -> bool:
    """The personal organization is current when no slug is selected."""
    if org.type == PERSONAL:
        return current_slug == ""
    return org.slug == current_slug


def format_current(org: Organization) -> Organization:
    """A copy of the organization marked for display as the current one."""
    return replace(org, name=emph(org.name), slug=f"{emph(org.slug)} (current)")


def extract_org_names(orgs: Iterable[Organization]) -> list[str]:
    return [org.name for org in orgs]


def org_rows(orgs: Iterable[Organization], current: str) -> tuple[list[list[str]], bool, str]:
    """Rows of name and slug, whether the current org was seen, and the personal slug."""
    rows: list[list[str]] = []
    current_found = False
    personal = ""
    for org in orgs:
        if is_current_org(org, current):
            current_found = True
            org = format_current(org)
        if org.type == PERSONAL:
            personal = org.slug
        rows.append([org.name, org.slug])
    return rows, current_found, personal


def invite_rows(invites: Iterable[Invite]) -> list[list[str]]:
    return [[invite.email, invite.role, "true" if invite.accepted else "false"] for invite in invites]


def member_rows(members: Iterable[Any]) -> list[list[str]]:
    return [[_field(member, "name"), _field(member, "role")] for member in members]


def jwks_rows(jwks_list: Iterable[Any]) -> list[list[str]]:
    return [[_field(jwks, "jwks_name"), _field(jwks, "jwks_url")] for jwks in jwks_list]


def _format_timestamp(value: str) -> str:
    text = value[:-1] + "+00:00" if value[-1:] in ("Z", "z") else value
    if "T" not in text.upper():
        return value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return value
    if parsed.tzinfo is None:
        return value
    return parsed.strftime(_AUDIT_TIME_FORMAT)


def audit_log_rows(logs: Iterable[Any]) -> list[list[str]]:
    """Rows of date, author, code and origin for each audit log."""
    return [
        [
            _format_timestamp(_field(log, "created_at")),
            _field(log, "author"),
            _field(log, "code"),
            _field(log, "origin"),
        ]
        for log in logs
    ]


def audit_log_verbose(logs: Iterable[Any]) -> str:
    """A detailed description of each audit log, including its data."""
    parts: list[str] = []
    for log in logs:
        parts.append(
            f"{emph(_field(log, 'created_at'))}: {emph(_field(log, 'author'))} "
            f"via {emph(_field(log, 'origin'))} performed {emph(_field(log, 'code'))}\n"
        )
        data = _field(log, "data", {})
        if data:
            parts.append("  Data:\n")
            parts.extend(f"    {key}: {value}\n" for key, value in data.items())
        parts.append("\n")
    return "".join(parts)


def member_role(admin: bool) -> str:
    return "admin" if admin else "member"