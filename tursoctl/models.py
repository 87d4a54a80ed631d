"""Organizations, databases and instances, and their tabular display."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from .colors import emph

_ANSI = re.compile(r"\x1b\[[0-9;]*m")
_TABLE_PADDING = "     "


def _pick(data: dict, *keys: str, default: Any = "") -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass
class Organization:
    name: str = ""
    slug: str = ""
    type: str = ""
    overages: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Organization":
        return cls(
            name=_pick(data, "name"),
            slug=_pick(data, "slug"),
            type=_pick(data, "type"),
            overages=bool(_pick(data, "overages", default=False)),
        )


@dataclass
class Invite:
    email: str = ""
    role: str = ""
    accepted: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Invite":
        return cls(
            email=_pick(data, "email"),
            role=_pick(data, "role"),
            accepted=bool(_pick(data, "accepted", default=False)),
        )


@dataclass
class Invoice:
    number: str = ""
    amount: str = ""
    status: str = ""
    due_date: str = ""
    paid_at: str = ""
    payment_failed_at: str = ""
    invoice_pdf: str = ""
    hosted_invoice_url: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Invoice":
        return cls(
            number=_pick(data, "invoice_number", "number"),
            amount=_pick(data, "amount_due", "amount"),
            status=_pick(data, "status"),
            due_date=_pick(data, "due_date"),
            paid_at=_pick(data, "paid_at"),
            payment_failed_at=_pick(data, "payment_failed_at"),
            invoice_pdf=_pick(data, "invoice_pdf"),
            hosted_invoice_url=_pick(data, "hosted_invoice_url"),
        )


@dataclass
class Database:
    name: str = ""
    hostname: str = ""
    group: str = ""
    primary_region: str = ""
    id: str = ""
    type: str = ""
    regions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Database":
        return cls(
            name=_pick(data, "Name", "name"),
            hostname=_pick(data, "Hostname", "hostname"),
            group=_pick(data, "group"),
            primary_region=_pick(data, "primaryRegion", "primary_region"),
            id=_pick(data, "DbId", "id"),
            type=_pick(data, "type"),
            regions=list(_pick(data, "regions", default=[])),
        )


@dataclass
class Instance:
    name: str = ""
    type: str = ""
    region: str = ""
    hostname: str = ""
    uuid: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Instance":
        return cls(
            name=_pick(data, "name"),
            type=_pick(data, "type"),
            region=_pick(data, "region"),
            hostname=_pick(data, "hostname"),
            uuid=_pick(data, "uuid"),
        )


def _width(text: str) -> int:
    return len(_ANSI.sub("", text))


def _pad(text: str, width: int) -> str:
    return text + " " * (width - _width(text))


def _title(header: str) -> str:
    return header.replace("_", " ").replace(".", " ").upper()


def render_table(headers: Iterable[str], rows: Iterable[Iterable[Any]]) -> str:
    """Render a borderless, left-aligned table with upper-cased headers."""
    header_cells = [_title(str(h)) for h in headers]
    body = [[str(cell) for cell in row] for row in rows]
    columns = max([len(header_cells)] + [len(row) for row in body])
    widths = [0] * columns
    for line in [header_cells, *body]:
        for index, cell in enumerate(line):
            widths[index] = max(widths[index], _width(cell))
    lines = []
    for line in [header_cells, *body]:
        cells = [_pad(cell, widths[index]) for index, cell in enumerate(line)]
        lines.append(_TABLE_PADDING.join(cells).rstrip())
    return "\n".join(lines) + "\n"


def print_table(headers: Iterable[str], rows: Iterable[Iterable[Any]]) -> None:
    print(render_table(headers, rows), end="")


def format_bool(value: bool) -> str:
    return "Yes" if value else "No"


def format_locations(locations: Iterable[str], primary: str) -> str:
    """Join locations with commas, marking the primary one."""
    return ", ".join(
        f"{emph(location)} (primary)" if location == primary else location for location in locations
    )


def _url(db: Database, instance: Instance | None, scheme: str) -> str:
    host = instance.hostname if instance is not None else db.hostname
    return f"{scheme}://{host}"


def database_url(db: Database) -> str:
    return _url(db, None, "libsql")


def instance_url(db: Database, instance: Instance | None) -> str:
    return _url(db, instance, "libsql")


def is_local_development_db(db: Database) -> bool:
    """True when the database runs on a local development server."""
    return db.primary_region == "local"


def database_http_url(db: Database) -> str:
    scheme = "http" if is_local_development_db(db) else "https"
    return _url(db, None, scheme)


def filter_instances_by_region(instances: Iterable[Instance], region: str) -> list[Instance]:
    return [instance for instance in instances if instance.region == region]


def extract_primary(instances: Iterable[Instance]) -> tuple[Instance | None, list[Instance]]:
    """Split instances into the primary (last one found, if any) and the rest."""
    primary = None
    others = []
    for instance in instances:
        if instance.type == "primary":
            primary = instance
        else:
            others.append(instance)
    return primary, others