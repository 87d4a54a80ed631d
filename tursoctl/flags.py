"""Command-line flag values, their validation and shell completions."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass, field

DEFAULT_CSV_SEPARATOR = ","
DEFAULT_EXPIRATION = "never"
DEFAULT_INVOICE_TYPE = "issued"
DEFAULT_DATABASE_TYPE = "regular"
DEFAULT_JWKS_SCOPE = "full-access"

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class FineGrainedPermissions:
    """Permissions on a set of tables; no table names means all tables."""

    table_names: list[str] | None
    allowed_operations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Return the wire form: table names under "t", operations under "a"."""
        return {"t": self.table_names, "a": self.allowed_operations}


def validate_csv_separator(value: str) -> None:
    """Raise ValueError unless the separator is exactly one single-byte character."""
    if len(value.encode("utf-8")) > 1:
        raise ValueError("csv separator must be a single character")
    if value == "":
        raise ValueError("csv separator must not be empty")


def csv_separator(value: str) -> str:
    """Return the validated CSV separator character."""
    validate_csv_separator(value)
    return value[0]


def validate_expiration(expiration: str) -> None:
    """Raise ValueError unless the expiration is 'never'-like or a number of days."""
    if not expiration:
        return
    if expiration in ("none", "default", "never"):
        return
    if not expiration.endswith("d"):
        raise ValueError("expiration must be either 'never' or in days (e.g. 7d)")
    days_str = expiration[:-1]
    if not _INTEGER.fullmatch(days_str):
        raise ValueError(f'invalid expiration days: "{days_str}"')
    if int(days_str) < 1:
        raise ValueError("expiration must be at least 1 day")


def expiration_completion(to_complete: str) -> list[str]:
    """Suggest expiration values for a partially typed flag."""
    if _INTEGER.fullmatch(to_complete):
        return [to_complete + "d"]
    return ["never", "1d", "7d"]


def validate_invoice_type(invoice_type: str) -> None:
    """Raise ValueError unless the invoice type is a known one."""
    if invoice_type not in ("issued", "all", "upcoming"):
        raise ValueError("type parameter must be either 'all' or 'upcoming' or 'issued'")


def invoice_type_completion() -> list[str]:
    return ["issued", "upcoming", "all"]


def validate_timeline(timeline: str) -> None:
    """Raise ValueError unless the timeline is empty, monthly or yearly."""
    if timeline not in ("", "monthly", "yearly"):
        raise ValueError("timeline parameter must be either 'monthly' or 'yearly'")


def timeline_completion() -> list[str]:
    return ["monthly", "yearly"]


def extensions_completion() -> list[str]:
    return ["all", "none"]


def version_completion() -> list[str]:
    return ["latest", "canary"]


def type_completion() -> list[str]:
    return ["regular", "schema"]


def parse_fine_grained_permissions(permissions) -> list[FineGrainedPermissions]:
    """Parse values of the form '<table|all>:<op1>,<op2>,...'."""
    parsed: list[FineGrainedPermissions] = []
    for permission in permissions or ():
        table, sep, operations = permission.partition(":")
        if not sep:
            raise ValueError(f"invalid permission format: '{permission}'")
        table_names = None if table == "all" else [table]
        parsed.append(FineGrainedPermissions(table_names, operations.split(",")))
    return parsed


def add_global_flags(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add the hidden --debug and --reset-config flags to a parser."""
    parser.add_argument("--debug", action="store_true", default=False, help=argparse.SUPPRESS)
    parser.add_argument(
        "--reset-config", dest="reset_config", action="store_true", default=False, help=argparse.SUPPRESS
    )
    return parser