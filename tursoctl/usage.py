"""Plan usage: quota table, number formatting and billing helpers."""

from __future__ import annotations

import calendar
import math
import time
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from .colors import emph
from .models import Organization

BILLING_BASE_URL = "https://app.turso.tech/"
OVERAGES_SUFFIX = "_overages"
UNLIMITED = "Unlimited"
MAX_ERRORS_IN_A_ROW = 5

_BYTE_SIZES = ("B", "kB", "MB", "GB", "TB", "PB", "EB")

# (resource label, usage key, quota key, kind)
_RESOURCES = (
    ("storage", "storage_bytes_used", "storage", "bytes"),
    ("rows read", "rows_read", "rows_read", "millions"),
    ("rows written", "rows_written", "rows_written", "millions"),
    ("embedded syncs", "bytes_synced", "bytes_synced", "bytes"),
    ("databases", "databases", "databases", "count"),
    ("locations", "locations", "locations", "count"),
    ("groups", "groups", "groups", "count"),
)


def _field(item: Any, name: str, default: Any = None) -> Any:
    if item is None:
        return default
    if isinstance(item, dict):
        value = item.get(name, default)
    else:
        value = getattr(item, name, default)
    return default if value is None else value


def human_bytes(value: int) -> str:
    """Format a byte count with decimal (SI) units, e.g. '1.5 kB'."""
    if value < 10:
        return f"{value} B"
    exponent = math.floor(math.log(value) / math.log(1000))
    exponent = min(exponent, len(_BYTE_SIZES) - 1)
    scaled = math.floor(value / math.pow(1000, exponent) * 10 + 0.5) / 10
    suffix = _BYTE_SIZES[exponent]
    if scaled < 10:
        return f"{scaled:.1f} {suffix}"
    return f"{scaled:.0f} {suffix}"


def to_millions(value: int) -> str:
    """Format a count in millions with one decimal, e.g. '2.5M'."""
    text = f"{value / 1_000_000.0:.1f}"
    text = text.removesuffix(".0")
    if text == "0" and value != 0:
        text = "<0.1"
    return text + "M"


def percentage(used: float, limit: float) -> str:
    """The share of the limit that is used, as a whole percentage."""
    return f"{used / limit * 100:.0f}%"


def first_day_of_next_month(now: datetime | None = None) -> datetime:
    """Midnight UTC of the first day of the month after a one-month step from now.

    Stepping one month from a day the next month lacks (e.g. 31 January)
    overflows into the month after, as calendar arithmetic normalizes it.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    year, month = now.year, now.month + 1
    if month > 12:
        year, month = year + 1, 1
    if now.day > calendar.monthrange(year, month)[1]:
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return datetime(year, month, 1, tzinfo=timezone.utc)


def overages_message(overages: bool) -> str:
    status = "enabled" if overages else "disabled"
    return f"Overages {emph(status)}\n"


def displayed_plan_name(plan: str, overages: bool) -> str:
    """The plan name without its overages suffix when overages are on."""
    if overages:
        return plan.removesuffix(OVERAGES_SUFFIX)
    return plan


def get_plan(name: str, plans: Iterable[Any]) -> Any:
    """The plan with the given name, or None when there is none."""
    for plan in plans:
        if _field(plan, "name", "") == name:
            return plan
    return None


def _row(label: str, kind: str, used: int, limit: int, overages: bool) -> list[str]:
    if limit == 0:
        shown = human_bytes(used) if kind == "bytes" else str(used)
        return [label, shown, UNLIMITED, ""]
    if kind == "count":
        return [label, str(used), str(limit), percentage(float(used), float(limit))]
    fmt = human_bytes if kind == "bytes" else to_millions
    row = [label, fmt(used), fmt(limit), percentage(float(used), float(limit))]
    exceeded = max(used - limit, 0)
    if overages and exceeded > 0:
        row.append(fmt(exceeded))
    return row


def usage_table(usage: Any, plan: Any, overages: bool) -> tuple[list[str], list[list[str]]]:
    """Headers and rows comparing resource usage with the plan's quotas.

    A quota of zero, or a missing plan, means the resource is unlimited.
    """
    headers = ["RESOURCE", "USED", "LIMIT", "LIMIT %"]
    if overages:
        headers.append("OVERAGE")
    quotas = _field(plan, "quotas", {})
    rows = [
        _row(
            label,
            kind,
            int(_field(usage, usage_key, 0)),
            int(_field(quotas, quota_key, 0)),
            overages,
        )
        for label, usage_key, quota_key, kind in _RESOURCES
    ]
    return headers, rows


def find_current_org(orgs: Iterable[Organization], organization_name: str) -> Organization:
    """The organization with the slug, or the personal one when no name is given."""
    for org in orgs:
        if org.slug == organization_name:
            return org
        if organization_name == "" and org.type == "personal":
            return org
    raise LookupError(f"could not find organization {organization_name}")


def billing_url(org: str) -> str:
    return BILLING_BASE_URL + org + "/billing"


def wait_for_payment_method(
    check: Callable[[], bool], sleep: Callable[[float], None] = time.sleep
) -> bool:
    """Poll check() once a second until it reports a payment method.

    Errors are tolerated until more than five happen in a row; the last
    one is then raised.
    """
    errors_in_a_row = 0
    while True:
        try:
            has_payment_method = check()
        except Exception:
            errors_in_a_row += 1
            if errors_in_a_row > MAX_ERRORS_IN_A_ROW:
                raise
            has_payment_method = False
        else:
            errors_in_a_row = 0
        if has_payment_method:
            return True
        sleep(1)