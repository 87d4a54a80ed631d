"""Invoice and database listings, with paging over the database list."""

from __future__ import annotations

import random
import string
from typing import Callable, Iterable, Iterator, Sequence

from .models import Database, Invoice, database_url

INVOICE_HEADERS = ["ID", "Amount Due", "Status", "Due Date", "Paid At", "Payment Failed At"]
INVOICE_LINK_HEADERS = ["ID", "Link"]
DATABASE_HEADERS = ["NAME", "GROUP", "URL"]
NEXT_PAGE_HINT = "\nPress 'n' or Enter for next page (q to quit)"
ALL_PAGES_SIZE = 1000
_COLUMN_GAP = "    "
_RANDOM_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

PageFetcher = Callable[[int, "str | None"], "tuple[Sequence[Database], str | None]"]


def invoice_table(invoices: Iterable[Invoice]) -> tuple[list[str], list[list[str]]]:
    """Headers and rows describing each invoice."""
    rows = [
        [
            invoice.number,
            invoice.amount,
            invoice.status,
            invoice.due_date,
            invoice.paid_at,
            invoice.payment_failed_at,
        ]
        for invoice in invoices
    ]
    return list(INVOICE_HEADERS), rows


def invoice_links(invoices: Iterable[Invoice]) -> tuple[list[str], list[list[str]]]:
    """Headers and rows linking each invoice to its PDF, or its hosted page."""
    rows = [[invoice.number, invoice.invoice_pdf or invoice.hosted_invoice_url] for invoice in invoices]
    return list(INVOICE_LINK_HEADERS), rows


def format_group(group: str) -> str:
    return group if group else "-"


def render_database_list(databases: Iterable[Database], has_more: bool = False) -> str:
    """Render databases as aligned NAME/GROUP/URL columns."""
    rows = [[db.name, format_group(db.group), database_url(db)] for db in databases]
    widths = [len(header) for header in DATABASE_HEADERS]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def line(cells: Sequence[str]) -> str:
        return _COLUMN_GAP.join(cell.ljust(width) for cell, width in zip(cells, widths)) + "\n"

    parts = []
    if rows:
        parts.append(line(DATABASE_HEADERS))
        parts.extend(line(row) for row in rows)
    if has_more:
        parts.append(NEXT_PAGE_HINT)
    return "".join(parts)


def iter_database_pages(
    fetch_page: PageFetcher, page_size: int, cursor: str | None = None
) -> Iterator[list[Database]]:
    """Yield pages of databases, following the cursor until there is none."""
    while True:
        databases, cursor = fetch_page(page_size, cursor)
        yield list(databases)
        if cursor is None:
            return


def collect_all_databases(fetch_page: PageFetcher) -> list[Database]:
    """Fetch every page of databases and return them in order."""
    return [db for page in iter_database_pages(fetch_page, ALL_PAGES_SIZE) for db in page]


def rand_string(n: int) -> str:
    """A random string of n letters and digits."""
    return "".join(random.choices(_RANDOM_ALPHABET, k=n))