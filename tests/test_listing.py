import pytest

from tursoctl.listing import (
    collect_all_databases,
    format_group,
    invoice_links,
    invoice_table,
    iter_database_pages,
    rand_string,
    render_database_list,
)
from tursoctl.models import Database, Invoice


def _invoice(number, pdf="", hosted=""):
    return Invoice(
        number=number,
        amount="10",
        status="paid",
        due_date="d1",
        paid_at="d2",
        payment_failed_at="",
        invoice_pdf=pdf,
        hosted_invoice_url=hosted,
    )


def test_invoice_table_headers_and_rows():
    headers, rows = invoice_table([_invoice("INV-1")])
    assert headers == ["ID", "Amount Due", "Status", "Due Date", "Paid At", "Payment Failed At"]
    assert rows == [["INV-1", "10", "paid", "d1", "d2", ""]]


def test_invoice_table_empty():
    headers, rows = invoice_table([])
    assert rows == []
    assert len(headers) == 6


def test_invoice_links_prefers_pdf():
    headers, rows = invoice_links(
        [_invoice("A", pdf="https://example.com/a.pdf", hosted="https://example.com/a"), _invoice("B", hosted="https://example.com/b")]
    )
    assert headers == ["ID", "Link"]
    assert rows == [["A", "https://example.com/a.pdf"], ["B", "https://example.com/b"]]


def test_format_group():
    assert format_group("") == "-"
    assert format_group("default") == "default"


def test_render_empty_list():
    assert render_database_list([]) == ""
    assert render_database_list([], has_more=True) == "\nPress 'n' or Enter for next page (q to quit)"


def test_render_aligns_columns():
    dbs = [
        Database(name="a", hostname="a.example.com", group=""),
        Database(name="longer-name", hostname="b.example.com", group="grp"),
    ]
    text = render_database_list(dbs)
    lines = text.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("NAME")
    group_col = lines[0].index("GROUP")
    url_col = lines[0].index("URL")
    assert lines[1][group_col] == "-"
    assert lines[2][group_col:].startswith("grp")
    assert lines[1][url_col:].startswith("libsql://a.example.com")
    assert lines[2][url_col:].startswith("libsql://b.example.com")
    assert "Press" not in text


def test_render_with_more_appends_hint():
    text = render_database_list([Database(name="a", hostname="h")], has_more=True)
    assert text.endswith("\nPress 'n' or Enter for next page (q to quit)")


def _fetcher(pages, calls):
    def fetch(page_size, cursor):
        calls.append((page_size, cursor))
        return pages[cursor]

    return fetch


def test_iter_database_pages_follows_cursor():
    a, b, c = Database(name="a"), Database(name="b"), Database(name="c")
    pages = {None: ([a, b], "next"), "next": ([c], None)}
    calls = []
    result = list(iter_database_pages(_fetcher(pages, calls), 2))
    assert result == [[a, b], [c]]
    assert calls == [(2, None), (2, "next")]


def test_iter_database_pages_starting_cursor():
    c = Database(name="c")
    calls = []
    result = list(iter_database_pages(_fetcher({"next": ([c], None)}, calls), 5, "next"))
    assert result == [[c]]
    assert calls == [(5, "next")]


def test_collect_all_databases_uses_large_pages():
    a, b = Database(name="a"), Database(name="b")
    calls = []
    result = collect_all_databases(_fetcher({None: ([a], "x"), "x": ([b], None)}, calls))
    assert result == [a, b]
    assert [size for size, _ in calls] == [1000, 1000]


def test_collect_propagates_errors():
    def failing(page_size, cursor):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        collect_all_databases(failing)


@pytest.mark.parametrize("n", [0, 1, 16, 64])
def test_rand_string_length_and_alphabet(n):
    value = rand_string(n)
    assert len(value) == n
    assert all(ch.isascii() and ch.isalnum() for ch in value)