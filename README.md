# tursoctl

A library of building blocks for a command-line tool that works with a
Turso account. It validates flag values, asks questions at the terminal,
lays out organizations, invoices and databases as tables, formats plan
usage against quotas, and checks for and installs new releases.

It depends on nothing outside the standard library.

## Installation

```
pip install .
```

To also install what the tests need:

```
pip install ".[test]"
```

## Modules

### `tursoctl.flags`

Validation and completion for flag values. Each validator returns nothing
and raises `ValueError` on a bad value:

- `validate_expiration`: empty, `never`, `none`, `default`, or a whole
  number of days of at least one, such as `7d`.
- `validate_invoice_type`: `issued`, `all` or `upcoming`.
- `validate_timeline`: empty, `monthly` or `yearly`.
- `validate_csv_separator` / `csv_separator`: exactly one single-byte
  character.

`parse_fine_grained_permissions` turns values such as `all:data_read` or
`comments:data_insert,data_update` into `FineGrainedPermissions` objects;
`to_dict()` gives their wire form (`{"t": ..., "a": ...}`).
`add_global_flags` adds hidden `--debug` and `--reset-config` options to an
`argparse` parser. The `*_completion` functions return the suggestions for
each flag.

```python
from tursoctl.flags import parse_fine_grained_permissions

perms = parse_fine_grained_permissions(["all:data_read"])
perms[0].to_dict()   # {'t': None, 'a': ['data_read']}
```

### `tursoctl.colors`

`emph` and `warn` join their arguments into text, coloured bold blue or
bold yellow when standard output is a terminal that accepts colour (not on
Windows, not with `NO_COLOR` set, not with `TERM=dumb`).

### `tursoctl.prompt`

- `is_interactive()`: whether stdin and stdout are both terminals.
- `Spinner` / `spinner(text)`: an animated indicator drawn on a background
  thread, or printed once when not interactive. `Spinner` is also a context
  manager.
- `confirm(message)`: asks a yes/no question up to three times and raises
  `RuntimeError` if no answer is given.
- `text_input` and `text_area`: read one line (at most 80 characters) or
  several lines until end of input.

### `tursoctl.models`

Dataclasses `Organization`, `Invite`, `Invoice`, `Database` and `Instance`,
most with a `from_dict` constructor for API responses. Helpers build
database and instance URLs (`database_url`, `instance_url`,
`database_http_url`), filter instances by region, split off the primary
instance, and `render_table` / `print_table` lay out a borderless,
left-aligned table with upper-cased headers.

### `tursoctl.listing`

`invoice_table` and `invoice_links` give headers and rows for invoices.
`render_database_list` lays out databases as NAME / GROUP / URL columns.
`iter_database_pages` follows a page cursor through a caller-supplied fetch
function, and `collect_all_databases` gathers every page.

### `tursoctl.orgs`

Organization lookups (`find_org_with_slug`, `is_current_org`) and the rows
shown for organizations, members, invites, JWKS sources and audit logs,
including a verbose audit-log description.

### `tursoctl.usage`

Plan usage formatting:

```python
from tursoctl.usage import human_bytes, to_millions, percentage

human_bytes(1500)         # '1.5 kB'
to_millions(2_500_000)    # '2.5M'
percentage(50, 200)       # '25%'
```

`usage_table` compares usage with a plan's quotas (a quota of zero means
unlimited) and adds an overage column when overages are on.
`first_day_of_next_month` gives the date quotas reset, `billing_url` the
billing page for an organization, and `wait_for_payment_method` polls a
check once a second, giving up after more than five errors in a row.

### `tursoctl.update`

`semver_compare` compares `x.y.z` versions, falling back to string order
for anything else. `fetch_latest_version` asks the API for the latest
release; `run_update` installs it by running Homebrew when the program is
installed there, or the install script otherwise.

## What this package does not do

- It installs no command. There is no `tursoctl` program to run; the
  modules are meant to be called from your own code.
- It does not read or write a settings file, so there is no stored login
  session, selected organization or local cache.
- It has no API client for organizations, databases, plans or invoices.
  The functions here work on data you have already fetched.