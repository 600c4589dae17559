# bbapi

Building blocks for a read-only HTTP API over governance and pool data
stored in PostgreSQL. The package decides *what* to query and *how* to
shape the answer. It has no dependencies outside the standard library.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## What is inside

- `bbapi.query`: `Builder`, `Filters` and `Filter` assemble parameterised
  SQL. A query template carries the markers `$filters$`, `$offset$` and
  `$limit$`. `Filters.add(key, value, where="=")` adds a `key = $n`
  condition (a list or tuple value becomes `key = ANY($n)`), and
  `Filters.add_raw(cond)` adds a condition verbatim. `Builder.with_pagination(offset, limit)`
  returns a paginating copy that shares the filters, and `Builder.run(query)`
  returns the filled-in query text with its parameter list.
- `bbapi.response`: `ok`, `error`, `bad_request` and `not_found` each
  return a `(http_status, body)` pair, where the body is the JSON envelope
  `{"status": ..., "data": ...}` with an optional `meta`. `not_found()` is
  sent with HTTP 200 and `"status": 404` in the body. `Meta` is a `dict`
  whose `set()` returns itself for chaining.
- `bbapi.config`: `Settings` with its sections `DatabaseConfig`,
  `MetricsConfig`, `APIConfig` and `AddressesConfig`, carrying the default
  values (database on `localhost:5432`, API port `3001`, metrics port
  `9909`). `load_settings(data)` reads a nested mapping with the sections
  `db`, `metrics`, `api` and `addresses`, matching keys case-insensitively
  and raising `ValueError` on values of the wrong kind.
  `build_connection_string(database)` returns the explicit
  `connection_string`, or a `host=... port=... sslmode=... dbname=... user=... password=...`
  string built from the parts.
- `bbapi.governance_types` and `bbapi.smartalpha_types`: dataclass records
  (proposals, votes, voters, treasury transactions, epochs, chart points,
  transactions, ...) with `to_dict()` methods that produce the API's JSON
  field names. Decimals are written as plain decimal strings and
  timestamps as RFC 3339 text.
- `bbapi.proposals`: proposal timing (`time_left`), id parsing
  (`parse_proposal_id`), voting outcome (`is_failed_proposal`,
  `abrogation_proposal_passed`) and the reconstruction of a proposal's
  state history. `build_history(proposal, events, abrogation, now)` lists
  the states in order; `history(...)` returns them newest first with end
  timestamps filled in. The events and the abrogation tally
  `(for_votes, bond_staked)` are passed in by the caller.
- `bbapi.smartalpha`: transaction-type checks (`is_tx_type`,
  `is_reward_pool_tx_type`), chart windows (`validate_window`,
  `total_points`, `performance_window`), duration parsing
  (`parse_duration`, e.g. `"1.5h"` or `"-2h45m"`) and amount conversion
  (`tx_token_symbol`, `amount_in_asset`). `CHART_NR_OF_POINTS` is 30.
- `bbapi.errorline`: `extract_error_line(source, position)` returns an
  `ErrorLineExtract` with the 1-based line and column of a position and the
  text of that line; it raises `ValueError` when the position lies past the
  end of the source.
- `bbapi.notification`: `Notification` and `parse_metadata()`, which
  decodes a JSON object (from bytes or text) and raises `ValueError` for
  any other JSON value except `null`.

## Example

```python
from bbapi.query import Builder
from bbapi.response import Meta, ok

builder = Builder()
builder.filters.add("user_address", "0xdeadbeef")
builder.filters.add("protocol_id", ["compound/v2", "aave/v2"])

sql, params = builder.with_pagination(0, 10).run("""
    select * from transaction_history
    $filters$
    order by block_timestamp desc
    $offset$ $limit$
""")
# sql contains "user_address = $1", "protocol_id = ANY($2)",
# "offset $3" and "limit $4"; params == ["0xdeadbeef", [...], 0, 10]

status, body = ok([], Meta().set("count", 0))
# status == 200
# body == {"status": 200, "data": [], "meta": {"count": 0}}
```

## What it does not do

There is no web server, no route table, no command-line program and no
database connection here. The package does not run queries: callers
execute the SQL that `Builder.run()` produces with their own PostgreSQL
driver, fetch proposal events themselves before calling
`bbapi.proposals.history()`, and send the `(status, body)` pairs from
`bbapi.response` through their own HTTP framework. Settings are read from
a mapping you supply; no configuration file, environment variable or
command-line flag is read.

## Tests

```
pytest
```