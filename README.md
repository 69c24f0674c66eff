# simplebank

A small bank ledger kept in an SQLite database. It holds accounts, entries and
transfers. Each entry is a signed change to one account. Each transfer moves
money between two accounts.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using it

```python
from simplebank.store import open_store

with open_store("bank.db") as store:  # ":memory:" works too
    alice = store.create_account("alice", 500, "USD")
    bob = store.create_account("bob", 100, "EUR")

    result = store.transfer_tx(alice.id, bob.id, 50)
    print(result.from_account.balance)  # 450
    print(result.to_account.balance)    # 150
    print(result.from_entry.amount, result.to_entry.amount)  # -50 50
```

`open_store(path)` opens the database, creates the tables if they are missing
and returns a `Store`. A `Store` can be used as a context manager, or closed
with `close()`. It may be shared between threads.

`transfer_tx(from_account_id, to_account_id, amount)` runs in one database
transaction and returns a `TransferTxResult` with the fields `transfer`,
`from_account`, `to_account`, `from_entry` and `to_entry`. It creates the
transfer record and one entry for each side, then updates both balances, always
in order of account id. Transactions on one store are run one at a time. If any
step fails, the whole transaction is rolled back and the error is raised.

### Queries

Single queries run in autocommit mode. `Store` offers every method of
`simplebank.queries.Queries`:

- `create_account(owner, balance, currency)`, `get_account(account_id)`,
  `get_account_for_update(account_id)`, `update_account(account_id, balance)`,
  `add_account_balance(account_id, amount)`, `delete_account(account_id)`,
  `list_accounts(owner, limit, offset)`
- `create_entry(account_id, amount)`, `get_entry(entry_id)`,
  `list_entries(account_id, limit, offset)`
- `create_transfer(from_account_id, to_account_id, amount)`,
  `get_transfer(transfer_id)`,
  `list_transfers(from_account_id, to_account_id, limit, offset)`

Records come back as the frozen dataclasses `Account`, `Entry` and `Transfer`
from `simplebank.models`. Lists come back ordered by id; `list_transfers`
returns transfers sent from `from_account_id` or received by `to_account_id`.
A negative `limit` or `offset` raises `ValueError`. Getting, updating or adding
to a record that does not exist raises `simplebank.models.RecordNotFoundError`;
deleting a missing account is not an error.

You can also use `Queries` on your own `sqlite3` connection. First call
`create_schema(connection)` to create the tables. `Queries` leaves transaction
control to you.

### Helpers

- `simplebank.currency.is_supported_currency(code)` returns true for `"USD"`,
  `"EUR"` and `"CAD"`. The queries do not check currencies themselves.
- `simplebank.random_data` makes random test data: `random_int(min_value,
  max_value)` (inclusive; an empty range raises `ValueError`),
  `random_string(n)`, `random_owner()`, `random_money()` (0 to 1000),
  `random_currency()` and `random_email()` (addresses at example.com).

## What it does not do

simplebank is a library only. It has no command-line program and no HTTP
server or API; to offer accounts and transfers over a network you write that
layer yourself on top of `Store`. Its only storage is SQLite.