"""SQL queries over accounts, entries and transfers, backed by sqlite3."""

import sqlite3
from datetime import datetime, timezone
from typing import Callable, Sequence, TypeVar

from simplebank.models import Account, Entry, RecordNotFoundError, Transfer

_SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner TEXT NOT NULL,
    balance INTEGER NOT NULL,
    currency TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS accounts_owner_idx ON accounts (owner);

CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS entries_account_idx ON entries (account_id);

CREATE TABLE IF NOT EXISTS transfers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    from_account_id INTEGER NOT NULL REFERENCES accounts (id),
    to_account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS transfers_from_idx ON transfers (from_account_id);
CREATE INDEX IF NOT EXISTS transfers_to_idx ON transfers (to_account_id);
"""

_ACCOUNT_COLUMNS = "id, owner, balance, currency, created_at"
_ENTRY_COLUMNS = "id, account_id, amount, created_at"
_TRANSFER_COLUMNS = "id, from_account_id, to_account_id, amount, created_at"

T = TypeVar("T")


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the bank tables on ``connection`` if they do not exist yet."""
    connection.execute("PRAGMA foreign_keys = ON")
    connection.executescript(_SCHEMA)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _account(row: Sequence) -> Account:
    id_, owner, balance, currency, created_at = row
    return Account(id_, owner, balance, currency, datetime.fromisoformat(created_at))


def _entry(row: Sequence) -> Entry:
    id_, account_id, amount, created_at = row
    return Entry(id_, account_id, amount, datetime.fromisoformat(created_at))


def _transfer(row: Sequence) -> Transfer:
    id_, from_id, to_id, amount, created_at = row
    return Transfer(id_, from_id, to_id, amount, datetime.fromisoformat(created_at))


def _check_page(limit: int, offset: int) -> None:
    if limit < 0:
        raise ValueError("limit must not be negative")
    if offset < 0:
        raise ValueError("offset must not be negative")


class Queries:
    """Runs the bank's queries on one connection.

    Transaction control is left to the caller.
    """

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection

    def _one(self, sql: str, params: tuple, convert: Callable[[Sequence], T], what: str) -> T:
        row = self.connection.execute(sql, params).fetchone()
        if row is None:
            raise RecordNotFoundError(f"{what} not found")
        return convert(row)

    def _many(self, sql: str, params: tuple, convert: Callable[[Sequence], T]) -> list[T]:
        return [convert(row) for row in self.connection.execute(sql, params)]

    # accounts

    def create_account(self, owner: str, balance: int, currency: str) -> Account:
        """Insert a new account and return it."""
        cursor = self.connection.execute(
            "INSERT INTO accounts (owner, balance, currency, created_at) VALUES (?, ?, ?, ?)",
            (owner, balance, currency, _now()),
        )
        return self.get_account(cursor.lastrowid)

    def get_account(self, account_id: int) -> Account:
        """Return the account with ``account_id``."""
        return self._one(
            f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE id = ? LIMIT 1",
            (account_id,),
            _account,
            f"account {account_id}",
        )

    def get_account_for_update(self, account_id: int) -> Account:
        """Return the account with ``account_id`` for a subsequent update.

        sqlite locks the whole database for a write transaction, so no row lock is taken.
        """
        return self.get_account(account_id)

    def list_accounts(self, owner: str, limit: int, offset: int) -> list[Account]:
        """Return a page of ``owner``'s accounts ordered by id."""
        _check_page(limit, offset)
        return self._many(
            f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE owner = ? "
            "ORDER BY id LIMIT ? OFFSET ?",
            (owner, limit, offset),
            _account,
        )

    def update_account(self, account_id: int, balance: int) -> Account:
        """Set the balance of an account and return the updated account."""
        cursor = self.connection.execute(
            "UPDATE accounts SET balance = ? WHERE id = ?", (balance, account_id)
        )
        if cursor.rowcount == 0:
            raise RecordNotFoundError(f"account {account_id} not found")
        return self.get_account(account_id)

    def add_account_balance(self, account_id: int, amount: int) -> Account:
        """Add ``amount`` to an account's balance and return the updated account."""
        cursor = self.connection.execute(
            "UPDATE accounts SET balance = balance + ? WHERE id = ?", (amount, account_id)
        )
        if cursor.rowcount == 0:
            raise RecordNotFoundError(f"account {account_id} not found")
        return self.get_account(account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete the account with ``account_id``; deleting a missing account is not an error."""
        self.connection.execute("DELETE FROM accounts WHERE id = ?", (account_id,))

    # entries

    def create_entry(self, account_id: int, amount: int) -> Entry:
        """Insert a new entry for an account and return it."""
        cursor = self.connection.execute(
            "INSERT INTO entries (account_id, amount, created_at) VALUES (?, ?, ?)",
            (account_id, amount, _now()),
        )
        return self.get_entry(cursor.lastrowid)

    def get_entry(self, entry_id: int) -> Entry:
        """Return the entry with ``entry_id``."""
        return self._one(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE id = ? LIMIT 1",
            (entry_id,),
            _entry,
            f"entry {entry_id}",
        )

    def list_entries(self, account_id: int, limit: int, offset: int) -> list[Entry]:
        """Return a page of an account's entries ordered by id."""
        _check_page(limit, offset)
        return self._many(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE account_id = ? "
            "ORDER BY id LIMIT ? OFFSET ?",
            (account_id, limit, offset),
            _entry,
        )

    # transfers

    def create_transfer(self, from_account_id: int, to_account_id: int, amount: int) -> Transfer:
        """Insert a new transfer record and return it."""
        cursor = self.connection.execute(
            "INSERT INTO transfers (from_account_id, to_account_id, amount, created_at) "
            "VALUES (?, ?, ?, ?)",
            (from_account_id, to_account_id, amount, _now()),
        )
        return self.get_transfer(cursor.lastrowid)

    def get_transfer(self, transfer_id: int) -> Transfer:
        """Return the transfer with ``transfer_id``."""
        return self._one(
            f"SELECT {_TRANSFER_COLUMNS} FROM transfers WHERE id = ? LIMIT 1",
            (transfer_id,),
            _transfer,
            f"transfer {transfer_id}",
        )

    def list_transfers(
        self, from_account_id: int, to_account_id: int, limit: int, offset: int
    ) -> list[Transfer]:
        """Return a page of transfers sent from ``from_account_id`` or to ``to_account_id``."""
        _check_page(limit, offset)
        return self._many(
            f"SELECT {_TRANSFER_COLUMNS} FROM transfers "
            "WHERE from_account_id = ? OR to_account_id = ? "
            "ORDER BY id LIMIT ? OFFSET ?",
            (from_account_id, to_account_id, limit, offset),
            _transfer,
        )