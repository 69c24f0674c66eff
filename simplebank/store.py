"""A store that runs the bank's queries and its multi-step transactions."""

import sqlite3
import threading
from dataclasses import dataclass
from os import PathLike
from typing import Callable, TypeVar

from simplebank.models import Account, Entry, Transfer
from simplebank.queries import Queries, create_schema

T = TypeVar("T")


@dataclass(frozen=True)
class TransferTxResult:
    """Everything a money transfer created or changed."""

    transfer: Transfer
    from_account: Account
    to_account: Account
    from_entry: Entry
    to_entry: Entry


class Store(Queries):
    """Runs single queries and whole transactions on one database connection.

    Single queries run in autocommit mode. Transactions are serialised by a
    lock, so concurrent callers in different threads never interleave.
    """

    def __init__(self, connection: sqlite3.Connection):
        super().__init__(connection)
        self._lock = threading.RLock()

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        self.connection.close()

    def _exec_tx(self, fn: Callable[[Queries], T]) -> T:
        """Run ``fn`` inside one transaction, committing on success and rolling back on error."""
        with self._lock:
            self.connection.execute("BEGIN IMMEDIATE")
            try:
                result = fn(Queries(self.connection))
            except Exception as err:
                try:
                    self.connection.execute("ROLLBACK")
                except sqlite3.Error as rb_err:
                    raise sqlite3.Error(f"tx err: {err}, rb err: {rb_err}") from err
                raise
            self.connection.execute("COMMIT")
            return result

    def transfer_tx(self, from_account_id: int, to_account_id: int, amount: int) -> TransferTxResult:
        """Move ``amount`` from one account to another in a single transaction.

        Creates the transfer record and one entry for each account, then
        updates both balances. Balances are updated in ascending account id
        order so that opposite transfers never wait on each other.
        """

        def run(q: Queries) -> TransferTxResult:
            transfer = q.create_transfer(from_account_id, to_account_id, amount)
            from_entry = q.create_entry(from_account_id, -amount)
            to_entry = q.create_entry(to_account_id, amount)

            if from_account_id < to_account_id:
                from_account, to_account = _add_money(
                    q, from_account_id, -amount, to_account_id, amount
                )
            else:
                to_account, from_account = _add_money(
                    q, to_account_id, amount, from_account_id, -amount
                )

            return TransferTxResult(
                transfer=transfer,
                from_account=from_account,
                to_account=to_account,
                from_entry=from_entry,
                to_entry=to_entry,
            )

        return self._exec_tx(run)


def _add_money(
    q: Queries, account_id1: int, amount1: int, account_id2: int, amount2: int
) -> tuple[Account, Account]:
    account1 = q.add_account_balance(account_id1, amount1)
    account2 = q.add_account_balance(account_id2, amount2)
    return account1, account2


def open_store(path: "str | PathLike[str]") -> Store:
    """Open the database at ``path``, create the bank tables if needed and return a store."""
    connection = sqlite3.connect(path, isolation_level=None, check_same_thread=False, timeout=30)
    try:
        create_schema(connection)
    except Exception:
        connection.close()
        raise
    return Store(connection)