import sqlite3
from concurrent.futures import ThreadPoolExecutor

import pytest

from simplebank.models import RecordNotFoundError
from simplebank.random_data import random_currency, random_money, random_owner
from simplebank.store import Store, TransferTxResult, open_store


@pytest.fixture
def store(tmp_path):
    with open_store(tmp_path / "bank.db") as s:
        yield s


def _random_account(store: Store):
    owner = random_owner()
    balance = random_money()
    currency = random_currency()
    account = store.create_account(owner, balance, currency)
    assert account.owner == owner
    assert account.balance == balance
    assert account.currency == currency
    assert account.id > 0
    return account


def test_transfer_tx(store):
    account1 = _random_account(store)
    account2 = _random_account(store)

    n = 5
    amount = 10

    with ThreadPoolExecutor(max_workers=n) as pool:
        futures = [
            pool.submit(store.transfer_tx, account1.id, account2.id, amount) for _ in range(n)
        ]
        results = [f.result() for f in futures]

    existed = set()
    for result in results:
        assert isinstance(result, TransferTxResult)

        transfer = result.transfer
        assert transfer.from_account_id == account1.id
        assert transfer.to_account_id == account2.id
        assert transfer.amount == amount
        assert transfer.id > 0
        assert store.get_transfer(transfer.id) == transfer

        from_entry = result.from_entry
        assert from_entry.account_id == account1.id
        assert from_entry.amount == -amount
        assert from_entry.id > 0
        assert store.get_entry(from_entry.id) == from_entry

        to_entry = result.to_entry
        assert to_entry.account_id == account2.id
        assert to_entry.amount == amount
        assert to_entry.id > 0
        assert store.get_entry(to_entry.id) == to_entry

        from_account = result.from_account
        assert from_account.id == account1.id
        to_account = result.to_account
        assert to_account.id == account2.id

        diff1 = account1.balance - from_account.balance
        diff2 = to_account.balance - account2.balance
        assert diff1 == diff2
        assert diff1 > 0
        assert diff1 % amount == 0

        k = diff1 // amount
        assert 1 <= k <= n
        assert k not in existed
        existed.add(k)

    updated1 = store.get_account(account1.id)
    updated2 = store.get_account(account2.id)
    assert updated1.balance == account1.balance - n * amount
    assert updated2.balance == account2.balance + n * amount


def test_transfer_tx_deadlock(store):
    account1 = _random_account(store)
    account2 = _random_account(store)

    n = 10
    amount = 10

    pairs = [
        (account2.id, account1.id) if i % 2 == 1 else (account1.id, account2.id)
        for i in range(n)
    ]
    with ThreadPoolExecutor(max_workers=n) as pool:
        futures = [pool.submit(store.transfer_tx, src, dst, amount) for src, dst in pairs]
        results = [f.result() for f in futures]

    assert len(results) == n

    updated1 = store.get_account(account1.id)
    updated2 = store.get_account(account2.id)
    assert updated1.balance == account1.balance
    assert updated2.balance == account2.balance


def test_transfer_tx_orders_accounts_by_id(store):
    account1 = _random_account(store)
    account2 = _random_account(store)

    result = store.transfer_tx(account2.id, account1.id, 7)

    assert result.from_account.id == account2.id
    assert result.to_account.id == account1.id
    assert result.from_account.balance == account2.balance - 7
    assert result.to_account.balance == account1.balance + 7


def test_transfer_tx_rolls_back_on_error(store):
    account = _random_account(store)
    missing_id = account.id + 1000

    with pytest.raises(sqlite3.IntegrityError):
        store.transfer_tx(account.id, missing_id, 10)

    assert store.get_account(account.id).balance == account.balance
    assert store.list_entries(account.id, 10, 0) == []
    assert store.list_transfers(account.id, account.id, 10, 0) == []


def test_store_runs_plain_queries(store):
    account = _random_account(store)
    store.delete_account(account.id)
    with pytest.raises(RecordNotFoundError):
        store.get_account(account.id)


def test_data_persists_across_opens(tmp_path):
    path = tmp_path / "bank.db"
    with open_store(path) as first:
        account = first.create_account("alice", 100, "USD")
    with open_store(path) as second:
        assert second.get_account(account.id) == account


def test_closed_store_rejects_queries(tmp_path):
    store = open_store(tmp_path / "bank.db")
    store.close()
    with pytest.raises(sqlite3.ProgrammingError):
        store.get_account(1)