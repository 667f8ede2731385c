import pytest

from zeroledger.account import Account
from zeroledger.accounts import AccountStore
from zeroledger.params import U32_MAX


def test_new_account_has_zero_balance():
    store = AccountStore()
    key = bytes([1]) * 32
    assert store.balance(key) == 0
    assert store.nonce(key) == 0
    assert store.get(key) is None


def test_mint_and_debit():
    store = AccountStore()
    key = bytes([1]) * 32
    store.mint(key, 1000)
    assert store.balance(key) == 1000

    head = bytes([0xAA]) * 32
    updated = store.debit(key, 100, 1, head)
    assert store.balance(key) == 899
    assert store.nonce(key) == 1
    assert updated.head == head
    assert updated.balance == 899


def test_credit():
    store = AccountStore()
    key = bytes([2]) * 32
    head = bytes([0xBB]) * 32
    store.credit(key, 500, head)
    assert store.balance(key) == 500
    assert store.get(key).head == head


def test_burn_insufficient():
    store = AccountStore()
    key = bytes([3]) * 32
    store.mint(key, 100)
    assert store.burn(key, 200) is False
    assert store.balance(key) == 100


def test_burn_sufficient():
    store = AccountStore()
    key = bytes([3]) * 32
    store.mint(key, 200)
    assert store.burn(key, 150) is True
    assert store.balance(key) == 50


def test_burn_unknown_account():
    store = AccountStore()
    assert store.burn(bytes([9]) * 32, 0) is False
    assert len(store) == 0


def test_total_supply():
    store = AccountStore()
    store.mint(bytes([1]) * 32, 100)
    store.mint(bytes([2]) * 32, 200)
    store.mint(bytes([3]) * 32, 300)
    assert store.total_supply() == 600
    assert len(store) == 3


def test_debit_underflow_raises():
    store = AccountStore()
    key = bytes([4]) * 32
    store.mint(key, 10)
    with pytest.raises(ValueError):
        store.debit(key, 10, 1, bytes(32))
    assert store.balance(key) == 10
    assert store.nonce(key) == 0


def test_mint_saturates():
    store = AccountStore()
    key = bytes([5]) * 32
    store.mint(key, U32_MAX)
    store.mint(key, 10)
    assert store.balance(key) == U32_MAX


def test_get_returns_copy():
    store = AccountStore()
    key = bytes([6]) * 32
    store.mint(key, 50)
    copy = store.get(key)
    copy.balance = 1
    assert store.balance(key) == 50


def test_get_or_default_and_set():
    store = AccountStore()
    key = bytes([7]) * 32
    assert store.get_or_default(key) == Account.empty()
    store.set(key, Account(balance=42, nonce=3))
    assert store.get(key) == Account(balance=42, nonce=3)


def test_iter_accounts():
    store = AccountStore()
    store.mint(bytes([1]) * 32, 10)
    store.mint(bytes([2]) * 32, 20)
    pairs = dict(store.iter_accounts())
    assert pairs[bytes([1]) * 32].balance == 10
    assert pairs[bytes([2]) * 32].balance == 20
    assert len(pairs) == 2


def test_bad_key_length_rejected():
    store = AccountStore()
    with pytest.raises(ValueError):
        store.mint(b"short", 1)