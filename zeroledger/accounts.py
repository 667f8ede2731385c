"""In-memory account state table."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator

from .account import Account
from .params import HASH_SIZE, PUBKEY_SIZE, U32_MAX


def _key(key: bytes) -> bytes:
    key = bytes(key)
    if len(key) != PUBKEY_SIZE:
        raise ValueError(f"public key must be {PUBKEY_SIZE} bytes, got {len(key)}")
    return key


def _copy(account: Account) -> Account:
    return dataclasses.replace(account)


class AccountStore:
    """Maps public keys to account state: the whole state of the network."""

    def __init__(self) -> None:
        self._accounts: dict[bytes, Account] = {}

    def _entry(self, key: bytes) -> Account:
        return self._accounts.setdefault(_key(key), Account.empty())

    def get(self, key: bytes) -> Account | None:
        """A copy of the account, or None if it does not exist."""
        account = self._accounts.get(bytes(key))
        return None if account is None else _copy(account)

    def balance(self, key: bytes) -> int:
        """Balance of the account; 0 for unknown accounts."""
        account = self._accounts.get(bytes(key))
        return 0 if account is None else account.balance

    def nonce(self, key: bytes) -> int:
        """Nonce of the account; 0 for unknown accounts."""
        account = self._accounts.get(bytes(key))
        return 0 if account is None else account.nonce

    def set(self, key: bytes, account: Account) -> None:
        """Insert or replace an account."""
        self._accounts[_key(key)] = _copy(account)

    def get_or_default(self, key: bytes) -> Account:
        """A copy of the account, or an empty account for unknown keys."""
        account = self._accounts.get(bytes(key))
        return Account.empty() if account is None else _copy(account)

    def debit(self, key: bytes, amount: int, fee: int, new_head: bytes) -> Account:
        """Take amount plus fee, bump the nonce and move the head.

        The caller checks that the balance suffices; a shortfall raises ValueError.
        """
        total_cost = amount + fee
        if total_cost > U32_MAX:
            raise ValueError("debit: amount + fee overflow")
        new_head = bytes(new_head)
        if len(new_head) != HASH_SIZE:
            raise ValueError(f"head must be {HASH_SIZE} bytes, got {len(new_head)}")
        entry = self._entry(key)
        if entry.balance < total_cost:
            raise ValueError("debit: balance underflow")
        if entry.nonce >= U32_MAX:
            raise ValueError("debit: nonce overflow")
        entry.balance -= total_cost
        entry.nonce += 1
        entry.head = new_head
        return _copy(entry)

    def credit(self, key: bytes, amount: int, new_head: bytes) -> Account:
        """Add amount (saturating) and move the head."""
        new_head = bytes(new_head)
        if len(new_head) != HASH_SIZE:
            raise ValueError(f"head must be {HASH_SIZE} bytes, got {len(new_head)}")
        entry = self._entry(key)
        entry.balance = min(entry.balance + amount, U32_MAX)
        entry.head = new_head
        return _copy(entry)

    def mint(self, key: bytes, amount: int) -> None:
        """Create units in an account (saturating); the head is unchanged."""
        entry = self._entry(key)
        entry.balance = min(entry.balance + amount, U32_MAX)

    def burn(self, key: bytes, amount: int) -> bool:
        """Destroy units if the account holds enough; the nonce is unchanged."""
        entry = self._accounts.get(bytes(key))
        if entry is None or entry.balance < amount:
            return False
        entry.balance -= amount
        return True

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[bytes]:
        return iter(list(self._accounts))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (bytes, bytearray)) and bytes(key) in self._accounts

    def total_supply(self) -> int:
        """Sum of every account balance."""
        return sum(account.balance for account in self._accounts.values())

    def iter_accounts(self) -> list[tuple[bytes, Account]]:
        """All (public key, account copy) pairs."""
        return [(key, _copy(account)) for key, account in self._accounts.items()]