"""Per-account ledger state."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from .params import HASH_SIZE, U32_MAX, U64_MAX

ACCOUNT_SIZE = 48

_LAYOUT = struct.Struct("<II32sQ")


class AccountFlags(enum.IntFlag):
    """Bit flags stored in an account."""

    FROZEN = 1 << 0
    """Account cannot send, but can still receive."""
    VALIDATOR = 1 << 1
    """Account is a registered validator."""


@dataclass
class Account:
    """Account state: balance, nonce, head of the account chain and flags."""

    balance: int = 0
    nonce: int = 0
    head: bytes = field(default=bytes(HASH_SIZE))
    flags: int = 0

    def __post_init__(self) -> None:
        self.head = bytes(self.head)
        if len(self.head) != HASH_SIZE:
            raise ValueError(f"head must be {HASH_SIZE} bytes, got {len(self.head)}")
        for name, value, limit in (
            ("balance", self.balance, U32_MAX),
            ("nonce", self.nonce, U32_MAX),
            ("flags", int(self.flags), U64_MAX),
        ):
            if not 0 <= value <= limit:
                raise ValueError(f"{name} out of range: {value}")

    @classmethod
    def empty(cls) -> Account:
        """A new account with zero balance, zero nonce and no history."""
        return cls()

    def is_frozen(self) -> bool:
        return bool(self.flags & AccountFlags.FROZEN)

    def is_validator(self) -> bool:
        return bool(self.flags & AccountFlags.VALIDATOR)

    def to_bytes(self) -> bytes:
        """Serialize to the 48-byte little-endian layout."""
        return _LAYOUT.pack(self.balance, self.nonce, self.head, int(self.flags))

    @classmethod
    def from_bytes(cls, data: bytes) -> Account:
        """Deserialize from the 48-byte layout."""
        if len(data) != ACCOUNT_SIZE:
            raise ValueError(f"account record must be {ACCOUNT_SIZE} bytes, got {len(data)}")
        balance, nonce, head, flags = _LAYOUT.unpack(data)
        return cls(balance=balance, nonce=nonce, head=head, flags=flags)