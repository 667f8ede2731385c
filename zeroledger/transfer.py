"""The transfer record and its byte encodings."""

from __future__ import annotations

import struct
from collections.abc import Callable
from dataclasses import dataclass

from .params import PUBKEY_SIZE, SIGNATURE_SIZE, U32_MAX

WIRE_SIZE = 100
"""Size of a transfer on the wire (signature truncated to 28 bytes)."""

STORAGE_SIZE = 136
"""Size of a transfer in storage (full 64-byte signature)."""

SIGNING_SIZE = 72

_WIRE_SIGNATURE_SIZE = 28

_SIGNING = struct.Struct("<32s32sII")
_STORAGE = struct.Struct("<32s32sII64s")
_WIRE = struct.Struct("<32s32sII28s")


@dataclass
class Transfer:
    """A single transfer of units from one account to another."""

    sender: bytes
    recipient: bytes
    amount: int
    nonce: int
    signature: bytes = bytes(SIGNATURE_SIZE)

    def __post_init__(self) -> None:
        self.sender = bytes(self.sender)
        self.recipient = bytes(self.recipient)
        self.signature = bytes(self.signature)
        for name, value, size in (
            ("sender", self.sender, PUBKEY_SIZE),
            ("recipient", self.recipient, PUBKEY_SIZE),
            ("signature", self.signature, SIGNATURE_SIZE),
        ):
            if len(value) != size:
                raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
        for name, value in (("amount", self.amount), ("nonce", self.nonce)):
            if not 0 <= value <= U32_MAX:
                raise ValueError(f"{name} out of range: {value}")

    def signing_bytes(self) -> bytes:
        """The 72 signed bytes: sender, recipient, amount and nonce."""
        return _SIGNING.pack(self.sender, self.recipient, self.amount, self.nonce)

    def to_storage_bytes(self) -> bytes:
        """Encode to the 136-byte storage format."""
        return _STORAGE.pack(
            self.sender, self.recipient, self.amount, self.nonce, self.signature
        )

    @classmethod
    def from_storage_bytes(cls, data: bytes) -> Transfer:
        """Decode from the 136-byte storage format."""
        if len(data) != STORAGE_SIZE:
            raise ValueError(f"storage record must be {STORAGE_SIZE} bytes, got {len(data)}")
        sender, recipient, amount, nonce, signature = _STORAGE.unpack(data)
        return cls(sender, recipient, amount, nonce, signature)

    def to_wire_bytes(self) -> bytes:
        """Encode to the 100-byte wire format with a truncated signature."""
        return _WIRE.pack(
            self.sender,
            self.recipient,
            self.amount,
            self.nonce,
            self.signature[:_WIRE_SIGNATURE_SIZE],
        )

    def hash_with(self, hasher: Callable[[bytes], bytes]) -> bytes:
        """Hash the storage encoding with the given hash function."""
        return hasher(self.to_storage_bytes())