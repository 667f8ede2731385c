"""Trinity Validator attestations controlling bridge mints and burns.

Bridge operations are authorised by exactly three Trinity Validators,
separate from the consensus validator set; two of the three must sign.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TypeAlias

from cryptography.exceptions import InvalidSignature as _CryptoInvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from .params import PUBKEY_SIZE, SIGNATURE_SIZE, U64_MAX

TRINITY_SIZE = 3
TRINITY_THRESHOLD = 2

_MINT_PREFIX = b"ZERO-BRIDGE:MINT:"
_BURN_PREFIX = b"ZERO-BRIDGE:BURN:"


def _checked(value: bytes, size: int, name: str) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def _signing_bytes(prefix: bytes, key: bytes, amount: int, chain: str, target: str) -> bytes:
    return b"".join(
        (
            prefix,
            key,
            amount.to_bytes(8, "big"),
            chain.encode(),
            b":",
            target.encode(),
        )
    )


def _check_amount(amount: int) -> None:
    if not 0 <= amount <= U64_MAX:
        raise ValueError(f"amount out of range: {amount}")


@dataclass(frozen=True)
class MintOp:
    """Mint Z (bridge-in) for stablecoins locked on a source chain."""

    recipient: bytes
    amount: int
    source_chain: str
    source_tx: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "recipient", _checked(self.recipient, PUBKEY_SIZE, "recipient"))
        _check_amount(self.amount)

    def signing_bytes(self) -> bytes:
        """Canonical bytes signed by Trinity Validators."""
        return _signing_bytes(
            _MINT_PREFIX, self.recipient, self.amount, self.source_chain, self.source_tx
        )


@dataclass(frozen=True)
class BurnOp:
    """Burn Z (bridge-out) to release stablecoins on a destination chain."""

    sender: bytes
    amount: int
    dest_chain: str
    dest_address: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "sender", _checked(self.sender, PUBKEY_SIZE, "sender"))
        _check_amount(self.amount)

    def signing_bytes(self) -> bytes:
        """Canonical bytes signed by Trinity Validators."""
        return _signing_bytes(
            _BURN_PREFIX, self.sender, self.amount, self.dest_chain, self.dest_address
        )


BridgeOp: TypeAlias = MintOp | BurnOp


class BridgeError(Exception):
    """Base class for bridge attestation errors."""


class NotTrinityValidator(BridgeError):
    def __init__(self, pubkey: bytes) -> None:
        self.pubkey = bytes(pubkey)
        super().__init__(f"not a Trinity Validator: {self.pubkey.hex()}")


class DuplicateSignature(BridgeError):
    def __init__(self) -> None:
        super().__init__("duplicate Trinity Validator signature")


class InsufficientSignatures(BridgeError):
    def __init__(self, have: int, need: int) -> None:
        self.have = have
        self.need = need
        super().__init__(
            f"insufficient Trinity Validator signatures: have {have}, need {need}"
        )


class InvalidAttestationSignature(BridgeError):
    def __init__(self) -> None:
        super().__init__("invalid Trinity Validator signature")


@dataclass
class BridgeAttestation:
    """An operation together with the validator signatures collected for it."""

    operation: BridgeOp
    signatures: list[tuple[bytes, bytes]] = field(default_factory=list)

    def add_signature(self, guardian: bytes, signature: bytes) -> None:
        """Add a validator's signature; raise DuplicateSignature if it already signed."""
        guardian = _checked(guardian, PUBKEY_SIZE, "guardian")
        signature = _checked(signature, SIGNATURE_SIZE, "signature")
        if any(pk == guardian for pk, _ in self.signatures):
            raise DuplicateSignature()
        self.signatures.append((guardian, signature))

    def signature_count(self) -> int:
        """Number of signatures collected."""
        return len(self.signatures)


def _unique_keys(validators: Iterable[bytes]) -> tuple[bytes, ...]:
    keys = tuple(_checked(pk, PUBKEY_SIZE, "validator key") for pk in validators)
    if len(keys) != TRINITY_SIZE or len(set(keys)) != TRINITY_SIZE:
        raise ValueError(f"Trinity Validators must be {TRINITY_SIZE} unique keys")
    return keys


def _verify(pubkey: bytes, signature: bytes, message: bytes) -> bool:
    try:
        Ed25519PublicKey.from_public_bytes(pubkey).verify(signature, message)
    except (ValueError, _CryptoInvalidSignature):
        return False
    return True


class TrinityValidatorSet:
    """The three validators allowed to authorise bridge operations."""

    def __init__(self, validators: Iterable[bytes]) -> None:
        self._validators = _unique_keys(validators)
        self._validator_set = frozenset(self._validators)
        self.threshold = TRINITY_THRESHOLD

    @property
    def validators(self) -> tuple[bytes, ...]:
        """The Trinity Validator public keys, in order."""
        return self._validators

    def is_trinity(self, pubkey: bytes) -> bool:
        """Whether the key belongs to a Trinity Validator."""
        return bytes(pubkey) in self._validator_set

    def verify_attestation(self, attestation: BridgeAttestation) -> None:
        """Check every signature and that enough validators signed; raise BridgeError if not."""
        message = attestation.operation.signing_bytes()
        seen: set[bytes] = set()
        valid_count = 0

        for pubkey, signature in attestation.signatures:
            if not self.is_trinity(pubkey):
                raise NotTrinityValidator(pubkey)
            if pubkey in seen:
                raise DuplicateSignature()
            seen.add(pubkey)
            if not _verify(pubkey, signature, message):
                raise InvalidAttestationSignature()
            valid_count += 1

        if valid_count < self.threshold:
            raise InsufficientSignatures(valid_count, self.threshold)

    def rotate(self, new_validators: Iterable[bytes]) -> None:
        """Replace the set with three new unique validators."""
        self._validators = _unique_keys(new_validators)
        self._validator_set = frozenset(self._validators)