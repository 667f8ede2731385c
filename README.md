# zeroledger

Building blocks for a small account-based payment ledger. Balances are
integer units (100 units = 1 Z). Public keys and hashes are 32 bytes, and
signatures are 64-byte Ed25519 signatures.

## Modules

- `zeroledger.params`: network parameters, such as `TRANSFER_FEE`,
  `MAX_TRANSFER_AMOUNT`, `ACCOUNT_CREATION_FEE`, `MIN_VALIDATOR_STAKE`,
  `UNBONDING_PERIOD_SECS` and the fee-share basis points. It also defines
  type aliases for keys, hashes and amounts.
- `zeroledger.account`: `Account` and `AccountFlags`.
  - `Account` is a 48-byte little-endian record holding balance, nonce, head
    hash and flags.
  - `to_bytes()` and `from_bytes()` convert it to and from those bytes.
  - `is_frozen()` and `is_validator()` read the flags.
- `zeroledger.transfer`: `Transfer`, made of sender, recipient, amount, nonce
  and signature.
  - `signing_bytes()` gives the 72-byte message that is signed.
  - `to_storage_bytes()` and `from_storage_bytes()` use the 136-byte storage
    layout.
  - `to_wire_bytes()` gives the 100-byte wire layout, where the signature is
    cut to 28 bytes.
  - `hash_with(hasher)` hashes the storage encoding with a function you pass in.
- `zeroledger.block`: `BlockRef` and `Event`.
  - `BlockRef` is orderable and prints as `B<round>(<author>,<digest prefix>)`.
  - `Event.reference()` returns the `BlockRef` that points at an event.
- `zeroledger.config`: `NodeConfig` and `GenesisConfig`, with
  `GenesisValidator` and `GenesisAccount`.
  - `NodeConfig.from_toml()` and `GenesisConfig.from_toml()` parse TOML text.
    Missing optional fields get their defaults, and bad input raises
    `ValueError`.
  - `GenesisConfig.to_toml()` writes a genesis config back to TOML.
- `zeroledger.accounts`: `AccountStore`, the in-memory account table.
  - Reads: `get`, `get_or_default`, `balance`, `nonce`, `total_supply`,
    `iter_accounts` and `len()`.
  - Writes: `set`, `debit`, `credit`, `mint` and `burn`.
  - `debit` takes the amount plus the fee, increments the nonce and moves the
    head hash. If the balance is too small it raises `ValueError`.
  - `credit` and `mint` stop at the 32-bit maximum instead of overflowing.
  - `burn` returns `False` if the balance is too small.
- `zeroledger.ring_buffer`: `TransferLog`, a ring buffer of transfers and
  their hashes with a fixed capacity.
  - `append` returns a global sequence number.
  - Lookups: `get_by_seq`, `get_hash` and `find_by_hash`. Each returns `None`
    once an entry has been overwritten.
  - `recent` and `recent_with_seq` list the newest entries first.
- `zeroledger.staking`: `StakeStore`, which tracks validator stakes.
  - `begin_unstake` moves stake into a 7-day unbonding queue. If the validator
    has too little stake it raises `InsufficientStake`.
  - `complete_unbonding` releases entries whose period is over.
  - `slash` cuts active and unbonding stake by a number of basis points.
  - `active_validators` lists validators that meet the minimum stake, largest
    first.
- `zeroledger.snapshot`: `save_snapshot` and `load_snapshot`.
  - `save_snapshot` writes version 2 of the binary format atomically: it
    writes a temporary file, then renames it.
  - `load_snapshot` reads versions 1 and 2 and returns `SnapshotData`. A
    version 1 file gives zero reserves.
  - Problems raise `SnapshotError`.
- `zeroledger.bridge`: bridge operations and their attestations.
  - `MintOp` and `BurnOp`, each with a canonical `signing_bytes()`.
  - `BridgeAttestation`, which collects signatures and rejects a second
    signature from the same key.
  - `TrinityValidatorSet`, three unique Ed25519 keys. `verify_attestation`
    requires 2 of the 3 to sign, and checks every signature it is given.
  - Errors are subclasses of `BridgeError`: `NotTrinityValidator`,
    `DuplicateSignature`, `InsufficientSignatures` and
    `InvalidAttestationSignature`.
- `zeroledger.fees`: `split_fees(total, validators)` returns a
  `FeeDistribution`.
  - Fees are split 70/15/15 between validators, the bridge reserve and the
    protocol reserve.
  - The validator share is divided in proportion to stake.
  - Rounding remainders go to the last validator and to the protocol reserve.

## Example

```python
import hashlib

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from zeroledger.accounts import AccountStore
from zeroledger.bridge import BridgeAttestation, MintOp, TrinityValidatorSet
from zeroledger.ring_buffer import TransferLog
from zeroledger.transfer import Transfer

sender, receiver = bytes([1]) * 32, bytes([2]) * 32

store = AccountStore()
store.mint(sender, 1000)
store.debit(sender, 100, 1, bytes(32))
store.credit(receiver, 100, bytes(32))
assert store.balance(sender) == 899

tx = Transfer(sender, receiver, amount=100, nonce=1)
log = TransferLog(capacity=10)
seq = log.append(tx, tx.hash_with(lambda b: hashlib.blake2b(b, digest_size=32).digest()))
assert log.get_by_seq(seq) == tx

signers = [Ed25519PrivateKey.generate() for _ in range(3)]
pubkeys = [s.public_key().public_bytes_raw() for s in signers]
trinity = TrinityValidatorSet(pubkeys)

op = MintOp(recipient=receiver, amount=10_000, source_chain="base", source_tx="0xabc")
attestation = BridgeAttestation(op)
for signer, pubkey in list(zip(signers, pubkeys))[:2]:
    attestation.add_signature(pubkey, signer.sign(op.signing_bytes()))
trinity.verify_attestation(attestation)  # raises BridgeError if not accepted
```

## What this package does not do

- It does not verify the signature on a `Transfer`. `Transfer.signing_bytes()`
  gives the message, and checking it is left to the caller.
- It has no transfer executor. Nothing checks nonces, fees, minimum balances
  or per-account rate limits before a transfer is applied. `AccountStore`,
  `TransferLog`, `StakeStore` and `split_fees` have to be combined by the
  caller.
- It has no node, network server, consensus or command-line program. The
  configuration classes only parse and write TOML.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```