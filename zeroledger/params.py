"""Network-wide parameters and the primitive types of the ledger."""

from typing import TypeAlias

PubKey: TypeAlias = bytes
"""32-byte Ed25519 public key."""

Signature: TypeAlias = bytes
"""64-byte Ed25519 signature (full, not truncated)."""

Hash: TypeAlias = bytes
"""32-byte BLAKE3 hash."""

ValidatorIndex: TypeAlias = int
Round: TypeAlias = int
Amount: TypeAlias = int
"""Amount in units. 1 unit = 0.01 Z, 100 units = 1 Z."""
Nonce: TypeAlias = int
Epoch: TypeAlias = int
TimestampMs: TypeAlias = int

PUBKEY_SIZE = 32
HASH_SIZE = 32
SIGNATURE_SIZE = 64

U16_MAX = 2**16 - 1
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

# Network
MAX_VALIDATORS = 1024
MIN_VALIDATOR_STAKE = 1_000_000  # 10,000 Z
UNBONDING_PERIOD_SECS = 7 * 24 * 60 * 60
EPOCH_LENGTH = 10_000

# Units
UNITS_PER_Z = 100

# Transfers
TRANSFER_FEE = 1
MAX_TRANSFER_AMOUNT = 2_500
BRIDGE_OUT_FEE = 50
ACCOUNT_CREATION_FEE = 500
MIN_SEND_BALANCE = 100

# Fee distribution (basis points, summing to 10,000)
FEE_SHARE_VALIDATORS_BPS = 7_000
FEE_SHARE_BRIDGE_OPS_BPS = 1_500
FEE_SHARE_PROTOCOL_BPS = 1_500

# Rate limiting
MAX_TX_PER_ACCOUNT_PER_SEC = 100
MAX_BRIDGE_MINT_PER_HOUR = 100_000_000

# Validator scoring
INITIAL_TRUST_SCORE = 500
MAX_TRUST_SCORE = 1000
MIN_TRUST_SCORE = 100
EJECTION_RATE_BPS = 500
SCORE_REWARD_EVENT = 1
SCORE_PENALTY_MISS = 5
SCORE_PENALTY_LATE = 2
SCORE_PENALTY_EQUIVOCATION = 1000
LATE_EVENT_THRESHOLD_MS = 5_000

# Slashing (basis points)
SLASH_EQUIVOCATION_BPS = 10_000
SLASH_DOWNTIME_BPS = 1_000
SLASH_INVALID_ATTESTATION_BPS = 10_000

# Bridge
BRIDGE_CONFIRMATIONS_BASE = 20
BRIDGE_CONFIRMATIONS_ARBITRUM = 20
BRIDGE_CIRCUIT_BREAKER_BPS = 2000

# Dust
DUST_THRESHOLD = 10
DUST_PRUNE_DAYS = 30