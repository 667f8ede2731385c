"""Node and genesis configuration read from TOML."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w

from .params import U16_MAX, U32_MAX, U64_MAX

_MISSING: Any = object()


def _int(data: dict, key: str, limit: int, default: Any = _MISSING) -> int:
    if key not in data:
        if default is _MISSING:
            raise ValueError(f"missing field `{key}`")
        return default
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field `{key}` must be an integer")
    if not 0 <= value <= limit:
        raise ValueError(f"field `{key}` out of range: {value}")
    return value


def _str(data: dict, key: str, default: Any = _MISSING) -> str:
    if key not in data:
        if default is _MISSING:
            raise ValueError(f"missing field `{key}`")
        return default
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _optional_str(data: dict, key: str) -> str | None:
    return _str(data, key, None)


def _list(data: dict, key: str, default: Any = _MISSING) -> list:
    if key not in data:
        if default is _MISSING:
            raise ValueError(f"missing field `{key}`")
        return list(default)
    value = data[key]
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be an array")
    return value


def _parse(text: str) -> dict:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"invalid TOML: {exc}") from exc


@dataclass
class NodeConfig:
    """Configuration of one validator node."""

    validator_index: int
    key_file: str
    listen: str
    peers: list[str] = field(default_factory=list)
    log_capacity: int = 1_000_000
    max_batch_size: int = 1000
    event_interval_ms: int = 100
    data_dir: str = "data"
    tls_cert: str | None = None
    tls_key: str | None = None
    tls_ca: str | None = None
    faucet_key: str | None = None
    faucet_listen: str | None = None
    faucet_amount: int = 2_500
    faucet_cooldown_secs: int = 3600
    bridge_listen: str | None = None

    @classmethod
    def from_toml(cls, text: str) -> NodeConfig:
        """Parse a node config; raises ValueError on bad input."""
        data = _parse(text)
        peers = _list(data, "peers", [])
        if not all(isinstance(p, str) for p in peers):
            raise ValueError("field `peers` must be an array of strings")
        return cls(
            validator_index=_int(data, "validator_index", U16_MAX),
            key_file=_str(data, "key_file"),
            listen=_str(data, "listen"),
            peers=list(peers),
            log_capacity=_int(data, "log_capacity", U64_MAX, 1_000_000),
            max_batch_size=_int(data, "max_batch_size", U64_MAX, 1000),
            event_interval_ms=_int(data, "event_interval_ms", U64_MAX, 100),
            data_dir=_str(data, "data_dir", "data"),
            tls_cert=_optional_str(data, "tls_cert"),
            tls_key=_optional_str(data, "tls_key"),
            tls_ca=_optional_str(data, "tls_ca"),
            faucet_key=_optional_str(data, "faucet_key"),
            faucet_listen=_optional_str(data, "faucet_listen"),
            faucet_amount=_int(data, "faucet_amount", U32_MAX, 2_500),
            faucet_cooldown_secs=_int(data, "faucet_cooldown_secs", U64_MAX, 3600),
            bridge_listen=_optional_str(data, "bridge_listen"),
        )


@dataclass
class GenesisValidator:
    """A validator in the genesis file: hex public key and initial stake."""

    public_key: str
    stake: int

    @classmethod
    def _from_dict(cls, data: Any) -> GenesisValidator:
        if not isinstance(data, dict):
            raise ValueError("validator entry must be a table")
        return cls(_str(data, "public_key"), _int(data, "stake", U64_MAX))


@dataclass
class GenesisAccount:
    """A pre-funded account in the genesis file."""

    public_key: str
    balance: int

    @classmethod
    def _from_dict(cls, data: Any) -> GenesisAccount:
        if not isinstance(data, dict):
            raise ValueError("account entry must be a table")
        return cls(_str(data, "public_key"), _int(data, "balance", U32_MAX))


@dataclass
class GenesisConfig:
    """The initial state of a network."""

    network: str
    validators: list[GenesisValidator]
    accounts: list[GenesisAccount] = field(default_factory=list)

    @classmethod
    def from_toml(cls, text: str) -> GenesisConfig:
        """Parse a genesis config; raises ValueError on bad input."""
        data = _parse(text)
        return cls(
            network=_str(data, "network"),
            validators=[GenesisValidator._from_dict(v) for v in _list(data, "validators")],
            accounts=[GenesisAccount._from_dict(a) for a in _list(data, "accounts", [])],
        )

    def to_toml(self) -> str:
        """Serialize to a TOML document."""
        return tomli_w.dumps(
            {
                "network": self.network,
                "validators": [
                    {"public_key": v.public_key, "stake": v.stake} for v in self.validators
                ],
                "accounts": [
                    {"public_key": a.public_key, "balance": a.balance} for a in self.accounts
                ],
            }
        )