"""Binary snapshots of account state and reserves."""

from __future__ import annotations

import logging
import os
import struct
from dataclasses import dataclass
from pathlib import Path

from .account import ACCOUNT_SIZE, Account
from .accounts import AccountStore
from .params import PUBKEY_SIZE

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 2

_HEADER_V1 = struct.Struct("<IQQ")
_RESERVES = struct.Struct("<QQQ")
HEADER_SIZE_V1 = _HEADER_V1.size
HEADER_SIZE_V2 = HEADER_SIZE_V1 + _RESERVES.size
RECORD_SIZE = PUBKEY_SIZE + ACCOUNT_SIZE


class SnapshotError(Exception):
    """A snapshot file could not be read or is malformed."""


@dataclass
class SnapshotData:
    """Everything restored from a snapshot."""

    store: AccountStore
    total_written: int
    fee_pool: int = 0
    bridge_reserve: int = 0
    protocol_reserve: int = 0


def save_snapshot(
    store: AccountStore,
    total_written: int,
    fee_pool: int,
    bridge_reserve: int,
    protocol_reserve: int,
    path: str | os.PathLike[str],
) -> None:
    """Write a v2 snapshot atomically (temporary file, then rename)."""
    path = Path(path)
    tmp_path = path.with_suffix(".tmp")
    accounts = store.iter_accounts()

    with open(tmp_path, "wb") as file:
        file.write(_HEADER_V1.pack(SNAPSHOT_VERSION, len(accounts), total_written))
        file.write(_RESERVES.pack(fee_pool, bridge_reserve, protocol_reserve))
        for key, account in accounts:
            file.write(key)
            file.write(account.to_bytes())
        file.flush()
        os.fsync(file.fileno())

    os.replace(tmp_path, path)
    logger.info(
        "Snapshot saved (v2): accounts=%d total_written=%d fee_pool=%d "
        "bridge_reserve=%d protocol_reserve=%d path=%s",
        len(accounts),
        total_written,
        fee_pool,
        bridge_reserve,
        protocol_reserve,
        path,
    )


def load_snapshot(path: str | os.PathLike[str]) -> SnapshotData:
    """Read a v1 or v2 snapshot; raise SnapshotError on any problem."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SnapshotError(f"Failed to read snapshot {path}: {exc}") from exc

    if len(data) < HEADER_SIZE_V1:
        raise SnapshotError("Snapshot file too small for header")

    version, count, total_written = _HEADER_V1.unpack_from(data)

    if version == 1:
        logger.info("Loading v1 snapshot (reserves default to 0)")
        header_size = HEADER_SIZE_V1
        fee_pool = bridge_reserve = protocol_reserve = 0
    elif version == 2:
        if len(data) < HEADER_SIZE_V2:
            raise SnapshotError("Snapshot v2 file too small for header")
        header_size = HEADER_SIZE_V2
        fee_pool, bridge_reserve, protocol_reserve = _RESERVES.unpack_from(
            data, HEADER_SIZE_V1
        )
    else:
        raise SnapshotError(f"Unsupported snapshot version: {version}")

    expected_size = header_size + count * RECORD_SIZE
    if len(data) < expected_size:
        raise SnapshotError(
            f"Snapshot truncated: expected {expected_size} bytes, got {len(data)}"
        )

    store = AccountStore()
    for offset in range(header_size, expected_size, RECORD_SIZE):
        key = data[offset : offset + PUBKEY_SIZE]
        record = data[offset + PUBKEY_SIZE : offset + RECORD_SIZE]
        store.set(key, Account.from_bytes(record))

    logger.info(
        "Snapshot loaded: version=%d accounts=%d total_written=%d fee_pool=%d "
        "bridge_reserve=%d protocol_reserve=%d path=%s",
        version,
        count,
        total_written,
        fee_pool,
        bridge_reserve,
        protocol_reserve,
        path,
    )

    return SnapshotData(store, total_written, fee_pool, bridge_reserve, protocol_reserve)