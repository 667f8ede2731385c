import struct

import pytest

from zeroledger.account import Account
from zeroledger.accounts import AccountStore
from zeroledger.snapshot import SnapshotError, load_snapshot, save_snapshot


def _key(byte: int) -> bytes:
    return bytes([byte]) * 32


def test_snapshot_roundtrip_v2(tmp_path):
    store = AccountStore()
    store.mint(_key(1), 1000)
    store.mint(_key(2), 2000)
    store.mint(_key(3), 500)
    path = tmp_path / "snapshot-v2.bin"

    save_snapshot(store, 42, 100, 200, 300, path)

    snap = load_snapshot(path)
    assert snap.total_written == 42
    assert snap.fee_pool == 100
    assert snap.bridge_reserve == 200
    assert snap.protocol_reserve == 300
    assert snap.store.balance(_key(1)) == 1000
    assert snap.store.balance(_key(2)) == 2000
    assert snap.store.balance(_key(3)) == 500
    assert len(snap.store) == 3


def test_empty_snapshot_v2(tmp_path):
    path = tmp_path / "empty-v2.bin"
    save_snapshot(AccountStore(), 0, 0, 0, 0, path)

    snap = load_snapshot(path)
    assert snap.total_written == 0
    assert snap.fee_pool == 0
    assert snap.bridge_reserve == 0
    assert snap.protocol_reserve == 0
    assert len(snap.store) == 0


def test_v2_file_layout(tmp_path):
    store = AccountStore()
    store.mint(_key(7), 9)
    path = tmp_path / "layout.bin"
    save_snapshot(store, 5, 6, 7, 8, path)

    data = path.read_bytes()
    assert len(data) == 44 + 80
    assert struct.unpack_from("<IQQQQQ", data) == (2, 1, 5, 6, 7, 8)
    assert data[44:76] == _key(7)
    assert not (tmp_path / "layout.tmp").exists()


def test_roundtrip_preserves_full_account(tmp_path):
    store = AccountStore()
    account = Account(balance=12345, nonce=7, head=bytes([0xEE]) * 32, flags=3)
    store.set(_key(4), account)
    path = tmp_path / "full.bin"
    save_snapshot(store, 1, 2, 3, 4, path)

    assert load_snapshot(path).store.get(_key(4)) == account


def test_v1_backward_compat(tmp_path):
    store = AccountStore()
    store.mint(bytes([0xAA]) * 32, 5000)
    accounts = store.iter_accounts()

    data = struct.pack("<IQQ", 1, len(accounts), 99)
    for key, account in accounts:
        data += key + account.to_bytes()
    path = tmp_path / "snapshot-v1.bin"
    path.write_bytes(data)

    snap = load_snapshot(path)
    assert snap.total_written == 99
    assert snap.fee_pool == 0
    assert snap.bridge_reserve == 0
    assert snap.protocol_reserve == 0
    assert snap.store.balance(bytes([0xAA]) * 32) == 5000


def test_missing_file(tmp_path):
    with pytest.raises(SnapshotError, match="Failed to read snapshot"):
        load_snapshot(tmp_path / "absent.bin")


def test_too_small_for_header(tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(bytes(19))
    with pytest.raises(SnapshotError, match="too small for header"):
        load_snapshot(path)


def test_v2_too_small_for_header(tmp_path):
    path = tmp_path / "short-v2.bin"
    path.write_bytes(struct.pack("<IQQ", 2, 0, 0))
    with pytest.raises(SnapshotError, match="v2 file too small"):
        load_snapshot(path)


def test_unsupported_version(tmp_path):
    path = tmp_path / "v3.bin"
    path.write_bytes(struct.pack("<IQQ", 3, 0, 0) + bytes(24))
    with pytest.raises(SnapshotError, match="Unsupported snapshot version: 3"):
        load_snapshot(path)


def test_truncated_records(tmp_path):
    path = tmp_path / "truncated.bin"
    path.write_bytes(struct.pack("<IQQQQQ", 2, 2, 0, 0, 0, 0) + bytes(80))
    with pytest.raises(SnapshotError) as info:
        load_snapshot(path)
    assert str(info.value) == "Snapshot truncated: expected 204 bytes, got 124"