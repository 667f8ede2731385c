import pytest

from zeroledger.ring_buffer import TransferLog
from zeroledger.transfer import Transfer


def make_transfer(from_byte: int, nonce: int) -> Transfer:
    return Transfer(
        sender=bytes([from_byte]) * 32,
        recipient=bytes([0xFF]) * 32,
        amount=10,
        nonce=nonce,
        signature=bytes([0xAA]) * 64,
    )


def test_append_and_retrieve():
    log = TransferLog(10)
    tx = make_transfer(1, 1)
    tx_hash = bytes([0xBB]) * 32
    seq = log.append(tx, tx_hash)
    assert seq == 0
    assert len(log) == 1
    assert log.get_by_seq(0) == tx
    assert log.get_hash(0) == tx_hash


def test_ring_buffer_eviction():
    log = TransferLog(3)
    for i in range(5):
        log.append(make_transfer(i, i), bytes([i]) * 32)

    assert len(log) == 3
    assert log.total_written == 5
    assert log.oldest_seq() == 2

    assert log.get_by_seq(0) is None
    assert log.get_by_seq(1) is None

    assert log.get_by_seq(2).nonce == 2
    assert log.get_by_seq(3).nonce == 3
    assert log.get_by_seq(4).nonce == 4
    assert log.get_by_seq(5) is None


def test_find_by_hash():
    log = TransferLog(10)
    tx = make_transfer(7, 42)
    tx_hash = bytes([0xCC]) * 32
    log.append(tx, tx_hash)

    seq, found = log.find_by_hash(tx_hash)
    assert seq == 0
    assert found == tx

    assert log.find_by_hash(bytes([0xDD]) * 32) is None


def test_find_by_hash_after_eviction():
    log = TransferLog(2)
    for i in range(4):
        log.append(make_transfer(i, i), bytes([i]) * 32)
    assert log.find_by_hash(bytes([0]) * 32) is None
    seq, found = log.find_by_hash(bytes([3]) * 32)
    assert seq == 3
    assert found.nonce == 3


def test_recent_returns_newest_first():
    log = TransferLog(10)
    for i in range(5):
        log.append(make_transfer(i, i), bytes([i]) * 32)

    recent = log.recent(3)
    assert len(recent) == 3
    assert [tx.nonce for tx in recent] == [4, 3, 2]


def test_recent_with_seq_limited_by_len():
    log = TransferLog(3)
    for i in range(5):
        log.append(make_transfer(i, i), bytes([i]) * 32)
    pairs = log.recent_with_seq(10)
    assert [seq for seq, _ in pairs] == [4, 3, 2]
    assert [tx.nonce for _, tx in pairs] == [4, 3, 2]


def test_empty_log():
    log = TransferLog(4)
    assert len(log) == 0
    assert log.get_by_seq(0) is None
    assert log.get_hash(0) is None
    assert log.recent(5) == []
    assert log.capacity == 4


def test_zero_capacity_rejected():
    with pytest.raises(ValueError):
        TransferLog(0)