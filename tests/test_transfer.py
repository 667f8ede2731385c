import hashlib

import pytest

from zeroledger.transfer import STORAGE_SIZE, WIRE_SIZE, Transfer


def _zero_transfer():
    return Transfer(bytes(32), bytes(32), 0, 0, bytes(64))


def test_storage_roundtrip():
    tx = Transfer(b"\x01" * 32, b"\x02" * 32, 100, 42, b"\xab" * 64)
    data = tx.to_storage_bytes()
    assert len(data) == STORAGE_SIZE
    assert Transfer.from_storage_bytes(data) == tx


def test_wire_format_is_100_bytes():
    assert len(_zero_transfer().to_wire_bytes()) == 100
    assert WIRE_SIZE == 100


def test_signing_bytes_are_72():
    assert len(_zero_transfer().signing_bytes()) == 72


def test_signing_bytes_layout():
    tx = Transfer(b"\x01" * 32, b"\x02" * 32, 100, 42, b"\xab" * 64)
    data = tx.signing_bytes()
    assert data[0:32] == b"\x01" * 32
    assert data[32:64] == b"\x02" * 32
    assert data[64:68] == b"\x64\x00\x00\x00"
    assert data[68:72] == b"\x2a\x00\x00\x00"


def test_wire_truncates_signature():
    signature = bytes(range(64))
    tx = Transfer(b"\x01" * 32, b"\x02" * 32, 100, 42, signature)
    wire = tx.to_wire_bytes()
    assert wire[72:] == signature[:28]
    assert wire[:72] == tx.signing_bytes()


def test_storage_starts_with_signing_bytes():
    tx = Transfer(b"\x03" * 32, b"\x04" * 32, 7, 9, b"\xcd" * 64)
    data = tx.to_storage_bytes()
    assert data[:72] == tx.signing_bytes()
    assert data[72:] == b"\xcd" * 64


def test_hash_with_uses_storage_bytes():
    tx = Transfer(b"\x01" * 32, b"\x02" * 32, 100, 42, b"\xab" * 64)
    seen = []

    def hasher(data):
        seen.append(data)
        return hashlib.sha256(data).digest()

    digest = tx.hash_with(hasher)
    assert seen == [tx.to_storage_bytes()]
    assert len(digest) == 32


def test_from_storage_bytes_wrong_length():
    with pytest.raises(ValueError):
        Transfer.from_storage_bytes(b"\x00" * 100)


def test_rejects_short_key():
    with pytest.raises(ValueError):
        Transfer(b"\x01" * 31, b"\x02" * 32, 1, 1)


def test_rejects_amount_overflow():
    with pytest.raises(ValueError):
        Transfer(b"\x01" * 32, b"\x02" * 32, 2**32, 1)