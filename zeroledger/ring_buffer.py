"""Fixed-size ring buffer holding the recent transfer log."""

from __future__ import annotations

from collections.abc import Iterator

from .params import HASH_SIZE
from .transfer import Transfer


class TransferLog:
    """Keeps the last `capacity` transfers; the oldest are overwritten."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._capacity = capacity
        self._records: list[bytes] = [b""] * capacity
        self._hashes: list[bytes] = [bytes(HASH_SIZE)] * capacity
        self._total_written = 0

    @property
    def capacity(self) -> int:
        """Maximum number of transfers held."""
        return self._capacity

    @property
    def total_written(self) -> int:
        """Number of transfers ever appended."""
        return self._total_written

    def append(self, transfer: Transfer, tx_hash: bytes) -> int:
        """Append a transfer and return its global sequence number."""
        tx_hash = bytes(tx_hash)
        if len(tx_hash) != HASH_SIZE:
            raise ValueError(f"hash must be {HASH_SIZE} bytes, got {len(tx_hash)}")
        seq = self._total_written
        slot = seq % self._capacity
        self._records[slot] = transfer.to_storage_bytes()
        self._hashes[slot] = tx_hash
        self._total_written += 1
        return seq

    def _holds(self, seq: int) -> bool:
        return self.oldest_seq() <= seq < self._total_written

    def get_by_seq(self, seq: int) -> Transfer | None:
        """The transfer with this sequence number, or None if evicted or unwritten."""
        if not self._holds(seq):
            return None
        return Transfer.from_storage_bytes(self._records[seq % self._capacity])

    def get_hash(self, seq: int) -> bytes | None:
        """The hash stored for this sequence number, or None."""
        if not self._holds(seq):
            return None
        return self._hashes[seq % self._capacity]

    def _seqs(self) -> Iterator[int]:
        return iter(range(self.oldest_seq(), self._total_written))

    def find_by_hash(self, tx_hash: bytes) -> tuple[int, Transfer] | None:
        """Oldest-first linear search for a hash; (seq, transfer) or None."""
        tx_hash = bytes(tx_hash)
        for seq in self._seqs():
            slot = seq % self._capacity
            if self._hashes[slot] == tx_hash:
                return seq, Transfer.from_storage_bytes(self._records[slot])
        return None

    def oldest_seq(self) -> int:
        """Sequence number of the oldest transfer still held."""
        return max(self._total_written - self._capacity, 0)

    def __len__(self) -> int:
        return min(self._total_written, self._capacity)

    def recent(self, n: int) -> list[Transfer]:
        """The n most recent transfers, newest first."""
        return [tx for _, tx in self.recent_with_seq(n)]

    def recent_with_seq(self, n: int) -> list[tuple[int, Transfer]]:
        """The n most recent (seq, transfer) pairs, newest first."""
        count = min(n, len(self))
        newest = self._total_written - 1
        return [
            (seq, Transfer.from_storage_bytes(self._records[seq % self._capacity]))
            for seq in range(newest, newest - count, -1)
        ]