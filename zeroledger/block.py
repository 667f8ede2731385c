"""Consensus DAG references and events."""

from __future__ import annotations

from dataclasses import dataclass, field

from .params import HASH_SIZE


@dataclass(frozen=True, order=True)
class BlockRef:
    """Reference to a block in the consensus DAG: round, author and digest."""

    round: int
    author: int
    digest: bytes

    def __post_init__(self) -> None:
        if len(self.digest) != HASH_SIZE:
            raise ValueError(f"digest must be {HASH_SIZE} bytes, got {len(self.digest)}")
        object.__setattr__(self, "digest", bytes(self.digest))

    def __str__(self) -> str:
        return f"B{self.round}({self.author},{self.digest[:4].hex()})"


@dataclass
class Event:
    """A consensus event produced by one validator in one round."""

    round: int
    author: int
    timestamp: int
    parents: list[BlockRef] = field(default_factory=list)
    transactions: list[int] = field(default_factory=list)
    digest: bytes = bytes(HASH_SIZE)

    def reference(self) -> BlockRef:
        """The reference other events use to point at this one."""
        return BlockRef(self.round, self.author, self.digest)