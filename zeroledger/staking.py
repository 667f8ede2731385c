"""Validator stakes and the unbonding queue."""

from __future__ import annotations

from dataclasses import dataclass

from .params import MIN_VALIDATOR_STAKE, UNBONDING_PERIOD_SECS

_BPS_DENOMINATOR = 10_000


class StakeError(Exception):
    """Base class for staking errors."""


class InsufficientStake(StakeError):
    def __init__(self, have: int, want: int) -> None:
        self.have = have
        self.want = want
        super().__init__(f"insufficient stake: have {have}, want {want}")


@dataclass
class UnbondingEntry:
    """Stake waiting out the unbonding period."""

    validator: bytes
    amount: int
    initiated_at: int
    """Timestamp (ms) when unbonding began."""


class StakeStore:
    """Tracks validator stakes and pending unbonding entries."""

    def __init__(self) -> None:
        self._stakes: dict[bytes, int] = {}
        self._unbonding: list[UnbondingEntry] = []

    def stake(self, validator: bytes, amount: int) -> int:
        """Add stake for a validator and return its new total."""
        key = bytes(validator)
        total = self._stakes.get(key, 0) + amount
        self._stakes[key] = total
        return total

    def begin_unstake(self, validator: bytes, amount: int, now_ms: int) -> None:
        """Move stake into the unbonding queue; raise InsufficientStake if short."""
        key = bytes(validator)
        current = self._stakes.get(key)
        if current is None or amount > current:
            raise InsufficientStake(current or 0, amount)

        remaining = current - amount
        if remaining == 0:
            del self._stakes[key]
        else:
            self._stakes[key] = remaining

        self._unbonding.append(UnbondingEntry(key, amount, now_ms))

    def complete_unbonding(self, now_ms: int) -> list[tuple[bytes, int]]:
        """Release entries past the unbonding period as (validator, amount) pairs."""
        threshold_ms = UNBONDING_PERIOD_SECS * 1000
        completed: list[tuple[bytes, int]] = []
        remaining: list[UnbondingEntry] = []
        for entry in self._unbonding:
            if max(now_ms - entry.initiated_at, 0) >= threshold_ms:
                completed.append((entry.validator, entry.amount))
            else:
                remaining.append(entry)
        self._unbonding = remaining
        return completed

    def staked(self, validator: bytes) -> int:
        """Current active stake of a validator."""
        return self._stakes.get(bytes(validator), 0)

    def is_active_validator(self, validator: bytes) -> bool:
        """Whether the validator meets the minimum stake."""
        return self.staked(validator) >= MIN_VALIDATOR_STAKE

    def active_validators(self) -> list[tuple[bytes, int]]:
        """Validators meeting the minimum stake, largest stake first."""
        active = [
            (key, stake)
            for key, stake in self._stakes.items()
            if stake >= MIN_VALIDATOR_STAKE
        ]
        return sorted(active, key=lambda pair: pair[1], reverse=True)

    def total_stake(self) -> int:
        """Total active stake across all validators."""
        return sum(self._stakes.values())

    def active_count(self) -> int:
        """Number of validators meeting the minimum stake."""
        return sum(1 for stake in self._stakes.values() if stake >= MIN_VALIDATOR_STAKE)

    def unbonding_count(self) -> int:
        """Number of pending unbonding entries."""
        return len(self._unbonding)

    def total_unbonding(self) -> int:
        """Total amount currently unbonding."""
        return sum(entry.amount for entry in self._unbonding)

    def slash(self, validator: bytes, slash_bps: int) -> int:
        """Cut active and unbonding stake by slash_bps; return the amount slashed."""
        key = bytes(validator)
        total_slashed = 0

        stake = self._stakes.get(key)
        if stake is not None:
            cut = stake * slash_bps // _BPS_DENOMINATOR
            stake -= cut
            total_slashed += cut
            if stake == 0:
                del self._stakes[key]
            else:
                self._stakes[key] = stake

        for entry in self._unbonding:
            if entry.validator == key:
                cut = entry.amount * slash_bps // _BPS_DENOMINATOR
                entry.amount -= cut
                total_slashed += cut

        self._unbonding = [entry for entry in self._unbonding if entry.amount > 0]
        return total_slashed