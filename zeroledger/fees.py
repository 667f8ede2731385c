"""Splitting accumulated transfer fees between validators and reserves."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .params import FEE_SHARE_BRIDGE_OPS_BPS, FEE_SHARE_VALIDATORS_BPS

_BPS_DENOMINATOR = 10_000


@dataclass
class FeeDistribution:
    """How one epoch's fees were shared out."""

    total: int
    """Total fees distributed."""
    validator_total: int
    """Amount allocated to validators (sum of the individual payouts)."""
    bridge_amount: int
    """Amount added to the bridge reserve."""
    protocol_amount: int
    """Amount added to the protocol reserve."""
    validator_payouts: list[tuple[bytes, int]] = field(default_factory=list)
    """Individual validator payouts as (public key, amount) pairs."""


def split_fees(total: int, validators: Iterable[tuple[bytes, int]]) -> FeeDistribution:
    """Split total fees 70/15/15 between validators, bridge and protocol.

    The validator share is divided in proportion to stake; the last validator
    receives the rounding remainder, and the protocol reserve receives the
    remainder of the three-way split, so no unit is lost. No payouts are made
    when the total or the combined stake is zero.
    """
    if total < 0:
        raise ValueError(f"total fees must not be negative: {total}")
    validators = [(bytes(pk), stake) for pk, stake in validators]
    if any(stake < 0 for _, stake in validators):
        raise ValueError("validator stake must not be negative")

    if total == 0:
        return FeeDistribution(0, 0, 0, 0, [])

    validator_total = total * FEE_SHARE_VALIDATORS_BPS // _BPS_DENOMINATOR
    bridge_amount = total * FEE_SHARE_BRIDGE_OPS_BPS // _BPS_DENOMINATOR
    protocol_amount = total - validator_total - bridge_amount

    total_stake = sum(stake for _, stake in validators)
    payouts: list[tuple[bytes, int]] = []
    if total_stake > 0 and validators:
        *leading, (last_pk, _) = validators
        paid = 0
        for pk, stake in leading:
            share = validator_total * stake // total_stake
            payouts.append((pk, share))
            paid += share
        payouts.append((last_pk, validator_total - paid))

    return FeeDistribution(
        total=total,
        validator_total=validator_total,
        bridge_amount=bridge_amount,
        protocol_amount=protocol_amount,
        validator_payouts=payouts,
    )