"""Ledger building blocks: account records, transfers, account store, transfer log, staking, snapshots, fee splitting and bridge attestations."""

__version__ = "0.1.0"