"""Core models: balances, ledger, journal."""

from eternalcurrencies.core.balance import INT64_MAX, INT64_MIN, BalanceOverflow
from eternalcurrencies.core.journal import (
    InMemoryJournal,
    JsonLogJournal,
    TransactionEntry,
    TransactionJournal,
)
from eternalcurrencies.core.ledger import Ledger, SnapshotError

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "BalanceOverflow",
    "InMemoryJournal",
    "JsonLogJournal",
    "Ledger",
    "SnapshotError",
    "TransactionEntry",
    "TransactionJournal",
]
