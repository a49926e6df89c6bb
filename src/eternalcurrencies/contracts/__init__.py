"""Canonical contracts for currencies and ledgers."""

from eternalcurrencies.contracts.enums import TransactionKind
from eternalcurrencies.contracts.models import (
    DEFAULT_NAMESPACE,
    CurrencyData,
    CurrencyId,
    LedgerSnapshot,
    as_currency_id,
)

__all__ = [
    "DEFAULT_NAMESPACE",
    "CurrencyData",
    "CurrencyId",
    "LedgerSnapshot",
    "TransactionKind",
    "as_currency_id",
]
