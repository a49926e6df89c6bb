"""EternalCurrencies - per-subject currency ledgers."""

from eternalcurrencies.api import CurrenciesAPI, build_api
from eternalcurrencies.attachments import LedgerAttachments
from eternalcurrencies.contracts import CurrencyData, CurrencyId
from eternalcurrencies.core import BalanceOverflow, Ledger
from eternalcurrencies.registry import CurrencyRegistry, load_registry

__version__ = "0.1.0"

__all__ = [
    "BalanceOverflow",
    "CurrenciesAPI",
    "CurrencyData",
    "CurrencyId",
    "CurrencyRegistry",
    "Ledger",
    "LedgerAttachments",
    "build_api",
    "load_registry",
]
