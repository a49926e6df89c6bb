"""Facade over subject ledgers and the currency registry.

Every method degrades to a neutral result when the subject has no ledger or
the registry is unavailable: balances read as 0, debits fail, writes are
skipped and registry queries come back empty.
"""

import logging

from eternalcurrencies.attachments import LedgerAttachments
from eternalcurrencies.contracts.models import CurrencyData, CurrencyId
from eternalcurrencies.core.journal import JsonLogJournal
from eternalcurrencies.core.ledger import Ledger
from eternalcurrencies.registry import CurrencyRegistry, load_registry
from eternalcurrencies.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class CurrenciesAPI:
    """Stateless service over injected ledger attachments and registry."""

    def __init__(
        self,
        attachments: LedgerAttachments,
        registry: CurrencyRegistry | None = None,
    ) -> None:
        self.attachments = attachments
        self.registry = registry

    def registered_currencies(self) -> dict[CurrencyId, CurrencyData]:
        """All registered currencies; empty if the registry is unavailable."""
        if self.registry is None:
            return {}
        return self.registry.all()

    def currency_data(self, currency: CurrencyId | str) -> CurrencyData | None:
        """Metadata for currency, or None if unknown or no registry is loaded."""
        if self.registry is None:
            logger.debug("No currency registry; cannot look up %s", currency)
            return None
        return self.registry.lookup(currency)

    def currencies_for(self, subject: str) -> Ledger | None:
        """The subject's ledger, for callers doing several operations at once."""
        return self.attachments.get(subject)

    def balance_for(self, subject: str, currency: CurrencyId | str) -> int:
        """Subject's balance of currency; 0 if the subject has no ledger."""
        ledger = self.attachments.get(subject)
        if ledger is None:
            return 0
        return ledger.get(currency)

    def set_balance_for(self, subject: str, currency: CurrencyId | str, amount: int) -> None:
        """Set the subject's balance of currency to amount."""
        ledger = self._ledger_or_log(subject, "set")
        if ledger is not None:
            ledger.set(currency, amount)

    def add_balance_for(self, subject: str, currency: CurrencyId | str, amount: int) -> None:
        """Add amount to the subject's balance of currency."""
        ledger = self._ledger_or_log(subject, "add")
        if ledger is not None:
            ledger.add(currency, amount)

    def take_balance_for(self, subject: str, currency: CurrencyId | str, amount: int) -> bool:
        """Debit amount only if the balance would not go below 0."""
        return self.take_balance_with_threshold(subject, currency, amount, 0)

    def take_balance_with_threshold(
        self,
        subject: str,
        currency: CurrencyId | str,
        amount: int,
        threshold: int,
    ) -> bool:
        """Debit amount only if the balance would stay at or above threshold.

        A negative threshold allows debt down to that limit.

        Returns:
            True if the debit was applied, False otherwise (including when the
            subject has no ledger)
        """
        ledger = self._ledger_or_log(subject, "try_take")
        if ledger is None:
            return False
        return ledger.try_take(currency, amount, threshold)

    def take_anyway_for(self, subject: str, currency: CurrencyId | str, amount: int) -> None:
        """Debit amount with no floor; the balance may go negative."""
        ledger = self._ledger_or_log(subject, "take")
        if ledger is not None:
            ledger.take(currency, amount)

    def _ledger_or_log(self, subject: str, operation: str) -> Ledger | None:
        ledger = self.attachments.get(subject)
        if ledger is None:
            logger.debug("Skipping %s: subject %s has no ledger", operation, subject)
        return ledger


def build_api(settings: Settings | None = None) -> CurrenciesAPI:
    """Wire a CurrenciesAPI from settings."""
    settings = settings or get_settings()
    journal = JsonLogJournal() if settings.journal_enabled else None
    registry = load_registry(settings.registry_path) if settings.registry_path else None
    return CurrenciesAPI(LedgerAttachments(journal=journal), registry)
