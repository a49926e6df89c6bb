"""Transaction journal for recording ledger mutations."""

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Protocol

from pydantic import BaseModel, Field

from eternalcurrencies.contracts.enums import TransactionKind
from eternalcurrencies.contracts.models import CurrencyId, as_currency_id

TRANSACTION_LOGGER_NAME = "eternalcurrencies.transactions"


class TransactionEntry(BaseModel):
    """Single ledger mutation (or refused debit)."""

    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    subject: str
    currency: CurrencyId
    kind: TransactionKind
    amount: int
    threshold: int | None = None
    balance_before: int
    balance_after: int
    success: bool = True

    model_config = {"extra": "forbid"}

    @property
    def delta(self) -> int:
        """Net change applied to the balance."""
        return self.balance_after - self.balance_before


class TransactionJournal(Protocol):
    """Protocol for recording transaction entries."""

    def record(self, entry: TransactionEntry) -> None:
        """Record a transaction entry."""
        ...


class InMemoryJournal:
    """Journal that stores TransactionEntry list and supports per-subject queries."""

    def __init__(self) -> None:
        self.entries: list[TransactionEntry] = []
        self._lock = threading.Lock()

    def record(self, entry: TransactionEntry) -> None:
        """Record a transaction entry."""
        with self._lock:
            self.entries.append(entry)

    def entries_for(
        self, subject: str, currency: CurrencyId | str | None = None
    ) -> list[TransactionEntry]:
        """Entries for a subject, optionally filtered by currency."""
        wanted = as_currency_id(currency) if currency is not None else None
        with self._lock:
            return [
                e
                for e in self.entries
                if e.subject == subject and (wanted is None or e.currency == wanted)
            ]

    def net_change(self, subject: str, currency: CurrencyId | str) -> int:
        """Sum of balance deltas for one subject and currency."""
        return sum(e.delta for e in self.entries_for(subject, currency))


class JsonLogJournal:
    """Journal implementation that writes one JSON line to logger eternalcurrencies.transactions."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(TRANSACTION_LOGGER_NAME)

    def record(self, entry: TransactionEntry) -> None:
        """Record entry as a single JSON line to the transaction logger."""
        payload = {
            "occurred_at": entry.occurred_at.isoformat(),
            "subject": entry.subject,
            "currency": str(entry.currency),
            "kind": entry.kind.value,
            "amount": entry.amount,
            "threshold": entry.threshold,
            "balance_before": entry.balance_before,
            "balance_after": entry.balance_after,
            "success": entry.success,
        }
        self._logger.info(json.dumps(payload))
