"""Per-subject currency ledger with threshold-guarded debits."""

import logging
import threading

from pydantic import ValidationError

from eternalcurrencies.contracts.enums import TransactionKind
from eternalcurrencies.contracts.models import CurrencyId, LedgerSnapshot, as_currency_id
from eternalcurrencies.core.balance import checked_int64, require_int
from eternalcurrencies.core.journal import TransactionEntry, TransactionJournal

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when serialized ledger data cannot be restored."""


class Ledger:
    """Balances of every currency held by one subject.

    A currency with no entry reads as 0. All operations on a ledger are
    serialized by a single re-entrant lock, so ``try_take`` checks and
    subtracts as one step. Integer overflow outside the signed 64-bit range
    raises ``BalanceOverflow`` and leaves the balance untouched.
    """

    def __init__(self, subject: str, journal: TransactionJournal | None = None) -> None:
        self.subject = subject
        self._journal = journal
        self._balances: dict[CurrencyId, int] = {}
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Ledger(subject={self.subject!r}, currencies={len(self._balances)})"

    def get(self, currency: CurrencyId | str) -> int:
        """Return the balance for currency, or 0 if it was never set."""
        key = as_currency_id(currency)
        with self._lock:
            return self._balances.get(key, 0)

    def set(self, currency: CurrencyId | str, amount: int) -> None:
        """Overwrite the balance for currency."""
        key = as_currency_id(currency)
        amount = checked_int64(require_int("amount", amount), "set", str(key))
        with self._lock:
            before = self._balances.get(key, 0)
            self._balances[key] = amount
            self._record(TransactionKind.SET, key, amount, before, amount)

    def add(self, currency: CurrencyId | str, amount: int) -> None:
        """Add amount (may be negative) to the balance for currency."""
        key = as_currency_id(currency)
        checked_int64(require_int("amount", amount), "add", str(key))
        with self._lock:
            before = self._balances.get(key, 0)
            after = checked_int64(before + amount, "add", str(key))
            self._balances[key] = after
            self._record(TransactionKind.ADD, key, amount, before, after)

    def take(self, currency: CurrencyId | str, amount: int) -> None:
        """Subtract amount with no floor; the balance may go negative."""
        key = as_currency_id(currency)
        checked_int64(require_int("amount", amount), "take", str(key))
        with self._lock:
            before = self._balances.get(key, 0)
            after = checked_int64(before - amount, "take", str(key))
            self._balances[key] = after
            self._record(TransactionKind.TAKE, key, amount, before, after)

    def try_take(self, currency: CurrencyId | str, amount: int, threshold: int = 0) -> bool:
        """Subtract amount only if the result stays at or above threshold.

        Args:
            currency: Currency to debit
            amount: Amount to subtract
            threshold: Lowest balance allowed after the debit. 0 forbids
                negative balances, a negative value allows debt down to it.

        Returns:
            True if the balance was debited, False if it was left unchanged
        """
        key = as_currency_id(currency)
        checked_int64(require_int("amount", amount), "try_take", str(key))
        checked_int64(require_int("threshold", threshold), "try_take", str(key))
        with self._lock:
            before = self._balances.get(key, 0)
            after = before - amount
            if after < threshold:
                self._record(
                    TransactionKind.TRY_TAKE, key, amount, before, before,
                    threshold=threshold, success=False,
                )
                return False
            checked_int64(after, "try_take", str(key))
            self._balances[key] = after
            self._record(TransactionKind.TRY_TAKE, key, amount, before, after, threshold=threshold)
            return True

    def balances(self) -> dict[CurrencyId, int]:
        """Copy of every explicitly stored balance."""
        with self._lock:
            return dict(self._balances)

    def serialize(self) -> bytes:
        """Encode the ledger as a UTF-8 JSON snapshot; zero balances are omitted."""
        with self._lock:
            balances = {str(k): v for k, v in self._balances.items() if v != 0}
        snapshot = LedgerSnapshot(subject=self.subject, balances=dict(sorted(balances.items())))
        return snapshot.model_dump_json().encode("utf-8")

    def deserialize(self, data: bytes) -> None:
        """Replace all balances from a snapshot produced by serialize().

        Raises:
            SnapshotError: If data is malformed, belongs to another subject or
                holds a balance outside int64. The ledger is left unchanged.
        """
        try:
            snapshot = LedgerSnapshot.model_validate_json(data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid ledger snapshot for {self.subject!r}: {e}") from e
        if snapshot.subject != self.subject:
            raise SnapshotError(
                f"Snapshot belongs to {snapshot.subject!r}, not {self.subject!r}"
            )
        restored: dict[CurrencyId, int] = {}
        for raw_key, value in snapshot.balances.items():
            try:
                key = CurrencyId.parse(raw_key)
                restored[key] = checked_int64(value, "deserialize", raw_key)
            except (ValueError, ArithmeticError) as e:
                raise SnapshotError(f"Invalid balance {raw_key!r} for {self.subject!r}: {e}") from e
        with self._lock:
            self._balances = restored
        logger.debug("Restored %d balances for %s", len(restored), self.subject)

    def _record(
        self,
        kind: TransactionKind,
        currency: CurrencyId,
        amount: int,
        before: int,
        after: int,
        threshold: int | None = None,
        success: bool = True,
    ) -> None:
        if self._journal is None:
            return
        self._journal.record(
            TransactionEntry(
                subject=self.subject,
                currency=currency,
                kind=kind,
                amount=amount,
                threshold=threshold,
                balance_before=before,
                balance_after=after,
                success=success,
            )
        )
