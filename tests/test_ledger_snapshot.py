"""Tests for ledger serialize/deserialize."""

import json

import pytest

from eternalcurrencies.contracts.models import CurrencyId
from eternalcurrencies.core.balance import INT64_MAX
from eternalcurrencies.core.ledger import Ledger, SnapshotError

COIN = CurrencyId(path="coin")
SHELL = CurrencyId(namespace="othermod", path="shells/blue")


class TestSerialize:
    """Test snapshot encoding."""

    def test_serialize_format(self) -> None:
        """Test serialize() emits versioned JSON keyed by currency text."""
        ledger = Ledger("steve")
        ledger.set(COIN, 12)
        ledger.set(SHELL, -3)
        payload = json.loads(ledger.serialize())
        assert payload == {
            "version": 1,
            "subject": "steve",
            "balances": {"eternalcurrencies:coin": 12, "othermod:shells/blue": -3},
        }

    def test_zero_balances_omitted(self) -> None:
        """Test zero balances are left out of the snapshot."""
        ledger = Ledger("steve")
        ledger.set(COIN, 0)
        assert json.loads(ledger.serialize())["balances"] == {}

    def test_restore_into_fresh_ledger(self) -> None:
        """Test a snapshot restores the same balances into a new ledger."""
        original = Ledger("steve")
        original.set(COIN, INT64_MAX)
        original.take(SHELL, 9)
        restored = Ledger("steve")
        restored.deserialize(original.serialize())
        assert restored.balances() == original.balances()


class TestDeserializeErrors:
    """Test malformed snapshots leave the ledger unchanged."""

    @pytest.fixture
    def ledger(self) -> Ledger:
        ledger = Ledger("steve")
        ledger.set(COIN, 5)
        return ledger

    @pytest.mark.parametrize(
        "data",
        [
            b"not json",
            b'{"version": 2, "subject": "steve", "balances": {}}',
            b'{"version": 1, "subject": "steve", "balances": {"Bad Key": 1}}',
            b'{"version": 1, "subject": "steve", "balances": {"a:b": 9223372036854775808}}',
            b'{"version": 1, "subject": "steve", "balances": {}, "extra": true}',
            b'{"version": 1, "subject": "steve", "balances": {"a:b": true}}',
            b'{"version": 1, "subject": "steve", "balances": {"a:b": "7"}}',
            b'{"version": 1, "subject": "steve", "balances": {"coin": 5, "eternalcurrencies:coin": 7}}',
        ],
    )
    def test_invalid_data(self, ledger: Ledger, data: bytes) -> None:
        """Test invalid snapshots raise SnapshotError without mutation."""
        with pytest.raises(SnapshotError):
            ledger.deserialize(data)
        assert ledger.balances() == {COIN: 5}

    def test_other_subject_rejected(self, ledger: Ledger) -> None:
        """Test a snapshot for a different subject is refused."""
        other = Ledger("alex")
        other.set(COIN, 100)
        with pytest.raises(SnapshotError, match="alex"):
            ledger.deserialize(other.serialize())
        assert ledger.get(COIN) == 5

    def test_snapshot_error_is_value_error(self) -> None:
        """Test SnapshotError subclasses ValueError."""
        assert issubclass(SnapshotError, ValueError)

    def test_aliased_keys_rejected(self, ledger: Ledger) -> None:
        """Test two spellings of one currency are refused rather than merged."""
        data = b'{"version": 1, "subject": "steve", "balances": {"coin": 5, "eternalcurrencies:coin": 7}}'
        with pytest.raises(SnapshotError, match="Duplicate currency key"):
            ledger.deserialize(data)
        assert ledger.get(COIN) == 5

    def test_bool_balance_rejected(self, ledger: Ledger) -> None:
        """Test a JSON boolean is not accepted as a balance."""
        data = b'{"version": 1, "subject": "steve", "balances": {"eternalcurrencies:gem": true}}'
        with pytest.raises(SnapshotError):
            ledger.deserialize(data)
        assert ledger.balances() == {COIN: 5}
