"""Pytest configuration and fixtures."""

import pytest

from eternalcurrencies.attachments import LedgerAttachments
from eternalcurrencies.contracts.models import CurrencyData, CurrencyId
from eternalcurrencies.core.journal import InMemoryJournal
from eternalcurrencies.core.ledger import Ledger
from eternalcurrencies.registry import CurrencyRegistry
from eternalcurrencies.settings import get_settings

COIN = CurrencyId(namespace="eternalcurrencies", path="coin")
GEM = CurrencyId(namespace="eternalcurrencies", path="gem")


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Clear cached settings so env changes in one test do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def journal() -> InMemoryJournal:
    """Fresh in-memory journal."""
    return InMemoryJournal()


@pytest.fixture
def ledger(journal: InMemoryJournal) -> Ledger:
    """Ledger for subject 'steve' recording into the journal fixture."""
    return Ledger("steve", journal=journal)


@pytest.fixture
def attachments(journal: InMemoryJournal) -> LedgerAttachments:
    """Attachment layer sharing the journal fixture."""
    return LedgerAttachments(journal=journal)


@pytest.fixture
def registry() -> CurrencyRegistry:
    """Registry with coin and gem registered."""
    return CurrencyRegistry(
        {
            COIN: CurrencyData(display_name="Coin"),
            GEM: CurrencyData(display_name="Gem", decimal_places=2, text_color="#55FFFF"),
        }
    )
