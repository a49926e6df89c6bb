"""Read-only registry of currency metadata, loaded from data files."""

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from eternalcurrencies.contracts.models import CurrencyData, CurrencyId, as_currency_id

logger = logging.getLogger(__name__)

CURRENCIES_DIR = "currencies"


class RegistryLoadError(ValueError):
    """Raised when currency definitions cannot be loaded."""


class CurrencyRegistry:
    """Immutable mapping of CurrencyId to CurrencyData."""

    def __init__(self, entries: Mapping[CurrencyId | str, CurrencyData] | None = None) -> None:
        self._entries: dict[CurrencyId, CurrencyData] = {
            as_currency_id(k): v for k, v in (entries or {}).items()
        }

    def lookup(self, currency: CurrencyId | str) -> CurrencyData | None:
        """Metadata for currency, or None if it is not registered."""
        return self._entries.get(as_currency_id(currency))

    def all(self) -> dict[CurrencyId, CurrencyData]:
        """Copy of every registered currency."""
        return dict(self._entries)

    def __contains__(self, currency: object) -> bool:
        if not isinstance(currency, (CurrencyId, str)):
            return False
        return as_currency_id(currency) in self._entries

    def __iter__(self) -> Iterator[CurrencyId]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def _parse_data(source: str, raw: Any) -> CurrencyData:
    try:
        return CurrencyData.model_validate(raw)
    except ValidationError as e:
        raise RegistryLoadError(f"Invalid currency data in {source}: {e}") from e


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RegistryLoadError(f"Invalid JSON in {path}: {e}") from e


def _load_file(path: Path) -> dict[CurrencyId, CurrencyData]:
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise RegistryLoadError(f"Registry file {path} must hold a JSON object")
    entries: dict[CurrencyId, CurrencyData] = {}
    for key, value in raw.items():
        try:
            currency = CurrencyId.parse(key)
        except ValueError as e:
            raise RegistryLoadError(f"Invalid currency id {key!r} in {path}") from e
        if currency in entries:
            raise RegistryLoadError(f"Duplicate currency {currency} in {path}")
        entries[currency] = _parse_data(f"{path}[{key}]", value)
    return entries


def _load_dir(root: Path) -> dict[CurrencyId, CurrencyData]:
    """Load ``<root>/<namespace>/currencies/<path>.json`` files."""
    entries: dict[CurrencyId, CurrencyData] = {}
    for file in sorted(root.glob(f"*/{CURRENCIES_DIR}/**/*.json")):
        rel = file.relative_to(root)
        namespace = rel.parts[0]
        path = "/".join(rel.parts[2:])[: -len(".json")]
        try:
            currency = CurrencyId(namespace=namespace, path=path)
        except ValueError as e:
            raise RegistryLoadError(f"Invalid currency id for {file}") from e
        if currency in entries:
            raise RegistryLoadError(f"Duplicate currency {currency} in {root}")
        entries[currency] = _parse_data(str(file), _read_json(file))
    return entries


def load_registry(path: str | Path) -> CurrencyRegistry:
    """Load currency definitions from a JSON file or a data directory.

    A file maps ``"namespace:path"`` to a CurrencyData object. A directory is
    scanned for ``<namespace>/currencies/<path>.json``; nested folders become
    ``/``-separated paths.

    Raises:
        RegistryLoadError: Missing path, bad JSON or invalid definitions
    """
    source = Path(path)
    if source.is_dir():
        entries = _load_dir(source)
    elif source.is_file():
        entries = _load_file(source)
    else:
        raise RegistryLoadError(f"Registry path does not exist: {source}")
    logger.info("Loaded %d currencies from %s", len(entries), source)
    return CurrencyRegistry(entries)
