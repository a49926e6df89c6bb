"""Pydantic v2 models for currency ids, registry metadata and ledger snapshots."""

import re
from typing import Any

from pydantic import BaseModel, Field, StrictInt, field_validator, model_validator

DEFAULT_NAMESPACE = "eternalcurrencies"
SNAPSHOT_VERSION = 1

_NAMESPACE_RE = re.compile(r"[a-z0-9_.-]+")
_PATH_RE = re.compile(r"[a-z0-9_./-]+")


class BaseContractModel(BaseModel):
    """Base model for all contracts."""

    model_config = {"extra": "forbid", "frozen": False}


class CurrencyId(BaseModel):
    """Namespaced currency identifier, rendered as ``namespace:path``.

    Immutable and hashable so it can key balance maps.
    """

    namespace: str = DEFAULT_NAMESPACE
    path: str

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Namespace is lowercase alphanumerics plus ``_.-``."""
        if not _NAMESPACE_RE.fullmatch(v):
            raise ValueError(f"Invalid currency namespace: {v!r}")
        return v

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Path is lowercase alphanumerics plus ``_./-``."""
        if not _PATH_RE.fullmatch(v):
            raise ValueError(f"Invalid currency path: {v!r}")
        return v

    @classmethod
    def parse(cls, value: str) -> "CurrencyId":
        """Parse ``namespace:path``; a bare path gets the default namespace."""
        namespace, sep, path = value.partition(":")
        if not sep:
            return cls(path=value)
        return cls(namespace=namespace, path=path)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"


def as_currency_id(currency: "CurrencyId | str") -> CurrencyId:
    """Coerce a CurrencyId or its text form to a CurrencyId."""
    if isinstance(currency, CurrencyId):
        return currency
    if isinstance(currency, str):
        return CurrencyId.parse(currency)
    raise TypeError(f"Expected CurrencyId or str, got {type(currency).__name__}")


class CurrencyData(BaseContractModel):
    """Registry metadata for a single currency."""

    display_name: str = Field(min_length=1)
    decimal_places: int = Field(default=0, ge=0, le=18)
    icon: str | None = None
    text_color: int | None = Field(default=None, ge=0, le=0xFFFFFF)

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("text_color", mode="before")
    @classmethod
    def parse_text_color(cls, v: Any) -> Any:
        """Accept ``#RRGGBB`` strings as well as plain integers."""
        if isinstance(v, str):
            raw = v[1:] if v.startswith("#") else v
            try:
                return int(raw, 16)
            except ValueError:
                raise ValueError(f"Invalid text_color: {v!r}") from None
        return v


class LedgerSnapshot(BaseContractModel):
    """Persisted form of one subject's ledger."""

    version: int = SNAPSHOT_VERSION
    subject: str
    balances: dict[str, StrictInt] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_snapshot(self) -> "LedgerSnapshot":
        """Reject unknown versions, malformed currency keys and aliased keys."""
        if self.version != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {self.version}")
        seen: dict[CurrencyId, str] = {}
        for key in self.balances:
            try:
                currency = CurrencyId.parse(key)
            except ValueError:
                raise ValueError(f"Invalid currency key: {key!r}") from None
            if currency in seen:
                raise ValueError(f"Duplicate currency key: {key!r} repeats {seen[currency]!r}")
            seen[currency] = key
        return self
