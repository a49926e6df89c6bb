"""Canonical enum definitions for ledger contracts."""

from enum import Enum


class TransactionKind(str, Enum):
    """Kind of ledger mutation."""

    SET = "set"
    ADD = "add"
    TAKE = "take"
    TRY_TAKE = "try_take"
