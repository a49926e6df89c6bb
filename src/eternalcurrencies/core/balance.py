"""Signed 64-bit balance arithmetic with checked overflow."""

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class BalanceOverflow(ArithmeticError):
    """Raised when a balance operation would leave the signed 64-bit range."""

    def __init__(self, message: str, operation: str, currency: str, attempted: int) -> None:
        super().__init__(message)
        self.operation = operation
        self.currency = currency
        self.attempted = attempted


def require_int(name: str, value: object) -> int:
    """Return value if it is a plain int; bools and other numbers raise TypeError."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    return value


def checked_int64(value: int, operation: str, currency: str) -> int:
    """Return value unchanged, or raise BalanceOverflow if it is outside int64.

    Args:
        value: Exact (unbounded) result of the operation
        operation: Operation name, for the error
        currency: Currency text form, for the error
    """
    if value < INT64_MIN or value > INT64_MAX:
        raise BalanceOverflow(
            f"Balance overflow in {operation} for {currency}: {value} outside int64",
            operation=operation,
            currency=currency,
            attempted=value,
        )
    return value
