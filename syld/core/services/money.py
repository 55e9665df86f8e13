"""
Money helpers — convert between major units (``12.50``) and integer
minor units (``1250``) without floating point.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

_ZERO_DECIMAL = frozenset({"CLP", "ISK", "JPY", "KRW", "PYG", "UGX", "VND", "XAF", "XOF"})
_THREE_DECIMAL = frozenset({"BHD", "JOD", "KWD", "OMR", "TND"})


def exponent(currency: str) -> int:
    """Number of minor-unit digits for a currency code."""
    code = currency.upper()
    if code in _ZERO_DECIMAL:
        return 0
    if code in _THREE_DECIMAL:
        return 3
    return 2


def parse_amount(value: str | int | Decimal) -> Decimal:
    """Parse a user-supplied amount. Raises ``ValueError`` on garbage."""
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a valid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a valid amount: {value!r}")
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {value}")
    return amount


def to_minor(amount: Decimal | str | int, currency: str) -> int:
    """Major units → integer minor units (banker's rounding)."""
    digits = exponent(currency)
    quantized = parse_amount(amount).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_EVEN)
    return int(quantized.scaleb(digits))


def to_major(minor: int, currency: str) -> Decimal:
    """Integer minor units → major units."""
    digits = exponent(currency)
    return Decimal(minor).scaleb(-digits).quantize(Decimal(1).scaleb(-digits))


def format_amount(minor: int, currency: str) -> str:
    """``1250, "USD"`` → ``"12.50 USD"``."""
    return f"{to_major(minor, currency)} {currency.upper()}"
