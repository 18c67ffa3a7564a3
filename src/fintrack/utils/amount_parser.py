"""Amount parsing utilities.

Bank statements mix the Brazilian convention ("1.234,56") with the plain
decimal one ("1234.56"). The separator heuristic lives in
``normalize_amount`` so it can be tested on its own and so callers can decide
what to do with readings it flags as ambiguous.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional
import re

from fintrack.domain.entities import TransactionKind
from fintrack.domain.errors import InvalidAmount

CENTS = Decimal("0.01")

# Largest magnitude a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")

_CURRENCY_RE = re.compile(r"R\$|[$€£¥]")
_WHITESPACE_RE = re.compile(r"\s+")
_EXPONENT_RE = re.compile(r"\d[eE][+-]?\d")


@dataclass(frozen=True)
class AmountReading:
    """Signed decimal read from an amount token.

    ``ambiguous`` is set when the separators did not follow any single
    convention (more than one comma) and the last comma was assumed to be
    the decimal point.
    """

    value: Decimal
    ambiguous: bool = False


def _normalize_separators(token: str) -> tuple[str, bool]:
    """Rewrite an unsigned numeric token into canonical "1234.56" form."""
    commas = token.count(",")
    dots = token.count(".")

    if commas == 1 and dots >= 1:
        # "1.234,56": dots group thousands, the comma is the decimal point
        return token.replace(".", "").replace(",", "."), False
    if commas == 1:
        return token.replace(",", "."), False
    if commas == 0 and dots == 1:
        return token, False
    if commas == 0 and dots > 1:
        return token.replace(".", ""), False
    if commas == 0:
        return token, False

    # More than one comma: the last one is taken as the decimal point
    head, _, tail = token.rpartition(",")
    head = head.replace(".", "").replace(",", "")
    return f"{head}.{tail}", True


def normalize_amount(amount_str: str, line: Optional[int] = None) -> AmountReading:
    """Normalize a free-form amount token into a signed Decimal.

    Handles various formats:
    - "1234.56", "-1234.56"
    - "1.234,56", "-125,50", "R$ 1.200,00"
    - "1.000.000" (thousands separators only)
    - "(123.45)" (negative in parentheses)

    Exponent notation ("1e5") is rejected, as is any magnitude above
    MAX_AMOUNT.

    Args:
        amount_str: Amount token
        line: Optional statement line used in error messages

    Returns:
        AmountReading with the signed value

    Raises:
        InvalidAmount: If the token does not normalize to a finite number
            within range
    """
    if amount_str is None or not amount_str.strip():
        raise InvalidAmount(line, amount_str or "", "empty amount")

    token = _WHITESPACE_RE.sub("", amount_str)
    token = _CURRENCY_RE.sub("", token)

    # Handle parentheses notation (negative)
    is_negative = False
    if token.startswith("(") and token.endswith(")"):
        is_negative = True
        token = token[1:-1]

    if token.startswith("-"):
        is_negative = not is_negative
        token = token[1:]
    elif token.startswith("+"):
        token = token[1:]

    # Currency symbol may follow the sign ("-R$ 10,00")
    token = _CURRENCY_RE.sub("", token)

    canonical, ambiguous = _normalize_separators(token)
    if _EXPONENT_RE.search(canonical):
        raise InvalidAmount(line, amount_str.strip(), "exponent notation")

    try:
        value = Decimal(canonical)
    except InvalidOperation:
        raise InvalidAmount(line, amount_str.strip())
    if not value.is_finite() or canonical.startswith(("-", "+")):
        raise InvalidAmount(line, amount_str.strip())
    if value > MAX_AMOUNT:
        raise InvalidAmount(line, amount_str.strip(), "out of range")

    if is_negative:
        value = -value
    return AmountReading(value=value, ambiguous=ambiguous)


def parse_signed_amount(
    amount_str: str, line: Optional[int] = None, reject_ambiguous: bool = False
) -> tuple[Decimal, TransactionKind]:
    """Parse a statement amount into a magnitude and a transaction kind.

    Negative amounts are expenses, everything else is income. The returned
    magnitude is always non-negative and rounded to cents.

    Raises:
        InvalidAmount: If the token cannot be parsed, or is ambiguous and
            ``reject_ambiguous`` is set
    """
    reading = normalize_amount(amount_str, line)
    if reading.ambiguous and reject_ambiguous:
        raise InvalidAmount(line, amount_str.strip(), "ambiguous decimal separator")

    kind = TransactionKind.EXPENSE if reading.value < 0 else TransactionKind.INCOME
    magnitude = abs(reading.value).quantize(CENTS, rounding=ROUND_HALF_UP)
    return magnitude, kind


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a signed Decimal.

    Used for amounts typed on the command line.

    Raises:
        InvalidAmount: If amount string cannot be parsed
    """
    return normalize_amount(amount_str).value
