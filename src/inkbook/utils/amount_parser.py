"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from inkbook.domain.errors import ValidationError


def _normalize_separators(amount_str: str) -> str:
    """Turn a localized number into a plain ``1234.56`` string.

    The right-most of ``.`` or ``,`` is the decimal separator when it is
    followed by one or two digits; every other separator groups thousands.
    """
    last_sep = max(amount_str.rfind("."), amount_str.rfind(","))
    if last_sep == -1:
        return amount_str

    decimals = amount_str[last_sep + 1:]
    if 1 <= len(decimals) <= 2 and decimals.isdigit():
        integer_part = re.sub(r"[.,]", "", amount_str[:last_sep])
        return f"{integer_part}.{decimals}"

    return re.sub(r"[.,]", "", amount_str)


def parse_amount(amount_str: str, allow_negative: bool = False) -> Decimal:
    """Parse a money string into a Decimal.

    Handles various formats:
    - "150", "150.00", "150,00"
    - "R$ 1.234,56" and "$1,234.56"
    - "-50.00" and "(50.00)" when ``allow_negative`` is set

    Args:
        amount_str: Amount string
        allow_negative: Accept negative amounts

    Returns:
        Decimal amount rounded to cents

    Raises:
        ValidationError: If the string cannot be parsed, or is negative when
            negatives are not allowed
    """
    if not amount_str or not amount_str.strip():
        raise ValidationError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]
    if amount_str.startswith("-"):
        is_negative = True
        amount_str = amount_str[1:]

    # Currency symbols and spacing
    amount_str = re.sub(r"R\$|[$€£]|\s", "", amount_str)

    try:
        amount = Decimal(_normalize_separators(amount_str))
    except InvalidOperation as e:
        raise ValidationError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{amount_str}'")

    if is_negative:
        if not allow_negative:
            raise ValidationError(f"Amount must not be negative: -{amount_str}")
        amount = -amount
    return amount.quantize(Decimal("0.01"))
