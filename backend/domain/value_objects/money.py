"""
Money helpers.

Amounts are kept as ``Decimal`` so sums over payments stay exact.
"""

from decimal import Decimal, InvalidOperation

from exceptions import ValidationError


def to_money(value, field: str = "amount") -> Decimal:
    """
    Coerce a number or numeric string to Decimal.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal('0.1')``.

    Raises:
        ValidationError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid amount: {value!r}", field)
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"Invalid amount: {value!r}", field)

    if not result.is_finite():
        raise ValidationError(f"Invalid amount: {value!r}", field)
    return result
