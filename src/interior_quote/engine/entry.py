"""
Point-of-entry coercion for form and file values.

Dimensions and quantities pass through here before they become part of
a LineItem, so the pricing engine only sees finite numbers and positive
whole quantities.
"""
import math
import numbers
import uuid

from ..errors import InvalidEntryError


def new_id() -> str:
    return uuid.uuid4().hex[:8]


def coerce_dimension(value, field: str = 'dimension') -> float:
    """
    Coerce a form value to a dimension in feet.

    Blank values mean 0; numeric strings may use a comma as the decimal
    separator. Non-numeric, NaN and infinite values are rejected.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise InvalidEntryError(field, value, "must be a number")

    if isinstance(value, str):
        raw = value.strip().replace(',', '.')
        if raw == '':
            return 0.0
        try:
            number = float(raw)
        except ValueError:
            raise InvalidEntryError(field, value, "must be a number")
    elif isinstance(value, numbers.Real):
        number = float(value)
    else:
        raise InvalidEntryError(field, value, "must be a number")

    if not math.isfinite(number):
        raise InvalidEntryError(field, value, "must be finite")
    return number


def coerce_quantity(value) -> int:
    """Coerce a form value to a positive integer quantity; blank means 1."""
    if value is None or (isinstance(value, str) and value.strip() == ''):
        return 1
    if isinstance(value, bool):
        raise InvalidEntryError('qty', value, "must be a whole number")

    number = coerce_dimension(value, 'qty')
    if number != int(number):
        raise InvalidEntryError('qty', value, "must be a whole number")
    if number < 1:
        raise InvalidEntryError('qty', value, "must be at least 1")
    return int(number)
