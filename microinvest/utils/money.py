"""Currency rounding helpers.

Amounts travel through the package as ``float``. Wherever a value is rounded
to cents it goes through :func:`round_currency`, which converts the float via
its shortest ``repr`` into :class:`decimal.Decimal` and rounds half-up, so
``2.675`` becomes ``2.68`` rather than the binary-float ``2.67``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from microinvest.utils.validation import InvalidArgument

CENT = Decimal("0.01")


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    """Return ``value`` as a Decimal without binary-float noise."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(str(value))


def quantize_cents(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise InvalidArgument(f"Amount must be finite, received {value}")
    with localcontext() as ctx:
        # integer digits plus two decimals must fit in the context
        ctx.prec = max(28, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_currency(value: float | int | Decimal) -> float:
    """Round to two decimal places, half-up, returning a float."""

    return float(quantize_cents(to_decimal(value)))


__all__ = ["CENT", "to_decimal", "quantize_cents", "round_currency"]
