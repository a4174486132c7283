"""Round-up calculation for purchases."""

from __future__ import annotations

from decimal import ROUND_CEILING, localcontext

from microinvest.utils.money import quantize_cents, to_decimal
from microinvest.utils.validation import InvalidArgument, assert_positive


def round_up(amount: float, unit: float) -> float:
    """Return the spare change between ``amount`` and the next multiple of ``unit``.

    The purchase is first taken to whole cents (half-up), then the ceiling
    multiple is computed in Decimal so that values like ``1.1`` with a ``0.1``
    unit land exactly on a multiple. The result is clamped at zero, so for any
    unit expressed in whole cents ``0 <= round_up(amount, unit) < unit``.

    >>> round_up(149.5, 10)
    0.5
    >>> round_up(150, 10)
    0.0
    """

    assert_positive(unit, "unit")
    assert_positive(amount, "amount")
    amt = quantize_cents(to_decimal(amount))
    step = to_decimal(unit)
    if not step.is_finite():
        raise InvalidArgument(f"unit must be finite, received {unit}")
    with localcontext() as ctx:
        ctx.prec = max(28, amt.adjusted() - step.adjusted() + 30)
        target = (amt / step).to_integral_value(rounding=ROUND_CEILING) * step
        gap = max(target - amt, to_decimal(0))
    return float(quantize_cents(gap))


__all__ = ["round_up"]
