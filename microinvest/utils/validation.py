"""Validation helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from microinvest.config import Config


class InvalidArgument(ValueError):
    """Raised when an input is out of range or otherwise unusable."""


def assert_positive(value: float, name: str) -> None:
    """Ensure value is strictly greater than zero."""

    if not value > 0:
        raise InvalidArgument(f"{name} must be positive, received {value}")


def assert_non_negative(value: float, name: str) -> None:
    """Ensure value is zero or greater."""

    if not value >= 0:
        raise InvalidArgument(f"{name} must be non-negative, received {value}")


def assert_in_range(
    value: float,
    name: str,
    low: float,
    high: float,
    *,
    include_low: bool = True,
    include_high: bool = True,
) -> None:
    """Ensure value lies within ``low``/``high`` with the requested closedness."""

    above = value >= low if include_low else value > low
    below = value <= high if include_high else value < high
    if not (above and below):
        left = "[" if include_low else "("
        right = "]" if include_high else ")"
        raise InvalidArgument(f"{name} must lie in {left}{low}, {high}{right}, received {value}")


def assert_monotonic(sequence: Sequence[float], increasing: bool = True, tol: float = 1e-9) -> None:
    """Ensure a sequence is monotonic within tolerance."""

    arr = np.asarray(sequence, dtype=float)
    diffs = np.diff(arr)
    if increasing and np.any(diffs < -tol):
        raise InvalidArgument("Sequence must be non-decreasing")
    if not increasing and np.any(diffs > tol):
        raise InvalidArgument("Sequence must be non-increasing")


def validate_config(config: "Config") -> None:
    """Run cross-field checks that pydantic field constraints cannot express."""

    from microinvest.engine.roundup import round_up

    rounding = config.rounding
    if rounding.unit not in rounding.allowed_units:
        allowed = ", ".join(f"{unit:g}" for unit in rounding.allowed_units)
        raise InvalidArgument(f"rounding.unit must be one of {allowed}, received {rounding.unit:g}")
    spare = 0.0
    for index, txn in enumerate(config.transactions):
        if txn.amount > rounding.max_amount:
            raise InvalidArgument(
                f"transactions[{index}].amount exceeds the {rounding.max_amount:,.0f} purchase limit"
            )
        spare += round_up(txn.amount, rounding.unit)
    projection = config.projection
    if projection.starting_balance + projection.monthly_contribution + spare <= 0:
        raise InvalidArgument(
            "Need at least one of: spare change, monthly contribution, or starting balance"
        )


__all__ = [
    "InvalidArgument",
    "assert_positive",
    "assert_non_negative",
    "assert_in_range",
    "assert_monotonic",
    "validate_config",
]
