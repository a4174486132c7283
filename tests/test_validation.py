import pytest

from microinvest.config import load_config
from microinvest.utils.validation import (
    InvalidArgument,
    assert_in_range,
    assert_monotonic,
    assert_non_negative,
    assert_positive,
    validate_config,
)


def test_invalid_argument_is_value_error() -> None:
    assert issubclass(InvalidArgument, ValueError)


def test_scalar_assertions() -> None:
    assert_positive(0.01, "x")
    assert_non_negative(0, "x")
    with pytest.raises(InvalidArgument, match="x must be positive"):
        assert_positive(0, "x")
    with pytest.raises(InvalidArgument):
        assert_positive(float("nan"), "x")
    with pytest.raises(InvalidArgument):
        assert_non_negative(-0.01, "x")


def test_range_closedness() -> None:
    assert_in_range(0, "r", 0, 50)
    assert_in_range(50, "r", 0, 50)
    with pytest.raises(InvalidArgument, match=r"\(0, 50\]"):
        assert_in_range(0, "r", 0, 50, include_low=False)
    with pytest.raises(InvalidArgument):
        assert_in_range(50, "r", 0, 50, include_high=False)


def test_monotonic() -> None:
    assert_monotonic([1, 1, 2, 3])
    assert_monotonic([3, 2, 2], increasing=False)
    with pytest.raises(InvalidArgument):
        assert_monotonic([1, 3, 2])


def test_validate_config_accepts_defaults_with_contribution() -> None:
    validate_config(load_config(overrides={"projection": {"monthly_contribution": 100}}))


def test_validate_config_spare_change_counts() -> None:
    cfg = load_config(overrides={"transactions": [{"description": "Coffee", "amount": 149.5}]})
    validate_config(cfg)


def test_validate_config_rejects_empty_plan() -> None:
    with pytest.raises(InvalidArgument, match="at least one"):
        validate_config(load_config())
    exact = load_config(overrides={"transactions": [{"description": "Rent", "amount": 150}]})
    with pytest.raises(InvalidArgument):
        validate_config(exact)


def test_validate_config_unit_and_limit() -> None:
    with pytest.raises(InvalidArgument, match="rounding.unit"):
        validate_config(load_config(overrides={"rounding": {"unit": 2}, "projection": {"monthly_contribution": 1}}))
    cfg = load_config(
        overrides={
            "rounding": {"max_amount": 100},
            "transactions": [{"description": "TV", "amount": 500}],
        }
    )
    with pytest.raises(InvalidArgument, match=r"transactions\[0\]"):
        validate_config(cfg)
