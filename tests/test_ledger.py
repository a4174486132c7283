from datetime import date

import pytest

from microinvest.accounting.ledger import (
    CATEGORIES,
    MAX_PURCHASE_AMOUNT,
    QUICK_PURCHASES,
    SpareChangeLedger,
    make_transaction,
)
from microinvest.utils.validation import InvalidArgument


def test_make_transaction_attaches_round_up() -> None:
    txn = make_transaction("  Coffee ", 149.5, 10, category="Food & Dining", date="2025-11-05")
    assert txn.description == "Coffee"
    assert txn.round_up == pytest.approx(0.5)
    assert txn.date == "2025-11-05"


def test_make_transaction_accepts_date_objects_and_defaults_today() -> None:
    txn = make_transaction("Book", 99, 5, date=date(2025, 1, 2))
    assert txn.date == "2025-01-02"
    assert txn.category == "Other"
    assert txn.round_up == pytest.approx(1.0)
    assert make_transaction("Tea", 10, 1).date == date.today().isoformat()


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"description": "   "}, "description"),
        ({"amount": 0}, "positive"),
        ({"amount": -5}, "positive"),
        ({"amount": "abc"}, "numeric"),
        ({"amount": MAX_PURCHASE_AMOUNT + 1}, "cannot exceed"),
        ({"category": "Travel"}, "Unknown category"),
        ({"date": "  "}, "date"),
    ],
)
def test_make_transaction_rejects_bad_input(kwargs: dict, message: str) -> None:
    params = {"description": "Coffee", "amount": 12.5, "unit": 10, "category": "Other", "date": "2025-11-05"}
    params.update(kwargs)
    with pytest.raises(InvalidArgument, match=message):
        make_transaction(**params)


def test_demo_seed_totals() -> None:
    ledger = SpareChangeLedger()
    added = ledger.seed_demo(10)
    assert [txn.description for txn in added] == ["Coffee", "Grocery", "Lunch"]
    assert [txn.round_up for txn in ledger] == pytest.approx([0.5, 7.8, 1.0])
    assert ledger.total_spare() == pytest.approx(9.3)
    assert ledger.total_spent() == pytest.approx(740.7)
    assert ledger.category_totals() == pytest.approx({"Food & Dining": 1.5, "Shopping": 7.8})


def test_demo_seed_with_unit_one() -> None:
    ledger = SpareChangeLedger()
    ledger.seed_demo(1)
    assert [txn.round_up for txn in ledger] == pytest.approx([0.5, 0.8, 0.0])
    assert ledger.total_spare() == pytest.approx(1.3)


def test_remove_and_clear() -> None:
    ledger = SpareChangeLedger()
    ledger.seed_demo(10)
    removed = ledger.remove(1)
    assert removed.description == "Grocery"
    assert len(ledger) == 2
    assert ledger.last().description == "Lunch"
    with pytest.raises(InvalidArgument):
        ledger.remove(5)
    ledger.clear()
    assert len(ledger) == 0
    assert ledger.last() is None
    assert ledger.total_spare() == 0.0


def test_to_frame_columns() -> None:
    ledger = SpareChangeLedger()
    assert list(ledger.to_frame().columns) == ["date", "description", "category", "amount", "round_up"]
    assert ledger.to_frame().empty
    ledger.record("Taxi", 231.25, 5, category="Transport", date="2025-03-01")
    frame = ledger.to_frame()
    assert frame.loc[0, "round_up"] == pytest.approx(3.75)
    assert frame.loc[0, "category"] == "Transport"


def test_categories_catalogue() -> None:
    assert "Other" in CATEGORIES
    assert len(set(CATEGORIES)) == len(CATEGORIES)


def test_quick_add_purchases_are_dated_today() -> None:
    ledger = SpareChangeLedger()
    coffee = ledger.add_quick("Coffee", 10)
    grocery = ledger.add_quick("Grocery", 10)
    assert set(QUICK_PURCHASES) == {"Coffee", "Grocery"}
    assert (coffee.amount, coffee.category, coffee.round_up) == (131.6, "Food & Dining", pytest.approx(8.4))
    assert (grocery.amount, grocery.category, grocery.round_up) == (485.9, "Shopping", pytest.approx(4.1))
    assert coffee.date == grocery.date == date.today().isoformat()
    assert ledger.total_spare() == pytest.approx(12.5)
    with pytest.raises(InvalidArgument, match="No quick purchase"):
        ledger.add_quick("Caviar", 10)
