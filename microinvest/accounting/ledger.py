"""Spare-change ledger for logged purchases."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date as _date
from typing import Dict, List, Optional, Tuple

import pandas as pd

from microinvest.engine.roundup import round_up
from microinvest.utils.money import round_currency
from microinvest.utils.validation import InvalidArgument

logger = logging.getLogger(__name__)

CATEGORIES = (
    "Food & Dining",
    "Shopping",
    "Bills & Utilities",
    "Transport",
    "Entertainment",
    "Health",
    "Other",
)
MAX_PURCHASE_AMOUNT = 1_000_000.0

DEMO_PURCHASES = (
    ("2025-11-05", "Coffee", 149.5, "Food & Dining"),
    ("2025-11-06", "Grocery", 372.2, "Shopping"),
    ("2025-11-07", "Lunch", 219.0, "Food & Dining"),
)

# one-click purchases, dated on the day they are added
QUICK_PURCHASES: Dict[str, Tuple[float, str]] = {
    "Coffee": (131.6, "Food & Dining"),
    "Grocery": (485.9, "Shopping"),
}

LEDGER_COLUMNS = ["date", "description", "category", "amount", "round_up"]


@dataclass(frozen=True)
class Transaction:
    date: str
    description: str
    category: str
    amount: float
    round_up: float


def make_transaction(
    description: str,
    amount: float,
    unit: float,
    category: str = "Other",
    date: str | _date | None = None,
    max_amount: float = MAX_PURCHASE_AMOUNT,
) -> Transaction:
    """Validate a purchase and attach its round-up."""

    desc = (description or "").strip()
    if not desc:
        raise InvalidArgument("Please enter a description")
    try:
        amt = float(amount)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Amount must be numeric, received {amount!r}") from exc
    if not amt > 0:
        raise InvalidArgument("Please enter a valid positive amount")
    if amt > max_amount:
        raise InvalidArgument(f"Amount cannot exceed {max_amount:,.0f}")
    if category not in CATEGORIES:
        raise InvalidArgument(f"Unknown category {category!r}")
    if date is None:
        date = _date.today()
    when = date.isoformat() if isinstance(date, _date) else str(date).strip()
    if not when:
        raise InvalidArgument("Please select a date")
    return Transaction(
        date=when,
        description=desc,
        category=category,
        amount=amt,
        round_up=round_up(amt, unit),
    )


@dataclass
class SpareChangeLedger:
    """Ordered purchases and the round-ups they generated."""

    transactions: List[Transaction] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.transactions)

    def __iter__(self):
        return iter(self.transactions)

    def add(self, transaction: Transaction) -> Transaction:
        self.transactions.append(transaction)
        logger.debug("Logged %s %.2f (round-up %.2f)", transaction.description, transaction.amount, transaction.round_up)
        return transaction

    def record(
        self,
        description: str,
        amount: float,
        unit: float,
        category: str = "Other",
        date: str | _date | None = None,
    ) -> Transaction:
        return self.add(make_transaction(description, amount, unit, category=category, date=date))

    def remove(self, index: int) -> Transaction:
        try:
            removed = self.transactions.pop(index)
        except IndexError as exc:
            raise InvalidArgument(f"No transaction at position {index}") from exc
        logger.debug("Removed %s", removed.description)
        return removed

    def clear(self) -> None:
        self.transactions.clear()

    def seed_demo(self, unit: float) -> List[Transaction]:
        """Append the three demo purchases rounded to ``unit``."""

        added = [
            self.record(desc, amount, unit, category=category, date=when)
            for when, desc, amount, category in DEMO_PURCHASES
        ]
        logger.info("Seeded %d demo transactions", len(added))
        return added

    def add_quick(self, description: str, unit: float) -> Transaction:
        try:
            amount, category = QUICK_PURCHASES[description]
        except KeyError as exc:
            raise InvalidArgument(f"No quick purchase named {description!r}") from exc
        return self.record(description, amount, unit, category=category)

    def total_spare(self) -> float:
        return round_currency(sum(txn.round_up for txn in self.transactions))

    def total_spent(self) -> float:
        return round_currency(sum(txn.amount for txn in self.transactions))

    def category_totals(self) -> Dict[str, float]:
        """Round-up totals keyed by category, in first-seen order."""

        totals: Dict[str, float] = {}
        for txn in self.transactions:
            totals[txn.category] = totals.get(txn.category, 0.0) + txn.round_up
        return {key: round_currency(value) for key, value in totals.items()}

    def last(self) -> Optional[Transaction]:
        return self.transactions[-1] if self.transactions else None

    def to_frame(self) -> pd.DataFrame:
        if not self.transactions:
            return pd.DataFrame(columns=LEDGER_COLUMNS)
        return pd.DataFrame([asdict(txn) for txn in self.transactions], columns=LEDGER_COLUMNS)


__all__ = [
    "CATEGORIES",
    "MAX_PURCHASE_AMOUNT",
    "DEMO_PURCHASES",
    "QUICK_PURCHASES",
    "Transaction",
    "make_transaction",
    "SpareChangeLedger",
]
